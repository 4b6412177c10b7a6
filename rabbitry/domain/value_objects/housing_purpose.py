from __future__ import annotations

from enum import Enum


class HousingPurpose(str, Enum):
    HOUSING = "Housing"
    MATING = "Mating"
    QUARANTINE = "Quarantine"
    WEANING = "Weaning"
    RECOVERY = "Recovery"
