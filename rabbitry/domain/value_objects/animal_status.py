from __future__ import annotations

from enum import Enum


class AnimalStatus(str, Enum):
    ACTIVE = "Active"
    WEANED = "Weaned"
    PREGNANT = "Pregnant"
    SOLD = "Sold"
    DECEASED_NATURAL = "Deceased-Natural"
    DECEASED_PROCESSED = "Deceased-Processed"

    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def is_saleable(self) -> bool:
        return self in {AnimalStatus.ACTIVE, AnimalStatus.WEANED, AnimalStatus.PREGNANT}


TERMINAL_STATUSES = frozenset(
    {AnimalStatus.SOLD, AnimalStatus.DECEASED_NATURAL, AnimalStatus.DECEASED_PROCESSED}
)
MORTALITY_STATUSES = frozenset({AnimalStatus.DECEASED_NATURAL, AnimalStatus.DECEASED_PROCESSED})
