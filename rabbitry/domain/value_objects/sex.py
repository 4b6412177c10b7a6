from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
