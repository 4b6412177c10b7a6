from __future__ import annotations

from enum import Enum


class CapacityPolicy(str, Enum):
    SOFT = "soft"  # warn, allow overcrowding
    HARD = "hard"  # reject moves into a full hutch
