from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def hutch_code(number: int) -> str:
    return f"H{number:02d}"


@dataclass(slots=True)
class Hutch:
    id: UUID
    farm_id: UUID
    number: int
    code: str
    label: str
    capacity: int
    current_occupancy: int = 0
    accessories: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        number: int,
        label: str,
        capacity: int,
        *,
        accessories: list[str] | None = None,
    ) -> Hutch:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            number=number,
            code=hutch_code(number),
            label=label,
            capacity=capacity,
            current_occupancy=0,
            accessories=list(accessories or []),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_full(self) -> bool:
        return self.current_occupancy >= self.capacity
