from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(slots=True)
class WeightRecord:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    weight: Decimal  # kg
    date: date
    age_label: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        weight: Decimal,
        date: date,
        age_label: str | None = None,
        notes: str | None = None,
    ) -> WeightRecord:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            weight=weight,
            date=date,
            age_label=age_label,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
