from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


def sale_code(now: datetime) -> str:
    # S- plus the low digits of the epoch second
    return f"S-{str(int(now.timestamp()))[4:]}"


@dataclass(slots=True)
class Sale:
    id: UUID
    farm_id: UUID
    code: str
    animal_ids: list[UUID]
    animal_tags: list[str]
    buyer_name: str
    amount: Decimal
    date: date
    customer_id: UUID | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_ids: list[UUID],
        animal_tags: list[str],
        buyer_name: str,
        amount: Decimal,
        date: date,
        customer_id: UUID | None = None,
        notes: str | None = None,
    ) -> Sale:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            code=sale_code(now),
            animal_ids=list(animal_ids),
            animal_tags=list(animal_tags),
            buyer_name=buyer_name,
            amount=amount,
            date=date,
            customer_id=customer_id,
            notes=notes,
            created_at=now,
        )
