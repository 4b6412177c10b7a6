from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(slots=True)
class Transaction:
    id: UUID
    farm_id: UUID
    type: str  # TransactionType
    category: str
    amount: Decimal
    date: date
    notes: str = ""
    related_id: UUID | None = None  # sale, medical record or animal that produced it
    related_tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        type: str,
        category: str,
        amount: Decimal,
        date: date,
        notes: str = "",
        related_id: UUID | None = None,
        related_tags: list[str] | None = None,
    ) -> Transaction:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            type=type,
            category=category,
            amount=amount,
            date=date,
            notes=notes,
            related_id=related_id,
            related_tags=list(related_tags or []),
            created_at=datetime.now(timezone.utc),
        )
