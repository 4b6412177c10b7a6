from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(slots=True)
class Customer:
    id: UUID
    farm_id: UUID
    name: str
    phone: str | None = None
    email: str | None = None
    total_spent: Decimal = Decimal("0")
    last_purchase_date: date | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        name: str,
        *,
        phone: str | None = None,
        email: str | None = None,
    ) -> Customer:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            name=name,
            phone=phone,
            email=email,
            total_spent=Decimal("0"),
            created_at=datetime.now(timezone.utc),
        )

    def record_purchase(self, amount: Decimal, on: date) -> None:
        self.total_spent = self.total_spent + amount
        if self.last_purchase_date is None or on > self.last_purchase_date:
            self.last_purchase_date = on
