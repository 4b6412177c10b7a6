from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Delivery:
    id: UUID
    farm_id: UUID
    mating_id: UUID
    doe_tag: str
    sire_tag: str
    delivery_date: date
    kits_born: int
    kits_live: int
    kit_ids: list[UUID] = field(default_factory=list)
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        mating_id: UUID,
        doe_tag: str,
        sire_tag: str,
        delivery_date: date,
        kits_born: int,
        kits_live: int,
        notes: str | None = None,
    ) -> Delivery:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            mating_id=mating_id,
            doe_tag=doe_tag,
            sire_tag=sire_tag,
            delivery_date=delivery_date,
            kits_born=kits_born,
            kits_live=kits_live,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
