from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from rabbitry.domain.value_objects.animal_status import AnimalStatus


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    tag: str
    breed: str
    sex: str  # Sex
    source: str = "Born"  # 'Born' | 'Purchased'
    name: str | None = None
    date_of_birth: date | None = None
    date_of_acquisition: date | None = None
    purchase_cost: Decimal | None = None
    status: str = AnimalStatus.ACTIVE.value
    current_hutch_id: UUID | None = None

    # Parentage, by tag
    sire_tag: str | None = None
    doe_tag: str | None = None

    weight: Decimal | None = None  # latest, kg
    notes: str = ""

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        tag: str,
        breed: str,
        sex: str,
        source: str = "Born",
        name: str | None = None,
        date_of_birth: date | None = None,
        date_of_acquisition: date | None = None,
        purchase_cost: Decimal | None = None,
        sire_tag: str | None = None,
        doe_tag: str | None = None,
        weight: Decimal | None = None,
        notes: str = "",
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            tag=tag,
            breed=breed,
            sex=sex,
            source=source,
            name=name,
            date_of_birth=date_of_birth,
            date_of_acquisition=date_of_acquisition or now.date(),
            purchase_cost=purchase_cost,
            status=AnimalStatus.ACTIVE.value,
            current_hutch_id=None,
            sire_tag=sire_tag,
            doe_tag=doe_tag,
            weight=weight,
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_terminal(self) -> bool:
        return AnimalStatus(self.status).is_terminal()

    def append_note(self, line: str) -> None:
        self.notes = f"{self.notes}\n{line}" if self.notes else line

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)
