from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from rabbitry.domain.services.breeding_dates import project_breeding_dates


class MatingStatus(str, Enum):
    PENDING = "Pending"  # just mated
    PREGNANT = "Pregnant"  # palpation positive
    FAILED = "Failed"  # palpation negative
    DELIVERED = "Delivered"  # kits born


class PalpationResult(str, Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


@dataclass(slots=True)
class Mating:
    id: UUID
    farm_id: UUID
    doe_tag: str
    sire_tag: str
    mating_date: date
    expected_palpation_date: date
    expected_delivery_date: date
    status: str = MatingStatus.PENDING.value
    palpation_result: str | None = None
    palpation_checked_on: date | None = None
    actual_delivery_date: date | None = None
    kits_born: int | None = None
    kits_live: int | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        doe_tag: str,
        sire_tag: str,
        mating_date: date,
        *,
        palpation_days: int,
        gestation_days: int,
        notes: str | None = None,
    ) -> Mating:
        projected = project_breeding_dates(mating_date, palpation_days, gestation_days)
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            doe_tag=doe_tag,
            sire_tag=sire_tag,
            mating_date=mating_date,
            expected_palpation_date=projected.palpation_date,
            expected_delivery_date=projected.delivery_date,
            status=MatingStatus.PENDING.value,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    def confirm_pregnancy(self, checked_on: date) -> None:
        self.status = MatingStatus.PREGNANT.value
        self.palpation_result = PalpationResult.POSITIVE.value
        self.palpation_checked_on = checked_on
        self.touch()

    def mark_failed(self, checked_on: date) -> None:
        self.status = MatingStatus.FAILED.value
        self.palpation_result = PalpationResult.NEGATIVE.value
        self.palpation_checked_on = checked_on
        self.touch()

    def mark_delivered(self, delivery_date: date, kits_born: int, kits_live: int) -> None:
        self.status = MatingStatus.DELIVERED.value
        self.actual_delivery_date = delivery_date
        self.kits_born = kits_born
        self.kits_live = kits_live
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
