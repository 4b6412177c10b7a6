"""Hutch occupancy ledger.

Keeps three things in step inside one unit of work: the animal's
``current_hutch_id``, the hutch ``current_occupancy`` counters and the
assignment history. Nothing here commits; the calling use case does, so a
move made as part of a sale or mating lands together with the rest of it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from uuid import UUID

from rabbitry.application.errors import CapacityExceeded, HousingNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.hutch import Hutch
from rabbitry.domain.models.hutch_assignment import HutchAssignment
from rabbitry.domain.value_objects.capacity_policy import CapacityPolicy
from rabbitry.domain.value_objects.housing_purpose import HousingPurpose
from rabbitry.utils.datetime_tz import ensure_utc, start_of_day_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CapacityWarning:
    hutch_id: UUID
    hutch_code: str
    capacity: int
    occupancy: int

    @property
    def message(self) -> str:
        return (
            f"Hutch {self.hutch_code} already holds {self.occupancy} "
            f"of {self.capacity} animals"
        )


@dataclass(slots=True)
class MoveResult:
    animal: Animal
    changed: bool
    source_hutch: Hutch | None = None
    target_hutch: Hutch | None = None
    assignment: HutchAssignment | None = None
    capacity_warning: CapacityWarning | None = None


def _as_instant(value: date | datetime | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return ensure_utc(value)
    return start_of_day_utc(value)


def _ensure_purpose(purpose: str) -> str:
    valid = {p.value for p in HousingPurpose}
    if purpose not in valid:
        raise ValidationError(f"Invalid purpose. Must be one of: {', '.join(sorted(valid))}")
    return purpose


def check_capacity(hutch: Hutch, policy: str) -> CapacityWarning | None:
    if not hutch.is_full:
        return None
    if policy == CapacityPolicy.HARD.value:
        raise CapacityExceeded(
            f"Hutch {hutch.code} is full",
            details={
                "hutch_id": str(hutch.id),
                "capacity": hutch.capacity,
                "occupancy": hutch.current_occupancy,
            },
        )
    return CapacityWarning(
        hutch_id=hutch.id,
        hutch_code=hutch.code,
        capacity=hutch.capacity,
        occupancy=hutch.current_occupancy,
    )


async def _closing_instant(
    uow: UnitOfWork, farm_id: UUID, animal: Animal, value: date | datetime | None
) -> datetime:
    # A stay never ends before it started; back-dated moves close at the start
    open_stays = await uow.hutch_assignments.list_open_for_animal(farm_id, animal.id)
    return max([_as_instant(value), *(ensure_utc(stay.start_at) for stay in open_stays)])


async def _vacate(
    uow: UnitOfWork, farm_id: UUID, animal: Animal, at: datetime
) -> Hutch | None:
    await uow.hutch_assignments.close_open_for_animal(farm_id, animal.id, at)
    if animal.current_hutch_id is None:
        return None
    return await uow.hutches.decrement_occupancy(farm_id, animal.current_hutch_id)


async def move_animal(
    uow: UnitOfWork,
    farm_id: UUID,
    animal: Animal,
    target_hutch_id: UUID,
    *,
    purpose: str = HousingPurpose.HOUSING.value,
    notes: str | None = None,
    capacity_policy: str = CapacityPolicy.SOFT.value,
    at: date | datetime | None = None,
) -> MoveResult:
    """Move ``animal`` into ``target_hutch_id``.

    Every lookup and check runs before the first write, so a missing hutch or
    a full one under the hard policy leaves storage untouched. Moving an
    animal into the hutch it already occupies changes nothing.
    """
    _ensure_purpose(purpose)
    if animal.is_terminal:
        raise ValidationError(f"Animal {animal.tag} is {animal.status} and cannot be moved")
    target = await uow.hutches.get(farm_id, target_hutch_id)
    if target is None:
        raise HousingNotFound(f"Hutch {target_hutch_id} not found")
    if animal.current_hutch_id == target.id:
        return MoveResult(animal=animal, changed=False, source_hutch=target, target_hutch=target)
    warning = check_capacity(target, capacity_policy)

    moved_at = await _closing_instant(uow, farm_id, animal, at)
    source = await _vacate(uow, farm_id, animal, moved_at)
    target = await uow.hutches.increment_occupancy(farm_id, target.id)
    assignment = await uow.hutch_assignments.add(
        HutchAssignment.open(
            farm_id=farm_id,
            animal_id=animal.id,
            hutch_id=target.id,
            hutch_label=target.label or target.code,
            purpose=purpose,
            start_at=moved_at,
            notes=notes,
        )
    )
    animal.current_hutch_id = target.id
    animal.bump_version()
    animal = await uow.animals.save(animal)

    logger.info(
        "Moved animal %s from %s to %s (%s)",
        animal.tag,
        source.code if source else "none",
        target.code,
        purpose,
    )
    if warning is not None:
        logger.warning("Capacity warning for farm %s: %s", farm_id, warning.message)
    return MoveResult(
        animal=animal,
        changed=True,
        source_hutch=source,
        target_hutch=target,
        assignment=assignment,
        capacity_warning=warning,
    )


async def release_animal(
    uow: UnitOfWork,
    farm_id: UUID,
    animal: Animal,
    released_at: date | datetime | None = None,
) -> MoveResult:
    """Take ``animal`` out of its hutch, closing the open stay at ``released_at``."""
    open_stays = await uow.hutch_assignments.list_open_for_animal(farm_id, animal.id)
    if animal.current_hutch_id is None and not open_stays:
        return MoveResult(animal=animal, changed=False)
    released = await _closing_instant(uow, farm_id, animal, released_at)
    source = await _vacate(uow, farm_id, animal, released)
    animal.current_hutch_id = None
    animal.bump_version()
    animal = await uow.animals.save(animal)
    logger.info("Released animal %s from %s", animal.tag, source.code if source else "none")
    return MoveResult(animal=animal, changed=True, source_hutch=source)
