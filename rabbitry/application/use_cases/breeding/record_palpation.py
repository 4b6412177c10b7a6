from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.domain.models.mating import Mating, MatingStatus, PalpationResult
from rabbitry.domain.value_objects.animal_status import AnimalStatus
from rabbitry.utils.datetime_tz import farm_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordPalpationInput:
    result: str  # Positive | Negative
    checked_on: date | None = None


async def execute(
    uow: UnitOfWork, farm_id: UUID, mating_id: UUID, payload: RecordPalpationInput
) -> Mating:
    if payload.result not in {r.value for r in PalpationResult}:
        raise ValidationError("result must be Positive or Negative")
    farm = await require_farm(uow, farm_id)
    mating = await uow.matings.get(farm_id, mating_id)
    if not mating:
        raise NotFound(f"Mating {mating_id} not found")
    if mating.status != MatingStatus.PENDING.value:
        raise ValidationError(f"Mating is {mating.status}; only Pending matings can be palpated")

    checked_on = payload.checked_on or farm_today(farm.timezone)
    doe = await uow.animals.get_by_tag(farm_id, mating.doe_tag)
    if payload.result == PalpationResult.POSITIVE.value:
        mating.confirm_pregnancy(checked_on)
        doe_status = AnimalStatus.PREGNANT.value
    else:
        mating.mark_failed(checked_on)
        doe_status = AnimalStatus.ACTIVE.value
    mating = await uow.matings.save(mating)

    if doe and not doe.is_terminal and doe.status != doe_status:
        doe.status = doe_status
        doe.bump_version()
        await uow.animals.save(doe)

    await uow.commit()
    logger.info("Palpation %s for mating %s x %s", payload.result, mating.doe_tag, mating.sire_tag)
    return mating
