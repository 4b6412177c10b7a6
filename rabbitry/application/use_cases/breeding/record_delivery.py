from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import ConflictError, NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.delivery import Delivery
from rabbitry.domain.models.mating import Mating, MatingStatus
from rabbitry.domain.value_objects.animal_status import AnimalStatus

logger = logging.getLogger(__name__)

DELIVERABLE = (MatingStatus.PENDING.value, MatingStatus.PREGNANT.value)


@dataclass(slots=True)
class RecordDeliveryInput:
    delivery_date: date
    kits_born: int
    kits_live: int
    notes: str | None = None


@dataclass(slots=True)
class RecordDeliveryOutput:
    mating: Mating
    delivery: Delivery


def validate_litter(kits_born: int, kits_live: int) -> None:
    if kits_born < 0 or kits_live < 0:
        raise ValidationError("Kit counts cannot be negative")
    if kits_live > kits_born:
        raise ValidationError("kits_live cannot exceed kits_born")


async def execute(
    uow: UnitOfWork, farm_id: UUID, mating_id: UUID, payload: RecordDeliveryInput
) -> RecordDeliveryOutput:
    validate_litter(payload.kits_born, payload.kits_live)
    mating = await uow.matings.get(farm_id, mating_id)
    if not mating:
        raise NotFound(f"Mating {mating_id} not found")
    if mating.status not in DELIVERABLE:
        raise ValidationError(f"Mating is {mating.status} and cannot be delivered")
    if payload.delivery_date < mating.mating_date:
        raise ValidationError("delivery_date cannot precede the mating date")
    if await uow.deliveries.get_by_mating(farm_id, mating_id):
        raise ConflictError("Mating already has a delivery")

    mating.mark_delivered(payload.delivery_date, payload.kits_born, payload.kits_live)
    mating = await uow.matings.save(mating)
    delivery = await uow.deliveries.add(
        Delivery.create(
            farm_id=farm_id,
            mating_id=mating.id,
            doe_tag=mating.doe_tag,
            sire_tag=mating.sire_tag,
            delivery_date=payload.delivery_date,
            kits_born=payload.kits_born,
            kits_live=payload.kits_live,
            notes=payload.notes,
        )
    )

    doe = await uow.animals.get_by_tag(farm_id, mating.doe_tag)
    if doe and doe.status == AnimalStatus.PREGNANT.value:
        doe.status = AnimalStatus.ACTIVE.value
        doe.bump_version()
        await uow.animals.save(doe)

    await uow.commit()
    logger.info(
        "Delivery for %s x %s: %d born, %d live",
        mating.doe_tag,
        mating.sire_tag,
        payload.kits_born,
        payload.kits_live,
    )
    return RecordDeliveryOutput(mating=mating, delivery=delivery)
