from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.breeding.record_delivery import validate_litter
from rabbitry.domain.models.delivery import Delivery


@dataclass(slots=True)
class UpdateDeliveryInput:
    delivery_date: date | None = None
    kits_born: int | None = None
    kits_live: int | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork, farm_id: UUID, delivery_id: UUID, payload: UpdateDeliveryInput
) -> Delivery:
    delivery = await uow.deliveries.get(farm_id, delivery_id)
    if not delivery:
        raise NotFound(f"Delivery {delivery_id} not found")
    if payload.delivery_date is not None:
        delivery.delivery_date = payload.delivery_date
    if payload.kits_born is not None:
        delivery.kits_born = payload.kits_born
    if payload.kits_live is not None:
        delivery.kits_live = payload.kits_live
    if payload.notes is not None:
        delivery.notes = payload.notes
    validate_litter(delivery.kits_born, delivery.kits_live)
    delivery = await uow.deliveries.save(delivery)

    # The mating keeps a copy of the litter figures
    mating = await uow.matings.get(farm_id, delivery.mating_id)
    if mating:
        mating.actual_delivery_date = delivery.delivery_date
        mating.kits_born = delivery.kits_born
        mating.kits_live = delivery.kits_live
        mating.touch()
        await uow.matings.save(mating)

    await uow.commit()
    return delivery
