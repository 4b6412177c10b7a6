from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.delivery import Delivery
from rabbitry.domain.models.mating import Mating, MatingStatus


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    status: str | None = None,
    doe_tag: str | None = None,
    sire_tag: str | None = None,
) -> list[Mating]:
    if status is not None and status not in {s.value for s in MatingStatus}:
        raise ValidationError(f"Unknown mating status: {status}")
    return await uow.matings.list(farm_id, status=status, doe_tag=doe_tag, sire_tag=sire_tag)


async def get_mating(
    uow: UnitOfWork, farm_id: UUID, mating_id: UUID
) -> tuple[Mating, Delivery | None]:
    mating = await uow.matings.get(farm_id, mating_id)
    if not mating:
        raise NotFound(f"Mating {mating_id} not found")
    return mating, await uow.deliveries.get_by_mating(farm_id, mating_id)


async def list_deliveries(uow: UnitOfWork, farm_id: UUID) -> list[Delivery]:
    return await uow.deliveries.list(farm_id)
