from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.farm import Farm


async def require_farm(uow: UnitOfWork, farm_id: UUID) -> Farm:
    farm = await uow.farms.get(farm_id)
    if not farm:
        raise NotFound("Farm not found")
    return farm


async def execute(uow: UnitOfWork, owner_user_id: UUID) -> Farm:
    farm = await uow.farms.get_by_owner(owner_user_id)
    if not farm:
        raise NotFound("No farm registered for this account")
    return farm
