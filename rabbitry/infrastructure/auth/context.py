from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from rabbitry.application.errors import NotFound, PermissionDenied
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.farm import Farm


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    claims: dict[str, Any]
    farm_id: UUID | None = None  # from the farm header, when sent


@dataclass(slots=True)
class FarmContext:
    user_id: UUID
    farm: Farm

    @property
    def farm_id(self) -> UUID:
        return self.farm.id


async def resolve_farm(uow: UnitOfWork, context: AuthContext) -> FarmContext:
    if context.farm_id is None:
        raise PermissionDenied("Missing farm header")
    farm = await uow.farms.get(context.farm_id)
    if not farm:
        raise NotFound("Farm not found")
    if farm.owner_user_id != context.user_id:
        raise PermissionDenied("User does not own this farm")
    return FarmContext(user_id=context.user_id, farm=farm)
