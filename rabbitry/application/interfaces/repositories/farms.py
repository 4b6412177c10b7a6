from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.farm import Farm


class FarmsRepository(Protocol):
    async def add(self, farm: Farm) -> Farm: ...

    async def get(self, farm_id: UUID) -> Farm | None: ...

    async def get_by_owner(self, owner_user_id: UUID) -> Farm | None: ...

    async def save(self, farm: Farm) -> Farm: ...


class TagCountersRepository(Protocol):
    async def next_sequence(self, farm_id: UUID) -> int:
        """Atomically advance and return the farm's tag sequence."""
        ...

    async def peek_sequence(self, farm_id: UUID) -> int:
        """The number ``next_sequence`` would hand out, without advancing it."""
        ...
