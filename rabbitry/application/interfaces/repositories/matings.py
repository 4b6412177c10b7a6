from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.delivery import Delivery
from rabbitry.domain.models.mating import Mating


class MatingsRepository(Protocol):
    async def add(self, mating: Mating) -> Mating: ...

    async def get(self, farm_id: UUID, mating_id: UUID) -> Mating | None: ...

    async def save(self, mating: Mating) -> Mating: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        doe_tag: str | None = None,
        sire_tag: str | None = None,
    ) -> list[Mating]: ...


class DeliveriesRepository(Protocol):
    async def add(self, delivery: Delivery) -> Delivery: ...

    async def get(self, farm_id: UUID, delivery_id: UUID) -> Delivery | None: ...

    async def get_by_mating(self, farm_id: UUID, mating_id: UUID) -> Delivery | None: ...

    async def save(self, delivery: Delivery) -> Delivery: ...

    async def list(self, farm_id: UUID) -> list[Delivery]: ...
