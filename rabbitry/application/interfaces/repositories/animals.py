from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None: ...

    async def get_by_tag(self, farm_id: UUID, tag: str) -> Animal | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Animal]: ...

    async def count(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
    ) -> int: ...

    async def list_by_parent(
        self, farm_id: UUID, *, sire_tag: str | None = None, doe_tag: str | None = None
    ) -> list[Animal]: ...

    async def save(self, animal: Animal) -> Animal: ...

    async def update(
        self,
        farm_id: UUID,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None: ...

    async def count_by_hutch(self, farm_id: UUID) -> dict[UUID, int]: ...
