from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from rabbitry.domain.models.hutch import Hutch


class HutchesRepo(ABC):
    @abstractmethod
    async def add(self, hutch: Hutch) -> Hutch: ...

    @abstractmethod
    async def get(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None: ...

    @abstractmethod
    async def get_by_number(self, farm_id: UUID, number: int) -> Hutch | None: ...

    @abstractmethod
    async def list_for_farm(self, farm_id: UUID) -> list[Hutch]: ...

    @abstractmethod
    async def update(self, farm_id: UUID, hutch_id: UUID, data: dict) -> Hutch | None: ...

    @abstractmethod
    async def delete(self, farm_id: UUID, hutch_id: UUID) -> bool: ...

    @abstractmethod
    async def increment_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None: ...

    @abstractmethod
    async def decrement_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        """Decrement by one, never below zero."""

    @abstractmethod
    async def set_occupancy(self, farm_id: UUID, hutch_id: UUID, value: int) -> Hutch | None: ...
