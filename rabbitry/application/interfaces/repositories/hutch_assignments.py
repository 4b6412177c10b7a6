from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.hutch_assignment import HutchAssignment


class HutchAssignmentsRepository(Protocol):
    async def add(self, assignment: HutchAssignment) -> HutchAssignment: ...

    async def list_open_for_animal(
        self, farm_id: UUID, animal_id: UUID
    ) -> list[HutchAssignment]: ...

    async def close_open_for_animal(
        self, farm_id: UUID, animal_id: UUID, end_at: datetime
    ) -> int: ...

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[HutchAssignment]: ...

    async def list_for_hutch(self, farm_id: UUID, hutch_id: UUID) -> list[HutchAssignment]: ...

    async def list_for_farm(self, farm_id: UUID) -> list[HutchAssignment]: ...
