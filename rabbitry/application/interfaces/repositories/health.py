from __future__ import annotations

from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.medical_record import MedicalRecord
from rabbitry.domain.models.weight_record import WeightRecord


class MedicalRecordsRepository(Protocol):
    async def add(self, record: MedicalRecord) -> MedicalRecord: ...

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[MedicalRecord]: ...


class WeightsRepository(Protocol):
    async def add(self, record: WeightRecord) -> WeightRecord: ...

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[WeightRecord]: ...
