from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import AnimalNotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.medical_record import MedicalRecord


async def execute(
    uow: UnitOfWork, farm_id: UUID, animal_id: UUID | None = None
) -> list[MedicalRecord]:
    if animal_id is not None and not await uow.animals.get(farm_id, animal_id):
        raise AnimalNotFound("Animal not found")
    return await uow.medical_records.list(farm_id, animal_id=animal_id)
