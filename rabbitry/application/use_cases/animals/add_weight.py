from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.weight_record import WeightRecord


@dataclass(slots=True)
class AddWeightInput:
    weight: Decimal
    date: date
    age_label: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork, farm_id: UUID, animal_id: UUID, payload: AddWeightInput
) -> WeightRecord:
    if payload.weight <= 0:
        raise ValidationError("weight must be positive")
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise AnimalNotFound("Animal not found")
    record = await uow.weights.add(
        WeightRecord.create(
            farm_id=farm_id,
            animal_id=animal_id,
            weight=payload.weight,
            date=payload.date,
            age_label=payload.age_label,
            notes=payload.notes,
        )
    )
    # Only a reading at least as recent as the others becomes the latest weight
    history = await uow.weights.list(farm_id, animal_id=animal_id)
    if all(other.date <= payload.date for other in history):
        animal.weight = payload.weight
        animal.bump_version()
        await uow.animals.save(animal)
    await uow.commit()
    return record
