from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.application.use_cases.housing.ledger import (
    MoveResult,
    move_animal,
    release_animal,
)
from rabbitry.domain.value_objects.housing_purpose import HousingPurpose


@dataclass(slots=True)
class AssignAnimalInput:
    hutch_id: UUID | None  # None takes the animal out of housing
    purpose: str = HousingPurpose.HOUSING.value
    notes: str | None = None
    released_on: date | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    payload: AssignAnimalInput,
) -> MoveResult:
    farm = await require_farm(uow, farm_id)
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise AnimalNotFound(f"Animal {animal_id} not found")
    if payload.hutch_id is None:
        result = await release_animal(uow, farm_id, animal, payload.released_on)
    else:
        result = await move_animal(
            uow,
            farm_id,
            animal,
            payload.hutch_id,
            purpose=payload.purpose,
            notes=payload.notes,
            capacity_policy=farm.capacity_policy,
        )
    if result.changed:
        await uow.commit()
    return result
