from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.hutch_assignment import HutchAssignment
from rabbitry.domain.models.mating import Mating
from rabbitry.domain.models.medical_record import MedicalRecord
from rabbitry.domain.models.weight_record import WeightRecord
from rabbitry.domain.value_objects.sex import Sex


@dataclass(slots=True)
class AnimalDetails:
    animal: Animal
    sire: Animal | None
    doe: Animal | None
    offspring: list[Animal]
    housing_history: list[HutchAssignment]  # newest first
    medical_records: list[MedicalRecord]
    matings: list[Mating]  # newest first
    weights: list[WeightRecord]  # oldest first


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> AnimalDetails:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise AnimalNotFound("Animal not found")

    sire = await uow.animals.get_by_tag(farm_id, animal.sire_tag) if animal.sire_tag else None
    doe = await uow.animals.get_by_tag(farm_id, animal.doe_tag) if animal.doe_tag else None
    if animal.sex == Sex.MALE.value:
        offspring = await uow.animals.list_by_parent(farm_id, sire_tag=animal.tag)
        matings = await uow.matings.list(farm_id, sire_tag=animal.tag)
    else:
        offspring = await uow.animals.list_by_parent(farm_id, doe_tag=animal.tag)
        matings = await uow.matings.list(farm_id, doe_tag=animal.tag)

    return AnimalDetails(
        animal=animal,
        sire=sire,
        doe=doe,
        offspring=offspring,
        housing_history=await uow.hutch_assignments.list_for_animal(farm_id, animal_id),
        medical_records=await uow.medical_records.list(farm_id, animal_id=animal_id),
        matings=matings,
        weights=await uow.weights.list(farm_id, animal_id=animal_id),
    )
