from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import AnimalNotFound
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.services.inbreeding import detect_inbreeding
from rabbitry.domain.value_objects.inbreeding_relation import InbreedingRelation


async def execute(
    uow: UnitOfWork, farm_id: UUID, first_tag: str, second_tag: str
) -> InbreedingRelation:
    first = await uow.animals.get_by_tag(farm_id, first_tag.strip())
    if not first:
        raise AnimalNotFound(f"Animal {first_tag} not found")
    second = await uow.animals.get_by_tag(farm_id, second_tag.strip())
    if not second:
        raise AnimalNotFound(f"Animal {second_tag} not found")
    return detect_inbreeding(first, second)
