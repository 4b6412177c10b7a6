from __future__ import annotations

from uuid import UUID

from rabbitry.application.errors import ConflictError, NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.domain.models.farm import Breed, Farm, is_valid_breed_code


async def add_breed(uow: UnitOfWork, farm_id: UUID, name: str, code: str) -> Farm:
    farm = await require_farm(uow, farm_id)
    name = (name or "").strip()
    code = (code or "").strip().upper()
    if not name:
        raise ValidationError("Breed name is required")
    if not is_valid_breed_code(code):
        raise ValidationError("Breed code must be 2 to 4 letters")
    if farm.find_breed(code):
        raise ConflictError(f"Breed code {code} already exists")
    farm.breeds.append(Breed(name=name, code=code))
    farm.touch()
    saved = await uow.farms.save(farm)
    await uow.commit()
    return saved


async def remove_breed(uow: UnitOfWork, farm_id: UUID, code: str) -> Farm:
    farm = await require_farm(uow, farm_id)
    breed = farm.find_breed(code)
    if not breed:
        raise NotFound(f"Breed {code} not found")
    farm.breeds = [b for b in farm.breeds if b.code != breed.code]
    farm.touch()
    saved = await uow.farms.save(farm)
    await uow.commit()
    return saved
