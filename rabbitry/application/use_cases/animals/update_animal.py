from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, ConflictError, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.value_objects.sex import Sex


@dataclass(slots=True)
class UpdateAnimalInput:
    version: int
    tag: str | None = None
    name: str | None = None
    breed: str | None = None
    sex: str | None = None
    date_of_birth: date | None = None
    date_of_acquisition: date | None = None
    purchase_cost: Decimal | None = None
    sire_tag: str | None = None
    doe_tag: str | None = None
    notes: str | None = None


# Status and housing only change through the ledger and the sale/mortality flows
EDITABLE_FIELDS = (
    "tag",
    "name",
    "breed",
    "sex",
    "date_of_birth",
    "date_of_acquisition",
    "purchase_cost",
    "sire_tag",
    "doe_tag",
    "notes",
)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    payload: UpdateAnimalInput,
) -> Animal:
    if payload.version < 1:
        raise ValidationError("Invalid version value")
    existing = await uow.animals.get(farm_id, animal_id)
    if not existing:
        raise AnimalNotFound("Animal not found")
    if payload.sex is not None and payload.sex not in {s.value for s in Sex}:
        raise ValidationError("sex must be Male or Female")
    data: dict = {}
    for field_name in EDITABLE_FIELDS:
        value = getattr(payload, field_name)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if field_name in ("tag", "breed") and not value:
                raise ValidationError(f"{field_name} cannot be blank")
        data[field_name] = value
    if "tag" in data and data["tag"] != existing.tag:
        if await uow.animals.get_by_tag(farm_id, data["tag"]):
            raise ConflictError(f"Animal tag {data['tag']} already exists")
    if not data:
        return existing
    updated = await uow.animals.update(
        farm_id,
        animal_id,
        data=data,
        expected_version=payload.version,
    )
    if not updated:
        raise ConflictError("Version mismatch while updating animal")
    await uow.commit()
    return updated
