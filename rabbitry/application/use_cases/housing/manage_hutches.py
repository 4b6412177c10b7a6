from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ConflictError, HousingNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.hutch import Hutch, hutch_code
from rabbitry.domain.models.hutch_assignment import HutchAssignment

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateHutchInput:
    number: int
    capacity: int
    label: str | None = None
    accessories: list[str] | None = None


@dataclass(slots=True)
class UpdateHutchInput:
    label: str | None = None
    capacity: int | None = None
    accessories: list[str] | None = None


def _validate_capacity(capacity: int) -> None:
    if capacity < 1:
        raise ValidationError("capacity must be at least 1")


async def create_hutch(uow: UnitOfWork, farm_id: UUID, payload: CreateHutchInput) -> Hutch:
    if payload.number < 1:
        raise ValidationError("number must be a positive integer")
    _validate_capacity(payload.capacity)
    if await uow.hutches.get_by_number(farm_id, payload.number):
        raise ConflictError(f"Hutch {hutch_code(payload.number)} already exists")
    hutch = Hutch.create(
        farm_id=farm_id,
        number=payload.number,
        label=(payload.label or "").strip() or hutch_code(payload.number),
        capacity=payload.capacity,
        accessories=payload.accessories,
    )
    created = await uow.hutches.add(hutch)
    await uow.commit()
    return created


async def list_hutches(uow: UnitOfWork, farm_id: UUID) -> list[Hutch]:
    return await uow.hutches.list_for_farm(farm_id)


async def update_hutch(
    uow: UnitOfWork, farm_id: UUID, hutch_id: UUID, payload: UpdateHutchInput
) -> Hutch:
    existing = await uow.hutches.get(farm_id, hutch_id)
    if not existing:
        raise HousingNotFound(f"Hutch {hutch_id} not found")
    data: dict = {}
    if payload.label is not None:
        label = payload.label.strip()
        if not label:
            raise ValidationError("label cannot be blank")
        data["label"] = label
    if payload.capacity is not None:
        _validate_capacity(payload.capacity)
        data["capacity"] = payload.capacity
    if payload.accessories is not None:
        data["accessories"] = list(payload.accessories)
    if not data:
        return existing
    updated = await uow.hutches.update(farm_id, hutch_id, data)
    await uow.commit()
    return updated


async def delete_hutch(uow: UnitOfWork, farm_id: UUID, hutch_id: UUID) -> None:
    hutch = await uow.hutches.get(farm_id, hutch_id)
    if not hutch:
        raise HousingNotFound(f"Hutch {hutch_id} not found")
    housed = (await uow.animals.count_by_hutch(farm_id)).get(hutch_id, 0)
    if hutch.current_occupancy > 0 or housed > 0:
        raise ConflictError(
            f"Hutch {hutch.code} is occupied",
            details={"occupancy": max(hutch.current_occupancy, housed)},
        )
    await uow.hutches.delete(farm_id, hutch_id)
    await uow.commit()
    logger.info("Deleted hutch %s for farm %s", hutch.code, farm_id)


async def hutch_history(uow: UnitOfWork, farm_id: UUID, hutch_id: UUID) -> list[HutchAssignment]:
    if not await uow.hutches.get(farm_id, hutch_id):
        raise HousingNotFound(f"Hutch {hutch_id} not found")
    return await uow.hutch_assignments.list_for_hutch(farm_id, hutch_id)
