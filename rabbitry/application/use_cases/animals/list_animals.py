from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.value_objects.animal_status import TERMINAL_STATUSES, AnimalStatus
from rabbitry.domain.value_objects.sex import Sex


@dataclass(slots=True)
class ListAnimalsResult:
    items: list[Animal]
    total: int


def _parse_statuses(statuses: list[str] | None) -> list[str] | None:
    if not statuses:
        return None
    valid = {s.value for s in AnimalStatus}
    unknown = [s for s in statuses if s not in valid]
    if unknown:
        raise ValidationError(f"Unknown status: {', '.join(unknown)}")
    return list(statuses)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    limit: int = 50,
    offset: int = 0,
    statuses: list[str] | None = None,
    sex: str | None = None,
    search: str | None = None,
) -> ListAnimalsResult:
    if limit <= 0 or limit > 200:
        raise ValidationError("limit must be between 1 and 200")
    if offset < 0:
        raise ValidationError("offset cannot be negative")
    if sex is not None and sex not in {s.value for s in Sex}:
        raise ValidationError("sex must be Male or Female")
    status_values = _parse_statuses(statuses)
    items = await uow.animals.list(
        farm_id,
        statuses=status_values,
        sex=sex,
        search=search,
        limit=limit,
        offset=offset,
    )
    total = await uow.animals.count(farm_id, statuses=status_values, sex=sex, search=search)
    return ListAnimalsResult(items=items, total=total)


async def breeding_candidates(uow: UnitOfWork, farm_id: UUID, sex: str) -> list[Animal]:
    """Living animals of ``sex`` that can be paired."""
    living = [s.value for s in AnimalStatus if s not in TERMINAL_STATUSES]
    return await uow.animals.list(farm_id, statuses=living, sex=sex)
