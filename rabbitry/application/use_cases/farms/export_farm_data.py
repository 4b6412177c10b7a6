from __future__ import annotations

import dataclasses
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.farms.get_farm import require_farm


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


async def execute(uow: UnitOfWork, farm_id: UUID) -> dict[str, Any]:
    """Every record of the farm as one JSON-ready document."""
    farm = await require_farm(uow, farm_id)
    document = {
        "farm_id": farm_id,
        "exported_at": datetime.now(timezone.utc),
        "farm": farm,
        "animals": await uow.animals.list(farm_id),
        "hutches": await uow.hutches.list_for_farm(farm_id),
        "hutch_assignments": await uow.hutch_assignments.list_for_farm(farm_id),
        "matings": await uow.matings.list(farm_id),
        "deliveries": await uow.deliveries.list(farm_id),
        "transactions": await uow.transactions.list(farm_id),
        "sales": await uow.sales.list(farm_id),
        "customers": await uow.customers.list(farm_id),
        "medical_records": await uow.medical_records.list(farm_id),
        "weights": await uow.weights.list(farm_id),
    }
    return _jsonable(document)
