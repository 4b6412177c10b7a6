from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OccupancyDrift:
    hutch_id: UUID
    hutch_code: str
    recorded: int
    actual: int


async def execute(uow: UnitOfWork, farm_id: UUID) -> list[OccupancyDrift]:
    """Recompute every hutch counter from the animals housed in it."""
    housed = await uow.animals.count_by_hutch(farm_id)
    drifts: list[OccupancyDrift] = []
    for hutch in await uow.hutches.list_for_farm(farm_id):
        actual = housed.get(hutch.id, 0)
        if hutch.current_occupancy == actual:
            continue
        await uow.hutches.set_occupancy(farm_id, hutch.id, actual)
        drifts.append(
            OccupancyDrift(
                hutch_id=hutch.id,
                hutch_code=hutch.code,
                recorded=hutch.current_occupancy,
                actual=actual,
            )
        )
    if drifts:
        logger.warning("Repaired %d hutch counters for farm %s", len(drifts), farm_id)
        await uow.commit()
    return drifts
