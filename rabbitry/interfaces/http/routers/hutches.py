from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from rabbitry.application.use_cases.housing import manage_hutches, reconcile_occupancy
from rabbitry.infrastructure.auth.context import FarmContext
from rabbitry.interfaces.http.deps import get_farm_context, get_uow
from rabbitry.interfaces.http.schemas.hutches import (
    HutchAssignmentResponse,
    HutchCreate,
    HutchResponse,
    HutchUpdate,
    OccupancyDriftResponse,
)

router = APIRouter(prefix="/hutches", tags=["hutches"])


@router.get("", response_model=list[HutchResponse])
async def list_hutches(
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[HutchResponse]:
    hutches = await manage_hutches.list_hutches(uow, ctx.farm_id)
    return [HutchResponse.model_validate(h) for h in hutches]


@router.post("", response_model=HutchResponse, status_code=status.HTTP_201_CREATED)
async def create_hutch(
    payload: HutchCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> HutchResponse:
    hutch = await manage_hutches.create_hutch(
        uow, ctx.farm_id, manage_hutches.CreateHutchInput(**payload.model_dump())
    )
    return HutchResponse.model_validate(hutch)


@router.post("/reconcile", response_model=list[OccupancyDriftResponse])
async def reconcile_hutches(
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[OccupancyDriftResponse]:
    """Repair occupancy counters that drifted from the housed animals."""
    drifts = await reconcile_occupancy.execute(uow, ctx.farm_id)
    return [OccupancyDriftResponse.model_validate(d) for d in drifts]


@router.put("/{hutch_id}", response_model=HutchResponse)
async def update_hutch(
    hutch_id: UUID,
    payload: HutchUpdate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> HutchResponse:
    hutch = await manage_hutches.update_hutch(
        uow,
        ctx.farm_id,
        hutch_id,
        manage_hutches.UpdateHutchInput(**payload.model_dump(exclude_unset=True)),
    )
    return HutchResponse.model_validate(hutch)


@router.delete("/{hutch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_hutch(
    hutch_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> Response:
    await manage_hutches.delete_hutch(uow, ctx.farm_id, hutch_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{hutch_id}/history", response_model=list[HutchAssignmentResponse])
async def hutch_history(
    hutch_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[HutchAssignmentResponse]:
    stays = await manage_hutches.hutch_history(uow, ctx.farm_id, hutch_id)
    return [HutchAssignmentResponse.model_validate(s) for s in stays]
