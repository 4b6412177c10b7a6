from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from rabbitry.application.use_cases.breeding import (
    list_matings,
    record_delivery,
    record_mating,
    record_palpation,
    update_delivery,
)
from rabbitry.infrastructure.auth.context import FarmContext
from rabbitry.interfaces.http.deps import get_farm_context, get_uow
from rabbitry.interfaces.http.schemas.breeding import (
    DeliveryCreate,
    DeliveryRecordedResponse,
    DeliveryResponse,
    DeliveryUpdate,
    MatingCreate,
    MatingCreatedResponse,
    MatingDetailResponse,
    MatingResponse,
    PalpationRequest,
)
from rabbitry.interfaces.http.schemas.hutches import CapacityWarningResponse

router = APIRouter(prefix="/breeding", tags=["breeding"])


@router.get("/matings", response_model=list[MatingResponse])
async def list_matings_endpoint(
    status_filter: str | None = Query(None, alias="status"),
    doe_tag: str | None = Query(None),
    sire_tag: str | None = Query(None),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[MatingResponse]:
    matings = await list_matings.execute(
        uow, ctx.farm_id, status=status_filter, doe_tag=doe_tag, sire_tag=sire_tag
    )
    return [MatingResponse.model_validate(m) for m in matings]


@router.post(
    "/matings", response_model=MatingCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def record_mating_endpoint(
    payload: MatingCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MatingCreatedResponse:
    move = (
        record_mating.MatingMove(mode=payload.move.mode, hutch_id=payload.move.hutch_id)
        if payload.move
        else None
    )
    result = await record_mating.execute(
        uow,
        ctx.farm_id,
        record_mating.RecordMatingInput(
            doe_tag=payload.doe_tag,
            sire_tag=payload.sire_tag,
            mating_date=payload.mating_date,
            notes=payload.notes,
            move=move,
        ),
    )
    return MatingCreatedResponse(
        mating=MatingResponse.model_validate(result.mating),
        inbreeding=result.inbreeding.value,
        moved_animal_ids=[m.animal.id for m in result.moves if m.changed],
        capacity_warnings=[
            CapacityWarningResponse.model_validate(w) for w in result.capacity_warnings
        ],
    )


@router.get("/matings/{mating_id}", response_model=MatingDetailResponse)
async def get_mating_endpoint(
    mating_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MatingDetailResponse:
    mating, delivery = await list_matings.get_mating(uow, ctx.farm_id, mating_id)
    return MatingDetailResponse(
        mating=MatingResponse.model_validate(mating),
        delivery=DeliveryResponse.model_validate(delivery) if delivery else None,
    )


@router.post("/matings/{mating_id}/palpation", response_model=MatingResponse)
async def record_palpation_endpoint(
    mating_id: UUID,
    payload: PalpationRequest,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MatingResponse:
    mating = await record_palpation.execute(
        uow,
        ctx.farm_id,
        mating_id,
        record_palpation.RecordPalpationInput(**payload.model_dump()),
    )
    return MatingResponse.model_validate(mating)


@router.post(
    "/matings/{mating_id}/delivery",
    response_model=DeliveryRecordedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_delivery_endpoint(
    mating_id: UUID,
    payload: DeliveryCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> DeliveryRecordedResponse:
    result = await record_delivery.execute(
        uow,
        ctx.farm_id,
        mating_id,
        record_delivery.RecordDeliveryInput(**payload.model_dump()),
    )
    return DeliveryRecordedResponse(
        mating=MatingResponse.model_validate(result.mating),
        delivery=DeliveryResponse.model_validate(result.delivery),
    )


@router.get("/deliveries", response_model=list[DeliveryResponse])
async def list_deliveries_endpoint(
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[DeliveryResponse]:
    deliveries = await list_matings.list_deliveries(uow, ctx.farm_id)
    return [DeliveryResponse.model_validate(d) for d in deliveries]


@router.put("/deliveries/{delivery_id}", response_model=DeliveryResponse)
async def update_delivery_endpoint(
    delivery_id: UUID,
    payload: DeliveryUpdate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> DeliveryResponse:
    delivery = await update_delivery.execute(
        uow,
        ctx.farm_id,
        delivery_id,
        update_delivery.UpdateDeliveryInput(**payload.model_dump(exclude_unset=True)),
    )
    return DeliveryResponse.model_validate(delivery)
