from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from rabbitry.application.use_cases.farms import (
    create_farm,
    export_farm_data,
    get_farm,
    manage_breeds,
    update_farm_settings,
)
from rabbitry.config.settings import Settings
from rabbitry.infrastructure.auth.context import AuthContext
from rabbitry.interfaces.http.deps import get_app_settings, get_auth_context, get_uow
from rabbitry.interfaces.http.schemas.farms import (
    BreedPayload,
    FarmCreate,
    FarmResponse,
    FarmSettingsUpdate,
)

router = APIRouter(prefix="/farms", tags=["farms"])


@router.post("", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
async def create_farm_endpoint(
    payload: FarmCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
) -> FarmResponse:
    farm = await create_farm.execute(
        uow,
        context.user_id,
        create_farm.CreateFarmInput(
            name=payload.name,
            currency=payload.currency,
            timezone=payload.timezone,
            gestation_days=payload.gestation_days or settings.default_gestation_days,
            palpation_days=payload.palpation_days or settings.default_palpation_days,
            weaning_days=payload.weaning_days or settings.default_weaning_days,
            tag_prefix=payload.tag_prefix,
        ),
    )
    return FarmResponse.model_validate(farm)


@router.get("/me", response_model=FarmResponse)
async def get_my_farm(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmResponse:
    farm = await get_farm.execute(uow, context.user_id)
    return FarmResponse.model_validate(farm)


@router.put("/me/settings", response_model=FarmResponse)
async def update_settings(
    payload: FarmSettingsUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmResponse:
    farm = await get_farm.execute(uow, context.user_id)
    updated = await update_farm_settings.execute(
        uow,
        farm.id,
        update_farm_settings.UpdateFarmSettingsInput(**payload.model_dump(exclude_unset=True)),
    )
    return FarmResponse.model_validate(updated)


@router.post("/me/breeds", response_model=FarmResponse, status_code=status.HTTP_201_CREATED)
async def add_breed(
    payload: BreedPayload,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmResponse:
    farm = await get_farm.execute(uow, context.user_id)
    updated = await manage_breeds.add_breed(uow, farm.id, payload.name, payload.code)
    return FarmResponse.model_validate(updated)


@router.delete("/me/breeds/{code}", response_model=FarmResponse)
async def remove_breed(
    code: str,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> FarmResponse:
    farm = await get_farm.execute(uow, context.user_id)
    updated = await manage_breeds.remove_breed(uow, farm.id, code)
    return FarmResponse.model_validate(updated)


@router.get("/me/export")
async def export_farm(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> dict[str, Any]:
    """Whole-farm JSON backup."""
    farm = await get_farm.execute(uow, context.user_id)
    return await export_farm_data.execute(uow, farm.id)
