from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from rabbitry.application.use_cases.health import create_medical_record, list_medical_records
from rabbitry.infrastructure.auth.context import FarmContext
from rabbitry.interfaces.http.deps import get_farm_context, get_uow
from rabbitry.interfaces.http.schemas.medical import (
    MedicalRecordCreate,
    MedicalRecordCreatedResponse,
    MedicalRecordResponse,
)

router = APIRouter(prefix="/medical", tags=["medical"])


@router.post("", response_model=MedicalRecordCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_medical_record_endpoint(
    payload: MedicalRecordCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MedicalRecordCreatedResponse:
    result = await create_medical_record.execute(
        uow,
        ctx.farm_id,
        create_medical_record.CreateMedicalRecordInput(**payload.model_dump()),
    )
    return MedicalRecordCreatedResponse(
        record=MedicalRecordResponse.model_validate(result.record),
        expense_transaction_id=result.expense.id if result.expense else None,
    )


@router.get("", response_model=list[MedicalRecordResponse])
async def list_medical_records_endpoint(
    animal_id: UUID | None = Query(None),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[MedicalRecordResponse]:
    records = await list_medical_records.execute(uow, ctx.farm_id, animal_id)
    return [MedicalRecordResponse.model_validate(r) for r in records]
