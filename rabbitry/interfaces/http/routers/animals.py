from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from rabbitry.application.use_cases.animals import (
    add_weight,
    check_inbreeding,
    create_animals,
    generate_next_tag,
    get_animal,
    get_animal_details,
    list_animals,
    update_animal,
)
from rabbitry.application.use_cases.disposition import record_mortality
from rabbitry.application.use_cases.health import list_medical_records
from rabbitry.application.use_cases.housing import assign_animal
from rabbitry.application.use_cases.housing.ledger import MoveResult
from rabbitry.infrastructure.auth.context import FarmContext
from rabbitry.interfaces.http.deps import get_app_settings, get_farm_context, get_uow
from rabbitry.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalDetailsResponse,
    AnimalResponse,
    AnimalsCreatedResponse,
    AnimalsListResponse,
    AnimalUpdate,
    InbreedingCheckRequest,
    InbreedingCheckResponse,
    MortalityRequest,
    MortalityResponse,
    MoveRequest,
    MoveResponse,
    NextTagResponse,
    WeightCreate,
    WeightResponse,
)
from rabbitry.interfaces.http.schemas.hutches import (
    CapacityWarningResponse,
    HutchAssignmentResponse,
)
from rabbitry.interfaces.http.schemas.medical import MedicalRecordResponse

router = APIRouter(prefix="/animals", tags=["animals"])


def _move_response(result: MoveResult) -> MoveResponse:
    return MoveResponse(
        animal=AnimalResponse.model_validate(result.animal),
        changed=result.changed,
        source_hutch_id=result.source_hutch.id if result.source_hutch else None,
        target_hutch_id=result.target_hutch.id if result.target_hutch else None,
        assignment=(
            HutchAssignmentResponse.model_validate(result.assignment)
            if result.assignment
            else None
        ),
        capacity_warning=(
            CapacityWarningResponse.model_validate(result.capacity_warning)
            if result.capacity_warning
            else None
        ),
    )


@router.get("/next-tag", response_model=NextTagResponse)
async def next_tag(
    breed_code: str = Query(..., description="Registered breed code or breed name"),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
    settings=Depends(get_app_settings),
) -> NextTagResponse:
    """Preview the next generated tag for a breed; the sequence is not advanced."""
    tag = await generate_next_tag.execute(
        uow, ctx.farm_id, breed_code, width=settings.tag_sequence_width
    )
    return NextTagResponse(next_tag=tag)


@router.post("/inbreeding-check", response_model=InbreedingCheckResponse)
async def inbreeding_check(
    payload: InbreedingCheckRequest,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> InbreedingCheckResponse:
    relation = await check_inbreeding.execute(
        uow, ctx.farm_id, payload.first_tag, payload.second_tag
    )
    return InbreedingCheckResponse(relation=relation.value, related=relation.is_related)


@router.get("", response_model=AnimalsListResponse)
async def list_animals_endpoint(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    status_codes: list[str] | None = Query(
        None, alias="status", description="Filter by status. Repeat param or use comma-separated"
    ),
    sex: str | None = Query(None),
    q: str | None = Query(None, description="Text search across tag, name and breed"),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> AnimalsListResponse:
    # Normalize comma-separated single value into list
    if status_codes and len(status_codes) == 1 and "," in status_codes[0]:
        status_codes = [code.strip() for code in status_codes[0].split(",") if code.strip()]
    result = await list_animals.execute(
        uow,
        ctx.farm_id,
        limit=limit,
        offset=offset,
        statuses=status_codes,
        sex=sex,
        search=q,
    )
    return AnimalsListResponse(
        items=[AnimalResponse.model_validate(a) for a in result.items],
        total=result.total,
    )


@router.post("", response_model=AnimalsCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_animals_endpoint(
    payload: AnimalCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
    settings=Depends(get_app_settings),
) -> AnimalsCreatedResponse:
    result = await create_animals.execute(
        uow,
        ctx.farm_id,
        create_animals.CreateAnimalsInput(**payload.model_dump()),
        tag_width=settings.tag_sequence_width,
    )
    return AnimalsCreatedResponse(
        items=[AnimalResponse.model_validate(a) for a in result.animals],
        purchase_transaction_id=(
            result.purchase_transaction.id if result.purchase_transaction else None
        ),
        capacity_warnings=[
            CapacityWarningResponse.model_validate(w) for w in result.capacity_warnings
        ],
    )


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(
    animal_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> AnimalResponse:
    animal = await get_animal.execute(uow, ctx.farm_id, animal_id)
    return AnimalResponse.model_validate(animal)


@router.get("/{animal_id}/details", response_model=AnimalDetailsResponse)
async def get_animal_details_endpoint(
    animal_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> AnimalDetailsResponse:
    details = await get_animal_details.execute(uow, ctx.farm_id, animal_id)
    return AnimalDetailsResponse.model_validate(details, from_attributes=True)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: UUID,
    payload: AnimalUpdate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> AnimalResponse:
    animal = await update_animal.execute(
        uow,
        ctx.farm_id,
        animal_id,
        update_animal.UpdateAnimalInput(**payload.model_dump(exclude_unset=True)),
    )
    return AnimalResponse.model_validate(animal)


@router.post("/{animal_id}/move", response_model=MoveResponse)
async def move_animal_endpoint(
    animal_id: UUID,
    payload: MoveRequest,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MoveResponse:
    result = await assign_animal.execute(
        uow,
        ctx.farm_id,
        animal_id,
        assign_animal.AssignAnimalInput(
            hutch_id=payload.hutch_id,
            purpose=payload.purpose,
            notes=payload.notes,
        ),
    )
    return _move_response(result)


@router.post("/{animal_id}/mortality", response_model=MortalityResponse)
async def record_mortality_endpoint(
    animal_id: UUID,
    payload: MortalityRequest,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> MortalityResponse:
    result = await record_mortality.execute(
        uow,
        ctx.farm_id,
        animal_id,
        record_mortality.RecordMortalityInput(**payload.model_dump()),
    )
    return MortalityResponse(
        animal=AnimalResponse.model_validate(result.animal),
        transaction_id=result.transaction.id if result.transaction else None,
    )


@router.post(
    "/{animal_id}/weights", response_model=WeightResponse, status_code=status.HTTP_201_CREATED
)
async def add_weight_endpoint(
    animal_id: UUID,
    payload: WeightCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> WeightResponse:
    record = await add_weight.execute(
        uow, ctx.farm_id, animal_id, add_weight.AddWeightInput(**payload.model_dump())
    )
    return WeightResponse.model_validate(record)


@router.get("/{animal_id}/medical", response_model=list[MedicalRecordResponse])
async def list_animal_medical_records(
    animal_id: UUID,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[MedicalRecordResponse]:
    records = await list_medical_records.execute(uow, ctx.farm_id, animal_id)
    return [MedicalRecordResponse.model_validate(r) for r in records]
