from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rabbitry.interfaces.http.schemas.breeding import MatingResponse
from rabbitry.interfaces.http.schemas.hutches import (
    CapacityWarningResponse,
    HutchAssignmentResponse,
)
from rabbitry.interfaces.http.schemas.medical import MedicalRecordResponse


class AnimalCreate(BaseModel):
    breed: str
    sex: str = Field(..., description="Male or Female")
    tag: str | None = Field(None, description="Generated from the breed code when omitted")
    count: int = Field(1, ge=1, le=50)
    name: str | None = None
    source: str = "Born"
    date_of_birth: DtDate | None = None
    date_of_acquisition: DtDate | None = None
    purchase_cost: Decimal | None = Field(None, ge=0)
    sire_tag: str | None = None
    doe_tag: str | None = None
    hutch_id: UUID | None = None
    weight: Decimal | None = Field(None, gt=0)
    notes: str | None = None
    delivery_id: UUID | None = None


class AnimalUpdate(BaseModel):
    version: int
    tag: str | None = None
    name: str | None = None
    breed: str | None = None
    sex: str | None = None
    date_of_birth: DtDate | None = None
    date_of_acquisition: DtDate | None = None
    purchase_cost: Decimal | None = Field(None, ge=0)
    sire_tag: str | None = None
    doe_tag: str | None = None
    notes: str | None = None


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    tag: str
    name: str | None
    breed: str
    sex: str
    source: str
    date_of_birth: DtDate | None
    date_of_acquisition: DtDate | None
    purchase_cost: Decimal | None
    status: str
    current_hutch_id: UUID | None
    sire_tag: str | None
    doe_tag: str | None
    weight: Decimal | None
    notes: str
    created_at: datetime
    updated_at: datetime
    version: int


class AnimalsListResponse(BaseModel):
    items: list[AnimalResponse]
    total: int


class AnimalsCreatedResponse(BaseModel):
    items: list[AnimalResponse]
    purchase_transaction_id: UUID | None = None
    capacity_warnings: list[CapacityWarningResponse] = Field(default_factory=list)


class NextTagResponse(BaseModel):
    next_tag: str


class MoveRequest(BaseModel):
    hutch_id: UUID | None = Field(None, description="Target hutch; null releases the animal")
    purpose: str = "Housing"
    notes: str | None = None


class MoveResponse(BaseModel):
    animal: AnimalResponse
    changed: bool
    source_hutch_id: UUID | None = None
    target_hutch_id: UUID | None = None
    assignment: HutchAssignmentResponse | None = None
    capacity_warning: CapacityWarningResponse | None = None


class MortalityRequest(BaseModel):
    status: str = Field(..., description="Deceased-Natural or Deceased-Processed")
    date: DtDate
    notes: str | None = None
    sale_amount: Decimal | None = Field(None, ge=0)


class MortalityResponse(BaseModel):
    animal: AnimalResponse
    transaction_id: UUID | None = None


class WeightCreate(BaseModel):
    weight: Decimal = Field(..., gt=0)
    date: DtDate
    age_label: str | None = None
    notes: str | None = None


class WeightResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    weight: Decimal
    date: DtDate
    age_label: str | None
    notes: str | None
    created_at: datetime


class InbreedingCheckRequest(BaseModel):
    first_tag: str
    second_tag: str


class InbreedingCheckResponse(BaseModel):
    relation: str
    related: bool


class AnimalDetailsResponse(BaseModel):
    animal: AnimalResponse
    sire: AnimalResponse | None = None
    doe: AnimalResponse | None = None
    offspring: list[AnimalResponse]
    housing_history: list[HutchAssignmentResponse]
    medical_records: list[MedicalRecordResponse]
    matings: list[MatingResponse]
    weights: list[WeightResponse]
