from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rabbitry.interfaces.http.schemas.hutches import CapacityWarningResponse


class MatingMovePayload(BaseModel):
    mode: str = Field(..., description="sire_visits_doe, doe_visits_sire or neutral")
    hutch_id: UUID | None = None


class MatingCreate(BaseModel):
    doe_tag: str
    sire_tag: str
    mating_date: DtDate | None = None
    notes: str | None = None
    move: MatingMovePayload | None = None


class PalpationRequest(BaseModel):
    result: str = Field(..., description="Positive or Negative")
    checked_on: DtDate | None = None


class DeliveryCreate(BaseModel):
    delivery_date: DtDate
    kits_born: int = Field(..., ge=0)
    kits_live: int = Field(..., ge=0)
    notes: str | None = None


class DeliveryUpdate(BaseModel):
    delivery_date: DtDate | None = None
    kits_born: int | None = Field(None, ge=0)
    kits_live: int | None = Field(None, ge=0)
    notes: str | None = None


class MatingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    doe_tag: str
    sire_tag: str
    mating_date: DtDate
    expected_palpation_date: DtDate
    expected_delivery_date: DtDate
    status: str
    palpation_result: str | None
    palpation_checked_on: DtDate | None
    actual_delivery_date: DtDate | None
    kits_born: int | None
    kits_live: int | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class DeliveryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    mating_id: UUID
    doe_tag: str
    sire_tag: str
    delivery_date: DtDate
    kits_born: int
    kits_live: int
    kit_ids: list[UUID]
    notes: str | None
    created_at: datetime


class MatingCreatedResponse(BaseModel):
    mating: MatingResponse
    inbreeding: str
    moved_animal_ids: list[UUID] = Field(default_factory=list)
    capacity_warnings: list[CapacityWarningResponse] = Field(default_factory=list)


class MatingDetailResponse(BaseModel):
    mating: MatingResponse
    delivery: DeliveryResponse | None = None


class DeliveryRecordedResponse(BaseModel):
    mating: MatingResponse
    delivery: DeliveryResponse
