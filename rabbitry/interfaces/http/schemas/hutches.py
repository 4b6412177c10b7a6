from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class HutchCreate(BaseModel):
    number: int = Field(..., ge=1)
    capacity: int = Field(..., ge=1)
    label: str | None = None
    accessories: list[str] = Field(default_factory=list)


class HutchUpdate(BaseModel):
    label: str | None = None
    capacity: int | None = Field(None, ge=1)
    accessories: list[str] | None = None


class HutchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    number: int
    code: str
    label: str
    capacity: int
    current_occupancy: int
    accessories: list[str]
    created_at: datetime
    updated_at: datetime


class HutchAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    hutch_id: UUID
    hutch_label: str
    start_at: datetime
    end_at: datetime | None
    purpose: str
    notes: str


class CapacityWarningResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hutch_id: UUID
    hutch_code: str
    capacity: int
    occupancy: int
    message: str


class OccupancyDriftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    hutch_id: UUID
    hutch_code: str
    recorded: int
    actual: int
