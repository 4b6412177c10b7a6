from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FarmCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    currency: str = "USD"
    timezone: str = "UTC"
    gestation_days: int | None = Field(None, description="Farm default when omitted")
    palpation_days: int | None = None
    weaning_days: int | None = None
    tag_prefix: str | None = None


class FarmSettingsUpdate(BaseModel):
    name: str | None = None
    currency: str | None = None
    timezone: str | None = None
    gestation_days: int | None = None
    palpation_days: int | None = None
    weaning_days: int | None = None
    tag_prefix: str | None = None
    capacity_policy: str | None = Field(None, description="soft or hard")


class BreedPayload(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    code: str


class FarmResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_user_id: UUID
    name: str
    currency: str
    timezone: str
    gestation_days: int
    palpation_days: int
    weaning_days: int
    breeds: list[BreedPayload]
    tag_prefix: str
    capacity_policy: str
    created_at: datetime
    updated_at: datetime
