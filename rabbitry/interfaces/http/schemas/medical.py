from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MedicalRecordCreate(BaseModel):
    """Types: Vaccination, Medication, Injury Treatment, Routine Checkup, Deworming, Other."""

    animal_id: UUID
    date: DtDate
    type: str
    medication_name: str
    cost: Decimal = Field(Decimal("0"), ge=0)
    dosage: str | None = None
    notes: str | None = None
    next_due_date: DtDate | None = None


class MedicalRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    animal_id: UUID
    date: DtDate
    type: str
    medication_name: str
    dosage: str | None
    cost: Decimal
    notes: str | None
    next_due_date: DtDate | None
    created_at: datetime


class MedicalRecordCreatedResponse(BaseModel):
    record: MedicalRecordResponse
    expense_transaction_id: UUID | None = None
