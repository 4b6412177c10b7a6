from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from rabbitry.interfaces.http.schemas.animals import AnimalResponse


class TransactionCreate(BaseModel):
    type: str = Field(..., description="Income or Expense")
    category: str
    amount: Decimal = Field(..., gt=0)
    date: DtDate
    notes: str | None = None
    related_tags: list[str] | None = None


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    category: str
    amount: Decimal
    date: DtDate
    notes: str
    related_id: UUID | None
    related_tags: list[str]
    created_at: datetime


class FinanceSummaryResponse(BaseModel):
    income: Decimal
    expense: Decimal
    net: Decimal
    date_from: DtDate | None = None
    date_to: DtDate | None = None


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str | None = None
    email: str | None = None


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    phone: str | None
    email: str | None
    total_spent: Decimal
    last_purchase_date: DtDate | None
    created_at: datetime


class SaleCreate(BaseModel):
    animal_ids: list[UUID] = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: DtDate
    buyer_name: str | None = None
    customer_id: UUID | None = None
    new_customer: CustomerCreate | None = None
    notes: str | None = None


class SaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    animal_ids: list[UUID]
    animal_tags: list[str]
    buyer_name: str
    customer_id: UUID | None
    amount: Decimal
    date: DtDate
    notes: str | None
    created_at: datetime


class SaleRecordedResponse(BaseModel):
    sale: SaleResponse
    transaction: TransactionResponse
    animals: list[AnimalResponse]
    customer: CustomerResponse | None = None
