from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.value_objects.transaction_type import TransactionType


@dataclass(slots=True)
class CreateTransactionInput:
    type: str
    category: str
    amount: Decimal
    date: date
    notes: str | None = None
    related_tags: list[str] | None = None


def _ensure_type(value: str) -> str:
    if value not in {t.value for t in TransactionType}:
        raise ValidationError("type must be Income or Expense")
    return value


async def create_transaction(
    uow: UnitOfWork, farm_id: UUID, payload: CreateTransactionInput
) -> Transaction:
    _ensure_type(payload.type)
    if payload.amount <= 0:
        raise ValidationError("amount must be positive")
    category = (payload.category or "").strip()
    if not category:
        raise ValidationError("category is required")
    created = await uow.transactions.add(
        Transaction.create(
            farm_id=farm_id,
            type=payload.type,
            category=category,
            amount=payload.amount,
            date=payload.date,
            notes=payload.notes or "",
            related_tags=payload.related_tags,
        )
    )
    await uow.commit()
    return created


async def list_transactions(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    type: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Transaction]:
    if type is not None:
        _ensure_type(type)
    if date_from and date_to and date_from > date_to:
        raise ValidationError("date_from must not be after date_to")
    return await uow.transactions.list(farm_id, type=type, date_from=date_from, date_to=date_to)


@dataclass(slots=True)
class FinanceSummary:
    income: Decimal
    expense: Decimal
    date_from: date | None = None
    date_to: date | None = None

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


async def finance_summary(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> FinanceSummary:
    items = await list_transactions(uow, farm_id, date_from=date_from, date_to=date_to)
    income = sum(
        (t.amount for t in items if t.type == TransactionType.INCOME.value), Decimal("0")
    )
    expense = sum(
        (t.amount for t in items if t.type == TransactionType.EXPENSE.value), Decimal("0")
    )
    return FinanceSummary(income=income, expense=expense, date_from=date_from, date_to=date_to)
