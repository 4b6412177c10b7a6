from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.medical_record import MedicalRecord, MedicalType
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.value_objects.transaction_type import MEDICATION_CATEGORY, TransactionType

logger = logging.getLogger(__name__)


@dataclass
class CreateMedicalRecordInput:
    animal_id: UUID
    date: date
    type: str
    medication_name: str
    cost: Decimal = Decimal("0")
    dosage: str | None = None
    notes: str | None = None
    next_due_date: date | None = None


@dataclass
class CreateMedicalRecordOutput:
    record: MedicalRecord
    expense: Transaction | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateMedicalRecordInput,
) -> CreateMedicalRecordOutput:
    """Create a medical record; a positive cost is booked as an expense."""
    if payload.type not in {t.value for t in MedicalType}:
        raise ValidationError(f"Unknown medical record type: {payload.type}")
    if payload.cost < 0:
        raise ValidationError("cost cannot be negative")
    if not (payload.medication_name or "").strip():
        raise ValidationError("medication_name is required")
    if payload.next_due_date and payload.next_due_date < payload.date:
        raise ValidationError("next_due_date cannot precede the record date")
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise AnimalNotFound("Animal not found")

    record = await uow.medical_records.add(
        MedicalRecord.create(
            farm_id=farm_id,
            animal_id=animal.id,
            date=payload.date,
            type=payload.type,
            medication_name=payload.medication_name.strip(),
            cost=payload.cost,
            dosage=payload.dosage,
            notes=payload.notes,
            next_due_date=payload.next_due_date,
        )
    )
    expense = None
    if payload.cost > 0:
        expense = await uow.transactions.add(
            Transaction.create(
                farm_id=farm_id,
                type=TransactionType.EXPENSE.value,
                category=MEDICATION_CATEGORY,
                amount=payload.cost,
                date=payload.date,
                notes=f"{payload.type}: {record.medication_name} for {animal.tag}",
                related_id=record.id,
                related_tags=[animal.tag],
            )
        )
    await uow.commit()
    logger.info("Recorded %s for animal %s", payload.type, animal.tag)
    return CreateMedicalRecordOutput(record=record, expense=expense)
