from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4


class MedicalType(str, Enum):
    VACCINATION = "Vaccination"
    MEDICATION = "Medication"
    INJURY = "Injury Treatment"
    CHECKUP = "Routine Checkup"
    DEWORMING = "Deworming"
    OTHER = "Other"


@dataclass(slots=True)
class MedicalRecord:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    date: date
    type: str  # MedicalType
    medication_name: str
    cost: Decimal = Decimal("0")
    dosage: str | None = None
    notes: str | None = None
    next_due_date: date | None = None  # recurring vaccines
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        date: date,
        type: str,
        medication_name: str,
        cost: Decimal = Decimal("0"),
        dosage: str | None = None,
        notes: str | None = None,
        next_due_date: date | None = None,
    ) -> MedicalRecord:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            date=date,
            type=type,
            medication_name=medication_name,
            cost=cost,
            dosage=dosage,
            notes=notes,
            next_due_date=next_due_date,
            created_at=datetime.now(timezone.utc),
        )
