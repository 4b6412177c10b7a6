from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.housing.ledger import release_animal
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.value_objects.animal_status import MORTALITY_STATUSES, AnimalStatus
from rabbitry.domain.value_objects.transaction_type import SALE_CATEGORY, TransactionType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordMortalityInput:
    status: str  # Deceased-Natural | Deceased-Processed
    date: date
    notes: str | None = None
    sale_amount: Decimal | None = None  # processed meat sold


@dataclass(slots=True)
class RecordMortalityResult:
    animal: Animal
    transaction: Transaction | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    payload: RecordMortalityInput,
) -> RecordMortalityResult:
    if payload.status not in {s.value for s in MORTALITY_STATUSES}:
        raise ValidationError("status must be Deceased-Natural or Deceased-Processed")
    if payload.sale_amount is not None and payload.sale_amount < 0:
        raise ValidationError("sale_amount cannot be negative")
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise AnimalNotFound("Animal not found")
    if animal.is_terminal:
        raise ValidationError(f"Animal {animal.tag} is already {animal.status}")

    animal = (await release_animal(uow, farm_id, animal, payload.date)).animal
    animal.status = payload.status
    animal.append_note(f"[{payload.status} on {payload.date.isoformat()}]: {payload.notes or ''}")
    animal.bump_version()
    animal = await uow.animals.save(animal)

    transaction = None
    processed = payload.status == AnimalStatus.DECEASED_PROCESSED.value
    if processed and payload.sale_amount and payload.sale_amount > 0:
        transaction = await uow.transactions.add(
            Transaction.create(
                farm_id=farm_id,
                type=TransactionType.INCOME.value,
                category=SALE_CATEGORY,
                amount=payload.sale_amount,
                date=payload.date,
                notes=f"Processed {animal.tag}",
                related_id=animal.id,
                related_tags=[animal.tag],
            )
        )

    await uow.commit()
    logger.info("Recorded %s for animal %s on %s", payload.status, animal.tag, payload.date)
    return RecordMortalityResult(animal=animal, transaction=transaction)
