from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import ConflictError, HousingNotFound, NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.animals.generate_next_tag import allocate_tag
from rabbitry.application.use_cases.farms.get_farm import require_farm
from rabbitry.application.use_cases.housing.ledger import CapacityWarning, move_animal
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.models.weight_record import WeightRecord
from rabbitry.domain.services.tags import DEFAULT_SEQUENCE_WIDTH, kit_tags
from rabbitry.domain.value_objects.housing_purpose import HousingPurpose
from rabbitry.domain.value_objects.sex import Sex
from rabbitry.domain.value_objects.transaction_type import PURCHASE_CATEGORY, TransactionType
from rabbitry.utils.datetime_tz import farm_today

logger = logging.getLogger(__name__)

MAX_BATCH = 50
SOURCES = ("Born", "Purchased")


@dataclass(slots=True)
class CreateAnimalsInput:
    breed: str
    sex: str
    tag: str | None = None  # generated from the breed code when omitted
    count: int = 1
    name: str | None = None
    source: str = "Born"
    date_of_birth: date | None = None
    date_of_acquisition: date | None = None
    purchase_cost: Decimal | None = None  # per animal
    sire_tag: str | None = None
    doe_tag: str | None = None
    hutch_id: UUID | None = None
    weight: Decimal | None = None
    notes: str | None = None
    delivery_id: UUID | None = None  # litter these kits belong to


@dataclass(slots=True)
class CreateAnimalsResult:
    animals: list[Animal]
    purchase_transaction: Transaction | None = None
    capacity_warnings: list[CapacityWarning] = field(default_factory=list)


def _validate(payload: CreateAnimalsInput) -> None:
    if payload.sex not in {s.value for s in Sex}:
        raise ValidationError("sex must be Male or Female")
    if payload.source not in SOURCES:
        raise ValidationError("source must be Born or Purchased")
    if not (1 <= payload.count <= MAX_BATCH):
        raise ValidationError(f"count must be between 1 and {MAX_BATCH}")
    if not (payload.breed or "").strip():
        raise ValidationError("breed is required")
    if payload.purchase_cost is not None and payload.purchase_cost < 0:
        raise ValidationError("purchase_cost cannot be negative")
    if payload.weight is not None and payload.weight <= 0:
        raise ValidationError("weight must be positive")


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: CreateAnimalsInput,
    *,
    tag_width: int = DEFAULT_SEQUENCE_WIDTH,
) -> CreateAnimalsResult:
    _validate(payload)
    farm = await require_farm(uow, farm_id)
    delivery = None
    if payload.delivery_id is not None:
        delivery = await uow.deliveries.get(farm_id, payload.delivery_id)
        if not delivery:
            raise NotFound(f"Delivery {payload.delivery_id} not found")
        payload.sire_tag = payload.sire_tag or delivery.sire_tag
        payload.doe_tag = payload.doe_tag or delivery.doe_tag
        payload.date_of_birth = payload.date_of_birth or delivery.delivery_date
    if payload.hutch_id is not None and not await uow.hutches.get(farm_id, payload.hutch_id):
        raise HousingNotFound(f"Hutch {payload.hutch_id} not found")

    if payload.tag and payload.tag.strip():
        tags = kit_tags(payload.tag.strip(), payload.count)
        for tag in tags:
            if await uow.animals.get_by_tag(farm_id, tag):
                raise ConflictError(f"Animal tag {tag} already exists")
    else:
        tags = [
            await allocate_tag(uow, farm, payload.breed, tag_width) for _ in range(payload.count)
        ]

    today = farm_today(farm.timezone)
    acquired_on = payload.date_of_acquisition or today
    result = CreateAnimalsResult(animals=[])
    for tag in tags:
        animal = Animal.create(
            farm_id=farm_id,
            tag=tag,
            breed=payload.breed.strip(),
            sex=payload.sex,
            source=payload.source,
            name=_clean(payload.name),
            date_of_birth=payload.date_of_birth,
            date_of_acquisition=acquired_on,
            purchase_cost=payload.purchase_cost,
            sire_tag=_clean(payload.sire_tag),
            doe_tag=_clean(payload.doe_tag),
            weight=payload.weight,
            notes=payload.notes or "",
        )
        animal = await uow.animals.add(animal)
        if payload.weight is not None:
            await uow.weights.add(
                WeightRecord.create(
                    farm_id=farm_id,
                    animal_id=animal.id,
                    weight=payload.weight,
                    date=today,
                    notes="Initial weight",
                )
            )
        if payload.hutch_id is not None:
            move = await move_animal(
                uow,
                farm_id,
                animal,
                payload.hutch_id,
                purpose=HousingPurpose.HOUSING.value,
                notes="Initial placement",
                capacity_policy=farm.capacity_policy,
            )
            animal = move.animal
            if move.capacity_warning:
                result.capacity_warnings.append(move.capacity_warning)
        result.animals.append(animal)

    if payload.source == "Purchased" and payload.purchase_cost and payload.purchase_cost > 0:
        result.purchase_transaction = await uow.transactions.add(
            Transaction.create(
                farm_id=farm_id,
                type=TransactionType.EXPENSE.value,
                category=PURCHASE_CATEGORY,
                amount=payload.purchase_cost * payload.count,
                date=acquired_on,
                notes=f"Purchase of {payload.count} {payload.breed.strip()}",
                related_id=result.animals[0].id if payload.count == 1 else None,
                related_tags=tags,
            )
        )

    if delivery is not None:
        delivery.kit_ids.extend(animal.id for animal in result.animals)
        await uow.deliveries.save(delivery)

    await uow.commit()
    logger.info("Registered %d animal(s) for farm %s: %s", len(tags), farm_id, ", ".join(tags))
    return result
