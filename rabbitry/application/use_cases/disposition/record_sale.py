from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from rabbitry.application.errors import AnimalNotFound, NotFound, ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.housing.ledger import release_animal
from rabbitry.domain.models.animal import Animal
from rabbitry.domain.models.customer import Customer
from rabbitry.domain.models.sale import Sale
from rabbitry.domain.models.transaction import Transaction
from rabbitry.domain.value_objects.animal_status import AnimalStatus
from rabbitry.domain.value_objects.transaction_type import SALE_CATEGORY, TransactionType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NewCustomer:
    name: str
    phone: str | None = None
    email: str | None = None


@dataclass(slots=True)
class RecordSaleInput:
    animal_ids: list[UUID]
    amount: Decimal  # total for the whole sale
    date: date
    buyer_name: str | None = None
    customer_id: UUID | None = None
    new_customer: NewCustomer | None = None
    notes: str | None = None


@dataclass(slots=True)
class RecordSaleOutput:
    sale: Sale
    transaction: Transaction
    animals: list[Animal]
    customer: Customer | None = None


def _validate(payload: RecordSaleInput) -> None:
    if not payload.animal_ids:
        raise ValidationError("At least one animal is required")
    if len(set(payload.animal_ids)) != len(payload.animal_ids):
        raise ValidationError("Duplicate animals in sale")
    if payload.amount <= 0:
        raise ValidationError("amount must be positive")
    if payload.customer_id and payload.new_customer:
        raise ValidationError("Provide either customer_id or new_customer, not both")


async def _resolve_customer(
    uow: UnitOfWork, farm_id: UUID, payload: RecordSaleInput
) -> Customer | None:
    if payload.customer_id:
        customer = await uow.customers.get(farm_id, payload.customer_id)
        if not customer:
            raise NotFound(f"Customer {payload.customer_id} not found")
        return customer
    if payload.new_customer:
        name = payload.new_customer.name.strip()
        if not name:
            raise ValidationError("Customer name is required")
        return await uow.customers.add(
            Customer.create(
                farm_id=farm_id,
                name=name,
                phone=payload.new_customer.phone,
                email=payload.new_customer.email,
            )
        )
    return None


async def execute(uow: UnitOfWork, farm_id: UUID, payload: RecordSaleInput) -> RecordSaleOutput:
    """Sell one or more animals as a single sale.

    All animals are checked before anything is written. The sale produces one
    ``Sale`` record and one aggregate Income transaction covering every tag.
    """
    _validate(payload)
    animals: list[Animal] = []
    for animal_id in payload.animal_ids:
        animal = await uow.animals.get(farm_id, animal_id)
        if not animal:
            raise AnimalNotFound(f"Animal {animal_id} not found")
        if not AnimalStatus(animal.status).is_saleable():
            raise ValidationError(f"Animal {animal.tag} is {animal.status} and cannot be sold")
        animals.append(animal)

    customer = await _resolve_customer(uow, farm_id, payload)
    buyer_name = (payload.buyer_name or "").strip() or (customer.name if customer else "")
    if not buyer_name:
        raise ValidationError("buyer_name is required")

    sold: list[Animal] = []
    for animal in animals:
        animal = (await release_animal(uow, farm_id, animal, payload.date)).animal
        animal.status = AnimalStatus.SOLD.value
        animal.bump_version()
        sold.append(await uow.animals.save(animal))

    tags = [animal.tag for animal in sold]
    sale = await uow.sales.add(
        Sale.create(
            farm_id=farm_id,
            animal_ids=[animal.id for animal in sold],
            animal_tags=tags,
            buyer_name=buyer_name,
            amount=payload.amount,
            date=payload.date,
            customer_id=customer.id if customer else None,
            notes=payload.notes,
        )
    )
    transaction = await uow.transactions.add(
        Transaction.create(
            farm_id=farm_id,
            type=TransactionType.INCOME.value,
            category=SALE_CATEGORY,
            amount=payload.amount,
            date=payload.date,
            notes=f"Sale {sale.code} to {buyer_name}",
            related_id=sale.id,
            related_tags=tags,
        )
    )
    if customer:
        customer.record_purchase(payload.amount, payload.date)
        customer = await uow.customers.save(customer)

    await uow.commit()
    logger.info(
        "Recorded sale %s of %s to %s for %s", sale.code, ", ".join(tags), buyer_name, payload.amount
    )
    return RecordSaleOutput(sale=sale, transaction=transaction, animals=sold, customer=customer)
