from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rabbitry.application.errors import ValidationError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.domain.models.customer import Customer
from rabbitry.domain.models.sale import Sale


@dataclass(slots=True)
class CreateCustomerInput:
    name: str
    phone: str | None = None
    email: str | None = None


async def create_customer(
    uow: UnitOfWork, farm_id: UUID, payload: CreateCustomerInput
) -> Customer:
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("name is required")
    created = await uow.customers.add(
        Customer.create(farm_id=farm_id, name=name, phone=payload.phone, email=payload.email)
    )
    await uow.commit()
    return created


async def list_customers(uow: UnitOfWork, farm_id: UUID) -> list[Customer]:
    return await uow.customers.list(farm_id)


async def list_sales(uow: UnitOfWork, farm_id: UUID) -> list[Sale]:
    return await uow.sales.list(farm_id)
