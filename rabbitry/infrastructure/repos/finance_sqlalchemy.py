from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import NotFound
from rabbitry.application.interfaces.repositories.finance import (
    CustomersRepository,
    SalesRepository,
    TransactionsRepository,
)
from rabbitry.domain.models.customer import Customer
from rabbitry.domain.models.sale import Sale
from rabbitry.domain.models.transaction import Transaction
from rabbitry.infrastructure.db.orm.finance import CustomerORM, SaleORM, TransactionORM
from rabbitry.utils.datetime_tz import ensure_utc


class TransactionsSQLAlchemyRepository(TransactionsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TransactionORM) -> Transaction:
        return Transaction(
            id=orm.id,
            farm_id=orm.farm_id,
            type=orm.type,
            category=orm.category,
            amount=Decimal(orm.amount),
            date=orm.date,
            notes=orm.notes or "",
            related_id=orm.related_id,
            related_tags=list(orm.related_tags or []),
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, transaction: Transaction) -> Transaction:
        orm = TransactionORM(
            id=transaction.id,
            farm_id=transaction.farm_id,
            type=transaction.type,
            category=transaction.category,
            amount=transaction.amount,
            date=transaction.date,
            notes=transaction.notes,
            related_id=transaction.related_id,
            related_tags=transaction.related_tags,
            created_at=transaction.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Transaction]:
        stmt = select(TransactionORM).where(TransactionORM.farm_id == farm_id)
        if type is not None:
            stmt = stmt.where(TransactionORM.type == type)
        if date_from is not None:
            stmt = stmt.where(TransactionORM.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(TransactionORM.date <= date_to)
        stmt = stmt.order_by(TransactionORM.date.desc(), TransactionORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]


class SalesSQLAlchemyRepository(SalesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: SaleORM) -> Sale:
        return Sale(
            id=orm.id,
            farm_id=orm.farm_id,
            code=orm.code,
            animal_ids=[UUID(value) for value in (orm.animal_ids or [])],
            animal_tags=list(orm.animal_tags or []),
            buyer_name=orm.buyer_name,
            customer_id=orm.customer_id,
            amount=Decimal(orm.amount),
            date=orm.date,
            notes=orm.notes,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, sale: Sale) -> Sale:
        orm = SaleORM(
            id=sale.id,
            farm_id=sale.farm_id,
            code=sale.code,
            animal_ids=[str(animal_id) for animal_id in sale.animal_ids],
            animal_tags=sale.animal_tags,
            buyer_name=sale.buyer_name,
            customer_id=sale.customer_id,
            amount=sale.amount,
            date=sale.date,
            notes=sale.notes,
            created_at=sale.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(self, farm_id: UUID) -> list[Sale]:
        stmt = (
            select(SaleORM)
            .where(SaleORM.farm_id == farm_id)
            .order_by(SaleORM.date.desc(), SaleORM.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]


class CustomersSQLAlchemyRepository(CustomersRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CustomerORM) -> Customer:
        return Customer(
            id=orm.id,
            farm_id=orm.farm_id,
            name=orm.name,
            phone=orm.phone,
            email=orm.email,
            total_spent=Decimal(orm.total_spent or 0),
            last_purchase_date=orm.last_purchase_date,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, customer: Customer) -> Customer:
        orm = CustomerORM(
            id=customer.id,
            farm_id=customer.farm_id,
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            total_spent=customer.total_spent,
            last_purchase_date=customer.last_purchase_date,
            created_at=customer.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, customer_id: UUID) -> Customer | None:
        stmt = select(CustomerORM).where(
            CustomerORM.farm_id == farm_id, CustomerORM.id == customer_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def save(self, customer: Customer) -> Customer:
        orm = await self.session.get(CustomerORM, customer.id)
        if not orm or orm.farm_id != customer.farm_id:
            raise NotFound(f"Customer {customer.id} not found")
        orm.name = customer.name
        orm.phone = customer.phone
        orm.email = customer.email
        orm.total_spent = customer.total_spent
        orm.last_purchase_date = customer.last_purchase_date
        await self.session.flush()
        return self._to_domain(orm)

    async def list(self, farm_id: UUID) -> list[Customer]:
        stmt = (
            select(CustomerORM)
            .where(CustomerORM.farm_id == farm_id)
            .order_by(CustomerORM.total_spent.desc(), CustomerORM.name)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
