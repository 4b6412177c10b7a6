from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from rabbitry.domain.models.customer import Customer
from rabbitry.domain.models.sale import Sale
from rabbitry.domain.models.transaction import Transaction


class TransactionsRepository(Protocol):
    async def add(self, transaction: Transaction) -> Transaction: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Transaction]: ...


class SalesRepository(Protocol):
    async def add(self, sale: Sale) -> Sale: ...

    async def list(self, farm_id: UUID) -> list[Sale]: ...


class CustomersRepository(Protocol):
    async def add(self, customer: Customer) -> Customer: ...

    async def get(self, farm_id: UUID, customer_id: UUID) -> Customer | None: ...

    async def save(self, customer: Customer) -> Customer: ...

    async def list(self, farm_id: UUID) -> list[Customer]: ...
