from __future__ import annotations

from typing import Protocol

from rabbitry.application.interfaces.repositories.animals import AnimalRepository
from rabbitry.application.interfaces.repositories.farms import (
    FarmsRepository,
    TagCountersRepository,
)
from rabbitry.application.interfaces.repositories.finance import (
    CustomersRepository,
    SalesRepository,
    TransactionsRepository,
)
from rabbitry.application.interfaces.repositories.health import (
    MedicalRecordsRepository,
    WeightsRepository,
)
from rabbitry.application.interfaces.repositories.hutch_assignments import (
    HutchAssignmentsRepository,
)
from rabbitry.application.interfaces.repositories.matings import (
    DeliveriesRepository,
    MatingsRepository,
)
from rabbitry.domain.ports.hutches_repo import HutchesRepo


class UnitOfWork(Protocol):
    """One transaction: every write made through the repositories lands on commit or not at all."""

    farms: FarmsRepository
    tag_counters: TagCountersRepository
    animals: AnimalRepository
    hutches: HutchesRepo
    hutch_assignments: HutchAssignmentsRepository
    matings: MatingsRepository
    deliveries: DeliveriesRepository
    transactions: TransactionsRepository
    sales: SalesRepository
    customers: CustomersRepository
    medical_records: MedicalRecordsRepository
    weights: WeightsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
