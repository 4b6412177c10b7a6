from __future__ import annotations

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.infrastructure.memory.repos import (
    InMemoryAnimalsRepository,
    InMemoryCustomersRepository,
    InMemoryDeliveriesRepository,
    InMemoryFarmsRepository,
    InMemoryHutchAssignmentsRepository,
    InMemoryHutchesRepository,
    InMemoryMatingsRepository,
    InMemoryMedicalRecordsRepository,
    InMemorySalesRepository,
    InMemoryTagCountersRepository,
    InMemoryTransactionsRepository,
    InMemoryWeightsRepository,
)
from rabbitry.infrastructure.memory.store import InMemoryStore, MemoryState


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._staged: MemoryState | None = None
        self._locked = False
        state = self._current
        self.farms = InMemoryFarmsRepository(state)
        self.tag_counters = InMemoryTagCountersRepository(state)
        self.animals = InMemoryAnimalsRepository(state)
        self.hutches = InMemoryHutchesRepository(state)
        self.hutch_assignments = InMemoryHutchAssignmentsRepository(state)
        self.matings = InMemoryMatingsRepository(state)
        self.deliveries = InMemoryDeliveriesRepository(state)
        self.transactions = InMemoryTransactionsRepository(state)
        self.sales = InMemorySalesRepository(state)
        self.customers = InMemoryCustomersRepository(state)
        self.medical_records = InMemoryMedicalRecordsRepository(state)
        self.weights = InMemoryWeightsRepository(state)

    def _current(self) -> MemoryState:
        if self._staged is None:
            raise RuntimeError("Unit of work used outside of its context")
        return self._staged

    async def __aenter__(self) -> UnitOfWork:
        await self._store.lock.acquire()
        self._locked = True
        self._staged = self._store.state.snapshot()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if exc:
                await self.rollback()
        finally:
            self._staged = None
            if self._locked:
                self._locked = False
                self._store.lock.release()

    async def commit(self) -> None:
        if self._staged is None:
            return
        self._store.state = self._staged
        self._staged = self._store.state.snapshot()

    async def rollback(self) -> None:
        if self._staged is None:
            return
        self._staged = self._store.state.snapshot()
