from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rabbitry.application.errors import ConflictError, ProviderError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._reset_repos()

    def _reset_repos(self) -> None:
        self.farms = None
        self.tag_counters = None
        self.animals = None
        self.hutches = None
        self.hutch_assignments = None
        self.matings = None
        self.deliveries = None
        self.transactions = None
        self.sales = None
        self.customers = None
        self.medical_records = None
        self.weights = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from rabbitry.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from rabbitry.infrastructure.repos.farms_sqlalchemy import (
            FarmsSQLAlchemyRepository,
            TagCountersSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.finance_sqlalchemy import (
            CustomersSQLAlchemyRepository,
            SalesSQLAlchemyRepository,
            TransactionsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.health_sqlalchemy import (
            MedicalRecordsSQLAlchemyRepository,
            WeightsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.hutch_assignments_sqlalchemy import (
            HutchAssignmentsSQLAlchemyRepository,
        )
        from rabbitry.infrastructure.repos.hutches_sqlalchemy import HutchesSQLAlchemyRepository
        from rabbitry.infrastructure.repos.matings_sqlalchemy import (
            DeliveriesSQLAlchemyRepository,
            MatingsSQLAlchemyRepository,
        )

        self.farms = FarmsSQLAlchemyRepository(self.session)
        self.tag_counters = TagCountersSQLAlchemyRepository(self.session)
        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.hutches = HutchesSQLAlchemyRepository(self.session)
        self.hutch_assignments = HutchAssignmentsSQLAlchemyRepository(self.session)
        self.matings = MatingsSQLAlchemyRepository(self.session)
        self.deliveries = DeliveriesSQLAlchemyRepository(self.session)
        self.transactions = TransactionsSQLAlchemyRepository(self.session)
        self.sales = SalesSQLAlchemyRepository(self.session)
        self.customers = CustomersSQLAlchemyRepository(self.session)
        self.medical_records = MedicalRecordsSQLAlchemyRepository(self.session)
        self.weights = WeightsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._reset_repos()

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Write conflicts with existing data") from exc
        except DBAPIError as exc:
            await self.session.rollback()
            logger.error("Database commit failed: %s", exc.__class__.__name__)
            raise ProviderError("Storage backend unavailable") from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
