from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ConflictError, NotFound
from rabbitry.application.interfaces.repositories.matings import (
    DeliveriesRepository,
    MatingsRepository,
)
from rabbitry.domain.models.delivery import Delivery
from rabbitry.domain.models.mating import Mating
from rabbitry.infrastructure.db.orm.mating import DeliveryORM, MatingORM
from rabbitry.utils.datetime_tz import ensure_utc


class MatingsSQLAlchemyRepository(MatingsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MatingORM) -> Mating:
        return Mating(
            id=orm.id,
            farm_id=orm.farm_id,
            doe_tag=orm.doe_tag,
            sire_tag=orm.sire_tag,
            mating_date=orm.mating_date,
            expected_palpation_date=orm.expected_palpation_date,
            expected_delivery_date=orm.expected_delivery_date,
            status=orm.status,
            palpation_result=orm.palpation_result,
            palpation_checked_on=orm.palpation_checked_on,
            actual_delivery_date=orm.actual_delivery_date,
            kits_born=orm.kits_born,
            kits_live=orm.kits_live,
            notes=orm.notes,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _apply(self, orm: MatingORM, mating: Mating) -> None:
        orm.doe_tag = mating.doe_tag
        orm.sire_tag = mating.sire_tag
        orm.mating_date = mating.mating_date
        orm.expected_palpation_date = mating.expected_palpation_date
        orm.expected_delivery_date = mating.expected_delivery_date
        orm.status = mating.status
        orm.palpation_result = mating.palpation_result
        orm.palpation_checked_on = mating.palpation_checked_on
        orm.actual_delivery_date = mating.actual_delivery_date
        orm.kits_born = mating.kits_born
        orm.kits_live = mating.kits_live
        orm.notes = mating.notes
        orm.updated_at = mating.updated_at

    async def add(self, mating: Mating) -> Mating:
        orm = MatingORM(id=mating.id, farm_id=mating.farm_id, created_at=mating.created_at)
        self._apply(orm, mating)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, mating_id: UUID) -> Mating | None:
        stmt = select(MatingORM).where(MatingORM.farm_id == farm_id, MatingORM.id == mating_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def save(self, mating: Mating) -> Mating:
        orm = await self.session.get(MatingORM, mating.id)
        if not orm or orm.farm_id != mating.farm_id:
            raise NotFound(f"Mating {mating.id} not found")
        self._apply(orm, mating)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        doe_tag: str | None = None,
        sire_tag: str | None = None,
    ) -> list[Mating]:
        stmt = select(MatingORM).where(MatingORM.farm_id == farm_id)
        if status is not None:
            stmt = stmt.where(MatingORM.status == status)
        if doe_tag is not None:
            stmt = stmt.where(MatingORM.doe_tag == doe_tag)
        if sire_tag is not None:
            stmt = stmt.where(MatingORM.sire_tag == sire_tag)
        stmt = stmt.order_by(MatingORM.mating_date.desc(), MatingORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]


class DeliveriesSQLAlchemyRepository(DeliveriesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: DeliveryORM) -> Delivery:
        return Delivery(
            id=orm.id,
            farm_id=orm.farm_id,
            mating_id=orm.mating_id,
            doe_tag=orm.doe_tag,
            sire_tag=orm.sire_tag,
            delivery_date=orm.delivery_date,
            kits_born=orm.kits_born,
            kits_live=orm.kits_live,
            kit_ids=[UUID(value) for value in (orm.kit_ids or [])],
            notes=orm.notes,
            created_at=ensure_utc(orm.created_at),
        )

    def _apply(self, orm: DeliveryORM, delivery: Delivery) -> None:
        orm.doe_tag = delivery.doe_tag
        orm.sire_tag = delivery.sire_tag
        orm.delivery_date = delivery.delivery_date
        orm.kits_born = delivery.kits_born
        orm.kits_live = delivery.kits_live
        orm.kit_ids = [str(kit_id) for kit_id in delivery.kit_ids]
        orm.notes = delivery.notes

    async def add(self, delivery: Delivery) -> Delivery:
        orm = DeliveryORM(
            id=delivery.id,
            farm_id=delivery.farm_id,
            mating_id=delivery.mating_id,
            created_at=delivery.created_at,
        )
        self._apply(orm, delivery)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Mating already has a delivery") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, delivery_id: UUID) -> Delivery | None:
        stmt = select(DeliveryORM).where(
            DeliveryORM.farm_id == farm_id, DeliveryORM.id == delivery_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_mating(self, farm_id: UUID, mating_id: UUID) -> Delivery | None:
        stmt = select(DeliveryORM).where(
            DeliveryORM.farm_id == farm_id, DeliveryORM.mating_id == mating_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def save(self, delivery: Delivery) -> Delivery:
        orm = await self.session.get(DeliveryORM, delivery.id)
        if not orm or orm.farm_id != delivery.farm_id:
            raise NotFound(f"Delivery {delivery.id} not found")
        self._apply(orm, delivery)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(self, farm_id: UUID) -> list[Delivery]:
        stmt = (
            select(DeliveryORM)
            .where(DeliveryORM.farm_id == farm_id)
            .order_by(DeliveryORM.delivery_date.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
