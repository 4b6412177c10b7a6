from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ConflictError, NotFound
from rabbitry.application.interfaces.repositories.farms import (
    FarmsRepository,
    TagCountersRepository,
)
from rabbitry.domain.models.farm import Breed, Farm
from rabbitry.infrastructure.db.orm.farm import FarmORM, TagCounterORM
from rabbitry.utils.datetime_tz import ensure_utc


class FarmsSQLAlchemyRepository(FarmsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmORM) -> Farm:
        return Farm(
            id=orm.id,
            owner_user_id=orm.owner_user_id,
            name=orm.name,
            currency=orm.currency,
            timezone=orm.timezone,
            gestation_days=orm.gestation_days,
            palpation_days=orm.palpation_days,
            weaning_days=orm.weaning_days,
            breeds=[Breed(name=b["name"], code=b["code"]) for b in (orm.breeds or [])],
            tag_prefix=orm.tag_prefix,
            capacity_policy=orm.capacity_policy,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _apply(self, orm: FarmORM, farm: Farm) -> None:
        orm.name = farm.name
        orm.currency = farm.currency
        orm.timezone = farm.timezone
        orm.gestation_days = farm.gestation_days
        orm.palpation_days = farm.palpation_days
        orm.weaning_days = farm.weaning_days
        orm.breeds = [{"name": b.name, "code": b.code} for b in farm.breeds]
        orm.tag_prefix = farm.tag_prefix
        orm.capacity_policy = farm.capacity_policy
        orm.updated_at = farm.updated_at

    async def add(self, farm: Farm) -> Farm:
        orm = FarmORM(id=farm.id, owner_user_id=farm.owner_user_id, created_at=farm.created_at)
        self._apply(orm, farm)
        self.session.add(orm)
        self.session.add(TagCounterORM(farm_id=farm.id, last_sequence=0))
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Owner already has a farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID) -> Farm | None:
        result = await self.session.execute(select(FarmORM).where(FarmORM.id == farm_id))
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_owner(self, owner_user_id: UUID) -> Farm | None:
        result = await self.session.execute(
            select(FarmORM).where(FarmORM.owner_user_id == owner_user_id)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def save(self, farm: Farm) -> Farm:
        orm = await self.session.get(FarmORM, farm.id)
        if not orm:
            raise NotFound(f"Farm {farm.id} not found")
        self._apply(orm, farm)
        await self.session.flush()
        return self._to_domain(orm)


class TagCountersSQLAlchemyRepository(TagCountersRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def next_sequence(self, farm_id: UUID) -> int:
        # Single UPDATE ... RETURNING so concurrent allocations never share a number
        stmt = (
            update(TagCounterORM)
            .where(TagCounterORM.farm_id == farm_id)
            .values(last_sequence=TagCounterORM.last_sequence + 1)
            .returning(TagCounterORM.last_sequence)
        )
        result = await self.session.execute(stmt)
        value = result.scalar_one_or_none()
        if value is not None:
            return int(value)
        try:
            async with self.session.begin_nested():
                self.session.add(TagCounterORM(farm_id=farm_id, last_sequence=1))
            return 1
        except IntegrityError:
            # Another transaction created the row first
            result = await self.session.execute(stmt)
            return int(result.scalar_one())

    async def peek_sequence(self, farm_id: UUID) -> int:
        stmt = select(TagCounterORM.last_sequence).where(TagCounterORM.farm_id == farm_id)
        last = (await self.session.execute(stmt)).scalar_one_or_none()
        return (last or 0) + 1
