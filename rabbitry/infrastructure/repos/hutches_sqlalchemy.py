from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ConflictError
from rabbitry.domain.models.hutch import Hutch
from rabbitry.domain.ports.hutches_repo import HutchesRepo
from rabbitry.infrastructure.db.orm.hutch import HutchORM
from rabbitry.utils.datetime_tz import ensure_utc


class HutchesSQLAlchemyRepository(HutchesRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HutchORM) -> Hutch:
        return Hutch(
            id=orm.id,
            farm_id=orm.farm_id,
            number=orm.number,
            code=orm.code,
            label=orm.label,
            capacity=orm.capacity,
            current_occupancy=orm.current_occupancy,
            accessories=list(orm.accessories or []),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, hutch: Hutch) -> Hutch:
        orm = HutchORM(
            id=hutch.id,
            farm_id=hutch.farm_id,
            number=hutch.number,
            code=hutch.code,
            label=hutch.label,
            capacity=hutch.capacity,
            current_occupancy=hutch.current_occupancy,
            accessories=hutch.accessories,
            created_at=hutch.created_at,
            updated_at=hutch.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Hutch number {hutch.number} already exists for farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        stmt = (
            select(HutchORM)
            .where(HutchORM.farm_id == farm_id, HutchORM.id == hutch_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_number(self, farm_id: UUID, number: int) -> Hutch | None:
        stmt = select(HutchORM).where(HutchORM.farm_id == farm_id, HutchORM.number == number)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_farm(self, farm_id: UUID) -> list[Hutch]:
        stmt = select(HutchORM).where(HutchORM.farm_id == farm_id).order_by(HutchORM.number)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def _update_values(self, farm_id: UUID, hutch_id: UUID, **values) -> Hutch | None:
        stmt = (
            update(HutchORM)
            .where(HutchORM.farm_id == farm_id, HutchORM.id == hutch_id)
            .values(**values, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get(farm_id, hutch_id)

    async def update(self, farm_id: UUID, hutch_id: UUID, data: dict) -> Hutch | None:
        try:
            return await self._update_values(farm_id, hutch_id, **data)
        except IntegrityError as exc:
            raise ConflictError("Hutch number already exists for farm") from exc

    async def delete(self, farm_id: UUID, hutch_id: UUID) -> bool:
        stmt = delete(HutchORM).where(HutchORM.farm_id == farm_id, HutchORM.id == hutch_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def increment_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        return await self._update_values(
            farm_id, hutch_id, current_occupancy=HutchORM.current_occupancy + 1
        )

    async def decrement_occupancy(self, farm_id: UUID, hutch_id: UUID) -> Hutch | None:
        return await self._update_values(
            farm_id,
            hutch_id,
            current_occupancy=case(
                (HutchORM.current_occupancy > 0, HutchORM.current_occupancy - 1),
                else_=0,
            ),
        )

    async def set_occupancy(self, farm_id: UUID, hutch_id: UUID, value: int) -> Hutch | None:
        return await self._update_values(farm_id, hutch_id, current_occupancy=max(0, value))
