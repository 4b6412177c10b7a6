from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.interfaces.repositories.hutch_assignments import (
    HutchAssignmentsRepository,
)
from rabbitry.domain.models.hutch_assignment import HutchAssignment
from rabbitry.infrastructure.db.orm.hutch_assignment import HutchAssignmentORM
from rabbitry.utils.datetime_tz import ensure_utc


class HutchAssignmentsSQLAlchemyRepository(HutchAssignmentsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HutchAssignmentORM) -> HutchAssignment:
        return HutchAssignment(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            hutch_id=orm.hutch_id,
            hutch_label=orm.hutch_label,
            start_at=ensure_utc(orm.start_at),
            end_at=ensure_utc(orm.end_at),
            purpose=orm.purpose,
            notes=orm.notes or "",
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, assignment: HutchAssignment) -> HutchAssignment:
        orm = HutchAssignmentORM(
            id=assignment.id,
            farm_id=assignment.farm_id,
            animal_id=assignment.animal_id,
            hutch_id=assignment.hutch_id,
            hutch_label=assignment.hutch_label,
            start_at=assignment.start_at,
            end_at=assignment.end_at,
            purpose=assignment.purpose,
            notes=assignment.notes,
            created_at=assignment.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list_open_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[HutchAssignment]:
        stmt = select(HutchAssignmentORM).where(
            HutchAssignmentORM.farm_id == farm_id,
            HutchAssignmentORM.animal_id == animal_id,
            HutchAssignmentORM.end_at.is_(None),
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def close_open_for_animal(self, farm_id: UUID, animal_id: UUID, end_at: datetime) -> int:
        stmt = (
            update(HutchAssignmentORM)
            .where(
                HutchAssignmentORM.farm_id == farm_id,
                HutchAssignmentORM.animal_id == animal_id,
                HutchAssignmentORM.end_at.is_(None),
            )
            .values(end_at=end_at)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[HutchAssignment]:
        stmt = (
            select(HutchAssignmentORM)
            .where(
                HutchAssignmentORM.farm_id == farm_id,
                HutchAssignmentORM.animal_id == animal_id,
            )
            .order_by(HutchAssignmentORM.start_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_for_hutch(self, farm_id: UUID, hutch_id: UUID) -> list[HutchAssignment]:
        stmt = (
            select(HutchAssignmentORM)
            .where(
                HutchAssignmentORM.farm_id == farm_id,
                HutchAssignmentORM.hutch_id == hutch_id,
            )
            .order_by(HutchAssignmentORM.start_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_for_farm(self, farm_id: UUID) -> list[HutchAssignment]:
        stmt = (
            select(HutchAssignmentORM)
            .where(HutchAssignmentORM.farm_id == farm_id)
            .order_by(HutchAssignmentORM.start_at)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
