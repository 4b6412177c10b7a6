from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.interfaces.repositories.health import (
    MedicalRecordsRepository,
    WeightsRepository,
)
from rabbitry.domain.models.medical_record import MedicalRecord
from rabbitry.domain.models.weight_record import WeightRecord
from rabbitry.infrastructure.db.orm.health import MedicalRecordORM, WeightRecordORM
from rabbitry.utils.datetime_tz import ensure_utc


class MedicalRecordsSQLAlchemyRepository(MedicalRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MedicalRecordORM) -> MedicalRecord:
        return MedicalRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            date=orm.date,
            type=orm.type,
            medication_name=orm.medication_name,
            cost=Decimal(orm.cost or 0),
            dosage=orm.dosage,
            notes=orm.notes,
            next_due_date=orm.next_due_date,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, record: MedicalRecord) -> MedicalRecord:
        orm = MedicalRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            date=record.date,
            type=record.type,
            medication_name=record.medication_name,
            dosage=record.dosage,
            cost=record.cost,
            notes=record.notes,
            next_due_date=record.next_due_date,
            created_at=record.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[MedicalRecord]:
        stmt = select(MedicalRecordORM).where(MedicalRecordORM.farm_id == farm_id)
        if animal_id is not None:
            stmt = stmt.where(MedicalRecordORM.animal_id == animal_id)
        stmt = stmt.order_by(MedicalRecordORM.date.desc(), MedicalRecordORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]


class WeightsSQLAlchemyRepository(WeightsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: WeightRecordORM) -> WeightRecord:
        return WeightRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            weight=Decimal(orm.weight),
            date=orm.date,
            age_label=orm.age_label,
            notes=orm.notes,
            created_at=ensure_utc(orm.created_at),
        )

    async def add(self, record: WeightRecord) -> WeightRecord:
        orm = WeightRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            weight=record.weight,
            date=record.date,
            age_label=record.age_label,
            notes=record.notes,
            created_at=record.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(self, farm_id: UUID, *, animal_id: UUID | None = None) -> list[WeightRecord]:
        stmt = select(WeightRecordORM).where(WeightRecordORM.farm_id == farm_id)
        if animal_id is not None:
            stmt = stmt.where(WeightRecordORM.animal_id == animal_id)
        stmt = stmt.order_by(WeightRecordORM.date, WeightRecordORM.created_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]
