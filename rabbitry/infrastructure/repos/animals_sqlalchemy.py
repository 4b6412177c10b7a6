from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitry.application.errors import ConflictError, NotFound
from rabbitry.application.interfaces.repositories.animals import AnimalRepository
from rabbitry.domain.models.animal import Animal
from rabbitry.infrastructure.db.orm.animal import AnimalORM
from rabbitry.utils.datetime_tz import ensure_utc


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            tag=orm.tag,
            breed=orm.breed,
            sex=orm.sex,
            source=orm.source,
            name=orm.name,
            date_of_birth=orm.date_of_birth,
            date_of_acquisition=orm.date_of_acquisition,
            purchase_cost=orm.purchase_cost,
            status=orm.status,
            current_hutch_id=orm.current_hutch_id,
            sire_tag=orm.sire_tag,
            doe_tag=orm.doe_tag,
            weight=orm.weight,
            notes=orm.notes or "",
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
        )

    def _apply(self, orm: AnimalORM, animal: Animal) -> None:
        orm.tag = animal.tag
        orm.breed = animal.breed
        orm.sex = animal.sex
        orm.source = animal.source
        orm.name = animal.name
        orm.date_of_birth = animal.date_of_birth
        orm.date_of_acquisition = animal.date_of_acquisition
        orm.purchase_cost = animal.purchase_cost
        orm.status = animal.status
        orm.current_hutch_id = animal.current_hutch_id
        orm.sire_tag = animal.sire_tag
        orm.doe_tag = animal.doe_tag
        orm.weight = animal.weight
        orm.notes = animal.notes
        orm.updated_at = animal.updated_at
        orm.version = animal.version

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            created_at=animal.created_at,
        )
        self._apply(orm, animal)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Animal tag {animal.tag} already exists for farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id == animal_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_tag(self, farm_id: UUID, tag: str) -> Animal | None:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id, AnimalORM.tag == tag)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    def _filtered(self, stmt, farm_id, statuses, sex, search):
        stmt = stmt.where(AnimalORM.farm_id == farm_id)
        if statuses is not None:
            stmt = stmt.where(AnimalORM.status.in_(statuses))
        if sex is not None:
            stmt = stmt.where(AnimalORM.sex == sex)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    AnimalORM.tag.ilike(pattern),
                    AnimalORM.name.ilike(pattern),
                    AnimalORM.breed.ilike(pattern),
                )
            )
        return stmt

    async def list(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Animal]:
        stmt = self._filtered(select(AnimalORM), farm_id, statuses, sex, search)
        stmt = stmt.order_by(AnimalORM.created_at.desc(), AnimalORM.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        *,
        statuses: list[str] | None = None,
        sex: str | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filtered(select(func.count(AnimalORM.id)), farm_id, statuses, sex, search)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_by_parent(
        self, farm_id: UUID, *, sire_tag: str | None = None, doe_tag: str | None = None
    ) -> list[Animal]:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id)
        if sire_tag is not None:
            stmt = stmt.where(AnimalORM.sire_tag == sire_tag)
        if doe_tag is not None:
            stmt = stmt.where(AnimalORM.doe_tag == doe_tag)
        result = await self.session.execute(stmt.order_by(AnimalORM.date_of_birth))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def save(self, animal: Animal) -> Animal:
        orm = await self.session.get(AnimalORM, animal.id)
        if not orm or orm.farm_id != animal.farm_id:
            raise NotFound(f"Animal {animal.id} not found")
        self._apply(orm, animal)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(f"Animal tag {animal.tag} already exists for farm") from exc
        return self._to_domain(orm)

    async def update(
        self,
        farm_id: UUID,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None:
        stmt = (
            update(AnimalORM)
            .where(
                AnimalORM.farm_id == farm_id,
                AnimalORM.id == animal_id,
                AnimalORM.version == expected_version,
            )
            .values(**data, version=AnimalORM.version + 1, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Animal tag already exists for farm") from exc
        if result.rowcount == 0:
            return None
        return await self.get(farm_id, animal_id)

    async def count_by_hutch(self, farm_id: UUID) -> dict[UUID, int]:
        stmt = (
            select(AnimalORM.current_hutch_id, func.count(AnimalORM.id))
            .where(AnimalORM.farm_id == farm_id, AnimalORM.current_hutch_id.is_not(None))
            .group_by(AnimalORM.current_hutch_id)
        )
        result = await self.session.execute(stmt)
        return {hutch_id: int(count) for hutch_id, count in result.all()}
