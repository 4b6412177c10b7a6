from __future__ import annotations

import asyncio
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.application.use_cases.animals import create_animals
from rabbitry.application.use_cases.farms import create_farm
from rabbitry.application.use_cases.housing import manage_hutches
from rabbitry.application.use_cases.housing.ledger import move_animal, release_animal
from rabbitry.infrastructure.db.base import Base
from rabbitry.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from rabbitry.infrastructure.memory.store import InMemoryStore
from rabbitry.infrastructure.memory.unit_of_work import InMemoryUnitOfWork

HUTCHES = 3
ANIMALS = 4

# (animal index, hutch index or None for a release)
steps = st.lists(
    st.tuples(
        st.integers(min_value=0, max_value=ANIMALS - 1),
        st.one_of(st.none(), st.integers(min_value=0, max_value=HUTCHES - 1)),
    ),
    max_size=25,
)


@asynccontextmanager
async def _unit_of_work(backend: str) -> AsyncIterator[UnitOfWork]:
    if backend == "memory":
        async with InMemoryUnitOfWork(InMemoryStore()) as uow:
            yield uow
        return
    with tempfile.TemporaryDirectory() as tmp:
        db_path = Path(tmp) / "ledger.db"
        engine = create_engine(f"sqlite+aiosqlite:///{db_path}")
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with SQLAlchemyUnitOfWork(create_session_factory(engine)) as uow:
                yield uow
        finally:
            await engine.dispose()


async def _run(backend: str, moves) -> None:
    async with _unit_of_work(backend) as uow:
        farm = await create_farm.execute(
            uow, uuid4(), create_farm.CreateFarmInput(name="Invariant Farm", tag_prefix="IF")
        )
        hutches = [
            await manage_hutches.create_hutch(
                uow, farm.id, manage_hutches.CreateHutchInput(number=n + 1, capacity=2)
            )
            for n in range(HUTCHES)
        ]
        created = await create_animals.execute(
            uow,
            farm.id,
            create_animals.CreateAnimalsInput(breed="REX", sex="Female", count=ANIMALS),
        )
        animal_ids = [a.id for a in created.animals]

        for animal_index, hutch_index in moves:
            animal = await uow.animals.get(farm.id, animal_ids[animal_index])
            if hutch_index is None:
                await release_animal(uow, farm.id, animal)
            else:
                await move_animal(uow, farm.id, animal, hutches[hutch_index].id)

        animals = [await uow.animals.get(farm.id, animal_id) for animal_id in animal_ids]
        for hutch in hutches:
            stored = await uow.hutches.get(farm.id, hutch.id)
            housed = sum(1 for a in animals if a.current_hutch_id == hutch.id)
            assert stored.current_occupancy == housed
            assert stored.current_occupancy >= 0
        for animal in animals:
            open_stays = await uow.hutch_assignments.list_open_for_animal(farm.id, animal.id)
            assert len(open_stays) <= 1
            if animal.current_hutch_id is None:
                assert open_stays == []
            else:
                assert open_stays[0].hutch_id == animal.current_hutch_id


@pytest.mark.parametrize("backend", ["memory", "sql"])
@settings(max_examples=40, deadline=None)
@given(moves=steps)
def test_counters_and_open_stays_match_animal_locations(backend, moves):
    asyncio.run(_run(backend, moves))
