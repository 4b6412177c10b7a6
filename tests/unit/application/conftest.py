from __future__ import annotations

from decimal import Decimal

import pytest

from rabbitry.application.use_cases.animals import create_animals
from rabbitry.application.use_cases.farms import manage_breeds
from rabbitry.application.use_cases.housing import manage_hutches


@pytest.fixture()
async def farm(uow, farm_record):
    return await manage_breeds.add_breed(uow, farm_record.id, "Rex", "REX")


@pytest.fixture()
def make_hutch(uow, farm):
    async def _make(number: int, capacity: int = 4):
        return await manage_hutches.create_hutch(
            uow,
            farm.id,
            manage_hutches.CreateHutchInput(number=number, capacity=capacity),
        )

    return _make


@pytest.fixture()
def make_animal(uow, farm):
    async def _make(sex: str = "Female", **overrides):
        payload = create_animals.CreateAnimalsInput(breed="REX", sex=sex, **overrides)
        result = await create_animals.execute(uow, farm.id, payload)
        return result.animals[0]

    return _make


@pytest.fixture()
def price():
    return Decimal("25.00")
