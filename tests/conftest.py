from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from rabbitry.application.use_cases.farms import create_farm
from rabbitry.config.settings import Settings
from rabbitry.domain.models.farm import Farm
from rabbitry.infrastructure.db.base import Base
from rabbitry.infrastructure.db.orm import (  # noqa: F401
    animal,
    farm,
    finance,
    health,
    hutch,
    hutch_assignment,
    mating,
)
from rabbitry.infrastructure.memory.store import InMemoryStore
from rabbitry.infrastructure.memory.unit_of_work import InMemoryUnitOfWork
from rabbitry.interfaces.http.main import create_app


@pytest.fixture()
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
async def uow(store: InMemoryStore) -> AsyncIterator[InMemoryUnitOfWork]:
    unit = InMemoryUnitOfWork(store)
    async with unit:
        yield unit


@pytest.fixture()
async def farm_record(uow, owner_id: UUID) -> Farm:
    return await create_farm.execute(
        uow, owner_id, create_farm.CreateFarmInput(name="Sunny Rabbitry", tag_prefix="SN")
    )


@pytest.fixture(params=["sql", "memory"])
def test_settings(request, tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "storage_backend": request.param,
            "jwt_secret_key": "test-secret-key",
            "farm_header": "X-Farm-ID",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    if engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    if engine is not None:
        await engine.dispose()


@pytest.fixture()
def auth_headers(app, owner_id: UUID) -> dict[str, str]:
    token = app.state.jwt_service.create_access_token(subject=owner_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
async def farm_headers(client: AsyncClient, auth_headers: dict[str, str]) -> dict[str, str]:
    response = await client.post(
        "/api/v1/farms", json={"name": "Sunny Rabbitry", "tag_prefix": "SN"}, headers=auth_headers
    )
    assert response.status_code == 201, response.text
    breed = await client.post(
        "/api/v1/farms/me/breeds", json={"name": "Rex", "code": "REX"}, headers=auth_headers
    )
    assert breed.status_code == 201, breed.text
    return {**auth_headers, "X-Farm-ID": response.json()["id"]}
