from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from rabbitry.application.errors import AuthError
from rabbitry.application.interfaces.unit_of_work import UnitOfWork
from rabbitry.config.settings import Settings, get_settings
from rabbitry.infrastructure.auth.context import AuthContext, FarmContext, resolve_farm
from rabbitry.infrastructure.db.session import SQLAlchemyUnitOfWork
from rabbitry.infrastructure.memory.unit_of_work import InMemoryUnitOfWork


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


def _build_uow(request: Request) -> UnitOfWork:
    store = getattr(request.app.state, "store", None)
    if store is not None:
        return InMemoryUnitOfWork(store)
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    return SQLAlchemyUnitOfWork(session_factory)


async def get_uow(request: Request) -> AsyncIterator[UnitOfWork]:
    uow = _build_uow(request)
    async with uow:
        yield uow


async def get_farm_context(
    context: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_uow),
) -> FarmContext:
    """Farm selected by the farm header, checked against the caller."""
    return await resolve_farm(uow, context)


def get_app_settings() -> Settings:
    return get_settings()
