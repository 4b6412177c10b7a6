from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rabbitry.config.settings import Settings, get_settings
from rabbitry.infrastructure.auth.jwt_service import JWTService
from rabbitry.infrastructure.db.session import create_engine, create_session_factory
from rabbitry.infrastructure.memory.store import InMemoryStore
from rabbitry.interfaces.http.deps import get_app_settings
from rabbitry.interfaces.http.routers import animals, breeding, farms, finance, hutches, medical
from rabbitry.interfaces.middleware.auth_middleware import AuthMiddleware
from rabbitry.interfaces.middleware.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    jwt_service: JWTService | None = None,
    store: InMemoryStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Rabbitry Backend",
        version="0.1.0",
        description="Rabbit farm management API: herd, hutches, breeding and finances",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if settings.storage_backend == "memory":
        # Demo mode: nothing survives a restart
        app.state.store = store or InMemoryStore()
        app.state.engine = None
        app.state.session_factory = None
    else:
        app.state.store = None
        app.state.engine = create_engine(settings.database_url)
        app.state.session_factory = create_session_factory(app.state.engine)
    logger.info("Storage backend: %s", settings.storage_backend)
    app.state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(farms.router)
    api.include_router(animals.router)
    api.include_router(hutches.router)
    api.include_router(breeding.router)
    api.include_router(finance.router)
    api.include_router(medical.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
