from __future__ import annotations

from typing import Iterable
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from rabbitry.application.errors import AuthError, PermissionDenied
from rabbitry.config.settings import Settings
from rabbitry.infrastructure.auth.context import AuthContext

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    """Verifies the bearer token and reads the farm header.

    Farm ownership is checked later, by the ``get_farm_context`` dependency,
    inside the request's unit of work.
    """

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            authorization = request.headers.get("Authorization")
            if not authorization:
                raise AuthError("Missing Authorization header")
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token)
            user_id = jwt_service.subject(claims)

            farm_id = None
            farm_value = request.headers.get(self.settings.farm_header)
            if farm_value:
                try:
                    farm_id = UUID(farm_value)
                except ValueError as exc:
                    raise PermissionDenied("Invalid farm identifier") from exc
            request.state.auth_context = AuthContext(
                user_id=user_id,
                claims=claims,
                farm_id=farm_id,
            )
            return await call_next(request)
        except (AuthError, PermissionDenied) as exc:
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
