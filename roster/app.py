"""FastAPI application exposing the roster storage over JSON."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from roster.core.config import get_settings
from roster.core.logging import configure_logging
from roster.domain.results import ErrorKind, StoreUnavailableError
from roster.routers import lineups as lineups_router
from roster.routers import teams as teams_router
from roster.routers.responses import error_response, get_storage
from roster.services.storage_service import StorageService, build_storage_service

logger = logging.getLogger(__name__)

DEV_ORIGINS = {
    "http://localhost:3000",
    "http://127.0.0.1:3000",
}


def create_app(storage: StorageService | None = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn roster.app:create_app --factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Roster Lineup API")
    app.state.storage = storage or build_storage_service(settings)
    app.state.storage_backend = settings.storage_backend if storage is None else "custom"

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update(DEV_ORIGINS)
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error("Storage unavailable while serving %s: %s", request.url.path, exc.message)
        return error_response(ErrorKind.STORE_UNAVAILABLE, exc.message)

    @app.get("/api/health")
    def health(request: Request):
        connected = get_storage(request).is_available()
        return {
            "success": connected,
            "services": {"storage": {"connected": connected, "backend": request.app.state.storage_backend}},
        }

    app.include_router(teams_router.router)
    app.include_router(lineups_router.router)
    return app
