"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classmarket.admin import PermissionDeniedError
from classmarket.api.dependencies import close_store, init_store
from classmarket.api.models import APIResponse
from classmarket.api.routes import admin, classes, enrollment
from classmarket.backend import (
    BackendError,
    BackendUnavailableError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from classmarket.config import Settings
from classmarket.enrollment import (
    AuthenticationRequiredError,
    ClassClosedError,
    ClassFullError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    init_store(settings)
    logger.info("classmarket started (backend=%s)", settings.backend)
    yield
    close_store()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="classmarket API",
        description="Class listing, class detail, enrollment and admin",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings if settings is not None else Settings.from_env()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(_request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc) or "Not found")

    @app.exception_handler(AuthenticationRequiredError)
    async def auth_required_handler(
        _request: Request, _exc: AuthenticationRequiredError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "Login required")

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(
        _request: Request, _exc: PermissionDeniedError
    ) -> JSONResponse:
        return _error(status.HTTP_403_FORBIDDEN, "Admin only")

    @app.exception_handler(ClassClosedError)
    async def class_closed_handler(_request: Request, _exc: ClassClosedError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Class is closed")

    @app.exception_handler(ClassFullError)
    async def class_full_handler(_request: Request, _exc: ClassFullError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Class is full")

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_handler(_request: Request, _exc: DuplicateRecordError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "Record already exists")

    @app.exception_handler(BackendUnavailableError)
    async def unavailable_handler(
        _request: Request, _exc: BackendUnavailableError
    ) -> JSONResponse:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Backend unavailable")

    @app.exception_handler(BackendError)
    async def backend_error_handler(_request: Request, exc: BackendError) -> JSONResponse:
        logger.error("Backend error: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, "Backend error")

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    # Include routers
    app.include_router(classes.router, prefix="/api/v1")
    app.include_router(enrollment.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
