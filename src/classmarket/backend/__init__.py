"""Backend access - the hosted backend contract and its implementations."""

from __future__ import annotations

from classmarket.backend.exceptions import (
    BackendAuthError,
    BackendError,
    BackendUnavailableError,
    DuplicateRecordError,
    InvalidRecordError,
    RecordNotFoundError,
)
from classmarket.backend.models import Backend, Filter, FilterOp, Table
from classmarket.backend.rest import RestBackend
from classmarket.backend.sql import SqlBackend
from classmarket.config import BackendKind, ConfigError, Settings


def create_backend(settings: Settings) -> Backend:
    """Build the backend selected by settings."""
    if settings.backend == BackendKind.REST:
        if not settings.backend_url or not settings.backend_key:
            raise ConfigError("The rest backend needs a backend URL and key")
        return RestBackend(
            base_url=settings.backend_url,
            api_key=settings.backend_key,
            timeout=settings.request_timeout,
        )
    return SqlBackend(settings.db_path)


__all__ = [
    "Backend",
    "BackendAuthError",
    "BackendError",
    "BackendUnavailableError",
    "DuplicateRecordError",
    "Filter",
    "FilterOp",
    "InvalidRecordError",
    "RecordNotFoundError",
    "RestBackend",
    "SqlBackend",
    "Table",
    "create_backend",
]
