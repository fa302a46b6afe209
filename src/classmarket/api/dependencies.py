"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Callable, Generator  # noqa: TC003
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, Header

from classmarket.admin import ClassAdmin
from classmarket.backend import create_backend
from classmarket.config import Settings
from classmarket.detail import ClassDetailLoader
from classmarket.enrollment import EnrollmentService
from classmarket.store import MarketStore, User

# Global Settings instance (initialized on app startup)
_settings: Settings | None = None

# Global MarketStore instance (initialized on app startup)
_store: MarketStore | None = None


def init_store(settings: Settings) -> MarketStore:
    """Initialize the global settings and MarketStore instance."""
    global _settings, _store  # noqa: PLW0603
    _settings = settings
    _store = MarketStore(create_backend(settings))
    return _store


def close_store() -> None:
    """Close the global MarketStore instance."""
    global _store  # noqa: PLW0603
    if _store is not None:
        _store.close()
        _store = None


def get_settings() -> Settings:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_store() first.")
    return _settings


def get_store() -> Generator[MarketStore, None, None]:
    """Dependency that provides the MarketStore instance."""
    if _store is None:
        raise RuntimeError("MarketStore not initialized. Call init_store() first.")
    yield _store


def get_clock() -> Callable[[], datetime]:
    """Dependency that provides the current-time source."""
    return lambda: datetime.now(UTC)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[MarketStore, Depends(get_store)]
ClockDep = Annotated[Callable[[], datetime], Depends(get_clock)]


def get_access_token(authorization: Annotated[str | None, Header()] = None) -> str | None:
    """Extract the bearer token from the Authorization header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


AccessTokenDep = Annotated[str | None, Depends(get_access_token)]


def get_principal(store: StoreDep, access_token: AccessTokenDep) -> User | None:
    """Dependency that resolves the caller, or None when anonymous."""
    return store.get_principal(access_token)


PrincipalDep = Annotated[User | None, Depends(get_principal)]


def get_detail_loader(store: StoreDep) -> ClassDetailLoader:
    return ClassDetailLoader(store)


def get_enrollment_service(store: StoreDep, settings: SettingsDep) -> EnrollmentService:
    return EnrollmentService(store, counter_mode=settings.counter_mode)


def get_class_admin(store: StoreDep, settings: SettingsDep) -> ClassAdmin:
    return ClassAdmin(store, tz=settings.tzinfo, close_mode=settings.close_mode)


DetailLoaderDep = Annotated[ClassDetailLoader, Depends(get_detail_loader)]
EnrollmentServiceDep = Annotated[EnrollmentService, Depends(get_enrollment_service)]
ClassAdminDep = Annotated[ClassAdmin, Depends(get_class_admin)]
