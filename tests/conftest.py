"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from classmarket.backend import SqlBackend, Table
from classmarket.store import ClassRecord, MarketStore, User


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """A fixed reference instant."""
    return NOW


@pytest.fixture
def backend() -> Generator[SqlBackend, None, None]:
    """Create an in-memory SqlBackend."""
    b = SqlBackend(":memory:")
    yield b
    b.close()


@pytest.fixture
def store(backend: SqlBackend) -> MarketStore:
    """Create a MarketStore over the in-memory backend."""
    return MarketStore(backend)


@pytest.fixture
def make_user(backend: SqlBackend) -> Callable[..., User]:
    """Factory inserting users into the backend."""
    counter = iter(range(1, 10_000))

    def _make(role: str = "student", **fields: Any) -> User:
        n = next(counter)
        row = {"email": f"user{n}@example.com", "name": f"User {n}", "role": role}
        row.update(fields)
        return User.model_validate(backend.insert(Table.USER, row))

    return _make


@pytest.fixture
def make_class(backend: SqlBackend) -> Callable[..., ClassRecord]:
    """Factory inserting classes into the backend."""
    counter = iter(range(1, 10_000))

    def _make(**fields: Any) -> ClassRecord:
        n = next(counter)
        row = {
            "title": f"Class {n}",
            "lecturer": "Kim",
            "price": 0,
            "start_date": NOW + timedelta(days=1),
            "end_date": NOW + timedelta(days=2),
        }
        row.update(fields)
        return ClassRecord.model_validate(backend.insert(Table.CLASS, row))

    return _make
