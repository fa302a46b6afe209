"""Data models and protocol for backend access."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol


class Table(StrEnum):
    """Logical tables exposed by the backend."""

    CLASS = "class"
    USER = "user"
    ENROLLMENT = "enrollment"


class FilterOp(StrEnum):
    """Comparison operators supported in filters."""

    EQ = "eq"
    NEQ = "neq"


@dataclass(frozen=True)
class Filter:
    """A single column comparison, combined with AND in queries."""

    column: str
    op: FilterOp
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> Filter:
        return cls(column, FilterOp.EQ, value)

    @classmethod
    def neq(cls, column: str, value: Any) -> Filter:
        return cls(column, FilterOp.NEQ, value)


class Backend(Protocol):
    """Interface of the hosted backend: identity lookup and row access."""

    def get_auth_user_id(self, access_token: str) -> str | None:
        """Return the user id behind an access token, or None if unknown."""
        ...

    def select(
        self,
        table: Table,
        filters: list[Filter] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows matching all filters."""
        ...

    def insert(self, table: Table, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        ...

    def update(
        self, table: Table, filters: list[Filter], values: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update rows matching all filters and return them."""
        ...

    def increment(self, table: Table, row_id: str, column: str, amount: int = 1) -> int:
        """Atomically add amount to a numeric column and return the new value."""
        ...

    def close(self) -> None:
        """Release connections."""
        ...
