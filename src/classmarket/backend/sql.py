"""SqlBackend - Local SQLAlchemy implementation of the backend contract."""

from __future__ import annotations

import logging
import secrets
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, OperationalError

from classmarket.backend.database import Database
from classmarket.backend.exceptions import (
    BackendError,
    BackendUnavailableError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from classmarket.backend.models import Filter, FilterOp, Table
from classmarket.backend.tables import TABLES, AuthSessionRow, Base, UserRow

logger = logging.getLogger("classmarket.backend.sql")


def _row_to_dict(row: Base) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def _to_storage(values: dict[str, Any]) -> dict[str, Any]:
    # SQLite keeps the wall time and drops the offset, so store UTC
    return {
        key: value.astimezone(UTC) if isinstance(value, datetime) and value.tzinfo else value
        for key, value in values.items()
    }


class SqlBackend:
    """Backend stored in a local SQLite database.

    Serves the same operations as the hosted backend, plus ``create_session``
    to issue access tokens for local users.
    """

    def __init__(self, db_path: str = "classmarket.db") -> None:
        """Initialize the backend, creating tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    @property
    def database(self) -> Database:
        return self._db

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def _model(self, table: Table) -> type[Base]:
        try:
            return TABLES[Table(table)]
        except (KeyError, ValueError) as e:
            raise BackendError(f"Unknown table '{table}'") from e

    def _conditions(self, model: type[Base], filters: list[Filter] | None) -> list[Any]:
        conditions = []
        for f in filters or []:
            column = getattr(model, f.column, None)
            if column is None:
                raise BackendError(f"Unknown column '{f.column}' on {model.__tablename__}")
            if f.op == FilterOp.EQ:
                conditions.append(column == f.value)
            elif f.op == FilterOp.NEQ:
                conditions.append(column != f.value)
            else:
                raise BackendError(f"Unsupported filter operator '{f.op}'")
        return conditions

    # --- Identity ---

    def create_session(self, user_id: str) -> str:
        """Issue an access token for a user.

        Raises:
            RecordNotFoundError: If the user doesn't exist
        """
        with self._db.session() as session:
            if session.get(UserRow, user_id) is None:
                raise RecordNotFoundError(f"user row '{user_id}' not found")
            token = secrets.token_urlsafe(32)
            session.add(AuthSessionRow(token=token, user_id=user_id))
            session.commit()
        return token

    def get_auth_user_id(self, access_token: str) -> str | None:
        """Return the user id behind an access token, or None if unknown."""
        with self._db.session() as session:
            auth = session.get(AuthSessionRow, access_token)
            return auth.user_id if auth is not None else None

    # --- Rows ---

    def select(
        self,
        table: Table,
        filters: list[Filter] | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """Read rows matching all filters."""
        model = self._model(table)
        stmt = select(model).where(*self._conditions(model, filters))
        if order_by is not None:
            stmt = stmt.order_by(getattr(model, order_by))
        if limit is not None:
            stmt = stmt.limit(limit)

        with self._db.session() as session:
            try:
                rows = session.execute(stmt).scalars().all()
            except OperationalError as e:
                raise BackendUnavailableError(str(e)) from e
            return [_row_to_dict(row) for row in rows]

    def insert(self, table: Table, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored.

        Raises:
            DuplicateRecordError: If a unique constraint is violated
        """
        model = self._model(table)
        with self._db.session() as session:
            obj = model(**_to_storage(row))
            session.add(obj)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if "UNIQUE constraint failed" in str(e):
                    raise DuplicateRecordError(f"Duplicate {table} row: {e.orig}") from e
                raise BackendError(f"Insert into {table} failed: {e.orig}") from e
            session.refresh(obj)
            return _row_to_dict(obj)

    def update(
        self, table: Table, filters: list[Filter], values: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update rows matching all filters and return them."""
        if not filters:
            raise ValueError("update requires at least one filter")
        model = self._model(table)
        changes = _to_storage(values)
        with self._db.session() as session:
            rows = list(
                session.execute(select(model).where(*self._conditions(model, filters)))
                .scalars()
                .all()
            )
            for row in rows:
                for key, value in changes.items():
                    setattr(row, key, value)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise BackendError(f"Update of {table} failed: {e.orig}") from e
            return [_row_to_dict(row) for row in rows]

    def increment(self, table: Table, row_id: str, column: str, amount: int = 1) -> int:
        """Atomically add amount to a numeric column and return the new value.

        Raises:
            RecordNotFoundError: If no row has the given id
        """
        model = self._model(table)
        target = getattr(model, column)
        stmt = (
            update(model)
            .where(model.id == row_id)  # type: ignore[attr-defined]
            .values({column: target + amount})
            .returning(target)
        )
        with self._db.session() as session:
            value = session.execute(stmt).scalar_one_or_none()
            if value is None:
                raise RecordNotFoundError(f"{table} row '{row_id}' not found")
            session.commit()
        logger.debug("Incremented %s.%s for %s to %d", table, column, row_id, value)
        return int(value)
