"""SQLite engine and sessions for the local SQL backend."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from classmarket.backend.tables import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY = ":memory:"


def _enable_pragmas(dbapi_connection: object, _connection_record: object) -> None:
    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(db_path: str) -> Engine:
    """Create a SQLite engine for a file path or ``":memory:"``.

    Every connection runs in WAL mode with foreign keys enforced. The
    in-memory database lives on a single shared connection, so all threads
    see the same rows.
    """
    if db_path == MEMORY:
        engine = create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{db_path}",
            connect_args={"check_same_thread": False},
        )
    event.listen(engine, "connect", _enable_pragmas)
    return engine


class Database:
    """Owns the engine and hands out ORM sessions.

    Use sessions as context managers::

        with db.session() as session:
            session.get(ClassRow, class_id)
    """

    def __init__(self, db_path: str = "classmarket.db") -> None:
        self.db_path = db_path
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = make_engine(self.db_path)
        return self._engine

    def create_tables(self) -> None:
        """Create the class, user, enrollment and auth_session tables if missing."""
        Base.metadata.create_all(self.engine)

    def session(self) -> Session:
        """Open a new ORM session."""
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)
        return self._sessions()

    def is_wal_mode(self) -> bool:
        with self.engine.connect() as conn:
            return conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"

    def close(self) -> None:
        """Dispose of the engine; the next use opens a fresh one."""
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None
