"""Integration tests for the file-backed SQL database."""

import tempfile
from pathlib import Path

import pytest

from classmarket.backend import Filter, SqlBackend, Table


@pytest.mark.integration
class TestFileDatabase:
    """Tests against a SQLite file."""

    def test_wal_mode_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            backend = SqlBackend(str(Path(tmpdir) / "market.db"))
            try:
                assert backend.database.is_wal_mode()
            finally:
                backend.close()

    def test_creates_parent_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "market.db"
            backend = SqlBackend(str(db_path))
            try:
                assert db_path.parent.exists()
            finally:
                backend.close()

    def test_data_survives_reopen(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = str(Path(tmpdir) / "market.db")
            backend = SqlBackend(db_path)
            row = backend.insert(Table.CLASS, {"title": "Kept", "lecturer": "Kim"})
            backend.close()

            reopened = SqlBackend(db_path)
            try:
                rows = reopened.select(Table.CLASS, [Filter.eq("id", row["id"])])
                assert rows[0]["title"] == "Kept"
            finally:
                reopened.close()
