"""Unit tests for create_backend."""

import pytest

from classmarket.backend import RestBackend, SqlBackend, create_backend
from classmarket.config import BackendKind, ConfigError, Settings


@pytest.mark.unit
class TestCreateBackend:
    """Tests for choosing a backend from settings."""

    def test_sql_backend(self) -> None:
        backend = create_backend(Settings(db_path=":memory:"))
        try:
            assert isinstance(backend, SqlBackend)
        finally:
            backend.close()

    def test_rest_backend(self) -> None:
        settings = Settings(
            backend=BackendKind.REST,
            backend_url="https://x.example.com",
            backend_key="anon",
            request_timeout=5.0,
        )

        backend = create_backend(settings)

        assert isinstance(backend, RestBackend)
        backend.close()

    def test_rest_without_credentials_raises_config_error(self) -> None:
        """Settings changed after validation are still rejected."""
        settings = Settings()
        settings.backend = BackendKind.REST

        with pytest.raises(ConfigError):
            create_backend(settings)
