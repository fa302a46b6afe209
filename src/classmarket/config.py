"""Configuration loading for classmarket."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


class BackendKind(StrEnum):
    """Which backend implementation serves data."""

    SQL = "sql"
    REST = "rest"


class CounterMode(StrEnum):
    """How the class enrollment counter is bumped after an enrollment.

    ATOMIC asks the backend for a server-side increment. CLIENT writes back
    the locally cached count plus one, which can undercount when two sessions
    enroll at the same time.
    """

    ATOMIC = "atomic"
    CLIENT = "client"


class CloseMode(StrEnum):
    """How closing a class is written to the backend.

    STATUS sets the class's ``status`` column to ``closed``. SENTINEL sets
    ``students_max`` to 0, for class tables without a ``status`` column.
    """

    STATUS = "status"
    SENTINEL = "sentinel"


ENV_PREFIX = "CLASSMARKET_"


@dataclass
class Settings:
    """Runtime settings for the service."""

    backend: BackendKind = BackendKind.SQL
    db_path: str = "classmarket.db"
    backend_url: str | None = None
    backend_key: str | None = None
    counter_mode: CounterMode = CounterMode.ATOMIC
    close_mode: CloseMode = CloseMode.STATUS
    timezone: str = "Asia/Seoul"
    request_timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 8000

    def __post_init__(self) -> None:
        if self.backend == BackendKind.REST and not (self.backend_url and self.backend_key):
            raise ConfigError(
                f"{ENV_PREFIX}BACKEND_URL and {ENV_PREFIX}BACKEND_KEY are required "
                "for the rest backend"
            )
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be positive")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone: {self.timezone}") from e

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone used for display strings."""
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from CLASSMARKET_* environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a value is invalid.
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        kwargs: dict[str, object] = {}

        backend = get("BACKEND")
        if backend is not None:
            try:
                kwargs["backend"] = BackendKind(backend.lower())
            except ValueError as e:
                raise ConfigError(f"Unknown backend: {backend}") from e

        counter_mode = get("COUNTER_MODE")
        if counter_mode is not None:
            try:
                kwargs["counter_mode"] = CounterMode(counter_mode.lower())
            except ValueError as e:
                raise ConfigError(f"Unknown counter mode: {counter_mode}") from e

        close_mode = get("CLOSE_MODE")
        if close_mode is not None:
            try:
                kwargs["close_mode"] = CloseMode(close_mode.lower())
            except ValueError as e:
                raise ConfigError(f"Unknown close mode: {close_mode}") from e

        port = get("PORT")
        if port is not None:
            try:
                kwargs["port"] = int(port)
            except ValueError as e:
                raise ConfigError(f"Invalid port: {port}") from e

        timeout = get("REQUEST_TIMEOUT")
        if timeout is not None:
            try:
                kwargs["request_timeout"] = float(timeout)
            except ValueError as e:
                raise ConfigError(f"Invalid request timeout: {timeout}") from e

        for field_name, env_name in (
            ("db_path", "DB_PATH"),
            ("backend_url", "BACKEND_URL"),
            ("backend_key", "BACKEND_KEY"),
            ("timezone", "TIMEZONE"),
            ("host", "HOST"),
        ):
            value = get(env_name)
            if value is not None:
                kwargs[field_name] = value

        return cls(**kwargs)  # type: ignore[arg-type]
