"""Logging setup for classmarket.

All component loggers live under the ``classmarket`` logger and share one
rotating log file, plus the console when running the server.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "classmarket"

LOG_DIR_ENV = "CLASSMARKET_LOG_DIR"
LOG_LEVEL_ENV = "CLASSMARKET_LOG_LEVEL"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "classmarket.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Credentials that show up in backend URLs, headers and error bodies
_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]+"), "[JWT]"),
    (re.compile(r"Bearer [\w.-]+"), "Bearer [REDACTED]"),
    (re.compile(r"(apikey|access_token)=[\w.-]+"), r"\1=[REDACTED]"),
)


def _file_handler(path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


def setup_logging(
    log_dir: str | Path | None = None,
    level: str | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``classmarket`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_dir: Directory for the log file. Falls back to CLASSMARKET_LOG_DIR,
            then ``logs``.
        level: Level name. Falls back to CLASSMARKET_LOG_LEVEL, then INFO.
        log_file: File name inside log_dir.
        max_bytes: Size at which the file rotates.
        backup_count: Rotated files kept.
        console: Also write to stderr.

    Returns:
        The ``classmarket`` logger.
    """
    directory = Path(log_dir or os.environ.get(LOG_DIR_ENV) or DEFAULT_LOG_DIR)
    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(log_level)

    log_path = directory / log_file
    handlers = [_file_handler(log_path, max_bytes, backup_count)]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)

    logger.info("classmarket logging initialized (level=%s, file=%s)", level_name, log_path)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a component, e.g. ``get_logger("store")``."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def sanitize_for_log(text: str) -> str:
    """Mask access tokens, API keys and JWTs before text is logged."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text
