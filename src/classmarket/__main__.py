"""Run the classmarket API server."""

from __future__ import annotations

import uvicorn

from classmarket.api import create_app
from classmarket.config import Settings
from classmarket.logging import setup_logging


def main() -> None:
    setup_logging()
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
