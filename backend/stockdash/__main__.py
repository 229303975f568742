"""Run the StockDash server: ``python -m stockdash``."""

from __future__ import annotations

import logging

import uvicorn

from .config import Settings
from .main import configure_logging, create_app

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
