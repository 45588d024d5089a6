#!/usr/bin/env python3
"""Entrypoint pentru `product-api`: pornește uvicorn pe app.main:app."""
import logging

import uvicorn

from app.core.logging import setup_logging
from app.core.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("Starting API on %s:%s (env=%s)", settings.HOST, settings.PORT, settings.APP_ENV)
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        # log-urile le configurăm noi (setup_logging)
        log_config=None,
    )


if __name__ == "__main__":
    main()
