from __future__ import annotations

import logging
import sys

from mytask.config import settings


def setup_logging(level: str | None = None) -> None:
    """Setup basic logging for the application."""
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout
    )

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info("Logging configured successfully", extra={"level": level_name})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
