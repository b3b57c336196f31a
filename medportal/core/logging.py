"""Application logger, configured from settings."""

import logging
import sys
from typing import Optional

from medportal.config import settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleHandler(logging.StreamHandler):
    """stdout handler owned by this module."""

    def __init__(self):
        super().__init__(sys.stdout)


def resolve_level(level_name: str) -> int:
    """Map a level name to its number. Unknown names fall back to INFO."""
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(name: Optional[str] = None, level_name: Optional[str] = None) -> logging.Logger:
    """
    Configure the named application logger with a single stdout handler.

    Calling it again only updates the level; no second handler is added.
    Module and line number are included when running at DEBUG.
    """
    logger = logging.getLogger(name or settings.LOGGER_NAME)
    level = resolve_level(level_name or settings.LOG_LEVEL)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if isinstance(h, ConsoleHandler)), None)
    if handler is None:
        handler = ConsoleHandler()
        logger.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT, datefmt=DATE_FORMAT)
    )

    logger.debug(f"Logging configured for '{logger.name}' at {logging.getLevelName(level)}")
    return logger


logger = setup_logging()
