"""Logging setup for the matcher."""

import logging
import sys
from typing import Optional

from .config import get_settings

PACKAGE_LOGGER = "btc_matcher"


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger with a single stdout handler.

    Calling this again replaces the handler instead of stacking another.

    Args:
        level: Logging level name, defaults to the configured one
        fmt: Format string, defaults to the configured one

    Returns:
        The package logger
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level {level!r}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(fmt or settings.log_format, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
