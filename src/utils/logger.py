# src/utils/logger.py
import logging
import sys
from typing import Optional

from core.config import settings


def setup_logger(
    name: str,
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    datefmt: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a named logger writing to stdout.

    Args:
        name: Logger name, upper-case component tag by convention (e.g. "STORAGE")
        level: Logging level (default: settings.LOG_LEVEL)
        format_string: Custom format string for log messages
        datefmt: Custom date format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if level is None:
        level = logging.getLevelName(settings.LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    if format_string is None:
        format_string = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"

    if datefmt is None:
        datefmt = "%Y-%m-%d %H:%M:%S"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string, datefmt=datefmt))
    logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    return logger
