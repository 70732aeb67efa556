"""
Logging configuration for the INI/REG formatter.

Logs go to stderr so the CLI can keep stdout for formatted output.
"""

import logging
import os
import sys
from typing import Optional, Union

from .rules import LOG_LEVEL_ENV

LOGGER_NAME = "ini_reg"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """
    Configure the formatter's logger.

    Args:
        level: Logging level or level name. Defaults to the value of
            INI_REG_LOG_LEVEL, or INFO when that is unset.

    Returns:
        Root logger for the formatter.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_resolve_level(level))

    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the formatter namespace."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
