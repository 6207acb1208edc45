"""Centralized logger used across the project.

`Logger` exposes static helpers (``debug``, ``info``, ``warning``, ``error``,
``success`` and ``separator``) on top of the standard :mod:`logging` module so
call sites never deal with logger instances. The level is read once from the
``LOG_LEVEL`` environment variable (default ``INFO``).
"""

import logging
import os
import sys

_LOGGER_NAME = "stock_grouping"
_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_SUCCESS_LEVEL = 25
_SEPARATOR = "-" * 80

logging.addLevelName(_SUCCESS_LEVEL, "SUCCESS")


def _build_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


class Logger:
    """Static facade over the project logger."""

    _LOGGER: logging.Logger = _build_logger()

    @staticmethod
    def debug(message: str) -> None:
        """Log a debug message."""
        Logger._LOGGER.debug(message)

    @staticmethod
    def info(message: str) -> None:
        """Log an informational message."""
        Logger._LOGGER.info(message)

    @staticmethod
    def success(message: str) -> None:
        """Log a success message (between INFO and WARNING)."""
        Logger._LOGGER.log(_SUCCESS_LEVEL, message)

    @staticmethod
    def warning(message: str) -> None:
        """Log a warning message."""
        Logger._LOGGER.warning(message)

    @staticmethod
    def error(message: str) -> None:
        """Log an error message."""
        Logger._LOGGER.error(message)

    @staticmethod
    def separator() -> None:
        """Log a horizontal rule at INFO level to split log sections."""
        Logger._LOGGER.info(_SEPARATOR)
