"""Logging setup for the sheet_import package.

Modules log through standard module loggers (logging.getLogger(__name__)),
all children of the "sheet_import" package logger. Applications that do
not configure logging themselves can call setup_logging() once to attach a
console handler to the package logger.

Usage:
    from sheet_import.utils.logging import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
    logger.info("Importing %s", file_name)
"""

import logging
import sys

__all__ = [
    "PACKAGE_LOGGER",
    "LOG_FORMAT",
    "setup_logging",
    "get_logger",
    "reset_logging",
]

PACKAGE_LOGGER = "sheet_import"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_handler: logging.Handler | None = None


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a console handler to the package logger.

    Idempotent: calling it again only updates the level.

    Args:
        level: Logging level name or number. Defaults to the configured
            SHEET_IMPORT_LOG_LEVEL.

    Returns:
        The package logger.
    """
    global _handler

    if level is None:
        from sheet_import.config import get_settings

        level = get_settings().log_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
        # Avoid duplicate lines when the root logger is configured too
        logger.propagate = False

    _handler.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger, namespaced under the package logger when needed."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def reset_logging() -> None:
    """Remove the handler installed by setup_logging(). Mainly for tests."""
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
