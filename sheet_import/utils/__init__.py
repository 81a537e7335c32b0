"""Utility modules for sheet_import."""

from sheet_import.utils.logging import get_logger, reset_logging, setup_logging

__all__ = [
    "get_logger",
    "reset_logging",
    "setup_logging",
]
