"""Configuration for spreadsheet imports.

Settings are read with pydantic-settings from environment variables with
the SHEET_IMPORT_ prefix, or from a .env file in the working directory.

Environment Variables:
    SHEET_IMPORT_LARGE_FILE_THRESHOLD: Data-row count above which rows are
        processed in parallel batches (default: 10000)
    SHEET_IMPORT_BATCH_SIZE: Rows per parallel batch (default: 1000)
    SHEET_IMPORT_MAX_WORKERS: Thread pool size for batches (default: executor default)
    SHEET_IMPORT_LOG_LEVEL: Logging level (default: INFO)
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Import settings loaded from environment variables.

    Example .env file:
        SHEET_IMPORT_BATCH_SIZE=500
        SHEET_IMPORT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="SHEET_IMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    large_file_threshold: int = 10_000
    """Sheets with more data rows than this are processed in batches."""

    batch_size: int = 1_000
    """Number of sheet rows per batch on the batched path."""

    max_workers: int | None = None
    """Thread pool size for batches; None uses the executor default."""

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    @field_validator("large_file_threshold", "batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_workers must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
