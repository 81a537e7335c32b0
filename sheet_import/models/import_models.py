"""
Pydantic models describing import runs and their outcomes.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class DispatchStrategy(str, Enum):
    """
    How the data rows of a sheet are processed.

    SEQUENTIAL keeps sheet row order in the output. BATCHED processes
    fixed-size row ranges concurrently; the output order follows batch
    completion and is not guaranteed to match sheet row order.
    """

    SEQUENTIAL = "sequential"
    BATCHED = "batched"


class ImportState(str, Enum):
    """
    Lifecycle of one import.

    idle -> reading_header -> (sequential | batched) -> merged -> done,
    with failed reachable from every step.
    """

    IDLE = "idle"
    READING_HEADER = "reading_header"
    SEQUENTIAL = "sequential"
    BATCHED = "batched"
    MERGED = "merged"
    DONE = "done"
    FAILED = "failed"


class ImportResult(BaseModel):
    """
    Records produced by a successful import plus run metadata.

    Attributes:
        records: Constructed records. Row order is only guaranteed for the
            sequential strategy.
        sheet_name: Name of the imported worksheet.
        strategy: Processing strategy that was used.
        row_count: Number of data rows mapped.
        batch_count: Number of batches (1 for the sequential strategy).
        state: Final state, always DONE for a returned result.
        processing_time_ms: Wall time of the import in milliseconds.
    """

    records: list[Any] = Field(
        default_factory=list,
        description="Constructed records",
    )
    sheet_name: str = Field(
        description="Name of the imported worksheet",
    )
    strategy: DispatchStrategy = Field(
        description="Processing strategy that was used",
    )
    row_count: int = Field(
        ge=0,
        description="Number of data rows mapped",
    )
    batch_count: int = Field(
        ge=0,
        description="Number of batches processed",
    )
    state: ImportState = Field(
        default=ImportState.DONE,
        description="Final import state",
    )
    processing_time_ms: float | None = Field(
        default=None,
        ge=0,
        description="Time taken by the import in milliseconds",
    )


class TemplateResult(BaseModel):
    """
    Outcome of writing an import template workbook.

    Attributes:
        file_path: Path to the written file.
        sheet_name: Name of the template sheet.
        columns: Header labels written, in order.
        file_size_bytes: Size of the written file in bytes.
    """

    file_path: str = Field(
        description="Path to the written file",
    )
    sheet_name: str = Field(
        description="Name of the template sheet",
    )
    columns: list[str] = Field(
        description="Header labels written, in order",
    )
    file_size_bytes: int | None = Field(
        default=None,
        ge=0,
        description="Size of the written file in bytes",
    )
