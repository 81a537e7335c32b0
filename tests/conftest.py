"""
Test fixtures and utilities for the sheet import tests.

This module provides shared fixtures including temporary files,
record types and schemas, in-memory sheets, and service instances.
"""

import tempfile
from collections.abc import Callable, Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from pydantic import BaseModel

from sheet_import.adapters.calamine_adapter import CalamineAdapter
from sheet_import.adapters.openpyxl_adapter import OpenpyxlAdapter
from sheet_import.adapters.xlsxwriter_adapter import XlsxWriterAdapter
from sheet_import.config import Settings
from sheet_import.models.cell_models import Cell, Row, SheetRows
from sheet_import.models.schema_models import FieldMapping, RecordSchema
from sheet_import.services.import_service import ImportService
from sheet_import.services.schema_registry import SchemaRegistry


class Person(BaseModel):
    """Record type used throughout the tests."""

    name: str = ""
    age: int | None = None
    joined: date | None = None
    email: str | None = None


def to_cell(value: Any) -> Cell:
    """Build a tagged cell from a plain Python value."""
    if value is None:
        return Cell.empty()
    if isinstance(value, Cell):
        return value
    if isinstance(value, bool):
        return Cell.of_bool(value)
    if isinstance(value, date):
        return Cell.of_date(value)
    if isinstance(value, (int, float)):
        return Cell.of_number(value)
    return Cell.of_text(str(value))


def build_sheet(header: list[Any], rows: list[list[Any]], sheet_name: str = "Sheet1") -> SheetRows:
    """Build SheetRows with a header row followed by data rows."""
    all_rows = [header, *rows]
    return SheetRows(
        sheet_name=sheet_name,
        rows=[
            Row(index=i, cells=[to_cell(v) for v in values])
            for i, values in enumerate(all_rows)
        ],
    )


@pytest.fixture
def sheet_factory() -> Callable[..., SheetRows]:
    """
    Return a factory building in-memory sheets.

    Returns:
        Callable taking a header and data rows.
    """
    return build_sheet


@pytest.fixture
def person_schema() -> RecordSchema:
    """
    Return the schema mapping spreadsheet columns onto Person.

    Returns:
        RecordSchema for Person.
    """
    return RecordSchema(
        record_type=Person,
        fields=[
            FieldMapping(field="name", column="Name", required=True),
            FieldMapping(field="age", column="Age", converter="int"),
            FieldMapping(field="joined", column="Joined", converter="date"),
            FieldMapping(field="email", column="Email"),
        ],
    )


@pytest.fixture
def settings() -> Settings:
    """
    Create settings with the default dispatch limits.

    Returns:
        Settings instance.
    """
    return Settings(large_file_threshold=10_000, batch_size=1_000, max_workers=4)


@pytest.fixture
def small_batch_settings() -> Settings:
    """
    Create settings that switch to batches on small sheets.

    Returns:
        Settings instance with a threshold of 10 and batches of 3 rows.
    """
    return Settings(large_file_threshold=10, batch_size=3, max_workers=4)


@pytest.fixture
def import_service(settings: Settings) -> ImportService:
    """
    Create an ImportService with its own schema registry.

    Returns:
        ImportService instance.
    """
    return ImportService(settings=settings, schemas=SchemaRegistry())


@pytest.fixture
def batching_service(small_batch_settings: Settings) -> ImportService:
    """
    Create an ImportService that batches sheets above 10 data rows.

    Returns:
        ImportService instance.
    """
    return ImportService(settings=small_batch_settings, schemas=SchemaRegistry())


@pytest.fixture
def openpyxl_adapter() -> OpenpyxlAdapter:
    """
    Create an OpenpyxlAdapter instance for testing.

    Returns:
        OpenpyxlAdapter instance.
    """
    return OpenpyxlAdapter()


@pytest.fixture
def calamine_adapter() -> CalamineAdapter:
    """
    Create a CalamineAdapter instance for testing.

    Returns:
        CalamineAdapter instance.
    """
    return CalamineAdapter()


@pytest.fixture
def xlsxwriter_adapter() -> XlsxWriterAdapter:
    """
    Create an XlsxWriterAdapter instance for testing.

    Returns:
        XlsxWriterAdapter instance.
    """
    return XlsxWriterAdapter()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def people_file(temp_dir: Path, xlsxwriter_adapter: XlsxWriterAdapter) -> Path:
    """
    Create a workbook with a Name/Age/Joined header and two people.

    Args:
        temp_dir: Temporary directory path.
        xlsxwriter_adapter: XlsxWriterAdapter instance.

    Returns:
        Path to the workbook.
    """
    file_path = temp_dir / "people.xlsx"

    xlsxwriter_adapter.write_rows(
        file_path=str(file_path),
        rows=[
            ["Alice", 30, date(2024, 1, 15)],
            ["Bob", 25, None],
        ],
        headers=["Name", "Age", "Joined"],
        sheet_name="People",
    )

    return file_path


@pytest.fixture
def missing_name_file(temp_dir: Path, xlsxwriter_adapter: XlsxWriterAdapter) -> Path:
    """
    Create a workbook whose second data row has an empty Name cell.

    Args:
        temp_dir: Temporary directory path.
        xlsxwriter_adapter: XlsxWriterAdapter instance.

    Returns:
        Path to the workbook.
    """
    file_path = temp_dir / "missing_name.xlsx"

    xlsxwriter_adapter.write_rows(
        file_path=str(file_path),
        rows=[
            ["Alice", 30],
            [None, 25],
        ],
        headers=["Name", "Age"],
    )

    return file_path
