"""
Data models for spreadsheet imports.

Contains Pydantic models for sheet content, record schemas and import
results.
"""

from sheet_import.models.cell_models import Cell, CellKind, Row, SheetRows
from sheet_import.models.import_models import (
    DispatchStrategy,
    ImportResult,
    ImportState,
    TemplateResult,
)
from sheet_import.models.schema_models import FieldMapping, RecordSchema

__all__ = [
    "Cell",
    "CellKind",
    "Row",
    "SheetRows",
    "FieldMapping",
    "RecordSchema",
    "DispatchStrategy",
    "ImportState",
    "ImportResult",
    "TemplateResult",
]
