"""
Service layer for spreadsheet imports.

Contains the import pipeline: cell text extraction, header resolution,
row mapping and the ImportService dispatcher, decoupled from the
spreadsheet engines behind the adapters.
"""

from sheet_import.services.cell_extractor import extract_cell_value
from sheet_import.services.header_resolver import resolve_header
from sheet_import.services.import_service import ImportService
from sheet_import.services.row_mapper import RowMapper
from sheet_import.services.schema_registry import SchemaRegistry, schema_registry

__all__ = [
    "ImportService",
    "RowMapper",
    "SchemaRegistry",
    "schema_registry",
    "extract_cell_value",
    "resolve_header",
]
