"""
Custom exceptions for spreadsheet imports.

Provides type-safe, descriptive exceptions for error handling throughout
the import pipeline.
"""

from sheet_import.exceptions.import_exceptions import (
    ArgumentError,
    ConversionError,
    ConverterNotFoundError,
    EmptySheetError,
    InvalidFileFormatError,
    ReadError,
    RequiredFieldError,
    RowMappingError,
    SheetImportBaseError,
    WriteError,
)
from sheet_import.exceptions.import_exceptions import (
    FileNotFoundError as ImportFileNotFoundError,
)
from sheet_import.exceptions.import_exceptions import (
    ImportError as SheetImportError,
)
from sheet_import.exceptions.import_exceptions import (
    PermissionError as ImportPermissionError,
)

__all__ = [
    "SheetImportBaseError",
    "ArgumentError",
    "ImportFileNotFoundError",
    "InvalidFileFormatError",
    "ReadError",
    "EmptySheetError",
    "ConversionError",
    "ConverterNotFoundError",
    "RowMappingError",
    "RequiredFieldError",
    "SheetImportError",
    "WriteError",
    "ImportPermissionError",
]
