"""
Adapters for spreadsheet engines.

Implements the adapter pattern for the spreadsheet libraries the import
pipeline depends on:
- OpenpyxlAdapter: reads XML workbooks with formulas and date flags (openpyxl)
- CalamineAdapter: reads binary and other workbooks (python-calamine)
- XlsxWriterAdapter: writes import templates (XlsxWriter)
"""

from sheet_import.adapters.base import SheetReader
from sheet_import.adapters.calamine_adapter import CalamineAdapter
from sheet_import.adapters.openpyxl_adapter import OpenpyxlAdapter
from sheet_import.adapters.xlsxwriter_adapter import XlsxWriterAdapter

__all__ = [
    "SheetReader",
    "CalamineAdapter",
    "OpenpyxlAdapter",
    "XlsxWriterAdapter",
]
