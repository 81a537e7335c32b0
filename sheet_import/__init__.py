"""
sheet-import: spreadsheet rows to typed records.

This package imports the first worksheet of a spreadsheet into records
described by a declarative column-to-field schema.

Architecture:
    - Service layer (ImportService) separated from the spreadsheet engines
    - openpyxl for XML workbooks (formulas, date formats)
    - python-calamine for binary and other workbooks
    - XlsxWriter for import templates
    - Pydantic models for sheet content, schemas and results
"""

__version__ = "0.1.0"
