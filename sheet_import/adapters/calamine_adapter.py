"""
Calamine adapter for reading binary and other workbooks.

This module provides the CalamineAdapter class that wraps python-calamine
for reading the first worksheet of workbooks that openpyxl cannot open.
python-calamine is a Rust-based library that reads legacy binary files
quickly and with a small memory footprint.

Calamine reports cell values only: formula cells arrive as their cached
results and empty cells as empty strings.

Supported formats:
    - .xls (Excel 97-2003)
    - .xlsb (Excel Binary)
    - .ods (OpenDocument Spreadsheet)
    - .xlsx / .xlsm (values only)

Example:
    adapter = CalamineAdapter()
    with open("/path/to/legacy.xls", "rb") as f:
        sheet = adapter.read_first_sheet(f, "legacy.xls")
"""

from datetime import date, datetime, time, timedelta
from typing import Any, BinaryIO

from python_calamine import CalamineWorkbook

from sheet_import.adapters.base import as_stream, build_sheet_rows, has_extension
from sheet_import.exceptions.import_exceptions import (
    EmptySheetError,
    InvalidFileFormatError,
    ReadError,
)
from sheet_import.models.cell_models import Cell, SheetRows


class CalamineAdapter:
    """
    Adapter reading workbooks with python-calamine.

    Attributes:
        SUPPORTED_EXTENSIONS: Tuple of supported file extensions.

    Example:
        adapter = CalamineAdapter()
        sheet = adapter.read_first_sheet(data, "report.xls")
        for row in sheet.rows:
            ...
    """

    SUPPORTED_EXTENSIONS = (".xls", ".xlsb", ".ods", ".xlsx", ".xlsm")

    def __init__(self) -> None:
        """Initialize the CalamineAdapter."""
        pass

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, self.SUPPORTED_EXTENSIONS)

    def _open_workbook(self, source: BinaryIO | bytes, file_name: str) -> CalamineWorkbook:
        """
        Open a workbook using calamine.

        Args:
            source: Workbook bytes or a binary stream.
            file_name: Name used in error messages.

        Returns:
            CalamineWorkbook instance.

        Raises:
            InvalidFileFormatError: If the content cannot be parsed.
            ReadError: If an unexpected error occurs during opening.
        """
        try:
            return CalamineWorkbook.from_filelike(as_stream(source))
        except Exception as e:
            error_msg = str(e).lower()
            if (
                "invalid" in error_msg
                or "corrupt" in error_msg
                or "format" in error_msg
                or "cannot detect" in error_msg
            ):
                raise InvalidFileFormatError(
                    file_name=file_name,
                    expected_formats=list(self.SUPPORTED_EXTENSIONS),
                    reason=str(e),
                ) from e
            raise ReadError(
                file_name=file_name,
                operation="open",
                reason=str(e),
            ) from e

    def _convert_value(self, value: Any) -> Cell:
        """
        Convert a calamine value to a tagged Cell.

        Args:
            value: Raw cell value from calamine.

        Returns:
            The tagged cell.
        """
        if value is None or value == "":
            return Cell.empty()

        if isinstance(value, bool):
            return Cell.of_bool(value)

        if isinstance(value, (datetime, date)):
            return Cell.of_date(value)

        if isinstance(value, time):
            return Cell.of_text(value.isoformat())

        if isinstance(value, timedelta):
            return Cell.of_text(str(value))

        if isinstance(value, (int, float)):
            return Cell.of_number(value)

        return Cell.of_text(str(value))

    def read_first_sheet(self, source: BinaryIO | bytes, file_name: str = "workbook.xls") -> SheetRows:
        """
        Read the first worksheet into memory.

        Args:
            source: Workbook bytes or a binary stream.
            file_name: Name of the source, used in error messages.

        Returns:
            SheetRows for the first worksheet.

        Raises:
            InvalidFileFormatError: If the content is not a readable workbook.
            ReadError: If reading fails for another reason.
            EmptySheetError: If the workbook has no worksheets.
        """
        workbook = self._open_workbook(source, file_name)
        sheet_names = workbook.sheet_names
        if not sheet_names:
            raise EmptySheetError(file_name)

        try:
            sheet = workbook.get_sheet_by_index(0)
            # Keep leading empty rows/columns so indexes match the sheet
            raw_data = sheet.to_python(skip_empty_area=False)
        except Exception as e:
            raise ReadError(
                file_name=file_name,
                operation="read sheet",
                reason=str(e),
            ) from e

        indexed_cells = [
            (index, [self._convert_value(value) for value in row])
            for index, row in enumerate(raw_data)
        ]
        return build_sheet_rows(sheet_names[0], indexed_cells)
