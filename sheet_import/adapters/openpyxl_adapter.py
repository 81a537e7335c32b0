"""
Openpyxl adapter for reading XML workbooks.

This module provides the OpenpyxlAdapter class that wraps openpyxl for
reading the first worksheet of .xlsx/.xlsm workbooks into tagged cells.
Openpyxl is used for the XML formats because it exposes what the import
pipeline needs beyond plain values: cell data types, the date-format flag
of numeric cells, formula text and the cached results of formulas.

Supported formats:
    - .xlsx (Excel 2007+)
    - .xlsm (Excel Macro-Enabled)

Example:
    adapter = OpenpyxlAdapter()
    with open("/path/to/people.xlsx", "rb") as f:
        sheet = adapter.read_first_sheet(f, "people.xlsx")
    print(sheet.sheet_name, sheet.data_row_count)
"""

from datetime import date, datetime, time, timedelta
from io import BytesIO
from typing import Any, BinaryIO

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook

from sheet_import.adapters.base import build_sheet_rows, has_extension, read_bytes
from sheet_import.exceptions.import_exceptions import (
    EmptySheetError,
    InvalidFileFormatError,
    ReadError,
)
from sheet_import.models.cell_models import Cell, CellKind, SheetRows


class OpenpyxlAdapter:
    """
    Adapter reading XML workbooks with openpyxl.

    The workbook is loaded twice in read-only mode: once for formula text
    and once for the values cached by the application that last saved the
    file. Both passes are zipped into formula cells carrying their cached
    result.

    Attributes:
        SUPPORTED_EXTENSIONS: Tuple of supported file extensions.

    Example:
        adapter = OpenpyxlAdapter()
        sheet = adapter.read_first_sheet(data, "orders.xlsx")
        header = sheet.header
    """

    SUPPORTED_EXTENSIONS = (".xlsx", ".xlsm")

    def __init__(self) -> None:
        """Initialize the OpenpyxlAdapter."""
        pass

    def supports(self, file_name: str) -> bool:
        return has_extension(file_name, self.SUPPORTED_EXTENSIONS)

    def _open_workbook(self, data: bytes, file_name: str, data_only: bool) -> Workbook:
        """
        Open a workbook from bytes in read-only mode.

        Args:
            data: Workbook content.
            file_name: Name used in error messages.
            data_only: If True, read cached values instead of formulas.

        Returns:
            Workbook instance.

        Raises:
            InvalidFileFormatError: If the content cannot be parsed.
            ReadError: If an unexpected error occurs during opening.
        """
        try:
            return load_workbook(BytesIO(data), read_only=True, data_only=data_only)
        except Exception as e:
            error_msg = str(e).lower()
            if (
                "zip" in error_msg
                or "invalid" in error_msg
                or "corrupt" in error_msg
                or "format" in error_msg
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

    def _read_raw_rows(self, workbook: Workbook) -> tuple[str, list[tuple[int, list[Any]]]]:
        """Return the first sheet's name and its (row index, openpyxl cells)."""
        worksheet = workbook.worksheets[0]
        # Some writers store a wrong dimension tag, which truncates read-only iteration
        worksheet.reset_dimensions()

        raw_rows: list[tuple[int, list[Any]]] = []
        next_index = 0
        for cells in worksheet.iter_rows():
            row_number = next(
                (c.row for c in cells if getattr(c, "row", None) is not None),
                None,
            )
            index = row_number - 1 if row_number is not None else next_index
            raw_rows.append((index, list(cells)))
            next_index = index + 1
        return worksheet.title, raw_rows

    def _convert_value_cell(self, cell: Any) -> Cell:
        """
        Convert a non-formula openpyxl cell to a tagged Cell.

        Args:
            cell: Cell object from openpyxl (ReadOnlyCell or EmptyCell).

        Returns:
            The tagged cell. Error cells become empty cells.
        """
        value = cell.value
        data_type = getattr(cell, "data_type", None)

        if value is None or data_type == "e":
            return Cell.empty()

        if isinstance(value, bool):
            return Cell.of_bool(value)

        if isinstance(value, (datetime, date)):
            return Cell.of_date(value)

        if isinstance(value, (time, timedelta)):
            # Time-only formats have no calendar date
            return Cell.of_text(value.isoformat() if isinstance(value, time) else str(value))

        if isinstance(value, (int, float)):
            if getattr(cell, "is_date", False):
                return Cell.of_date(value)
            return Cell.of_number(value)

        return Cell.of_text(str(value))

    def _convert_cell(self, cell: Any, cached_cell: Any | None) -> Cell:
        """
        Convert an openpyxl cell, attaching the cached result to formulas.

        Args:
            cell: Cell from the formula pass.
            cached_cell: Cell at the same position from the value pass.

        Returns:
            The tagged cell.
        """
        if getattr(cell, "data_type", None) != "f":
            return self._convert_value_cell(cell)

        formula = cell.value
        # Array formulas are returned as objects holding the text
        formula_text = str(getattr(formula, "text", formula) or "")

        cached = None
        if cached_cell is not None:
            cached = self._convert_value_cell(cached_cell)
            if cached.kind == CellKind.EMPTY:
                cached = None

        return Cell.of_formula(formula_text, cached)

    def read_first_sheet(self, source: BinaryIO | bytes, file_name: str = "workbook.xlsx") -> SheetRows:
        """
        Read the first worksheet into memory.

        Args:
            source: Workbook bytes or a binary stream.
            file_name: Name of the source, used in error messages.

        Returns:
            SheetRows for the first worksheet.

        Raises:
            InvalidFileFormatError: If the content is not an XML workbook.
            ReadError: If reading fails for another reason.
            EmptySheetError: If the workbook has no worksheets.
        """
        data = read_bytes(source)

        formula_wb = self._open_workbook(data, file_name, data_only=False)
        value_wb: Workbook | None = None
        try:
            value_wb = self._open_workbook(data, file_name, data_only=True)
            if not formula_wb.worksheets:
                raise EmptySheetError(file_name)

            try:
                sheet_name, formula_rows = self._read_raw_rows(formula_wb)
                _, value_rows = self._read_raw_rows(value_wb)
            except Exception as e:
                raise ReadError(
                    file_name=file_name,
                    operation="read sheet",
                    reason=str(e),
                ) from e

            cached_by_index = dict(value_rows)
            indexed_cells: list[tuple[int, list[Cell]]] = []
            for index, cells in formula_rows:
                cached_cells = cached_by_index.get(index, [])
                converted = [
                    self._convert_cell(
                        cell,
                        cached_cells[col] if col < len(cached_cells) else None,
                    )
                    for col, cell in enumerate(cells)
                ]
                indexed_cells.append((index, converted))
        finally:
            formula_wb.close()
            if value_wb is not None:
                value_wb.close()

        return build_sheet_rows(sheet_name, indexed_cells)
