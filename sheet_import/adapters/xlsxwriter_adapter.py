"""
XlsxWriter adapter for writing import workbooks.

This module provides the XlsxWriterAdapter class that wraps XlsxWriter for
producing workbooks the import pipeline can read back: header-only
templates generated from a RecordSchema, and sheets pre-filled with rows.

Example:
    adapter = XlsxWriterAdapter()
    adapter.write_template(PERSON_SCHEMA, "/path/to/people_template.xlsx")
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any

import xlsxwriter
from xlsxwriter.exceptions import XlsxWriterException
from xlsxwriter.worksheet import Worksheet

from sheet_import.exceptions.import_exceptions import PermissionError as ImportPermissionError
from sheet_import.exceptions.import_exceptions import WriteError
from sheet_import.models.import_models import TemplateResult
from sheet_import.models.schema_models import RecordSchema


class XlsxWriterAdapter:
    """
    Adapter writing single-sheet workbooks with XlsxWriter.

    Attributes:
        HEADER_STYLE: Format of optional header cells.
        REQUIRED_HEADER_STYLE: Format of header cells for required columns.
        DATE_FORMAT: Number format applied to date cells.
        MIN_WIDTH: Narrowest column width in characters.
        MAX_WIDTH: Widest column width in characters.

    Example:
        adapter = XlsxWriterAdapter()
        adapter.write_rows(
            "/path/to/people.xlsx",
            rows=[["Alice", 30], ["Bob", 25]],
            headers=["Name", "Age"],
        )
    """

    HEADER_STYLE = {"bold": True, "bg_color": "#4F81BD", "font_color": "white", "border": 1}
    REQUIRED_HEADER_STYLE = {"bold": True, "bg_color": "#C0504D", "font_color": "white", "border": 1}
    DATE_FORMAT = "yyyy-mm-dd"
    MIN_WIDTH = 10
    MAX_WIDTH = 50

    def _output_path(self, file_path: str, overwrite: bool) -> Path:
        """Return the .xlsx path to write, creating its directory."""
        path = Path(file_path)
        if path.suffix.lower() != ".xlsx":
            path = path.with_name(path.name + ".xlsx")

        if path.exists() and not overwrite:
            raise WriteError(str(path), "create", "file exists and overwrite is False")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise ImportPermissionError(str(path.parent), "create directory") from e
        except OSError as e:
            raise WriteError(str(path), "create directory", str(e)) from e
        return path

    def _column_widths(self, rows: list[list[Any]]) -> list[int]:
        """Width per column: longest value plus padding, clamped."""
        widths: dict[int, int] = {}
        for row in rows:
            for col, value in enumerate(row):
                if value is not None:
                    widths[col] = max(widths.get(col, self.MIN_WIDTH), len(str(value)) + 2)
        column_count = max(widths, default=-1) + 1
        return [min(widths.get(col, self.MIN_WIDTH), self.MAX_WIDTH) for col in range(column_count)]

    def _write_value(self, worksheet: Worksheet, row: int, col: int, value: Any, date_format: Any) -> None:
        match value:
            case None:
                return
            case bool():
                worksheet.write_boolean(row, col, value)
            case int() | float():
                worksheet.write_number(row, col, value)
            case datetime() | date():
                worksheet.write_datetime(row, col, value, date_format)
            case str() if value.startswith("="):
                worksheet.write_formula(row, col, value)
            case _:
                worksheet.write_string(row, col, str(value))

    def write_rows(
        self,
        file_path: str,
        rows: list[list[Any]],
        headers: list[str] | None = None,
        sheet_name: str = "Sheet1",
        overwrite: bool = False,
        required_headers: set[str] | None = None,
    ) -> TemplateResult:
        """
        Write a single-sheet workbook with an optional header row.

        Strings starting with '=' are written as formulas and dates get
        the DATE_FORMAT number format.

        Args:
            file_path: Path where the file will be written; .xlsx is
                appended when missing.
            rows: Data rows written below the header.
            headers: Header labels for the first row.
            sheet_name: Name of the sheet.
            overwrite: Whether to overwrite an existing file.
            required_headers: Header labels styled as required.

        Returns:
            TemplateResult describing the written file.

        Raises:
            WriteError: If the file exists or writing fails.
            ImportPermissionError: If the file cannot be written due to permissions.
        """
        path = self._output_path(file_path, overwrite)
        headers = list(headers or [])
        required_headers = required_headers or set()

        try:
            with xlsxwriter.Workbook(str(path)) as workbook:
                worksheet = workbook.add_worksheet(sheet_name)
                header_format = workbook.add_format(self.HEADER_STYLE)
                required_format = workbook.add_format(self.REQUIRED_HEADER_STYLE)
                date_format = workbook.add_format({"num_format": self.DATE_FORMAT})

                for col, label in enumerate(headers):
                    style = required_format if label in required_headers else header_format
                    worksheet.write_string(0, col, label, style)

                first_row = 1 if headers else 0
                for offset, values in enumerate(rows):
                    for col, value in enumerate(values):
                        self._write_value(worksheet, first_row + offset, col, value, date_format)

                for col, width in enumerate(self._column_widths([headers, *rows])):
                    worksheet.set_column(col, col, width)
        except PermissionError as e:
            raise ImportPermissionError(str(path), "write") from e
        except (OSError, XlsxWriterException) as e:
            raise WriteError(str(path), "write", str(e)) from e

        return TemplateResult(
            file_path=str(path),
            sheet_name=sheet_name,
            columns=headers,
            file_size_bytes=path.stat().st_size,
        )

    def write_template(
        self,
        schema: RecordSchema,
        file_path: str,
        sheet_name: str = "Sheet1",
        overwrite: bool = False,
    ) -> TemplateResult:
        """
        Write an empty import template for a schema.

        The header row lists the schema's column labels in declaration
        order; required columns get a distinct header style.

        Args:
            schema: Schema the template is generated for.
            file_path: Path where the file will be written.
            sheet_name: Name of the template sheet.
            overwrite: Whether to overwrite an existing file.

        Returns:
            TemplateResult describing the written file.
        """
        return self.write_rows(
            file_path,
            rows=[],
            headers=schema.columns,
            sheet_name=sheet_name,
            overwrite=overwrite,
            required_headers=set(schema.required_columns),
        )
