"""
Tests for the XlsxWriterAdapter.

Tests writing import templates and pre-filled sheets.
"""

from datetime import date
from pathlib import Path

import pytest
from openpyxl import load_workbook

from sheet_import.adapters.openpyxl_adapter import OpenpyxlAdapter
from sheet_import.adapters.xlsxwriter_adapter import XlsxWriterAdapter
from sheet_import.exceptions.import_exceptions import WriteError
from sheet_import.models.schema_models import RecordSchema
from sheet_import.services.cell_extractor import extract_cell_value


class TestXlsxWriterAdapterTemplate:
    """Tests for XlsxWriterAdapter.write_template()."""

    def test_write_template(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        openpyxl_adapter: OpenpyxlAdapter,
        person_schema: RecordSchema,
        temp_dir: Path,
    ) -> None:
        """Test that a template holds the schema's columns as header."""
        file_path = temp_dir / "template.xlsx"

        result = xlsxwriter_adapter.write_template(person_schema, str(file_path), sheet_name="People")

        assert result.columns == ["Name", "Age", "Joined", "Email"]
        assert result.file_size_bytes > 0

        sheet = openpyxl_adapter.read_first_sheet(file_path.read_bytes(), "template.xlsx")
        assert sheet.sheet_name == "People"
        assert sheet.total_rows == 1
        assert [extract_cell_value(c) for c in sheet.header.cells] == result.columns

    def test_required_columns_highlighted(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        person_schema: RecordSchema,
        temp_dir: Path,
    ) -> None:
        """Test that required columns get their own header fill."""
        file_path = temp_dir / "template.xlsx"
        xlsxwriter_adapter.write_template(person_schema, str(file_path))

        workbook = load_workbook(file_path)
        worksheet = workbook.active
        required_fill = worksheet["A1"].fill.fgColor.rgb
        optional_fill = worksheet["B1"].fill.fgColor.rgb
        workbook.close()

        assert required_fill != optional_fill


class TestXlsxWriterAdapterRows:
    """Tests for XlsxWriterAdapter.write_rows()."""

    def test_extension_added(self, xlsxwriter_adapter: XlsxWriterAdapter, temp_dir: Path) -> None:
        """Test that .xlsx is appended when missing."""
        result = xlsxwriter_adapter.write_rows(str(temp_dir / "out"), rows=[["a"]])

        assert result.file_path.endswith(".xlsx")
        assert Path(result.file_path).exists()

    def test_no_overwrite(self, xlsxwriter_adapter: XlsxWriterAdapter, temp_dir: Path) -> None:
        """Test that existing files are kept unless overwrite is set."""
        file_path = str(temp_dir / "out.xlsx")
        xlsxwriter_adapter.write_rows(file_path, rows=[["a"]])

        with pytest.raises(WriteError):
            xlsxwriter_adapter.write_rows(file_path, rows=[["b"]])

        xlsxwriter_adapter.write_rows(file_path, rows=[["b"]], overwrite=True)

    def test_round_trip_values(
        self,
        xlsxwriter_adapter: XlsxWriterAdapter,
        openpyxl_adapter: OpenpyxlAdapter,
        temp_dir: Path,
    ) -> None:
        """Test that written values read back with the expected text."""
        file_path = temp_dir / "values.xlsx"
        xlsxwriter_adapter.write_rows(
            str(file_path),
            rows=[["text", 5.0, 5.25, True, date(2024, 2, 29)]],
            headers=["A", "B", "C", "D", "E"],
        )

        sheet = openpyxl_adapter.read_first_sheet(file_path.read_bytes(), "values.xlsx")

        assert [extract_cell_value(c) for c in sheet.rows[1].cells] == [
            "text",
            "5",
            "5.25",
            "true",
            "2024-02-29",
        ]

    def test_column_widths(self, xlsxwriter_adapter: XlsxWriterAdapter) -> None:
        """Test column width calculation."""
        widths = xlsxwriter_adapter._column_widths([["a", "x" * 100], ["abcdefghijkl"]])

        assert widths == [14, 50]
