"""
Tests for assembling reader output into SheetRows.
"""

from sheet_import.adapters.base import build_sheet_rows
from sheet_import.models.cell_models import Cell
from sheet_import.models.schema_models import RecordSchema
from sheet_import.services.import_service import ImportService

from conftest import Person


class TestBuildSheetRows:
    """Tests for build_sheet_rows()."""

    def test_rows_by_index(self) -> None:
        """Test that rows land at their sheet index and gaps are None."""
        sheet = build_sheet_rows(
            "Data",
            [(2, [Cell.of_text("Bob")]), (0, [Cell.of_text("Name")])],
        )

        assert sheet.total_rows == 3
        assert sheet.rows[1] is None
        assert sheet.rows[2].index == 2

    def test_all_empty_row_is_missing(self) -> None:
        """Test that a row of empty cells, e.g. former error cells, is None."""
        sheet = build_sheet_rows(
            "Data",
            [
                (0, [Cell.of_text("Name")]),
                (1, [Cell.empty(), Cell.empty()]),
                (2, [Cell.of_text("Alice")]),
            ],
        )

        assert sheet.rows[1] is None
        assert sheet.data_row_count == 1

    def test_trailing_empty_rows_dropped(self) -> None:
        """Test that empty rows at the end do not extend the sheet."""
        sheet = build_sheet_rows("Data", [(0, [Cell.of_text("Name")]), (1, [Cell.empty()])])

        assert sheet.total_rows == 1

    def test_no_rows(self) -> None:
        """Test that a sheet without content has no rows."""
        assert build_sheet_rows("Data", [(0, [Cell.empty()])]).rows == []

    def test_all_empty_row_skips_required_check(
        self,
        import_service: ImportService,
        person_schema: RecordSchema,
    ) -> None:
        """Test that the importer skips an all-empty row instead of failing it."""
        sheet = build_sheet_rows(
            "Data",
            [
                (0, [Cell.of_text("Name"), Cell.of_text("Age")]),
                (1, [Cell.empty(), Cell.empty()]),
                (2, [Cell.of_text("Alice"), Cell.of_number(30)]),
            ],
        )

        result = import_service.import_rows(sheet, Person, person_schema)

        assert result.records == [Person(name="Alice", age=30)]
