"""
Pydantic models for worksheet content.

A worksheet is read once into memory as SheetRows: an ordered list of Row
objects (or None for rows that are absent from the sheet), each holding
tagged Cell values. Everything downstream of the reader adapters works on
these models only, never on the spreadsheet libraries' own cell types.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CellKind(str, Enum):
    """
    Closed set of cell kinds a reader adapter can produce.

    Error cells and any other kind the underlying library reports are
    normalized to EMPTY by the adapters.
    """

    TEXT = "text"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    EMPTY = "empty"


class Cell(BaseModel):
    """
    A single tagged cell value.

    Attributes:
        kind: The cell kind.
        value: The typed value. Numeric cells carry int/float, or a
            date/datetime when the reader already converted a date-formatted
            number.
        date_formatted: Whether the reader flagged a numeric cell as
            carrying a date number format.
        formula: Formula text for FORMULA cells (without the leading '=').
        cached: Cached result of a FORMULA cell, if the workbook stored one.
    """

    model_config = ConfigDict(frozen=True)

    kind: CellKind = Field(
        default=CellKind.EMPTY,
        description="The kind of the cell",
    )
    value: str | bool | int | float | datetime | date | None = Field(
        default=None,
        description="Typed cell value",
    )
    date_formatted: bool = Field(
        default=False,
        description="Whether a numeric cell carries a date number format",
    )
    formula: str | None = Field(
        default=None,
        description="Formula text of a formula cell",
    )
    cached: "Cell | None" = Field(
        default=None,
        description="Cached result of a formula cell",
    )

    @field_validator("cached")
    @classmethod
    def validate_cached_not_formula(cls, v: "Cell | None") -> "Cell | None":
        """Ensure a cached formula result is a plain value."""
        if v is not None and v.kind == CellKind.FORMULA:
            raise ValueError("cached formula result cannot itself be a formula")
        return v

    @classmethod
    def of_text(cls, value: str) -> "Cell":
        return cls(kind=CellKind.TEXT, value=value)

    @classmethod
    def of_number(cls, value: int | float) -> "Cell":
        return cls(kind=CellKind.NUMERIC, value=value)

    @classmethod
    def of_date(cls, value: date | datetime | float) -> "Cell":
        """Numeric cell flagged as date-formatted."""
        return cls(kind=CellKind.NUMERIC, value=value, date_formatted=True)

    @classmethod
    def of_bool(cls, value: bool) -> "Cell":
        return cls(kind=CellKind.BOOLEAN, value=value)

    @classmethod
    def of_formula(cls, formula: str, cached: "Cell | None" = None) -> "Cell":
        return cls(kind=CellKind.FORMULA, formula=formula.removeprefix("="), cached=cached)

    @classmethod
    def empty(cls) -> "Cell":
        return cls()


class Row(BaseModel):
    """
    One worksheet row.

    Attributes:
        index: Zero-based row index in the sheet.
        cells: Cells ordered by column; position i is column i.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(
        ge=0,
        description="Zero-based row index in the sheet",
    )
    cells: list[Cell] = Field(
        default_factory=list,
        description="Cells ordered by column index",
    )

    def cell(self, column_index: int) -> Cell | None:
        """Return the cell at a column, or None past the end of the row."""
        if 0 <= column_index < len(self.cells):
            return self.cells[column_index]
        return None

    @property
    def is_blank(self) -> bool:
        return all(c.kind == CellKind.EMPTY for c in self.cells)


class SheetRows(BaseModel):
    """
    Materialized content of one worksheet.

    Position i of rows is sheet row i; None marks a row that is missing
    from the sheet (never written, or entirely blank). Row 0 is the
    header row.

    Attributes:
        sheet_name: Name of the worksheet.
        rows: Row objects, or None for missing rows.
    """

    model_config = ConfigDict(frozen=True)

    sheet_name: str = Field(
        description="Name of the worksheet",
    )
    rows: list[Row | None] = Field(
        default_factory=list,
        description="Rows by sheet index; None for missing rows",
    )

    @property
    def total_rows(self) -> int:
        """Number of sheet rows including the header and missing rows."""
        return len(self.rows)

    @property
    def header(self) -> Row | None:
        return self.rows[0] if self.rows else None

    @property
    def data_row_count(self) -> int:
        """Number of present rows below the header."""
        return sum(1 for row in self.rows[1:] if row is not None)
