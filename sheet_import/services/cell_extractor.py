"""
Canonical string form of worksheet cells.

Every cell is reduced to text (or None) before conversion, so converters
only ever deal with strings:

    text              -> the text verbatim
    numeric (date)    -> YYYY-MM-DD
    numeric           -> "5" for 5.0, "5.25" for 5.25, "0.00001" for 1e-05
    boolean           -> "true" / "false"
    formula           -> cached result by the rules above, else the formula text
    empty             -> None
"""

import math
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import assert_never

from sheet_import.models.cell_models import Cell, CellKind

DATE_OUTPUT_FORMAT = "%Y-%m-%d"
# Excel's 1900 date system counts serial days from 1899-12-30
EXCEL_EPOCH = datetime(1899, 12, 30)


def format_numeric(value: int | float) -> str:
    """Render integral numbers without a decimal point, others in plain decimal notation."""
    if isinstance(value, bool):
        raise TypeError("boolean is not numeric")
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value == math.floor(value):
        return str(int(value))
    if not math.isfinite(value):
        return repr(value)
    # Shortest round-trip digits, printed without an exponent
    return format(Decimal(repr(value)), "f")


def format_date(value: date | datetime | int | float) -> str:
    """Render a date cell value as YYYY-MM-DD."""
    if isinstance(value, (date, datetime)):
        return value.strftime(DATE_OUTPUT_FORMAT)
    if isinstance(value, bool):
        raise TypeError("boolean is not a date serial")
    try:
        return (EXCEL_EPOCH + timedelta(days=value)).strftime(DATE_OUTPUT_FORMAT)
    except OverflowError as e:
        raise ValueError(f"date serial out of range: {value!r}") from e


def _extract_value(cell: Cell) -> str | None:
    """Format a non-formula cell; may raise on inconsistent values."""
    value = cell.value
    match cell.kind:
        case CellKind.TEXT:
            return None if value is None else str(value)
        case CellKind.NUMERIC:
            if value is None:
                return None
            if cell.date_formatted or isinstance(value, (date, datetime)):
                return format_date(value)
            return format_numeric(value)
        case CellKind.BOOLEAN:
            if value is None:
                return None
            return "true" if value else "false"
        case CellKind.FORMULA:
            raise ValueError("nested formula result")
        case CellKind.EMPTY:
            return None
        case _:
            assert_never(cell.kind)


def _extract_formula(cell: Cell) -> str | None:
    if cell.cached is not None:
        try:
            result = _extract_value(cell.cached)
        except (TypeError, ValueError, OverflowError):
            result = None
        if result is not None:
            return result
    return cell.formula


def extract_cell_value(cell: Cell | None) -> str | None:
    """
    Return the canonical string form of a cell.

    Args:
        cell: The cell, or None for a cell absent from its row.

    Returns:
        The cell text, or None for empty cells.

    Raises:
        TypeError: If a non-formula cell holds a value inconsistent with
            its kind (e.g. text in a numeric cell).
    """
    if cell is None:
        return None
    if cell.kind == CellKind.FORMULA:
        return _extract_formula(cell)
    return _extract_value(cell)
