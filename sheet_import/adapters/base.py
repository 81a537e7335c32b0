"""
Shared pieces of the reader adapters.

Readers turn a spreadsheet byte stream into a fully materialized SheetRows
for the first worksheet. Materializing up front means the batch workers
of an import never touch the underlying spreadsheet library concurrently.
"""

from io import BytesIO
from pathlib import PurePath
from typing import BinaryIO, Protocol

from sheet_import.models.cell_models import Cell, Row, SheetRows


class SheetReader(Protocol):
    """Reader adapter interface used by the import service."""

    SUPPORTED_EXTENSIONS: tuple[str, ...]

    def supports(self, file_name: str) -> bool: ...

    def read_first_sheet(self, source: BinaryIO | bytes, file_name: str) -> SheetRows: ...


def read_bytes(source: BinaryIO | bytes) -> bytes:
    """Return the full content of a byte source."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.read()


def as_stream(source: BinaryIO | bytes) -> BinaryIO:
    """Wrap raw bytes in a stream; streams are returned unchanged."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BytesIO(bytes(source))
    return source


def has_extension(file_name: str, extensions: tuple[str, ...]) -> bool:
    return PurePath(file_name).suffix.lower() in extensions


def build_sheet_rows(sheet_name: str, indexed_cells: list[tuple[int, list[Cell]]]) -> SheetRows:
    """
    Assemble SheetRows from (row index, cells) pairs.

    Rows that are entirely empty and gaps between row indexes become None,
    so position i of the result is always sheet row i. Trailing missing
    rows are dropped.

    Readers normalize error cells (#N/A, #DIV/0!, ...) to empty cells, so a
    row holding only errors is missing too: the importer skips it and never
    checks its required columns.

    Args:
        sheet_name: Name of the worksheet.
        indexed_cells: Zero-based row index and cells, in any order.

    Returns:
        The materialized sheet.
    """
    present: dict[int, Row] = {}
    for index, cells in indexed_cells:
        row = Row(index=index, cells=cells)
        if not row.is_blank:
            present[index] = row

    if not present:
        return SheetRows(sheet_name=sheet_name, rows=[])

    last = max(present)
    return SheetRows(
        sheet_name=sheet_name,
        rows=[present.get(i) for i in range(last + 1)],
    )
