"""Header row resolution."""

from sheet_import.models.cell_models import Row
from sheet_import.services.cell_extractor import extract_cell_value


def resolve_header(header_row: Row | None) -> dict[str, int]:
    """
    Build the column label to column index map from a header row.

    Labels are trimmed. When a label appears more than once the rightmost
    column wins. A missing header row yields an empty map, in which case
    every record keeps its default field values.

    Args:
        header_row: First row of the sheet, or None.

    Returns:
        Mapping of trimmed label to zero-based column index.
    """
    header_map: dict[str, int] = {}
    if header_row is None:
        return header_map
    for index, cell in enumerate(header_row.cells):
        label = extract_cell_value(cell)
        if label is not None:
            header_map[label.strip()] = index
    return header_map
