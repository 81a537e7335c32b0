"""
Row to record mapping.

RowMapper applies a RecordSchema to individual sheet rows. It is
stateless apart from the schema it was built with and can be shared by
concurrent batch workers.
"""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from sheet_import.exceptions.import_exceptions import (
    ConversionError,
    RequiredFieldError,
    RowMappingError,
)
from sheet_import.models.cell_models import Row
from sheet_import.models.schema_models import RecordSchema
from sheet_import.services.cell_extractor import extract_cell_value

logger = logging.getLogger(__name__)


class RowMapper:
    """
    Build records from sheet rows using a RecordSchema.

    For each field, in declaration order:
        1. look up the column in the header map (absent: field keeps its default)
        2. extract the cell text
        3. fail with RequiredFieldError if the column is required and blank
        4. convert the text with the field's converter; a None result also
           leaves the field at its default
    The collected values are then passed to the record type as keyword
    arguments.

    Attributes:
        schema: The schema applied to every row.

    Example:
        mapper = RowMapper(PERSON_SCHEMA)
        header_map = resolve_header(sheet.header)
        person = mapper.map_row(sheet.rows[1], header_map)
    """

    def __init__(self, schema: RecordSchema) -> None:
        """
        Initialize the RowMapper.

        Args:
            schema: The schema applied to every row.
        """
        self.schema = schema

    def map_values(self, row: Row, header_map: dict[str, int]) -> dict[str, Any]:
        """
        Extract and convert the mapped fields of one row.

        Args:
            row: The sheet row.
            header_map: Column label to index map of the sheet.

        Returns:
            Field name to converted value, for fields whose column exists
            and whose converted value is not None.

        Raises:
            RequiredFieldError: If a required column is blank.
            RowMappingError: If a cell cannot be extracted or converted.
        """
        values: dict[str, Any] = {}
        for mapping in self.schema.fields:
            column_index = header_map.get(mapping.column)
            if column_index is None:
                continue

            try:
                text = extract_cell_value(row.cell(column_index))
            except (TypeError, ValueError, OverflowError) as e:
                raise RowMappingError(
                    row_index=row.index,
                    reason=f"unreadable cell in column '{mapping.column}': {e}",
                    column=mapping.column,
                    field=mapping.field,
                ) from e

            if mapping.required and (text is None or not text.strip()):
                raise RequiredFieldError(
                    column=mapping.column,
                    row_index=row.index,
                    field=mapping.field,
                )

            try:
                value = mapping.converter(text)
            except ConversionError as e:
                raise RowMappingError(
                    row_index=row.index,
                    reason=f"column '{mapping.column}': {e.message}",
                    column=mapping.column,
                    field=mapping.field,
                ) from e
            except (TypeError, ValueError) as e:
                # Custom converters that raise plain errors
                raise RowMappingError(
                    row_index=row.index,
                    reason=f"column '{mapping.column}': cannot convert {text!r}: {e}",
                    column=mapping.column,
                    field=mapping.field,
                ) from e
            if value is not None:
                values[mapping.field] = value
        return values

    def map_row(self, row: Row, header_map: dict[str, int]) -> Any:
        """
        Construct one record from a row.

        Args:
            row: The sheet row.
            header_map: Column label to index map of the sheet.

        Returns:
            A new instance of the schema's record type.

        Raises:
            RequiredFieldError: If a required column is blank.
            RowMappingError: If a value cannot be converted or the record
                type rejects the values.
        """
        values = self.map_values(row, header_map)
        try:
            return self.schema.record_type(**values)
        except (ValidationError, TypeError, ValueError) as e:
            raise RowMappingError(
                row_index=row.index,
                reason=f"cannot construct {_type_name(self.schema.record_type)}: {e}",
            ) from e

    def map_rows(self, rows: Iterable[Row | None], header_map: dict[str, int]) -> list[Any]:
        """Map rows in order, skipping missing (None) rows."""
        records = [self.map_row(row, header_map) for row in rows if row is not None]
        logger.debug("Mapped %d rows to %s", len(records), _type_name(self.schema.record_type))
        return records


def _type_name(record_type: Any) -> str:
    return getattr(record_type, "__name__", repr(record_type))
