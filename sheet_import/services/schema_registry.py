"""
Per-record-type schema cache.

Schemas are declared once, usually at import time of the module defining
the record type, and looked up by record type when an import does not pass
a schema explicitly.

Example:
    schema_registry.register(PERSON_SCHEMA)
    service.import_all(stream, Person, file_name="people.xlsx")
"""

from threading import Lock
from typing import Any

from sheet_import.models.schema_models import RecordSchema


class SchemaRegistry:
    """Thread-safe mapping of record type to RecordSchema."""

    def __init__(self) -> None:
        self._schemas: dict[Any, RecordSchema] = {}
        self._lock = Lock()

    def register(self, schema: RecordSchema, replace: bool = False) -> RecordSchema:
        """
        Register a schema for its record type.

        Args:
            schema: The schema to register.
            replace: Whether an existing schema for the type may be replaced.

        Returns:
            The registered schema, so registration can be used inline.

        Raises:
            ValueError: If the record type already has a schema and replace
                is False.
        """
        with self._lock:
            existing = self._schemas.get(schema.record_type)
            if existing is not None and existing is not schema and not replace:
                raise ValueError(f"a schema is already registered for {schema.record_type!r}")
            self._schemas[schema.record_type] = schema
        return schema

    def get(self, record_type: Any) -> RecordSchema | None:
        return self._schemas.get(record_type)

    def unregister(self, record_type: Any) -> None:
        with self._lock:
            self._schemas.pop(record_type, None)

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


schema_registry = SchemaRegistry()
