"""
Tests for RecordSchema, FieldMapping and the SchemaRegistry.
"""

import pytest
from pydantic import ValidationError

from sheet_import.converters import identity, to_int
from sheet_import.exceptions.import_exceptions import ConverterNotFoundError
from sheet_import.models.schema_models import FieldMapping, RecordSchema
from sheet_import.services.schema_registry import SchemaRegistry

from conftest import Person


class TestFieldMapping:
    """Tests for FieldMapping."""

    def test_defaults(self) -> None:
        """Test that a mapping defaults to an optional identity column."""
        mapping = FieldMapping(field="name", column="Name")

        assert mapping.required is False
        assert mapping.converter is identity

    def test_converter_identifier_resolved(self) -> None:
        """Test that converter identifiers are resolved on construction."""
        assert FieldMapping(field="age", column="Age", converter="int").converter is to_int

    def test_unknown_converter_identifier(self) -> None:
        """Test that an unknown identifier fails at declaration time."""
        with pytest.raises(ConverterNotFoundError):
            FieldMapping(field="age", column="Age", converter="nope")

    def test_column_is_trimmed(self) -> None:
        """Test that column labels are stored trimmed."""
        assert FieldMapping(field="name", column=" Name ").column == "Name"

    def test_blank_column_rejected(self) -> None:
        """Test that a blank column label is rejected."""
        with pytest.raises(ValidationError):
            FieldMapping(field="name", column="   ")


class TestRecordSchema:
    """Tests for RecordSchema."""

    def test_columns(self, person_schema: RecordSchema) -> None:
        """Test column listings in declaration order."""
        assert person_schema.columns == ["Name", "Age", "Joined", "Email"]
        assert person_schema.required_columns == ["Name"]

    def test_duplicate_field_rejected(self) -> None:
        """Test that a field cannot be mapped twice."""
        with pytest.raises(ValidationError):
            RecordSchema(
                record_type=Person,
                fields=[
                    FieldMapping(field="name", column="Name"),
                    FieldMapping(field="name", column="Full Name"),
                ],
            )

    def test_empty_fields_rejected(self) -> None:
        """Test that a schema needs at least one field."""
        with pytest.raises(ValidationError):
            RecordSchema(record_type=Person, fields=[])

    def test_immutable(self, person_schema: RecordSchema) -> None:
        """Test that schemas cannot be modified after declaration."""
        with pytest.raises(ValidationError):
            person_schema.record_type = dict


class TestSchemaRegistry:
    """Tests for SchemaRegistry."""

    def test_register_and_get(self, person_schema: RecordSchema) -> None:
        """Test registering a schema by its record type."""
        registry = SchemaRegistry()

        assert registry.register(person_schema) is person_schema
        assert registry.get(Person) is person_schema
        assert Person in registry
        assert len(registry) == 1

    def test_register_same_schema_twice(self, person_schema: RecordSchema) -> None:
        """Test that re-registering the same schema is allowed."""
        registry = SchemaRegistry()
        registry.register(person_schema)
        registry.register(person_schema)

        assert len(registry) == 1

    def test_conflicting_schema(self, person_schema: RecordSchema) -> None:
        """Test that a second schema for a type needs replace=True."""
        registry = SchemaRegistry()
        registry.register(person_schema)
        other = RecordSchema(record_type=Person, fields=[FieldMapping(field="name", column="Full Name")])

        with pytest.raises(ValueError):
            registry.register(other)

        registry.register(other, replace=True)
        assert registry.get(Person) is other

    def test_unregister(self, person_schema: RecordSchema) -> None:
        """Test removing a schema."""
        registry = SchemaRegistry()
        registry.register(person_schema)
        registry.unregister(Person)

        assert registry.get(Person) is None
        assert Person not in registry
