"""
Pydantic models describing how sheet columns map onto record fields.

A RecordSchema is an explicit, statically declared table for one record
type: for each field, the column label it reads from, whether the column
is required, and the converter applied to the extracted text. Converter
identifiers are resolved when the mapping is built, so nothing is looked
up while rows are being mapped.

Example:
    class Person(BaseModel):
        name: str = ""
        age: int = 0

    PERSON_SCHEMA = RecordSchema(
        record_type=Person,
        fields=[
            FieldMapping(field="name", column="Name", required=True),
            FieldMapping(field="age", column="Age", converter="int"),
        ],
    )
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sheet_import.converters import default_registry, identity


class FieldMapping(BaseModel):
    """
    Mapping of one record field to one sheet column.

    Attributes:
        field: Attribute (keyword argument) name on the record type.
        column: Header label of the source column.
        required: Whether a blank cell in this column fails the import.
        converter: Converter callable. An identifier string is accepted on
            construction and resolved against the default registry.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(
        min_length=1,
        description="Record field name",
    )
    column: str = Field(
        min_length=1,
        description="Header label of the source column",
    )
    required: bool = Field(
        default=False,
        description="Whether a blank cell in this column is an error",
    )
    converter: Callable[[str | None], Any] = Field(
        default=identity,
        description="Converter applied to the extracted cell text",
    )

    @field_validator("column")
    @classmethod
    def strip_column(cls, v: str) -> str:
        """Header labels are matched trimmed."""
        v = v.strip()
        if not v:
            raise ValueError("column label must not be blank")
        return v

    @field_validator("converter", mode="before")
    @classmethod
    def resolve_converter(cls, v: Any) -> Any:
        """Resolve converter identifiers to callables."""
        if isinstance(v, str):
            return default_registry.get(v)
        return v


class RecordSchema(BaseModel):
    """
    Complete mapping for one record type.

    Attributes:
        record_type: Class (or factory) called with the mapped values as
            keyword arguments. Fields left out keep their defaults.
        fields: Field mappings in processing order.
    """

    model_config = ConfigDict(frozen=True)

    record_type: Callable[..., Any] = Field(
        description="Record class or factory",
    )
    fields: list[FieldMapping] = Field(
        min_length=1,
        description="Field mappings in declaration order",
    )

    @field_validator("fields")
    @classmethod
    def validate_unique_fields(cls, v: list[FieldMapping]) -> list[FieldMapping]:
        """Ensure each record field is mapped only once."""
        seen: set[str] = set()
        for mapping in v:
            if mapping.field in seen:
                raise ValueError(f"field '{mapping.field}' is mapped more than once")
            seen.add(mapping.field)
        return v

    @property
    def columns(self) -> list[str]:
        """Column labels in declaration order."""
        return [m.column for m in self.fields]

    @property
    def required_columns(self) -> list[str]:
        return [m.column for m in self.fields if m.required]
