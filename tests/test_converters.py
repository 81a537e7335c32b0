"""
Tests for the converters and the converter registry.
"""

from datetime import date
from decimal import Decimal

import pytest

from sheet_import.converters import (
    ConverterRegistry,
    DateConverter,
    default_registry,
    identity,
    to_bool,
    to_decimal,
    to_float,
    to_int,
)
from sheet_import.exceptions.import_exceptions import ConversionError, ConverterNotFoundError


class TestBuiltinConverters:
    """Tests for the built-in converters."""

    def test_identity(self) -> None:
        """Test that identity keeps text and None unchanged."""
        assert identity(" a ") == " a "
        assert identity(None) is None

    @pytest.mark.parametrize(("raw", "expected"), [("30", 30), ("30.0", 30), (" -7 ", -7)])
    def test_to_int(self, raw: str, expected: int) -> None:
        """Test integral text parsing."""
        assert to_int(raw) == expected

    @pytest.mark.parametrize("raw", ["30.5", "abc", "1e400x"])
    def test_to_int_rejects(self, raw: str) -> None:
        """Test that non-integral text is rejected."""
        with pytest.raises(ConversionError):
            to_int(raw)

    def test_to_float_and_decimal(self) -> None:
        """Test float and decimal parsing."""
        assert to_float("5.25") == 5.25
        assert to_decimal("19.99") == Decimal("19.99")
        with pytest.raises(ConversionError):
            to_float("five")
        with pytest.raises(ConversionError):
            to_decimal("five")

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("TRUE", True), ("yes", True), ("1", True), ("false", False), ("N", False), ("0", False)],
    )
    def test_to_bool(self, raw: str, expected: bool) -> None:
        """Test boolean words."""
        assert to_bool(raw) is expected

    def test_to_bool_rejects(self) -> None:
        """Test that other words are rejected."""
        with pytest.raises(ConversionError) as exc_info:
            to_bool("maybe")

        assert exc_info.value.target == "bool"

    def test_date_converter(self) -> None:
        """Test the default and a custom date format."""
        assert DateConverter()("2024-01-15") == date(2024, 1, 15)
        assert DateConverter("%d/%m/%Y")("15/01/2024") == date(2024, 1, 15)

    def test_date_converter_rejects(self) -> None:
        """Test that a date in another format is rejected."""
        with pytest.raises(ConversionError) as exc_info:
            DateConverter()("15/01/2024")

        assert exc_info.value.value == "15/01/2024"

    @pytest.mark.parametrize("converter", [to_int, to_float, to_decimal, to_bool, DateConverter()])
    def test_blank_is_none(self, converter) -> None:
        """Test that typed converters map blank input to None."""
        assert converter(None) is None
        assert converter("   ") is None


class TestConverterRegistry:
    """Tests for ConverterRegistry."""

    def test_defaults(self) -> None:
        """Test the identifiers of the default registry."""
        assert default_registry.names() == ["bool", "date", "decimal", "float", "identity", "int", "str"]
        assert default_registry.get("int") is to_int

    def test_register_custom(self) -> None:
        """Test registering and looking up a custom converter."""
        registry = ConverterRegistry()
        registry.register("upper", lambda raw: raw.upper() if raw else raw)

        assert "upper" in registry
        assert registry.get("upper")("abc") == "ABC"

    def test_register_duplicate(self) -> None:
        """Test that identifiers are not silently replaced."""
        registry = ConverterRegistry.with_defaults()

        with pytest.raises(ValueError):
            registry.register("int", to_float)

        registry.register("int", to_float, replace=True)
        assert registry.get("int") is to_float

    def test_register_not_callable(self) -> None:
        """Test that non-callables are rejected."""
        with pytest.raises(ValueError):
            ConverterRegistry().register("bad", "not callable")

    def test_unknown_identifier(self) -> None:
        """Test lookup of an unknown identifier."""
        with pytest.raises(ConverterNotFoundError) as exc_info:
            default_registry.get("uuid")

        assert "int" in exc_info.value.available

    def test_resolve(self) -> None:
        """Test resolving identifiers and callables."""
        assert default_registry.resolve("float") is to_float
        assert default_registry.resolve(identity) is identity
        with pytest.raises(ValueError):
            default_registry.resolve(42)

    def test_custom_date_format(self) -> None:
        """Test a registry whose date converter uses another format."""
        registry = ConverterRegistry.with_defaults(date_format="%d.%m.%Y")

        assert registry.get("date")("15.01.2024") == date(2024, 1, 15)
