"""
Converters from extracted cell text to typed field values.

A converter is any callable taking the extracted cell string (or None) and
returning the value to store on the record. Converters are pure and raise
ConversionError on malformed input.

Built-in converters are registered under short identifiers in the default
registry so schemas can name them ("int", "date", ...). Custom converters
are either registered under a new identifier or passed directly as
callables in a FieldMapping.

Example:
    registry = ConverterRegistry.with_defaults()
    registry.register("upper", lambda v: v.upper() if v else v)
    to_int = registry.get("int")
    to_int("30")  # 30
"""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from threading import Lock
from typing import Any, Protocol

from sheet_import.exceptions.import_exceptions import ConversionError, ConverterNotFoundError

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


class Converter(Protocol):
    """Callable turning extracted cell text into a typed value."""

    def __call__(self, raw: str | None) -> Any: ...


def _blank(raw: str | None) -> bool:
    return raw is None or not raw.strip()


def identity(raw: str | None) -> str | None:
    """Return the extracted text unchanged."""
    return raw


class DateConverter:
    """
    Parse text in one fixed date format into a datetime.date.

    Extracted date cells are already rendered as YYYY-MM-DD, so the default
    format round-trips them. Blank input converts to None.

    Attributes:
        date_format: strptime format string.
    """

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self.date_format = date_format

    def __call__(self, raw: str | None) -> date | None:
        if _blank(raw):
            return None
        try:
            return datetime.strptime(raw.strip(), self.date_format).date()
        except ValueError as e:
            raise ConversionError(raw, "date", reason=f"expected format {self.date_format}") from e

    def __repr__(self) -> str:
        return f"DateConverter({self.date_format!r})"


def to_int(raw: str | None) -> int | None:
    """Parse integral text; '30' and '30.0' both give 30."""
    if _blank(raw):
        return None
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = Decimal(text)
    except InvalidOperation as e:
        raise ConversionError(raw, "int") from e
    if not number.is_finite() or number != number.to_integral_value():
        raise ConversionError(raw, "int", reason="not an integral number")
    return int(number)


def to_float(raw: str | None) -> float | None:
    if _blank(raw):
        return None
    try:
        return float(raw.strip())
    except ValueError as e:
        raise ConversionError(raw, "float") from e


def to_decimal(raw: str | None) -> Decimal | None:
    if _blank(raw):
        return None
    try:
        return Decimal(raw.strip())
    except InvalidOperation as e:
        raise ConversionError(raw, "decimal") from e


_TRUE_WORDS = frozenset({"true", "yes", "y", "1"})
_FALSE_WORDS = frozenset({"false", "no", "n", "0"})


def to_bool(raw: str | None) -> bool | None:
    """Parse true/false, yes/no, y/n and 1/0 (case-insensitive)."""
    if _blank(raw):
        return None
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConversionError(raw, "bool", reason="expected true/false, yes/no or 1/0")


class ConverterRegistry:
    """
    Named lookup of converters.

    Lookups happen when a schema is constructed, not per row, so the
    registry is only read on the hot path indirectly. Registration is
    guarded by a lock so registries can be shared between threads.
    """

    def __init__(self) -> None:
        self._converters: dict[str, Callable[[str | None], Any]] = {}
        self._lock = Lock()

    @classmethod
    def with_defaults(cls, date_format: str = DEFAULT_DATE_FORMAT) -> "ConverterRegistry":
        """Create a registry holding the built-in converters."""
        registry = cls()
        registry.register("identity", identity)
        registry.register("str", identity)
        registry.register("date", DateConverter(date_format))
        registry.register("int", to_int)
        registry.register("float", to_float)
        registry.register("decimal", to_decimal)
        registry.register("bool", to_bool)
        return registry

    def register(
        self,
        name: str,
        converter: Callable[[str | None], Any],
        replace: bool = False,
    ) -> None:
        """
        Register a converter under an identifier.

        Args:
            name: Identifier used in schemas.
            converter: The converter callable.
            replace: Whether an existing registration may be overwritten.

        Raises:
            ValueError: If the name is taken and replace is False, or the
                converter is not callable.
        """
        if not callable(converter):
            raise ValueError(f"converter for '{name}' is not callable")
        with self._lock:
            if name in self._converters and not replace:
                raise ValueError(f"converter '{name}' is already registered")
            self._converters[name] = converter

    def get(self, name: str) -> Callable[[str | None], Any]:
        """
        Look up a converter by identifier.

        Raises:
            ConverterNotFoundError: If nothing is registered under name.
        """
        try:
            return self._converters[name]
        except KeyError:
            raise ConverterNotFoundError(name, available=self.names()) from None

    def resolve(self, converter: str | Callable[[str | None], Any]) -> Callable[[str | None], Any]:
        """Return a callable for an identifier or pass a callable through."""
        if isinstance(converter, str):
            return self.get(converter)
        if callable(converter):
            return converter
        raise ValueError(f"converter must be an identifier or a callable, got {type(converter).__name__}")

    def names(self) -> list[str]:
        return sorted(self._converters)

    def __contains__(self, name: object) -> bool:
        return name in self._converters


default_registry = ConverterRegistry.with_defaults()
