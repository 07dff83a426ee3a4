"""Convert values to a type selected by a type key.

Example:

    >>> convert("int", " 42 ")
    Int32(42)
    >>> as_int("", 7)
    7
    >>> convert("sqldate", "2024-01-15")
    datetime.date(2024, 1, 15)

The module level functions use a `TypeConverter` bound to the shared
`typeconv.registry.registry`.  Create a `TypeConverter` with its own
`ConversionRegistry` for conversions that should not be visible globally.
"""

import enum
from dataclasses import dataclass
from typing import Any, Callable

from .capabilities import ConversionListener, ConvertibleType
from .errors import ConversionError, ConversionNotFound
from .primitives import Char, Float32, Int8, Int16, Int32, Int64
from .registry import ConversionRegistry
from .registry import registry as shared_registry

__all__ = [
    "ConversionResult",
    "ConversionStatus",
    "TypeConverter",
    "as_bool",
    "as_byte",
    "as_char",
    "as_double",
    "as_float",
    "as_int",
    "as_long",
    "as_short",
    "as_string",
    "convert",
    "default_converter",
    "lookup_conversions",
    "register_conversion",
    "try_convert",
]


class ConversionStatus(enum.Enum):
    CONVERTED = "converted"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of `TypeConverter.try_convert`."""

    status: ConversionStatus
    value: Any = None
    error: ConversionError | None = None

    def __bool__(self) -> bool:
        return self.status is ConversionStatus.CONVERTED

    def unwrap(self) -> Any:
        """The converted value, or raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


class TypeConverter:
    def __init__(self, registry: ConversionRegistry | None = None):
        """
        Args:
            registry: Type key to converter mapping.  Defaults to the shared
                registry of built-in conversions.
        """
        self.registry = shared_registry if registry is None else registry

    def convert(self, type_key: Any, value: Any) -> Any:
        """Convert value to the type identified by type_key.

        None converts to None and a None type_key leaves value unchanged.
        A value that is already an instance of a class type_key is returned
        as-is, except for `object` whose conversion unpickles bytes.

        Raises:
            ConversionNotFound: no converter for type_key.
            ConversionError: the converter could not parse value.
        """
        if value is None:
            return None
        if type_key is None:
            return value

        match type_key:
            case type() if type_key is not object and isinstance(value, type_key):
                return value

        conversion = self.resolve(type_key, value)
        if conversion is None:
            raise ConversionNotFound(type_key, value)

        if isinstance(value, ConversionListener):
            value.before_conversion(type_key)
            return value.after_conversion(type_key, conversion(value))
        return conversion(value)

    def resolve(self, type_key: Any, value: Any) -> Callable[[Any], Any] | None:
        """The converter for type_key.

        A `ConvertibleType` value is asked directly and the registry is not
        consulted for it, even when it declines.
        """
        if isinstance(value, ConvertibleType):
            return value.get_conversion(type_key)
        return self.registry.lookup(type_key)

    def try_convert(self, type_key: Any, value: Any) -> ConversionResult:
        """Like `convert` but report failure in the result instead of raising."""
        try:
            converted = self.convert(type_key, value)
        except ConversionNotFound as ex:
            return ConversionResult(ConversionStatus.NOT_FOUND, error=ex)
        except ConversionError as ex:
            return ConversionResult(ConversionStatus.INVALID, error=ex)
        return ConversionResult(ConversionStatus.CONVERTED, converted)

    def register_conversion(self, key: Any, converter: Callable[[Any], Any]) -> None:
        self.registry.register(key, converter)

    def lookup_conversions(self) -> dict[Any, Callable[[Any], Any]]:
        return self.registry.conversions()

    # Typed shortcuts.  The default is only used when the conversion result is
    # None; parse errors still propagate.

    def as_int(self, value: Any, default: int = 0) -> int:
        return self._as(Int32, int, value, default)

    def as_long(self, value: Any, default: int = 0) -> int:
        return self._as(Int64, int, value, default)

    def as_short(self, value: Any, default: int = 0) -> int:
        return self._as(Int16, int, value, default)

    def as_byte(self, value: Any, default: int = 0) -> int:
        return self._as(Int8, int, value, default)

    def as_float(self, value: Any, default: float = 0.0) -> float:
        return self._as(Float32, float, value, default)

    def as_double(self, value: Any, default: float = 0.0) -> float:
        return self._as(float, float, value, default)

    def as_bool(self, value: Any, default: bool = False) -> bool:
        return self._as(bool, bool, value, default)

    def as_char(self, value: Any, default: str = "\0") -> str:
        return self._as(Char, str, value, default)

    def as_string(self, value: Any, default: str | None = None) -> str | None:
        result = self.convert(str, value)
        return default if result is None else result

    def _as(self, type_key: type, plain: type, value: Any, default: Any) -> Any:
        result = self.convert(type_key, value)
        return default if result is None else plain(result)


default_converter = TypeConverter()

convert = default_converter.convert
try_convert = default_converter.try_convert
register_conversion = default_converter.register_conversion
lookup_conversions = default_converter.lookup_conversions
as_int = default_converter.as_int
as_long = default_converter.as_long
as_short = default_converter.as_short
as_byte = default_converter.as_byte
as_float = default_converter.as_float
as_double = default_converter.as_double
as_bool = default_converter.as_bool
as_char = default_converter.as_char
as_string = default_converter.as_string
