"""Conversion errors.

Every failure raised by the converters or the dispatcher derives from
`ConversionError`, itself a `ValueError`, so callers that already treat bad
input as `ValueError` keep working.
"""

from typing import Any

__all__ = [
    "ConversionError",
    "ConversionNotFound",
    "DateTimeFormatInvalid",
    "DeserializationFailed",
    "InvalidRegistration",
    "NumberFormatInvalid",
    "UUIDFormatInvalid",
]


class ConversionError(ValueError):
    """Base exception for conversion failures.

    Attributes:
        value: The value that failed to convert.
        target: The type key or type the value was converted to.
    """

    def __init__(self, message: str, *, value: Any = None, target: Any = None):
        super().__init__(message)
        self.value = value
        self.target = target


class ConversionNotFound(ConversionError):
    """No converter could be resolved for a type key."""

    def __init__(self, type_key: Any, value: Any):
        self.type_key = type_key
        self.value_description = describe(value)
        super().__init__(
            f"Could not find type conversion for type {type_key!r} "
            f"(value = {self.value_description})",
            value=value,
            target=type_key,
        )


class NumberFormatInvalid(ConversionError):
    """Text could not be parsed as the requested numeric type."""

    def __init__(self, text: str, target: Any, reason: str = "not a number"):
        super().__init__(
            f"{text!r} is not a valid {_name(target)}: {reason}",
            value=text,
            target=target,
        )


class DateTimeFormatInvalid(ConversionError):
    """Text did not match the date, time or timestamp layout."""

    def __init__(self, text: str, target: Any, layout: str):
        super().__init__(
            f"{text!r} is not a valid {_name(target)}, expected {layout}",
            value=text,
            target=target,
        )


class UUIDFormatInvalid(ConversionError):
    """Text is not a hexadecimal UUID."""


class DeserializationFailed(ConversionError):
    """Bytes could not be unpickled.  The cause is chained."""


class InvalidRegistration(ConversionError):
    """A registry entry was rejected."""


def describe(value: Any) -> str:
    """Short diagnostic description of a value, its type and repr."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{type(value).__name__} {text}"


def _name(target: Any) -> str:
    return getattr(target, "__name__", str(target))
