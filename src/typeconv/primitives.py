"""Fixed-width value types.

Python has one unbounded `int` and one 64-bit `float`.  These subclasses
give the signed integer widths, single precision floats and single
characters a class of their own, so they can be used as type keys and
recognised by `isinstance`.
"""

import math
import struct
from typing import Any

__all__ = ["Char", "Float32", "Int8", "Int16", "Int32", "Int64", "qualified_name"]


def qualified_name(cls: type) -> str:
    """The fully-qualified name used as a string type key, ie 'decimal.Decimal'."""
    return f"{cls.__module__}.{cls.__qualname__}"


class FixedWidthInt(int):
    """Signed integer restricted to `bits` of two's complement range."""

    bits: int = 64

    def __new__(cls, value: Any = 0):
        number = super().__new__(cls, value)
        if not cls.min_value() <= number <= cls.max_value():
            raise OverflowError(
                f"{int(number)} out of range for {cls.__name__} "
                f"[{cls.min_value()}, {cls.max_value()}]"
            )
        return number

    @classmethod
    def min_value(cls) -> int:
        return -(1 << (cls.bits - 1))

    @classmethod
    def max_value(cls) -> int:
        return (1 << (cls.bits - 1)) - 1

    def __repr__(self):
        return f"{type(self).__name__}({int(self)})"


class Int8(FixedWidthInt):
    bits = 8


class Int16(FixedWidthInt):
    bits = 16


class Int32(FixedWidthInt):
    bits = 32


class Int64(FixedWidthInt):
    bits = 64


class Float32(float):
    """A float rounded to IEEE 754 single precision.

    Values beyond the single precision range become signed infinity.
    """

    def __new__(cls, value: Any = 0.0):
        double = float(value)
        try:
            (single,) = struct.unpack("f", struct.pack("f", double))
        except OverflowError:
            single = math.copysign(math.inf, double)
        return super().__new__(cls, single)

    def __repr__(self):
        return f"Float32({float(self)!r})"


class Char(str):
    """A string of exactly one character."""

    def __new__(cls, value: Any = "\0"):
        text = super().__new__(cls, value)
        if len(text) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        return text
