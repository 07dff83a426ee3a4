"""Built-in conversions.

Each conversion is a stateless callable which also lists the type keys it
is registered under: the class, its qualified name and one or more short
names.

    >>> INTEGER_CONVERSION(" 42 ")
    Int32(42)
    >>> "integer" in INTEGER_CONVERSION.type_keys
    True

Text based conversions share one rule: anything that is not already the
target type is converted through `str(value)`, and text which is empty after
trimming converts to None.  Trimming removes ASCII control characters and
spaces only, other Unicode whitespace such as NBSP is kept.
"""

import array
import datetime
import locale
import pickle
import re
import uuid
from abc import ABC, abstractmethod
from contextlib import suppress
from decimal import Decimal, InvalidOperation
from io import BytesIO
from typing import Any

from .errors import (
    DateTimeFormatInvalid,
    DeserializationFailed,
    NumberFormatInvalid,
    UUIDFormatInvalid,
)
from .primitives import Char, Float32, Int8, Int16, Int32, Int64, qualified_name

TYPE_UNKNOWN = "null"
TYPE_OBJECT = "object"
TYPE_STRING = "string"
TYPE_INT = "int"
TYPE_INTEGER = "integer"
TYPE_LONG = "long"
TYPE_FLOAT = "float"
TYPE_DOUBLE = "double"
TYPE_SHORT = "short"
TYPE_BOOLEAN = "boolean"
TYPE_BYTE = "byte"
TYPE_CHAR = "char"
TYPE_CHARACTER = "character"
TYPE_BIG_DECIMAL = "bigdecimal"
TYPE_SQL_DATE = "sqldate"
TYPE_SQL_TIME = "sqltime"
TYPE_SQL_TIMESTAMP = "sqltimestamp"
TYPE_UUID = "uuid"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOATING = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)
_DATE = re.compile(r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})")
_TIME = re.compile(r"([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})")
_TIMESTAMP = re.compile(
    r"([0-9]{4})-([0-9]{1,2})-([0-9]{1,2}) "
    r"([0-9]{1,2}):([0-9]{1,2}):([0-9]{1,2})(?:\.([0-9]{1,9}))?"
)

_BYTES_LIKE = (bytes, bytearray, memoryview)

# Code points up to and including the space character.
_TRIMMED = "".join(map(chr, range(0x21)))


def keys_for(cls: type, *short_names: str) -> tuple[Any, ...]:
    """Descriptor, qualified name and short names for `cls`."""
    return (cls, qualified_name(cls), *short_names)


def trim(text: str) -> str:
    return text.strip(_TRIMMED)


class Conversion(ABC):
    """A stateless converter that knows the keys it is registered under."""

    type_keys: tuple[Any, ...] = ()

    def __call__(self, value: Any) -> Any:
        return self.convert(value)

    @abstractmethod
    def convert(self, value: Any) -> Any:
        """The converted value, None for a None value."""

    def __repr__(self):
        return f"<{type(self).__name__}>"


class TextConversion(Conversion):
    """Convert by parsing the trimmed text of a value.

    Subclasses set `target` and implement `parse`.
    """

    target: type = object

    def convert(self, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, self.target):
            return value
        text = trim(str(value))
        if not text:
            return None
        return self.parse(text)

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Convert non-empty trimmed text."""


class IdentityConversion(Conversion):
    """Returns the value as-is."""

    type_keys = (TYPE_UNKNOWN,)

    def convert(self, value: Any) -> Any:
        return value


class ObjectConversion(Conversion):
    """Unpickle bytes, pass everything else through unchanged.

    Only use with trusted input: unpickling can execute arbitrary code.
    """

    type_keys = keys_for(object, TYPE_OBJECT)

    def convert(self, value: Any) -> Any:
        if value is None or not isinstance(value, _BYTES_LIKE):
            return value
        source = BytesIO(value)
        try:
            return pickle.Unpickler(source).load()
        except Exception as ex:
            raise DeserializationFailed(
                f"Could not deserialize object: {ex}", value=value, target=object
            ) from ex
        finally:
            with suppress(OSError):
                source.close()


class StringConversion(Conversion):
    """Bytes are decoded with the locale encoding, anything else uses str()."""

    type_keys = keys_for(str, TYPE_STRING)

    def convert(self, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, _BYTES_LIKE):
            encoding = locale.getpreferredencoding(False)
            return bytes(value).decode(encoding, errors="replace")
        if isinstance(value, array.array) and value.typecode in ("u", "w"):
            return value.tounicode()
        return str(value)


class FixedWidthIntConversion(TextConversion):
    """Parse base 10 text into a fixed-width integer."""

    def parse(self, text: str) -> Any:
        if not _INTEGER.fullmatch(text):
            raise NumberFormatInvalid(text, self.target)
        try:
            return self.target(int(text))
        except (OverflowError, ValueError) as ex:
            raise NumberFormatInvalid(text, self.target, str(ex)) from ex


class IntegerConversion(FixedWidthIntConversion):
    target = Int32
    type_keys = (
        Int32,
        int,
        qualified_name(Int32),
        qualified_name(int),
        TYPE_INT,
        TYPE_INTEGER,
    )


class LongConversion(FixedWidthIntConversion):
    target = Int64
    type_keys = keys_for(Int64, TYPE_LONG)


class ShortConversion(FixedWidthIntConversion):
    target = Int16
    type_keys = keys_for(Int16, TYPE_SHORT)


class ByteConversion(FixedWidthIntConversion):
    target = Int8
    type_keys = keys_for(Int8, TYPE_BYTE)


class FloatingConversion(TextConversion):
    """Parse decimal or exponent notation, NaN and Infinity.

    A trailing f or d type suffix is accepted and ignored.
    """

    def parse(self, text: str) -> Any:
        if not _FLOATING.fullmatch(text):
            raise NumberFormatInvalid(text, self.target)
        return self.target(text.rstrip("fFdD"))


class FloatConversion(FloatingConversion):
    target = Float32
    type_keys = keys_for(Float32, TYPE_FLOAT)


class DoubleConversion(FloatingConversion):
    target = float
    type_keys = keys_for(float, TYPE_DOUBLE)


class BooleanConversion(TextConversion):
    """Lenient: only 'true', in any case, is True."""

    target = bool
    type_keys = keys_for(bool, TYPE_BOOLEAN)

    def parse(self, text: str) -> Any:
        return text.lower() == "true"


class CharacterConversion(Conversion):
    """The first character of the text, whitespace included."""

    type_keys = keys_for(Char, TYPE_CHAR, TYPE_CHARACTER)

    def convert(self, value: Any) -> Any:
        if value is None or isinstance(value, Char):
            return value
        text = str(value)
        if not trim(text):
            return None
        return Char(text[0])


class BigDecimalConversion(TextConversion):
    target = Decimal
    type_keys = keys_for(Decimal, TYPE_BIG_DECIMAL)

    def parse(self, text: str) -> Any:
        if not _DECIMAL.fullmatch(text):
            raise NumberFormatInvalid(text, Decimal)
        try:
            return Decimal(text)
        except InvalidOperation as ex:
            raise NumberFormatInvalid(text, Decimal) from ex


class SqlDateConversion(TextConversion):
    """Parse 'yyyy-[m]m-[d]d'."""

    target = datetime.date
    type_keys = keys_for(datetime.date, TYPE_SQL_DATE)

    def parse(self, text: str) -> Any:
        match = _DATE.fullmatch(text)
        if match is None:
            raise DateTimeFormatInvalid(text, self.target, "yyyy-mm-dd")
        try:
            return datetime.date(*map(int, match.groups()))
        except ValueError as ex:
            raise DateTimeFormatInvalid(text, self.target, "yyyy-mm-dd") from ex


class SqlTimeConversion(TextConversion):
    """Parse 'hh:mm:ss'."""

    target = datetime.time
    type_keys = keys_for(datetime.time, TYPE_SQL_TIME)

    def parse(self, text: str) -> Any:
        match = _TIME.fullmatch(text)
        if match is None:
            raise DateTimeFormatInvalid(text, self.target, "hh:mm:ss")
        try:
            return datetime.time(*map(int, match.groups()))
        except ValueError as ex:
            raise DateTimeFormatInvalid(text, self.target, "hh:mm:ss") from ex


class SqlTimestampConversion(TextConversion):
    """Parse 'yyyy-mm-dd hh:mm:ss[.f...]'.

    Up to nine fraction digits are accepted; digits past the microsecond
    are dropped.
    """

    target = datetime.datetime
    type_keys = keys_for(datetime.datetime, TYPE_SQL_TIMESTAMP)
    layout = "yyyy-mm-dd hh:mm:ss[.fffffffff]"

    def parse(self, text: str) -> Any:
        match = _TIMESTAMP.fullmatch(text)
        if match is None:
            raise DateTimeFormatInvalid(text, self.target, self.layout)
        *fields, fraction = match.groups()
        microsecond = int((fraction or "0").ljust(6, "0")[:6])
        try:
            return datetime.datetime(*map(int, fields), microsecond)
        except ValueError as ex:
            raise DateTimeFormatInvalid(text, self.target, self.layout) from ex


class UUIDConversion(TextConversion):
    target = uuid.UUID
    type_keys = keys_for(uuid.UUID, TYPE_UUID)

    def parse(self, text: str) -> Any:
        try:
            return uuid.UUID(text)
        except ValueError as ex:
            raise UUIDFormatInvalid(
                f"{text!r} is not a valid UUID", value=text, target=uuid.UUID
            ) from ex


UNKNOWN_CONVERSION = IdentityConversion()
OBJECT_CONVERSION = ObjectConversion()
STRING_CONVERSION = StringConversion()
INTEGER_CONVERSION = IntegerConversion()
LONG_CONVERSION = LongConversion()
SHORT_CONVERSION = ShortConversion()
BYTE_CONVERSION = ByteConversion()
FLOAT_CONVERSION = FloatConversion()
DOUBLE_CONVERSION = DoubleConversion()
BOOLEAN_CONVERSION = BooleanConversion()
CHARACTER_CONVERSION = CharacterConversion()
BIG_DECIMAL_CONVERSION = BigDecimalConversion()
SQL_DATE_CONVERSION = SqlDateConversion()
SQL_TIME_CONVERSION = SqlTimeConversion()
SQL_TIMESTAMP_CONVERSION = SqlTimestampConversion()
UUID_CONVERSION = UUIDConversion()

BUILTIN_CONVERSIONS = (
    UNKNOWN_CONVERSION,
    OBJECT_CONVERSION,
    STRING_CONVERSION,
    INTEGER_CONVERSION,
    LONG_CONVERSION,
    SHORT_CONVERSION,
    BYTE_CONVERSION,
    FLOAT_CONVERSION,
    DOUBLE_CONVERSION,
    BOOLEAN_CONVERSION,
    CHARACTER_CONVERSION,
    BIG_DECIMAL_CONVERSION,
    SQL_DATE_CONVERSION,
    SQL_TIME_CONVERSION,
    SQL_TIMESTAMP_CONVERSION,
    UUID_CONVERSION,
)
