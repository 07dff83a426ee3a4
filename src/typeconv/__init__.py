from .capabilities import ConversionListener, ConvertibleType
from .conversions import Conversion
from .converter import (
    ConversionResult,
    ConversionStatus,
    TypeConverter,
    as_bool,
    as_byte,
    as_char,
    as_double,
    as_float,
    as_int,
    as_long,
    as_short,
    as_string,
    convert,
    lookup_conversions,
    register_conversion,
    try_convert,
)
from .dict_reader import LowerCaseDictReader
from .errors import (
    ConversionError,
    ConversionNotFound,
    DateTimeFormatInvalid,
    DeserializationFailed,
    InvalidRegistration,
    NumberFormatInvalid,
    UUIDFormatInvalid,
)
from .primitives import Char, Float32, Int8, Int16, Int32, Int64
from .registry import ConversionRegistry, registry
from .transform import TransformData

__all__ = [
    "Char",
    "Conversion",
    "ConversionError",
    "ConversionListener",
    "ConversionNotFound",
    "ConversionRegistry",
    "ConversionResult",
    "ConversionStatus",
    "ConvertibleType",
    "DateTimeFormatInvalid",
    "DeserializationFailed",
    "Float32",
    "Int16",
    "Int32",
    "Int64",
    "Int8",
    "InvalidRegistration",
    "LowerCaseDictReader",
    "NumberFormatInvalid",
    "TransformData",
    "TypeConverter",
    "UUIDFormatInvalid",
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
    "lookup_conversions",
    "register_conversion",
    "registry",
    "try_convert",
]
