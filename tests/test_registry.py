import datetime
import threading
import uuid
from decimal import Decimal

import pytest

from typeconv import (
    Char,
    Conversion,
    ConversionRegistry,
    Float32,
    Int8,
    Int16,
    Int32,
    Int64,
    InvalidRegistration,
    registry,
)
from typeconv.conversions import (
    BIG_DECIMAL_CONVERSION,
    BOOLEAN_CONVERSION,
    BYTE_CONVERSION,
    CHARACTER_CONVERSION,
    DOUBLE_CONVERSION,
    FLOAT_CONVERSION,
    INTEGER_CONVERSION,
    LONG_CONVERSION,
    OBJECT_CONVERSION,
    SHORT_CONVERSION,
    SQL_DATE_CONVERSION,
    SQL_TIME_CONVERSION,
    SQL_TIMESTAMP_CONVERSION,
    STRING_CONVERSION,
    UNKNOWN_CONVERSION,
    UUID_CONVERSION,
)


@pytest.mark.parametrize(
    "conversion, keys",
    (
        (UNKNOWN_CONVERSION, ("null",)),
        (OBJECT_CONVERSION, (object, "builtins.object", "object")),
        (STRING_CONVERSION, (str, "builtins.str", "string")),
        (
            INTEGER_CONVERSION,
            (Int32, int, "typeconv.primitives.Int32", "builtins.int", "int", "integer"),
        ),
        (LONG_CONVERSION, (Int64, "typeconv.primitives.Int64", "long")),
        (SHORT_CONVERSION, (Int16, "typeconv.primitives.Int16", "short")),
        (BYTE_CONVERSION, (Int8, "typeconv.primitives.Int8", "byte")),
        (FLOAT_CONVERSION, (Float32, "typeconv.primitives.Float32", "float")),
        (DOUBLE_CONVERSION, (float, "builtins.float", "double")),
        (BOOLEAN_CONVERSION, (bool, "builtins.bool", "boolean")),
        (
            CHARACTER_CONVERSION,
            (Char, "typeconv.primitives.Char", "char", "character"),
        ),
        (BIG_DECIMAL_CONVERSION, (Decimal, "decimal.Decimal", "bigdecimal")),
        (SQL_DATE_CONVERSION, (datetime.date, "datetime.date", "sqldate")),
        (SQL_TIME_CONVERSION, (datetime.time, "datetime.time", "sqltime")),
        (
            SQL_TIMESTAMP_CONVERSION,
            (datetime.datetime, "datetime.datetime", "sqltimestamp"),
        ),
        (UUID_CONVERSION, (uuid.UUID, "uuid.UUID", "uuid")),
    ),
)
def test_builtin_keys(conversion, keys):
    for key in keys:
        assert registry.lookup(key) is conversion, key


def test_builtin_count():
    assert 50 == len(ConversionRegistry.with_builtins())


def test_register_replaces():
    conversions = ConversionRegistry()
    conversions.register("money", Decimal)
    conversions.register("money", float)
    assert conversions.lookup("money") is float
    assert {"money": float} == conversions.conversions()


def test_lookup_missing():
    assert ConversionRegistry().lookup("nothing") is None
    with pytest.raises(KeyError):
        ConversionRegistry()["nothing"]


def test_descriptor_and_name_are_unrelated_keys():
    conversions = ConversionRegistry()
    conversions.register(Decimal, Decimal)
    assert Decimal in conversions
    assert "decimal.Decimal" not in conversions


@pytest.mark.parametrize(
    "key, converter", ((None, str), (["x"], str), ("key", None), ("key", 5))
)
def test_register_rejects(key, converter):
    with pytest.raises(InvalidRegistration):
        ConversionRegistry().register(key, converter)


class Keyless(Conversion):
    def convert(self, value):
        return value


def test_register_conversions_requires_keys():
    with pytest.raises(InvalidRegistration):
        ConversionRegistry().register_conversions(Keyless())


def test_lookup_unhashable_key():
    conversions = ConversionRegistry.with_builtins()
    assert conversions.lookup(["int"]) is None
    assert ["int"] not in conversions


def test_copy_is_independent():
    original = ConversionRegistry({"a": str})
    duplicate = original.copy()
    duplicate.register("b", int)
    assert "b" not in original
    assert duplicate.lookup("a") is str


def test_conversions_is_a_snapshot():
    conversions = ConversionRegistry({"a": str})
    snapshot = conversions.conversions()
    snapshot["b"] = int
    assert "b" not in conversions
    assert 1 == len(conversions)


def test_concurrent_register():
    conversions = ConversionRegistry()

    def register_many(offset):
        for n in range(200):
            conversions.register(offset + n, str)

    threads = [threading.Thread(target=register_many, args=(i * 1000,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert 1600 == len(conversions)
