import math

import pytest

from typeconv import Char, Float32, Int8, Int16, Int32, Int64
from typeconv.primitives import qualified_name


@pytest.mark.parametrize(
    "cls, low, high",
    (
        (Int8, -128, 127),
        (Int16, -32768, 32767),
        (Int32, -2147483648, 2147483647),
        (Int64, -9223372036854775808, 9223372036854775807),
    ),
)
def test_int_range(cls, low, high):
    assert low == cls(low) == cls.min_value()
    assert high == cls(high) == cls.max_value()
    with pytest.raises(OverflowError):
        cls(low - 1)
    with pytest.raises(OverflowError):
        cls(high + 1)


def test_int_is_int():
    value = Int32("12")
    assert isinstance(value, int)
    assert 13 == value + 1
    assert "Int32(12)" == repr(value)


def test_float32_rounds():
    assert 0.1 != Float32(0.1)
    assert 0.5 == Float32("0.5")
    assert -math.inf == Float32(-1e300)
    assert math.isnan(Float32("nan"))


def test_char():
    assert "x" == Char("x")
    with pytest.raises(ValueError):
        Char("xy")
    with pytest.raises(ValueError):
        Char("")


def test_qualified_name():
    assert "builtins.int" == qualified_name(int)
    assert "typeconv.primitives.Int32" == qualified_name(Int32)
