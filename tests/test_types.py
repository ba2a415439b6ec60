from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from tabula import types
from tabula.buffer import Buffer, is_sequence
from tabula.types import Bool, Complex128, Float32, Float64, Int8, Int64, Object


def test_types_compare_by_kind():
    assert Int64() == Int64()
    assert Int64() != Float64()
    assert len({Int64(), Int64(), Float32()}) == 2


def test_object_types_compare_by_scalar_type():
    assert Object(Fraction) == Object(Fraction)
    assert Object(Fraction) != Object(Decimal)
    assert hash(Object(Fraction)) == hash(Object(Fraction))


def test_defaults():
    assert Int64().default == 0
    assert Float32().default == 0.0
    assert not Bool().default
    assert Object(Fraction).default == Fraction(0)


def test_coerce():
    assert isinstance(Int8().coerce(3), np.int8)
    assert Int64().coerce(2.9) == 2
    assert Object(Fraction).coerce(3) == Fraction(3)
    assert isinstance(Object(Fraction).coerce(3), Fraction)


@pytest.mark.parametrize(
    "name, expected",
    [("int64", Int64()), ("Float32", Float32()), (" complex128 ", Complex128())],
)
def test_from_name(name, expected):
    assert types.from_name(name) == expected


def test_from_name_unknown():
    with pytest.raises(ValueError):
        types.from_name("bfloat16")


def test_from_python_type():
    assert types.from_python_type(int) == Int64()
    assert types.from_python_type(bool) == Bool()
    assert types.from_python_type(Decimal) == Object(Decimal)


def test_names():
    assert str(Int64()) == "Int64"
    assert str(Object(Fraction)) == "Object[Fraction]"
    assert repr(Object(Fraction)) == "Object(Fraction)"


def test_is_sequence():
    assert is_sequence([1, 2])
    assert is_sequence(np.arange(3))
    assert is_sequence(x for x in range(2))
    assert not is_sequence(3)
    assert not is_sequence("abc")
    assert not is_sequence(np.float64(1.0))
    assert not is_sequence(np.array(1.0))


def test_buffer_release_empties_source():
    buffer = Buffer.from_sequence([1, 2, 3], Int64())
    moved = buffer.release()

    assert len(buffer) == 0
    assert moved.data.tolist() == [1, 2, 3]


def test_buffer_flattens_arrays_row_major():
    buffer = Buffer.from_sequence(np.array([[1, 2], [3, 4]]), Int64())

    assert buffer.data.tolist() == [1, 2, 3, 4]
    assert buffer.to_numpy((2, 2)).tolist() == [[1, 2], [3, 4]]
