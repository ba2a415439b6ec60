import copy

import pytest

from tabula import FixedMatrix
from tabula.errors import (
    IndexOutOfBounds,
    InitializerSizeMismatch,
    InvalidShape,
    RowColumnOutOfBounds,
    Splice,
    SpliceOutOfBounds,
)
from tabula.types import Int32, Int64

Mat23 = FixedMatrix[int, 2, 3]
Mat32 = FixedMatrix[int, 3, 2]
Mat22 = FixedMatrix[int, 2, 2]

a = Mat23(1, 2, 3, 4, 5, 6)
b = Mat23(6, 5, 4, 3, 2, 1)


def test_specializations_are_cached():
    assert FixedMatrix[int, 2, 3] is Mat23
    assert FixedMatrix[Int64, 2, 3] is Mat23
    assert FixedMatrix[Int32, 2, 3] is not Mat23


def test_specialization_attributes():
    assert (Mat23.ROWS, Mat23.COLUMNS, Mat23.DTYPE) == (2, 3, Int64())
    assert Mat23.__name__ == "FixedMatrix[Int64, 2, 3]"


@pytest.mark.parametrize("rows, columns", [(0, 3), (2, 0)])
def test_empty_shape_rejected_at_specialization(rows, columns):
    with pytest.raises(InvalidShape):
        FixedMatrix[int, rows, columns]


def test_unspecialized_cannot_be_created():
    with pytest.raises(TypeError):
        FixedMatrix(1, 2)


def test_aggregate_construction():
    assert a.shape == (2, 3)
    assert a.size == 6
    assert list(a) == [1, 2, 3, 4, 5, 6], "Content is not the same."


def test_omitted_elements_are_default():
    assert list(Mat23()) == [0] * 6
    assert list(Mat23(1, 2)) == [1, 2, 0, 0, 0, 0]


def test_too_many_elements():
    with pytest.raises(InitializerSizeMismatch) as error:
        Mat22(1, 2, 3, 4, 5)

    assert (error.value.initializer_size, error.value.matrix_size) == (5, 4)


def test_access():
    for index, expected in enumerate([1, 2, 3, 4, 5, 6]):
        assert a.at(index) == expected
        assert a[index] == expected
        assert a.at(index // 3, index % 3) == expected
        assert a[index // 3, index % 3] == expected


def test_access_out_of_bounds():
    with pytest.raises(IndexOutOfBounds) as error:
        a.at(6)
    assert (error.value.index, error.value.matrix_size) == (6, 6)

    with pytest.raises(RowColumnOutOfBounds) as error:
        a.at(2, 0)
    assert (error.value.matrix_rows, error.value.matrix_columns) == (2, 3)


def test_set_at():
    m = a.copy()
    m.set_at((0, 2), 30)
    m[1, 0] = 40

    assert list(m) == [1, 2, 30, 40, 5, 6]

    with pytest.raises(IndexOutOfBounds):
        m.set_at(100, 1)


def test_addition_and_subtraction():
    assert list(a + b) == [7] * 6
    assert list(a - b) == [-5, -3, -1, 1, 3, 5]


def test_compound_operators():
    m = a.copy()
    m += b
    assert list(m) == [7] * 6

    m = a.copy()
    m -= b
    assert list(m) == [-5, -3, -1, 1, 3, 5]

    m = a.copy()
    m *= 4
    assert list(m) == [4, 8, 12, 16, 20, 24]


def test_mismatched_types_are_unsupported():
    with pytest.raises(TypeError):
        a + Mat32(1, 2, 3, 4, 5, 6)
    with pytest.raises(TypeError):
        a - FixedMatrix[Int32, 2, 3]()
    with pytest.raises(TypeError):
        a * b


def test_failed_compound_leaves_receiver_unmodified():
    m = a.copy()

    with pytest.raises(TypeError):
        m += Mat32()
    with pytest.raises(TypeError):
        m *= Mat32()

    assert m == a


def test_matrix_product():
    result = a * Mat32(6, 5, 4, 3, 2, 1)

    assert type(result) is Mat22
    assert list(result) == [20, 14, 56, 41]
    assert a @ Mat32(6, 5, 4, 3, 2, 1) == result


def test_square_compound_product():
    m = Mat22(1, 2, 3, 4)
    m *= Mat22(0, 1, 1, 0)

    assert list(m) == [2, 1, 4, 3]


def test_scalar_product():
    assert list(a * 4) == [4, 8, 12, 16, 20, 24]
    assert 4 * a == a * 4


def test_element_values_scale_from_the_left():
    m = Mat22(1, 2, 3, 4)
    s = m.at(1)

    assert isinstance(s * m, Mat22), "NumPy scalar took over the product."
    assert s * m == m * s
    assert list(s * m) == [2, 4, 6, 8]


def test_element_values_do_not_broadcast():
    m = Mat22(1, 2, 3, 4)

    with pytest.raises(TypeError):
        m.at(0) + m
    with pytest.raises(TypeError):
        m * None
    assert (m == m.at(0)) is False


def test_transpose():
    t = a.transpose()

    assert type(t) is Mat32
    assert t.tolist() == [[1, 4], [2, 5], [3, 6]]
    assert t.T == a


def test_identity():
    identity = Mat22.create_identity()

    assert identity.tolist() == [[1, 0], [0, 1]]
    assert identity * Mat22(1, 2, 3, 4) == Mat22(1, 2, 3, 4)

    with pytest.raises(TypeError):
        Mat23.create_identity()


def test_splice():
    m = FixedMatrix[int, 3, 3](1, 2, 3, 4, 5, 6, 7, 8, 9)

    block = m.splice(1, 1, 2, 2)
    assert type(block) is Mat22
    assert block.tolist() == [[5, 6], [8, 9]]

    row = m.splice(Splice(0, 0, 1, 3))
    assert row.shape == (1, 3)
    assert list(row) == [1, 2, 3]


@pytest.mark.parametrize(
    "region",
    [(0, 0, 3, 1), (0, 2, 1, 2), (-1, 0, 1, 1), (0, 0, 0, 1)],
)
def test_splice_out_of_bounds(region):
    with pytest.raises(SpliceOutOfBounds) as error:
        a.splice(*region)

    assert error.value.splice == Splice(*region)
    assert (error.value.matrix_rows, error.value.matrix_columns) == (2, 3)


def test_splice_is_independent():
    block = a.splice(0, 0, 1, 1)
    block[0] = 100

    assert a.at(0) == 1


def test_equality():
    assert a == Mat23(1, 2, 3, 4, 5, 6)
    assert a != b
    assert a != FixedMatrix[Int32, 2, 3](1, 2, 3, 4, 5, 6)


def test_copy_and_take():
    for duplicate in (a.copy(), copy.copy(a), copy.deepcopy(a), a.take()):
        assert duplicate == a
        duplicate[0] = 99
        assert a.at(0) == 1


def test_assign():
    m = Mat23()
    m.assign(a)
    assert m == a

    with pytest.raises(TypeError):
        m.assign(Mat32())


def test_repr_and_str():
    assert repr(a) == "<FixedMatrix[Int64, 2, 3]>"
    assert str(a) == "[1, 2, 3]\n[4, 5, 6]"
