"""Element operator lookup and the kernels shared by both matrix kinds."""
from __future__ import annotations

import operator
from typing import Any

import numpy as np

from tabula.buffer import Buffer
from tabula.errors import IndexOutOfBounds, Operation, RowColumnOutOfBounds

LOOKUP = {
    Operation.ADDITION: operator.add,
    Operation.SUBTRACTION: operator.sub,
}

IN_PLACE_LOOKUP = {
    Operation.ADDITION: operator.iadd,
    Operation.SUBTRACTION: operator.isub,
}


def linear_offset(index: int, size: int) -> int:
    index = operator.index(index)
    if not 0 <= index < size:
        raise IndexOutOfBounds(index, size)

    return index


def grid_offset(row: int, column: int, rows: int, columns: int) -> int:
    row, column = operator.index(row), operator.index(column)
    if not (0 <= row < rows and 0 <= column < columns):
        raise RowColumnOutOfBounds(row, column, rows, columns)

    return row * columns + column


def elementwise(op: Operation, lhs: Buffer, rhs: Buffer) -> Buffer:
    return Buffer(LOOKUP[op](lhs.data, rhs.data), lhs.dtype)


def elementwise_into(op: Operation, target: Buffer, rhs: Buffer) -> None:
    target.data = IN_PLACE_LOOKUP[op](target.data, rhs.data)


def scale(lhs: Buffer, scalar: Any) -> Buffer:
    return Buffer(lhs.data * lhs.dtype.coerce(scalar), lhs.dtype)


def scale_into(target: Buffer, scalar: Any) -> None:
    target.data *= target.dtype.coerce(scalar)


def matmul(lhs: Buffer, rhs: Buffer, rows: int, inner: int, columns: int) -> Buffer:
    """Product of a ``rows x inner`` and an ``inner x columns`` buffer.

    Every result cell starts at the element default and accumulates
    ``lhs(i, k) * rhs(k, j)`` for ascending ``k``. Only the ``j`` loop is
    vectorized, so the summation order matches the plain triple loop.
    """
    a = lhs.data.reshape(rows, inner)
    b = rhs.data.reshape(inner, columns)

    result = np.full((rows, columns), lhs.dtype.default, dtype=lhs.dtype.numpy)
    for k in range(inner):
        result += np.multiply.outer(a[:, k], b[k, :])

    return Buffer(result.reshape(-1), lhs.dtype)


def transpose(buffer: Buffer, rows: int, columns: int) -> Buffer:
    return Buffer(buffer.data.reshape(rows, columns).T.flatten(), buffer.dtype)


def identity(size: int, value: Any, dtype) -> Buffer:
    result = Buffer.default(size * size, dtype)
    result.data[:: size + 1] = dtype.coerce(value)

    return result


def equal(lhs: Buffer, rhs: Buffer) -> bool:
    """Exact, element-by-element comparison in row-major order."""
    if len(lhs) != len(rhs):
        return False

    return bool(np.array_equal(lhs.data, rhs.data))


def splice(
    buffer: Buffer,
    columns: int,
    row_start: int,
    column_start: int,
    row_extent: int,
    column_extent: int,
) -> Buffer:
    grid = buffer.data.reshape(-1, columns)
    region = grid[
        row_start : row_start + row_extent,
        column_start : column_start + column_extent,
    ]

    return Buffer(region.flatten(), buffer.dtype)
