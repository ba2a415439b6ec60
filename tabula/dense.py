"""The run-time sized dense matrix."""
from __future__ import annotations

import enum
import logging
import operator
from typing import Any, Iterable, Iterator, Optional, Union

import numpy as np

from tabula import ops
from tabula.buffer import Buffer, is_sequence
from tabula.config import DTypeLike, resolve_dtype
from tabula.errors import (
    ElementTypeMismatch,
    EmptySource,
    InitializerSizeMismatch,
    InvalidShape,
    Operation,
    ShapeMismatch,
)
from tabula.protocols import format_matrix, is_scalar
from tabula.types import DataType

logger = logging.getLogger(__name__)


class Orientation(enum.Enum):
    """How a flat sequence is laid out by ``DenseMatrix.from_flat``."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _check_shape(rows: int, columns: int) -> None:
    if rows < 1 or columns < 1:
        raise InvalidShape(rows, columns)


class DenseMatrix:
    """A matrix whose shape is chosen at run time.

    ``content`` is either a single fill value or a sequence of exactly
    ``rows * columns`` elements in row-major order. Without it every element
    holds the element type's default value.
    """

    __slots__ = ("_rows", "_columns", "_buffer")

    # NumPy scalars on the left fall back to the reflected operators.
    __array_ufunc__ = None

    def __init__(
        self,
        rows: int,
        columns: int,
        content: Any = None,
        *,
        dtype: DTypeLike = None,
    ) -> None:
        rows, columns = operator.index(rows), operator.index(columns)
        _check_shape(rows, columns)

        dtype = resolve_dtype(dtype)
        size = rows * columns

        if content is None:
            buffer = Buffer.default(size, dtype)
        elif is_sequence(content):
            buffer = Buffer.from_sequence(content, dtype, size)
            if len(buffer) != size:
                raise InitializerSizeMismatch(len(buffer), size)
        else:
            buffer = Buffer.filled(size, content, dtype)

        self._rows = rows
        self._columns = columns
        self._buffer = buffer

    @classmethod
    def _wrap(cls, rows: int, columns: int, buffer: Buffer) -> DenseMatrix:
        out = cls.__new__(cls)
        out._rows = rows
        out._columns = columns
        out._buffer = buffer

        return out

    @classmethod
    def zeros(cls, rows: int, columns: int, *, dtype: DTypeLike = None) -> DenseMatrix:
        return cls(rows, columns, dtype=dtype)

    @classmethod
    def ones(cls, rows: int, columns: int, *, dtype: DTypeLike = None) -> DenseMatrix:
        return cls(rows, columns, 1, dtype=dtype)

    @classmethod
    def full(
        cls, rows: int, columns: int, value: Any, *, dtype: DTypeLike = None
    ) -> DenseMatrix:
        return cls(rows, columns, value, dtype=dtype)

    @classmethod
    def from_flat(
        cls,
        content: Iterable,
        orientation: Union[Orientation, str] = Orientation.HORIZONTAL,
        *,
        dtype: DTypeLike = None,
    ) -> DenseMatrix:
        """Build a single row (horizontal) or single column (vertical)."""
        orientation = Orientation(orientation)
        buffer = Buffer.from_sequence(content, resolve_dtype(dtype))
        if not len(buffer):
            raise EmptySource()

        if orientation is Orientation.HORIZONTAL:
            return cls._wrap(1, len(buffer), buffer)

        return cls._wrap(len(buffer), 1, buffer)

    @classmethod
    def from_rows(cls, content: Iterable[Iterable], *, dtype: DTypeLike = None) -> DenseMatrix:
        rows = [list(row) for row in content]
        if not rows or not rows[0]:
            raise EmptySource()

        columns = len(rows[0])
        if any(len(row) != columns for row in rows):
            raise InitializerSizeMismatch(
                sum(len(row) for row in rows), len(rows) * columns
            )

        return cls(len(rows), columns, [x for row in rows for x in row], dtype=dtype)

    @classmethod
    def create_identity(
        cls, size: int, diagonal_value: Any = 1, *, dtype: DTypeLike = None
    ) -> DenseMatrix:
        size = operator.index(size)
        _check_shape(size, size)

        dtype = resolve_dtype(dtype)
        logger.debug("Creating %dx%d identity of %s", size, size, dtype)

        return cls._wrap(size, size, ops.identity(size, diagonal_value, dtype))

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def size(self) -> int:
        return len(self._buffer)

    @property
    def shape(self) -> tuple[int, int]:
        return self._rows, self._columns

    @property
    def dtype(self) -> DataType:
        return self._buffer.dtype

    def at(self, row: int, column: Optional[int] = None) -> Any:
        """Bounds-checked read by linear index, or by row and column."""
        if column is None:
            return self._buffer.data[ops.linear_offset(row, self.size)]

        return self._buffer.data[
            ops.grid_offset(row, column, self._rows, self._columns)
        ]

    def set_at(self, key: Union[int, tuple[int, int]], value: Any) -> None:
        """Bounds-checked write; ``key`` is an index or a ``(row, column)`` pair."""
        if isinstance(key, tuple):
            offset = ops.grid_offset(*key, self._rows, self._columns)
        else:
            offset = ops.linear_offset(key, self.size)

        self._buffer.data[offset] = self.dtype.coerce(value)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            row, column = key
            return self._buffer.data[row * self._columns + column]

        return self._buffer.data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            row, column = key
            key = row * self._columns + column

        self._buffer.data[key] = self.dtype.coerce(value)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        return iter(self._buffer.data)

    def _check_operands(self, op: Operation, other: DenseMatrix) -> None:
        if self.dtype != other.dtype:
            raise ElementTypeMismatch(self.dtype, other.dtype)

        if op is Operation.MULTIPLICATION:
            compatible = self._columns == other._rows
        else:
            compatible = self.shape == other.shape

        if not compatible:
            logger.debug("Rejected %s of %s and %s", op.value, self.shape, other.shape)
            raise ShapeMismatch(op, self._rows, self._columns, other._rows, other._columns)

    def _product(self, other: DenseMatrix) -> DenseMatrix:
        self._check_operands(Operation.MULTIPLICATION, other)

        return DenseMatrix._wrap(
            self._rows,
            other._columns,
            ops.matmul(self._buffer, other._buffer, self._rows, self._columns, other._columns),
        )

    def __mul__(self, other):
        if isinstance(other, DenseMatrix):
            return self._product(other)
        if is_scalar(other):
            return DenseMatrix._wrap(self._rows, self._columns, ops.scale(self._buffer, other))

        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return DenseMatrix._wrap(self._rows, self._columns, ops.scale(self._buffer, other))

        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, DenseMatrix):
            # The product is complete before the receiver changes.
            product = self._product(other)
            self._rows, self._columns = product.shape
            self._buffer = product._buffer
            return self
        if is_scalar(other):
            ops.scale_into(self._buffer, other)
            return self

        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, DenseMatrix):
            return self._product(other)

        return NotImplemented

    def __imatmul__(self, other):
        if isinstance(other, DenseMatrix):
            return self.__imul__(other)

        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented

        return self.shape == other.shape and ops.equal(self._buffer, other._buffer)

    __hash__ = None

    def transpose(self) -> DenseMatrix:
        return DenseMatrix._wrap(
            self._columns,
            self._rows,
            ops.transpose(self._buffer, self._rows, self._columns),
        )

    @property
    def T(self) -> DenseMatrix:
        return self.transpose()

    def copy(self) -> DenseMatrix:
        return DenseMatrix._wrap(self._rows, self._columns, self._buffer.copy())

    def __copy__(self) -> DenseMatrix:
        return self.copy()

    def __deepcopy__(self, memo) -> DenseMatrix:
        return self.copy()

    def assign(self, other: DenseMatrix) -> None:
        """Replace shape and contents with an independent copy of ``other``."""
        self._rows, self._columns = other.shape
        self._buffer = other._buffer.copy()

    def take(self) -> DenseMatrix:
        """Move the storage into a new matrix; this one becomes 0x0."""
        moved = DenseMatrix._wrap(self._rows, self._columns, self._buffer.release())
        self._rows = self._columns = 0
        logger.debug("Moved %dx%d matrix out, source is now empty", *moved.shape)

        return moved

    def swap(self, other: DenseMatrix) -> None:
        self._rows, other._rows = other._rows, self._rows
        self._columns, other._columns = other._columns, self._columns
        self._buffer, other._buffer = other._buffer, self._buffer

    def to_numpy(self) -> np.ndarray:
        return self._buffer.to_numpy(self.shape)

    def tolist(self) -> list[list[Any]]:
        return self.to_numpy().tolist()

    def __repr__(self) -> str:
        return f"DenseMatrix<{self.shape}, {self.dtype}>"

    def __str__(self) -> str:
        return format_matrix(self)


def _build_elementwise_op(op: Operation):
    def binary(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented

        self._check_operands(op, other)
        return DenseMatrix._wrap(
            self._rows, self._columns, ops.elementwise(op, self._buffer, other._buffer)
        )

    return binary


def _build_in_place_op(op: Operation):
    def in_place(self, other):
        if not isinstance(other, DenseMatrix):
            return NotImplemented

        self._check_operands(op, other)
        ops.elementwise_into(op, self._buffer, other._buffer)
        return self

    return in_place


for name, op in [("add", Operation.ADDITION), ("sub", Operation.SUBTRACTION)]:
    setattr(DenseMatrix, f"__{name}__", _build_elementwise_op(op))
    setattr(DenseMatrix, f"__i{name}__", _build_in_place_op(op))
