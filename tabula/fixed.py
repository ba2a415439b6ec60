"""A module for matrices whose shape is part of their type."""
from __future__ import annotations

import logging
import operator
from typing import Any, ClassVar, Iterator, Optional, Union

import numpy as np

from tabula import ops
from tabula.buffer import Buffer
from tabula.config import resolve_dtype
from tabula.errors import (
    InitializerSizeMismatch,
    InvalidShape,
    Operation,
    Splice,
    SpliceOutOfBounds,
)
from tabula.protocols import format_matrix, is_scalar
from tabula.types import DataType

logger = logging.getLogger(__name__)

_SPECIALIZATIONS: dict[tuple[DataType, int, int], type] = {}


class FixedMatrix:
    """A matrix whose element type and shape are fixed by its class.

    ``FixedMatrix[dtype, rows, columns]`` creates (once, then caches) the
    class for that shape. An impossible shape fails right there, before any
    matrix exists:

        >>> Mat23 = FixedMatrix[int, 2, 3]
        >>> m = Mat23(1, 2, 3, 4, 5, 6)
        >>> m.transpose().shape
        (3, 2)

    Operators only accept operands whose class makes the operation valid:
    ``+``/``-`` need the very same class, ``*`` needs ``FixedMatrix[T, C, K]``
    on the right of a ``FixedMatrix[T, R, C]``. Anything else is reported by
    Python as an unsupported operand ``TypeError``.
    """

    ROWS: ClassVar[int]
    COLUMNS: ClassVar[int]
    DTYPE: ClassVar[DataType]

    __slots__ = ("_buffer",)

    # NumPy scalars on the left fall back to the reflected operators.
    __array_ufunc__ = None

    def __class_getitem__(cls, params) -> type[FixedMatrix]:
        if hasattr(cls, "ROWS"):
            raise TypeError(f"{cls.__name__} is already specialized.")

        dtype, rows, columns = params
        dtype = resolve_dtype(dtype)
        rows, columns = operator.index(rows), operator.index(columns)

        key = (dtype, rows, columns)
        if key in _SPECIALIZATIONS:
            return _SPECIALIZATIONS[key]

        if rows < 1 or columns < 1:
            raise InvalidShape(rows, columns)

        name = f"FixedMatrix[{dtype}, {rows}, {columns}]"
        specialized = type(
            name,
            (FixedMatrix,),
            {
                "__slots__": (),
                "__module__": __name__,
                "__qualname__": name,
                "ROWS": rows,
                "COLUMNS": columns,
                "DTYPE": dtype,
            },
        )
        _SPECIALIZATIONS[key] = specialized
        logger.debug("Specialized %s", name)

        return specialized

    def __init__(self, *elements: Any) -> None:
        if not hasattr(type(self), "ROWS"):
            raise TypeError(
                "FixedMatrix must be specialized as FixedMatrix[dtype, rows, columns]."
            )

        size = self.ROWS * self.COLUMNS
        if len(elements) > size:
            raise InitializerSizeMismatch(len(elements), size)

        self._buffer = Buffer.default(size, self.DTYPE)
        if elements:
            self._buffer.data[: len(elements)] = [
                self.DTYPE.coerce(element) for element in elements
            ]

    @classmethod
    def _wrap(cls, buffer: Buffer) -> FixedMatrix:
        out = cls.__new__(cls)
        out._buffer = buffer

        return out

    @classmethod
    def create_identity(cls, diagonal_value: Any = 1) -> FixedMatrix:
        if cls.ROWS != cls.COLUMNS:
            raise TypeError(f"{cls.__name__} is not square.")

        return cls._wrap(ops.identity(cls.ROWS, diagonal_value, cls.DTYPE))

    @property
    def rows(self) -> int:
        return self.ROWS

    @property
    def columns(self) -> int:
        return self.COLUMNS

    @property
    def size(self) -> int:
        return self.ROWS * self.COLUMNS

    @property
    def shape(self) -> tuple[int, int]:
        return self.ROWS, self.COLUMNS

    @property
    def dtype(self) -> DataType:
        return self.DTYPE

    def at(self, row: int, column: Optional[int] = None) -> Any:
        if column is None:
            return self._buffer.data[ops.linear_offset(row, self.size)]

        return self._buffer.data[ops.grid_offset(row, column, self.ROWS, self.COLUMNS)]

    def set_at(self, key: Union[int, tuple[int, int]], value: Any) -> None:
        if isinstance(key, tuple):
            offset = ops.grid_offset(*key, self.ROWS, self.COLUMNS)
        else:
            offset = ops.linear_offset(key, self.size)

        self._buffer.data[offset] = self.DTYPE.coerce(value)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            row, column = key
            return self._buffer.data[row * self.COLUMNS + column]

        return self._buffer.data[key]

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            row, column = key
            key = row * self.COLUMNS + column

        self._buffer.data[key] = self.DTYPE.coerce(value)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        return iter(self._buffer.data)

    def _product_type(self, other) -> Optional[type[FixedMatrix]]:
        """Result class of ``self * other``, or None if the types do not fit."""
        if not isinstance(other, FixedMatrix) or type(other) is FixedMatrix:
            return None
        if other.DTYPE != self.DTYPE or other.ROWS != self.COLUMNS:
            return None

        return FixedMatrix[self.DTYPE, self.ROWS, other.COLUMNS]

    def _product(self, other: FixedMatrix, result_type: type[FixedMatrix]) -> FixedMatrix:
        return result_type._wrap(
            ops.matmul(self._buffer, other._buffer, self.ROWS, self.COLUMNS, other.COLUMNS)
        )

    def __mul__(self, other):
        result_type = self._product_type(other)
        if result_type is not None:
            return self._product(other, result_type)
        if is_scalar(other):
            return type(self)._wrap(ops.scale(self._buffer, other))

        return NotImplemented

    def __rmul__(self, other):
        if is_scalar(other):
            return type(self)._wrap(ops.scale(self._buffer, other))

        return NotImplemented

    def __imul__(self, other):
        if isinstance(other, FixedMatrix):
            if self._product_type(other) is not type(self):
                raise TypeError(
                    f"{type(self).__name__} *= {type(other).__name__} "
                    "would change the matrix type."
                )
            self._buffer = self._product(other, type(self))._buffer
            return self
        if is_scalar(other):
            ops.scale_into(self._buffer, other)
            return self

        return NotImplemented

    def __matmul__(self, other):
        result_type = self._product_type(other)
        if result_type is not None:
            return self._product(other, result_type)

        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, FixedMatrix):
            return NotImplemented

        return type(other) is type(self) and ops.equal(self._buffer, other._buffer)

    __hash__ = None

    def transpose(self) -> FixedMatrix:
        result_type = FixedMatrix[self.DTYPE, self.COLUMNS, self.ROWS]

        return result_type._wrap(ops.transpose(self._buffer, self.ROWS, self.COLUMNS))

    @property
    def T(self) -> FixedMatrix:
        return self.transpose()

    def splice(self, *region) -> FixedMatrix:
        """Copy out a sub-matrix.

        Takes either a ``Splice`` or its four fields
        ``(row_start, column_start, row_extent, column_extent)``. The region
        is validated before anything is copied.

        Raises:
            SpliceOutOfBounds: If the region is empty or leaves the matrix.
        """
        if len(region) == 1 and isinstance(region[0], Splice):
            region = region[0]
        else:
            region = Splice(*(operator.index(x) for x in region))

        if (
            region.row_start < 0
            or region.column_start < 0
            or region.row_extent < 1
            or region.column_extent < 1
            or region.row_start + region.row_extent > self.ROWS
            or region.column_start + region.column_extent > self.COLUMNS
        ):
            raise SpliceOutOfBounds(region, self.ROWS, self.COLUMNS)

        logger.debug("Splicing %s out of %s", region, type(self).__name__)
        result_type = FixedMatrix[self.DTYPE, region.row_extent, region.column_extent]

        return result_type._wrap(
            ops.splice(
                self._buffer,
                self.COLUMNS,
                region.row_start,
                region.column_start,
                region.row_extent,
                region.column_extent,
            )
        )

    def copy(self) -> FixedMatrix:
        return type(self)._wrap(self._buffer.copy())

    def __copy__(self) -> FixedMatrix:
        return self.copy()

    def __deepcopy__(self, memo) -> FixedMatrix:
        return self.copy()

    def assign(self, other: FixedMatrix) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot assign {type(other).__name__} to {type(self).__name__}."
            )

        self._buffer = other._buffer.copy()

    def take(self) -> FixedMatrix:
        """Move the contents into a new matrix.

        The size is part of the type, so the source cannot be emptied; it
        keeps its values.
        """
        return self.copy()

    def to_numpy(self) -> np.ndarray:
        return self._buffer.to_numpy(self.shape)

    def tolist(self) -> list[list[Any]]:
        return self.to_numpy().tolist()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    def __str__(self) -> str:
        return format_matrix(self)


def _build_elementwise_op(op: Operation):
    def binary(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return type(self)._wrap(ops.elementwise(op, self._buffer, other._buffer))

    return binary


def _build_in_place_op(op: Operation):
    def in_place(self, other):
        if type(other) is not type(self):
            return NotImplemented

        ops.elementwise_into(op, self._buffer, other._buffer)
        return self

    return in_place


for name, op in [("add", Operation.ADDITION), ("sub", Operation.SUBTRACTION)]:
    setattr(FixedMatrix, f"__{name}__", _build_elementwise_op(op))
    setattr(FixedMatrix, f"__i{name}__", _build_in_place_op(op))
