"""Exceptions raised by both matrix kinds."""
from __future__ import annotations

import enum
from dataclasses import dataclass


class Operation(enum.Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"


@dataclass(frozen=True)
class ShapeMismatchInfo:
    """Which binary operation failed and the shapes it was given."""

    operation: Operation
    lhs_rows: int
    lhs_columns: int
    rhs_rows: int
    rhs_columns: int


@dataclass(frozen=True)
class Splice:
    """A rectangular region: start corner plus extent."""

    row_start: int
    column_start: int
    row_extent: int
    column_extent: int


class MatrixError(Exception):
    """Base class for every matrix error."""


class InvalidShape(MatrixError, ValueError):
    def __init__(self, rows: int, columns: int) -> None:
        self.rows = rows
        self.columns = columns
        super().__init__(
            f"Matrix shape must be at least 1x1, got {rows}x{columns}."
        )


class EmptySource(MatrixError, ValueError):
    def __init__(self) -> None:
        super().__init__("Cannot build a matrix from an empty sequence.")


class InitializerSizeMismatch(MatrixError, ValueError):
    def __init__(self, initializer_size: int, matrix_size: int) -> None:
        self.initializer_size = initializer_size
        self.matrix_size = matrix_size
        super().__init__(
            f"Initializer has {initializer_size} elements, "
            f"matrix holds {matrix_size}."
        )


class IndexOutOfBounds(MatrixError, IndexError):
    def __init__(self, index: int, matrix_size: int) -> None:
        self.index = index
        self.matrix_size = matrix_size
        super().__init__(f"Index {index} is out of bounds for size {matrix_size}.")


class RowColumnOutOfBounds(MatrixError, IndexError):
    def __init__(
        self, row: int, column: int, matrix_rows: int, matrix_columns: int
    ) -> None:
        self.row = row
        self.column = column
        self.matrix_rows = matrix_rows
        self.matrix_columns = matrix_columns
        super().__init__(
            f"Position ({row}, {column}) is out of bounds "
            f"for a {matrix_rows}x{matrix_columns} matrix."
        )


class ShapeMismatch(MatrixError, ValueError):
    """Operands of a binary operation have incompatible shapes.

    The full descriptor is kept on ``info``; its fields are mirrored as
    attributes for convenience.
    """

    def __init__(
        self,
        operation: Operation,
        lhs_rows: int,
        lhs_columns: int,
        rhs_rows: int,
        rhs_columns: int,
    ) -> None:
        self.info = ShapeMismatchInfo(
            operation, lhs_rows, lhs_columns, rhs_rows, rhs_columns
        )
        super().__init__(
            f"Cannot apply {operation.value} to {lhs_rows}x{lhs_columns} "
            f"and {rhs_rows}x{rhs_columns} matrices."
        )

    @property
    def operation(self) -> Operation:
        return self.info.operation

    @property
    def lhs_rows(self) -> int:
        return self.info.lhs_rows

    @property
    def lhs_columns(self) -> int:
        return self.info.lhs_columns

    @property
    def rhs_rows(self) -> int:
        return self.info.rhs_rows

    @property
    def rhs_columns(self) -> int:
        return self.info.rhs_columns


class SpliceOutOfBounds(MatrixError, IndexError):
    def __init__(self, splice: Splice, matrix_rows: int, matrix_columns: int) -> None:
        self.splice = splice
        self.matrix_rows = matrix_rows
        self.matrix_columns = matrix_columns
        super().__init__(
            f"{splice} does not fit in a {matrix_rows}x{matrix_columns} matrix."
        )


class ElementTypeMismatch(MatrixError, TypeError):
    def __init__(self, lhs_dtype, rhs_dtype) -> None:
        self.lhs_dtype = lhs_dtype
        self.rhs_dtype = rhs_dtype
        super().__init__(f"Element types differ: {lhs_dtype} and {rhs_dtype}.")
