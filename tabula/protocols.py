"""Capabilities shared by both matrix kinds, and code written against them."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from tabula.buffer import is_sequence


@runtime_checkable
class MatrixLike(Protocol):
    """Anything with a shape and bounds-checked 2-D reads."""

    @property
    def rows(self) -> int:
        ...

    @property
    def columns(self) -> int:
        ...

    def at(self, row: int, column: int = ...) -> Any:
        ...


def is_scalar(value: Any) -> bool:
    """True for values a matrix may be scaled by."""
    if value is None or isinstance(value, (str, bytes, MatrixLike)):
        return False

    return not is_sequence(value)


def format_matrix(matrix: MatrixLike) -> str:
    """Render one bracketed row per line, e.g. ``[1, 2]\\n[3, 4]``."""
    lines = []
    for row in range(matrix.rows):
        cells = ", ".join(str(matrix.at(row, column)) for column in range(matrix.columns))
        lines.append(f"[{cells}]")

    return "\n".join(lines)
