"""A module containing the owned element buffer behind every matrix."""
from __future__ import annotations

from collections.abc import Iterable, Sized
from typing import Any, Optional

import numpy as np

from tabula.errors import InitializerSizeMismatch
from tabula.types import DataType, Object


def is_sequence(content: Any) -> bool:
    """Tell an initializer sequence apart from a single fill value."""
    if isinstance(content, np.ndarray):
        return content.ndim > 0

    return isinstance(content, Iterable) and not isinstance(content, (str, bytes))


def _flat_items(content: Iterable, size: Optional[int]) -> list:
    """Elements of a non-array initializer, which must already be flat.

    ``size`` is the element count the matrix needs; ``None`` accepts any
    length. Nested elements are never reshaped: they are reported as a size
    mismatch counting every value they hold.
    """
    items = list(content)
    expected = len(items) if size is None else size
    if len(items) != expected:
        raise InitializerSizeMismatch(len(items), expected)

    if any(is_sequence(item) for item in items):
        supplied = sum(
            len(item) if is_sequence(item) and isinstance(item, Sized) else 1
            for item in items
        )
        raise InitializerSizeMismatch(supplied, expected)

    return items


class Buffer:
    """Contiguous row-major storage, exclusively owned by one matrix.

    ``data`` is always a one-dimensional array of ``dtype.numpy`` elements.
    """

    __slots__ = ("data", "dtype")

    def __init__(self, data: np.ndarray, dtype: DataType) -> None:
        self.data = data
        self.dtype = dtype

    @classmethod
    def filled(cls, size: int, value: Any, dtype: DataType) -> Buffer:
        return cls(np.full(size, dtype.coerce(value), dtype=dtype.numpy), dtype)

    @classmethod
    def default(cls, size: int, dtype: DataType) -> Buffer:
        return cls.filled(size, dtype.default, dtype)

    @classmethod
    def from_sequence(
        cls, content: Iterable, dtype: DataType, size: Optional[int] = None
    ) -> Buffer:
        """Copy ``content`` into a new buffer.

        NumPy arrays are flattened in row-major order. Any other sequence is
        taken as the flat list of elements; with ``size`` given its length
        must match. For ``Object`` types every element is coerced to the
        scalar type individually.

        Raises:
            InitializerSizeMismatch: If a non-array sequence has the wrong
                length or holds nested sequences.
        """
        if isinstance(content, np.ndarray):
            items = content.ravel()
        else:
            items = _flat_items(content, size)

        if isinstance(dtype, Object):
            if isinstance(items, np.ndarray):
                items = items.tolist()
            data = np.empty(len(items), dtype=object)
            data[:] = [dtype.coerce(item) for item in items]
            return cls(data, dtype)

        return cls(np.array(items, dtype=dtype.numpy), dtype)

    @classmethod
    def empty(cls, dtype: DataType) -> Buffer:
        return cls(np.empty(0, dtype=dtype.numpy), dtype)

    def __len__(self) -> int:
        return self.data.shape[0]

    def copy(self) -> Buffer:
        return Buffer(self.data.copy(), self.dtype)

    def release(self) -> Buffer:
        """Hand the storage over to a new buffer and leave this one empty."""
        moved = Buffer(self.data, self.dtype)
        self.data = Buffer.empty(self.dtype).data

        return moved

    def to_numpy(self, shape: tuple[int, int]) -> np.ndarray:
        return self.data.reshape(shape).copy()
