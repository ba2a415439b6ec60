"""Element type menu card."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class DataType(ABC):
    """Generic element type.

    Two element types are equal when they are the same kind, so instances can
    be created freely and compared.
    """

    @property
    @abstractmethod
    def numpy(self) -> type:
        """Get corresponding NumPy storage type.

        Returns:
            type: NumPy scalar type used for storage.
        """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def default(self) -> Any:
        """Value of a default-initialized element."""
        return self.numpy(0)

    def coerce(self, value: Any) -> Any:
        """Convert a Python scalar into this element type."""
        return self.numpy(value)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.name}()"

    def __str__(self) -> str:
        return self.name


class Bool(DataType):
    """Boolean elements.

    NumPy has no boolean subtract, so ``-`` and ``-=`` raise ``TypeError``.
    ``+`` is logical or and ``*`` is logical and.
    """

    numpy = np.bool_


class Int8(DataType):
    numpy = np.int8


class Int16(DataType):
    numpy = np.int16


class Int32(DataType):
    numpy = np.int32


class Int64(DataType):
    numpy = np.int64


class Float32(DataType):
    numpy = np.float32


class Float64(DataType):
    numpy = np.float64


class Complex128(DataType):
    numpy = np.complex128


class Object(DataType):
    """Any Python scalar type, e.g. ``Object(Fraction)``.

    Elements are stored as Python objects and all arithmetic goes through the
    scalar type's own operators. The default element is ``scalar_type()``.
    """

    numpy = np.object_

    def __init__(self, scalar_type: type) -> None:
        self.scalar_type = scalar_type

    @property
    def name(self) -> str:
        return f"Object[{self.scalar_type.__name__}]"

    @property
    def default(self) -> Any:
        return self.scalar_type()

    def coerce(self, value: Any) -> Any:
        if isinstance(value, self.scalar_type):
            return value
        return self.scalar_type(value)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Object) and self.scalar_type is other.scalar_type

    def __hash__(self) -> int:
        return hash((Object, self.scalar_type))

    def __repr__(self) -> str:
        return f"Object({self.scalar_type.__name__})"


_BY_NAME: dict[str, type[DataType]] = {
    cls.__name__.lower(): cls
    for cls in (Bool, Int8, Int16, Int32, Int64, Float32, Float64, Complex128)
}

# Python builtins map onto the widest matching storage.
_BY_PYTHON_TYPE: dict[type, type[DataType]] = {
    bool: Bool,
    int: Int64,
    float: Float64,
    complex: Complex128,
}


def from_name(name: str) -> DataType:
    """Look up a concrete element type by its case-insensitive name."""
    try:
        return _BY_NAME[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown element type {name!r}, expected one of {sorted(_BY_NAME)}."
        ) from None


def from_python_type(python_type: type) -> DataType:
    if python_type in _BY_PYTHON_TYPE:
        return _BY_PYTHON_TYPE[python_type]()

    return Object(python_type)
