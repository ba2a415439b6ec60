"""
Global configuration for tabula.

Provides:
- The default element type used when a constructor gets ``dtype=None``
- ``TABULA_DEFAULT_DTYPE`` environment override for that default
- ``resolve_dtype``, which turns user-facing dtype arguments into ``DataType``
"""
from __future__ import annotations

import contextlib
import logging
import os
from typing import Iterator, Optional, Union

from . import types
from .types import DataType

logger = logging.getLogger(__name__)

ENV_DEFAULT_DTYPE = "TABULA_DEFAULT_DTYPE"

DTypeLike = Union[DataType, type, str, None]


class _Config:
    """
    Global configuration singleton.

    The environment variable is consulted lazily, the first time the default
    is needed, so setting it after import still takes effect.
    """

    def __init__(self) -> None:
        self._default_dtype: Optional[DataType] = None

    @property
    def default_dtype(self) -> DataType:
        if self._default_dtype is None:
            name = os.environ.get(ENV_DEFAULT_DTYPE)
            self._default_dtype = types.from_name(name) if name else types.Float64()
            logger.debug("Default element type initialized to %s", self._default_dtype)
        return self._default_dtype

    @default_dtype.setter
    def default_dtype(self, value: DTypeLike) -> None:
        if value is None:
            # Back to the environment / built-in default on next read.
            self._default_dtype = None
        else:
            self._default_dtype = resolve_dtype(value)
        logger.debug("Default element type set to %s", self._default_dtype)


_config = _Config()


def resolve_dtype(value: DTypeLike = None) -> DataType:
    """
    Turn a dtype argument into a ``DataType`` instance.

    Args:
        value: ``None`` (configured default), a ``DataType`` instance or
            class, a type name such as ``"int32"``, or a Python type
            (``int``, ``float``, ``bool``, ``complex`` or any other scalar
            type, which becomes ``Object(value)``).

    Returns:
        DataType instance

    Raises:
        TypeError: If the value cannot describe an element type
        ValueError: If a type name is unknown
    """
    if value is None:
        return _config.default_dtype
    if isinstance(value, DataType):
        return value
    if isinstance(value, str):
        return types.from_name(value)
    if isinstance(value, type):
        if issubclass(value, DataType):
            return value()
        return types.from_python_type(value)

    raise TypeError(f"Cannot interpret {value!r} as an element type.")


def get_default_dtype() -> DataType:
    return _config.default_dtype


def set_default_dtype(value: DTypeLike) -> None:
    """Set the element type used when no dtype is given. ``None`` resets it."""
    _config.default_dtype = value


@contextlib.contextmanager
def default_dtype(value: DTypeLike) -> Iterator[DataType]:
    """Temporarily change the default element type."""
    previous = _config._default_dtype
    _config.default_dtype = value
    try:
        yield _config.default_dtype
    finally:
        _config._default_dtype = previous
