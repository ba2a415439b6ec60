import logging

from . import config, errors, types
from .config import get_default_dtype, set_default_dtype
from .dense import DenseMatrix, Orientation
from .errors import (
    ElementTypeMismatch,
    EmptySource,
    IndexOutOfBounds,
    InitializerSizeMismatch,
    InvalidShape,
    MatrixError,
    Operation,
    RowColumnOutOfBounds,
    ShapeMismatch,
    ShapeMismatchInfo,
    Splice,
    SpliceOutOfBounds,
)
from .fixed import FixedMatrix
from .protocols import MatrixLike, format_matrix

__all__ = [
    "config",
    "errors",
    "types",
    "DenseMatrix",
    "FixedMatrix",
    "MatrixLike",
    "Orientation",
    "format_matrix",
    "get_default_dtype",
    "set_default_dtype",
    "MatrixError",
    "InvalidShape",
    "EmptySource",
    "InitializerSizeMismatch",
    "IndexOutOfBounds",
    "RowColumnOutOfBounds",
    "ShapeMismatch",
    "ShapeMismatchInfo",
    "SpliceOutOfBounds",
    "ElementTypeMismatch",
    "Operation",
    "Splice",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
