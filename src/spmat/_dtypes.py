"""
Data Type Definitions

Provides type-safe dtype constants and the element-type capability check
that gates which scalar types may instantiate a SparseMatrix.

A matrix element must be either an arithmetic numeric type (signed or
unsigned integer, floating point) or a complex type exposing real and
imaginary components. Booleans, strings and Python objects are rejected.
"""

from typing import Any, Union
from enum import Enum

import numpy as np

__all__ = [
    'DType',
    'int32', 'int64', 'float32', 'float64', 'complex64', 'complex128',
    'normalize_dtype', 'validate_dtype',
    'is_complex_dtype', 'is_int_dtype', 'is_float_dtype',
    'zero_of',
]


class DType(Enum):
    """
    Supported element types.

    Any other integer, floating or complex numpy dtype is accepted as well;
    these members are shorthands for the common ones.

    Example:
        >>> from spmat import SparseMatrix, DType
        >>> m = SparseMatrix(3, 3, dtype=DType.complex128)
    """

    int32 = 'int32'
    int64 = 'int64'
    float32 = 'float32'
    float64 = 'float64'
    complex64 = 'complex64'
    complex128 = 'complex128'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

int32 = DType.int32
int64 = DType.int64
float32 = DType.float32
float64 = DType.float64
complex64 = DType.complex64
complex128 = DType.complex128

# numpy kind codes: signed int, unsigned int, float, complex
_ALLOWED_KINDS = frozenset('iufc')


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, type, np.dtype, Any]) -> str:
    """
    Normalize dtype to its canonical numpy name.

    Args:
        dtype: String, DType enum, numpy dtype or Python scalar type
            (int, float, complex).

    Returns:
        Canonical dtype string (e.g. 'float64').

    Raises:
        TypeError: If the dtype cannot be interpreted.

    Example:
        >>> normalize_dtype(DType.float32)
        'float32'
        >>> normalize_dtype(complex)
        'complex128'
    """
    if isinstance(dtype, DType):
        return dtype.value
    try:
        return np.dtype(dtype).name
    except TypeError as e:
        raise TypeError(f"dtype not understood: {dtype!r}") from e


def validate_dtype(dtype: Union[str, DType, type, np.dtype, Any]) -> str:
    """
    Check that dtype is a real-or-complex numeric type.

    Args:
        dtype: Anything normalize_dtype() accepts.

    Returns:
        Canonical dtype string.

    Raises:
        TypeError: If the dtype is not an integer, floating or complex type.
    """
    name = normalize_dtype(dtype)
    if np.dtype(name).kind not in _ALLOWED_KINDS:
        raise TypeError(
            f"Invalid element type: {name}. "
            f"Matrix elements must be integer, floating point or complex"
        )
    return name


def is_complex_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is complex."""
    return np.dtype(normalize_dtype(dtype)).kind == 'c'


def is_int_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is integer."""
    return np.dtype(normalize_dtype(dtype)).kind in 'iu'


def is_float_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is floating point."""
    return np.dtype(normalize_dtype(dtype)).kind == 'f'


def zero_of(dtype: Union[str, DType]):
    """Zero scalar of the given dtype."""
    return np.dtype(normalize_dtype(dtype)).type(0)
