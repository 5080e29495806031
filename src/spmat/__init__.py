"""
spmat - Sparse Matrix with coordinate and compressed storage

A generic sparse matrix supporting:
- Two interchangeable representations (coordinate map / CSR-CSC arrays)
- Row-major or column-major storage order
- Integer, floating point and complex element types
- Matrix-vector and matrix-(single-column matrix) products
- One, infinity and Frobenius norms
- Matrix-Market coordinate import

Architecture:
    ┌──────────────────────────────────────────────┐
    │                 SparseMatrix                 │
    ├──────────────────────────────────────────────┤
    │  Storage: CoordinateStorage | Compressed     │
    │  Order:   ROW (CSR) | COLUMN (CSC)           │
    └──────────────────────────────────────────────┘

Example:
    >>> import spmat
    >>> m = spmat.SparseMatrix(5, 3)
    >>> m[0, 0] = 1.0
    >>> m[4, 2] = 2.0
    >>> m.compress()
    >>> m @ [1.0, 1.0, 1.0]
    array([1., 0., 0., 0., 2.])
"""

__version__ = '0.1.0'

from ._config import DisplayConfig, IOConfig, config, get_config, set_display
from ._dtypes import (
    DType,
    int32,
    int64,
    float32,
    float64,
    complex64,
    complex128,
    validate_dtype,
)
from ._matrix import SparseMatrix
from ._norm import norm
from ._ops import generate_random_vector, matmul_column, matvec, multiply
from ._ordering import NormType, StorageOrder
from ._storage import Representation
from ._typing import SparseView
from ._view import MatrixView
from .error import (
    DimensionMismatchError,
    InvalidArgumentError,
    MalformedInputError,
    MatrixError,
    MatrixStateError,
    OutOfRangeError,
)
from .io import parse_matrix_market, read_matrix_market

__all__ = [
    # Core classes
    'SparseMatrix',
    'MatrixView',
    'SparseView',

    # Policies
    'StorageOrder',
    'NormType',
    'Representation',

    # Type constants
    'DType',
    'int32',
    'int64',
    'float32',
    'float64',
    'complex64',
    'complex128',
    'validate_dtype',

    # Operations
    'matvec',
    'matmul_column',
    'multiply',
    'norm',
    'generate_random_vector',

    # Import
    'read_matrix_market',
    'parse_matrix_market',

    # Configuration
    'config',
    'get_config',
    'set_display',
    'DisplayConfig',
    'IOConfig',

    # Errors
    'MatrixError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'OutOfRangeError',
    'MalformedInputError',
    'MatrixStateError',
]
