"""Sparse Matrix Operations.

Free functions operating on read-only matrix views:

- matvec: matrix x dense vector
- matmul_column: matrix x single-column sparse matrix
- multiply: dispatch between the two
- generate_random_vector: random operand sized for a matrix-vector product

Every product returns a new numpy vector whose length is the left operand's
row count, whatever the storage order, the representation, or the kind of
right operand.

Example:
    >>> from spmat import SparseMatrix, matvec
    >>> m = SparseMatrix(2, 3)
    >>> m[0, 2] = 4.0
    >>> matvec(m.view(), [1.0, 1.0, 0.5])
    array([2., 0.])
"""

from typing import Any, Optional, Union

import numpy as np

from ._ordering import StorageOrder
from ._typing import SparseView, VectorInput
from ._view import MatrixView
from .error import DimensionMismatchError, InvalidArgumentError

__all__ = [
    'matvec',
    'matmul_column',
    'multiply',
    'generate_random_vector',
]


def _as_vector(vec: VectorInput, size: int) -> np.ndarray:
    arr = np.asarray(vec)
    if arr.dtype.kind not in 'biufc':
        raise TypeError(f"Vector must be numeric, got dtype {arr.dtype}")
    if arr.ndim != 1:
        raise DimensionMismatchError(
            f"Expected a 1-D vector, got an array of shape {arr.shape}"
        )
    if arr.shape[0] != size:
        raise DimensionMismatchError(
            f"Vector length {arr.shape[0]} does not match "
            f"matrix column count {size}"
        )
    return arr


# =============================================================================
# Matrix x Vector
# =============================================================================

def matvec(view: SparseView, vec: VectorInput) -> np.ndarray:
    """Multiply a sparse matrix by a dense vector.

    Args:
        view: Read-only view of the left operand.
        vec: Vector of length cols (anything numpy.asarray accepts).

    Returns:
        New array of length rows, dtype promoted from both operands.

    Raises:
        DimensionMismatchError: If vec is not 1-D or its length != cols.
    """
    rows, cols = view.shape
    x = _as_vector(vec, cols)
    result = np.zeros(rows, dtype=np.result_type(np.dtype(view.dtype), x.dtype))

    if not view.is_compressed:
        for i, j, value in view.entries():
            result[i] += value * x[j]
        return result

    indptr, indices, data = view.compressed_arrays()
    if view.order is StorageOrder.ROW:
        # CSR: one dot product per row
        for i in range(rows):
            start, end = indptr[i], indptr[i + 1]
            if end > start:
                result[i] += np.dot(data[start:end], x[indices[start:end]])
    else:
        # CSC: scale column j by x[j] and scatter into its row indices
        for j in range(cols):
            start, end = indptr[j], indptr[j + 1]
            if end > start:
                np.add.at(result, indices[start:end], data[start:end] * x[j])
    return result


# =============================================================================
# Matrix x Single-Column Matrix
# =============================================================================

def _column_to_vector(column: SparseView) -> np.ndarray:
    """Materialize a single-column matrix as a dense vector of length rows."""
    vec = np.zeros(column.shape[0], dtype=np.dtype(column.dtype))
    if not column.is_compressed:
        for i, _, value in column.entries():
            vec[i] = value
        return vec

    indptr, indices, data = column.compressed_arrays()
    if column.order is StorageOrder.ROW:
        # one slice per row, each holding at most column 0
        for i in range(column.shape[0]):
            if indptr[i + 1] > indptr[i]:
                vec[i] = data[indptr[i]]
    else:
        start, end = indptr[0], indptr[1]
        vec[indices[start:end]] = data[start:end]
    return vec


def matmul_column(view: SparseView, column: SparseView) -> np.ndarray:
    """Multiply a sparse matrix by a sparse matrix with exactly one column.

    Args:
        view: Read-only view of the left operand.
        column: Read-only view of a (cols x 1) matrix with the same order.

    Returns:
        New array of length rows.

    Raises:
        DimensionMismatchError: If column does not have exactly one column,
            or its row count differs from the left operand's column count.
        InvalidArgumentError: If the storage orders differ.
    """
    if column.shape[1] != 1:
        raise DimensionMismatchError(
            f"Right operand must have exactly one column, got shape {column.shape}"
        )
    if column.order is not view.order:
        raise InvalidArgumentError(
            f"Storage orders differ: {view.order.value} x {column.order.value}"
        )
    if column.shape[0] != view.shape[1]:
        raise DimensionMismatchError(
            f"Right operand has {column.shape[0]} rows, "
            f"left operand has {view.shape[1]} columns"
        )
    return matvec(view, _column_to_vector(column))


def multiply(view: SparseView, operand: Union[MatrixView, VectorInput]) -> np.ndarray:
    """Dispatch a product on the kind of right operand."""
    if isinstance(operand, MatrixView):
        return matmul_column(view, operand)
    if isinstance(operand, (np.ndarray, list, tuple)):
        return matvec(view, operand)
    raise TypeError(
        f"Unsupported operand type for sparse product: {type(operand).__name__}"
    )


# =============================================================================
# Utilities
# =============================================================================

def generate_random_vector(
    matrix: Any,
    seed: Optional[int] = None,
    low: float = 0.0,
    high: float = 1.0,
) -> np.ndarray:
    """Random vector suitable as right operand of matrix @ vector.

    Args:
        matrix: SparseMatrix or view; supplies length (cols) and dtype.
        seed: Seed for numpy's default generator.
        low: Lower bound of the uniform draw.
        high: Upper bound of the uniform draw (inclusive for integer dtypes).

    Returns:
        Array of length cols in the matrix dtype. Complex dtypes draw both
        real and imaginary parts.
    """
    size = matrix.shape[1]
    dtype = np.dtype(matrix.dtype)
    rng = np.random.default_rng(seed)
    if dtype.kind in 'iu':
        return rng.integers(int(low), int(high), size=size, endpoint=True).astype(dtype)
    if dtype.kind == 'c':
        real = rng.uniform(low, high, size)
        imag = rng.uniform(low, high, size)
        return (real + 1j * imag).astype(dtype)
    return rng.uniform(low, high, size).astype(dtype)
