"""
spmat Type Definitions and Protocols.

This module provides type aliases and the read-only capability protocol the
free operators (multiplication, norms) are written against. Operators never
touch a matrix's private stores directly; they receive an object satisfying
SparseView, normally a spmat._view.MatrixView.

Example:
    >>> from spmat._typing import SparseView
    >>>
    >>> def row_count(view: SparseView) -> int:
    ...     return view.shape[0]
"""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Iterator,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

if TYPE_CHECKING:
    import numpy as np
    from spmat._dtypes import DType
    from spmat._ordering import StorageOrder


# =============================================================================
# Type Aliases
# =============================================================================

Triple = Tuple[int, int, Any]
DTypeLike = Union[str, "DType", type, "np.dtype"]
OrderLike = Union[str, "StorageOrder"]
VectorInput = Union["np.ndarray", Sequence[Any]]


# =============================================================================
# Protocol Definitions
# =============================================================================

@runtime_checkable
class SparseView(Protocol):
    """Read-only access to a sparse matrix's active representation.

    Provides:
    - shape / dtype / order / nnz metadata
    - is_compressed: which representation is active
    - entries(): (row, col, value) triples in storage order
    - slices(): per primary slice (index, secondaries, values)
    - compressed_arrays(): (indptr, indices, data) in compressed form
    """

    @property
    def shape(self) -> Tuple[int, int]:
        """(rows, cols) tuple."""
        ...

    @property
    def dtype(self) -> str:
        """Element dtype name."""
        ...

    @property
    def order(self) -> "StorageOrder":
        """Ordering policy."""
        ...

    @property
    def is_compressed(self) -> bool:
        """Whether the compressed store is active."""
        ...

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        ...

    def entries(self) -> Iterator[Triple]:
        """Stored entries as (row, col, value) in storage order."""
        ...

    def slices(self) -> Iterator[Tuple[int, Sequence[int], Sequence[Any]]]:
        """Non-empty primary slices as (primary, secondaries, values)."""
        ...

    def compressed_arrays(self) -> Tuple["np.ndarray", "np.ndarray", "np.ndarray"]:
        """(indptr, indices, data) of the compressed store."""
        ...
