"""Read-only view over a SparseMatrix.

The free operators in spmat._ops and spmat._norm are written against this
view instead of the matrix itself. The view exposes iteration over entries
and slices plus read-only compressed arrays; it offers no way to mutate the
underlying stores.
"""

from itertools import groupby
from operator import itemgetter
from typing import TYPE_CHECKING, Any, Iterator, List, Tuple

import numpy as np

from ._ordering import StorageOrder
from ._storage import CompressedStorage
from .error import MatrixStateError

if TYPE_CHECKING:
    from ._matrix import SparseMatrix

__all__ = ['MatrixView']


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class MatrixView:
    """Read-only capability view of a SparseMatrix.

    The view follows the matrix: after compress()/uncompress() it reports
    the new active representation.
    """

    __slots__ = ('_matrix',)

    def __init__(self, matrix: 'SparseMatrix'):
        self._matrix = matrix

    # =========================================================================
    # Metadata
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        return self._matrix.shape

    @property
    def rows(self) -> int:
        return self._matrix.rows

    @property
    def cols(self) -> int:
        return self._matrix.cols

    @property
    def dtype(self) -> str:
        return self._matrix.dtype

    @property
    def order(self) -> StorageOrder:
        return self._matrix.order

    @property
    def is_compressed(self) -> bool:
        return self._matrix.is_compressed

    @property
    def nnz(self) -> int:
        return self._matrix.nnz

    # =========================================================================
    # Traversal
    # =========================================================================

    def entries(self) -> Iterator[Tuple[int, int, Any]]:
        """Yield (row, col, value) for every stored entry in storage order."""
        storage = self._matrix._storage
        to_coords = self.order.to_coords
        if isinstance(storage, CompressedStorage):
            for primary in range(storage.primary_size):
                for secondary, value in storage.iter_slice(primary):
                    row, col = to_coords(primary, secondary)
                    yield row, col, value
        else:
            for (primary, secondary), value in storage.items():
                row, col = to_coords(primary, secondary)
                yield row, col, value

    def slices(self) -> Iterator[Tuple[int, Any, Any]]:
        """Yield (primary, secondaries, values) for every non-empty slice.

        In compressed form secondaries/values are read-only array views; in
        uncompressed form they are lists.
        """
        storage = self._matrix._storage
        if isinstance(storage, CompressedStorage):
            indices = _readonly(storage.indices)
            data = _readonly(storage.data)
            for primary in range(storage.primary_size):
                start, end = storage.bounds(primary)
                if end > start:
                    yield primary, indices[start:end], data[start:end]
        else:
            for primary, group in groupby(storage.items(), key=lambda kv: kv[0][0]):
                pairs: List = list(group)
                yield (
                    primary,
                    [key[1] for key, _ in pairs],
                    list(map(itemgetter(1), pairs)),
                )

    def compressed_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Read-only (indptr, indices, data) of the compressed store.

        Raises:
            MatrixStateError: If the matrix is uncompressed.
        """
        storage = self._matrix._storage
        if not isinstance(storage, CompressedStorage):
            raise MatrixStateError("Matrix is uncompressed; call compress() first")
        return (
            _readonly(storage.indptr),
            _readonly(storage.indices),
            _readonly(storage.data),
        )

    def __repr__(self) -> str:
        return f"MatrixView({self._matrix!r})"
