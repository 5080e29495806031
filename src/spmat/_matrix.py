"""Sparse Matrix with two interchangeable representations.

SparseMatrix holds exactly one of two stores at a time:

- Uncompressed: an ordered coordinate map. Element assignment inserts new
  entries and grows the matrix when a coordinate lies outside its shape.
- Compressed: CSR (row order) or CSC (column order) arrays. The structure
  is fixed; existing entries may be overwritten, nothing may be inserted.

compress() and uncompress() move the data between the two without loss.
The storage order and the element dtype are chosen at construction and
never change afterwards.

Example:
    >>> from spmat import SparseMatrix, StorageOrder, NormType
    >>> m = SparseMatrix(2, 2, dtype='float64', order=StorageOrder.ROW)
    >>> m[0, 0] = 3.0
    >>> m[1, 1] = 4.0
    >>> m.norm(NormType.FROBENIUS)
    5.0
    >>> m.compress()
    >>> m @ [1.0, 1.0]
    array([3., 4.])
"""

import operator
import sys
import warnings
from typing import Any, Iterable, Iterator, Optional, TextIO, Tuple, Union

import numpy as np
from scipy import sparse as sp

from ._config import config
from ._dtypes import validate_dtype, zero_of
from ._format import render
from ._norm import norm as _norm
from ._ops import matmul_column, matvec
from ._ordering import NormType, StorageOrder
from ._storage import CompressedStorage, CoordinateStorage, Representation
from ._typing import DTypeLike, OrderLike, Triple
from ._view import MatrixView
from .error import InvalidArgumentError, MatrixStateError, OutOfRangeError

__all__ = ['SparseMatrix']


def _check_dim(value: Any, name: str) -> int:
    value = operator.index(value)
    if value < 0:
        raise InvalidArgumentError(f"Invalid {name}: {value}")
    return value


class SparseMatrix:
    """Sparse matrix with coordinate and compressed representations.

    Attributes:
        shape: Matrix dimensions (rows, cols).
        dtype: Element dtype name ('float64', 'complex128', ...).
        order: Storage ordering policy.
        is_compressed: Whether the compressed store is active.
        nnz: Number of stored entries.

    Element access:
        m[i, j]          read; zero for absent in-range coordinates
        m[i, j] = v      write; grows when uncompressed, never inserts
                         when compressed
    """

    __slots__ = ('_shape', '_dtype', '_order', '_storage')

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        dtype: DTypeLike = 'float64',
        order: OrderLike = StorageOrder.ROW,
    ):
        """Create an empty, uncompressed matrix.

        Args:
            rows: Number of rows (0 allowed, grows on assignment).
            cols: Number of columns (0 allowed, grows on assignment).
            dtype: Integer, floating or complex element type.
            order: StorageOrder member or its name.

        Raises:
            TypeError: If dtype is not a real-or-complex numeric type.
            InvalidArgumentError: If a dimension is negative.
        """
        self._shape = (_check_dim(rows, 'rows'), _check_dim(cols, 'cols'))
        self._dtype = validate_dtype(dtype)
        self._order = StorageOrder.parse(order)
        self._storage: Union[CoordinateStorage, CompressedStorage] = CoordinateStorage()

    @classmethod
    def from_triples(
        cls,
        triples: Iterable[Triple],
        shape: Optional[Tuple[int, int]] = None,
        dtype: DTypeLike = 'float64',
        order: OrderLike = StorageOrder.ROW,
    ) -> 'SparseMatrix':
        """Build an uncompressed matrix from (row, col, value) triples.

        Without a shape the matrix grows to fit the triples. With a shape,
        a triple outside it raises OutOfRangeError. Later triples overwrite
        earlier ones at the same coordinate.
        """
        if shape is None:
            mat = cls(0, 0, dtype=dtype, order=order)
            for i, j, value in triples:
                mat[i, j] = value
            return mat

        mat = cls(shape[0], shape[1], dtype=dtype, order=order)
        for i, j, value in triples:
            i, j = mat._index(i, j)
            mat._check_bounds(i, j)
            mat[i, j] = value
        return mat

    @classmethod
    def from_dense(
        cls,
        dense: Any,
        dtype: Optional[DTypeLike] = None,
        order: OrderLike = StorageOrder.ROW,
    ) -> 'SparseMatrix':
        """Build an uncompressed matrix from a 2-D array-like.

        Args:
            dense: Nested lists or numpy array.
            dtype: Element type; defaults to the array's dtype.
            order: Storage order.
        """
        arr = np.asarray(dense)
        if arr.ndim != 2:
            raise InvalidArgumentError(f"Expected a 2-D array, got {arr.ndim}-D")
        mat = cls(arr.shape[0], arr.shape[1],
                  dtype=arr.dtype if dtype is None else dtype, order=order)
        for i, j in zip(*np.nonzero(arr)):
            mat[int(i), int(j)] = arr[i, j]
        return mat

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return self._shape

    @property
    def rows(self) -> int:
        return self._shape[0]

    @property
    def cols(self) -> int:
        return self._shape[1]

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def order(self) -> StorageOrder:
        return self._order

    @property
    def format(self) -> str:
        """'csr' under row order, 'csc' under column order."""
        return self._order.format

    @property
    def is_compressed(self) -> bool:
        return isinstance(self._storage, CompressedStorage)

    @property
    def representation(self) -> Representation:
        return self._storage.representation

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return self._storage.nnz

    @property
    def size(self) -> int:
        """Total number of elements (rows * cols)."""
        return self._shape[0] * self._shape[1]

    @property
    def density(self) -> float:
        """Fraction of stored elements."""
        total = self.size
        return self.nnz / total if total > 0 else 0.0

    @property
    def indptr(self) -> np.ndarray:
        """Offsets array (compressed form only, read-only)."""
        return self.view().compressed_arrays()[0]

    @property
    def indices(self) -> np.ndarray:
        """Secondary index array (compressed form only, read-only)."""
        return self.view().compressed_arrays()[1]

    @property
    def data(self) -> np.ndarray:
        """Values array (compressed form only, read-only)."""
        return self.view().compressed_arrays()[2]

    # =========================================================================
    # Element Access
    # =========================================================================

    @staticmethod
    def _index(i: Any, j: Any) -> Tuple[int, int]:
        i, j = operator.index(i), operator.index(j)
        if i < 0 or j < 0:
            raise OutOfRangeError(f"Negative index ({i}, {j})")
        return i, j

    def _check_bounds(self, i: int, j: int) -> None:
        if i >= self._shape[0] or j >= self._shape[1]:
            raise OutOfRangeError(
                f"Index ({i}, {j}) out of bounds for shape {self._shape}"
            )

    def _convert(self, value: Any) -> Any:
        return np.dtype(self._dtype).type(value)

    def at(self, i: int, j: int) -> Any:
        """Read element (i, j).

        Returns:
            The stored value, or zero of the dtype if (i, j) holds no entry.

        Raises:
            OutOfRangeError: If (i, j) lies outside the shape.
        """
        i, j = self._index(i, j)
        self._check_bounds(i, j)
        primary, secondary = self._order.to_storage(i, j)
        storage = self._storage
        if isinstance(storage, CompressedStorage):
            k = storage.find(primary, secondary)
            return storage.data[k] if k >= 0 else zero_of(self._dtype)
        return storage.get((primary, secondary), zero_of(self._dtype))

    def set(self, i: int, j: int, value: Any) -> None:
        """Write element (i, j).

        Uncompressed: grows the shape to include (i, j) when needed; a zero
        value removes the entry. Compressed: only existing entries can be
        overwritten.

        Raises:
            OutOfRangeError: In compressed form, if (i, j) lies outside the
                shape or holds no entry.
        """
        i, j = self._index(i, j)
        value = self._convert(value)
        key = self._order.to_storage(i, j)
        storage = self._storage

        if isinstance(storage, CompressedStorage):
            self._check_bounds(i, j)
            k = storage.find(*key)
            if k < 0:
                raise OutOfRangeError(
                    f"Matrix in compressed form, cannot add new element at ({i}, {j})"
                )
            storage.data[k] = value
            return

        if i >= self._shape[0] or j >= self._shape[1]:
            self._shape = (max(self._shape[0], i + 1), max(self._shape[1], j + 1))
        if value == 0:
            storage.discard(key)
        else:
            storage.set(key, value)

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        i, j = self._unpack(key)
        return self.at(i, j)

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        i, j = self._unpack(key)
        self.set(i, j, value)

    @staticmethod
    def _unpack(key: Any) -> Tuple[Any, Any]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix index must be a (row, col) pair, got {key!r}")
        return key

    def items(self) -> Iterator[Triple]:
        """Iterate over stored (row, col, value) triples in storage order."""
        return self.view().entries()

    # =========================================================================
    # Representation Changes
    # =========================================================================

    def compress(self) -> None:
        """Switch to the compressed (CSR/CSC) representation. No-op if compressed."""
        storage = self._storage
        if isinstance(storage, CompressedStorage):
            return

        primary_size = self._order.primary_size(self._shape)
        nnz = storage.nnz
        indptr = np.zeros(primary_size + 1, dtype=np.int64)
        indices = np.empty(nnz, dtype=np.int64)
        data = np.empty(nnz, dtype=self._dtype)

        count = 0
        entries = storage.entries
        for p in range(primary_size):
            indptr[p] = count
            for key in storage.slice_keys(p):
                indices[count] = key[1]
                data[count] = entries[key]
                count += 1
        indptr[primary_size] = count

        self._storage = CompressedStorage(
            indptr=indptr, indices=indices[:count], data=data[:count]
        )

    def uncompress(self) -> None:
        """Switch to the coordinate representation. No-op if uncompressed."""
        storage = self._storage
        if not isinstance(storage, CompressedStorage):
            return

        coords = CoordinateStorage()
        for p in range(storage.primary_size):
            for s, value in storage.iter_slice(p):
                if value != 0:
                    coords.entries[(p, s)] = value
        self._storage = coords

    def resize(self, rows: int, cols: int) -> None:
        """Set the shape of an uncompressed matrix.

        Entries falling outside a smaller shape are dropped. A compressed
        matrix keeps its shape: the call is ignored with a RuntimeWarning.
        """
        if self.is_compressed:
            warnings.warn(
                "resize() ignored: matrix is compressed, call uncompress() first",
                RuntimeWarning,
                stacklevel=2,
            )
            return
        rows, cols = _check_dim(rows, 'rows'), _check_dim(cols, 'cols')
        if rows < self._shape[0] or cols < self._shape[1]:
            self._storage.prune(*self._order.to_storage(rows, cols))
        self._shape = (rows, cols)

    # =========================================================================
    # Import
    # =========================================================================

    def read(self, source: Any) -> 'SparseMatrix':
        """Replace the content with a Matrix-Market coordinate file.

        The shape comes from the file and the matrix ends up uncompressed.
        Dtype and order are kept. On any error the matrix is left untouched.

        Args:
            source: Path or open text file.

        Returns:
            self

        Raises:
            MalformedInputError: If the file cannot be parsed or its values
                do not fit the dtype.
        """
        from .io import load_matrix_market, check_field

        parsed = load_matrix_market(source)
        check_field(parsed.header, self._dtype)

        to_storage = self._order.to_storage
        coords = CoordinateStorage()
        for i, j, value in parsed.entries:
            value = self._convert(value)
            if value != 0:
                coords.entries[to_storage(i, j)] = value

        self._shape = parsed.shape
        self._storage = coords
        return self

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def view(self) -> MatrixView:
        """Read-only view for the free operators."""
        return MatrixView(self)

    def norm(self, kind: Union[NormType, str] = NormType.FROBENIUS) -> float:
        """One, infinity or Frobenius norm (see spmat._norm)."""
        return _norm(self.view(), kind)

    def dot(self, other: Any) -> np.ndarray:
        """Product with a vector or a single-column SparseMatrix."""
        if isinstance(other, SparseMatrix):
            return matmul_column(self.view(), other.view())
        return matvec(self.view(), other)

    def __matmul__(self, other: Any) -> np.ndarray:
        if isinstance(other, (SparseMatrix, np.ndarray, list, tuple)):
            return self.dot(other)
        return NotImplemented

    # =========================================================================
    # Conversion
    # =========================================================================

    def copy(self) -> 'SparseMatrix':
        """Deep copy in the same representation."""
        mat = SparseMatrix(self._shape[0], self._shape[1],
                           dtype=self._dtype, order=self._order)
        mat._storage = self._storage.copy()
        return mat

    def to_dense(self) -> np.ndarray:
        """Dense numpy array of shape (rows, cols)."""
        dense = np.zeros(self._shape, dtype=self._dtype)
        for i, j, value in self.items():
            dense[i, j] = value
        return dense

    def to_scipy(self) -> Any:
        """Convert to scipy.sparse.csr_matrix (row order) or csc_matrix."""
        if self.is_compressed:
            storage = self._storage
            cls = sp.csr_matrix if self._order is StorageOrder.ROW else sp.csc_matrix
            return cls(
                (storage.data.copy(), storage.indices.copy(), storage.indptr.copy()),
                shape=self._shape,
            )

        triples = list(self.items())
        rows = np.array([t[0] for t in triples], dtype=np.int64)
        cols = np.array([t[1] for t in triples], dtype=np.int64)
        values = np.array([t[2] for t in triples], dtype=self._dtype)
        coo = sp.coo_matrix((values, (rows, cols)), shape=self._shape)
        return coo.asformat(self._order.format)

    # =========================================================================
    # Rendering
    # =========================================================================

    def to_string(self) -> str:
        """Diagnostic rendering, see spmat._format."""
        return render(self.view(), config.display)

    def show(self, file: Optional[TextIO] = None) -> None:
        """Print the diagnostic rendering."""
        print(self.to_string(), file=file if file is not None else sys.stdout)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"shape={self._shape}, nnz={self.nnz}, dtype={self._dtype}, "
                f"order={self._order.value}, {self.representation.value})")

    def __len__(self) -> int:
        """Return number of rows."""
        return self._shape[0]

    def __bool__(self) -> bool:
        """Return True if the matrix stores any entry."""
        return self.nnz > 0
