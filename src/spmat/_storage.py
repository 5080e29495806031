"""Storage Records for the two matrix representations.

This module defines the two mutually exclusive stores a SparseMatrix holds:

- CoordinateStorage: ordered map (primary, secondary) -> value used while the
  matrix is built or randomly mutated (uncompressed form).
- CompressedStorage: offsets / secondary indices / values arrays, i.e. CSR
  under row ordering and CSC under column ordering (compressed form).

Keys of the coordinate store are already translated to (primary, secondary)
by the ordering policy, so ascending tuple order is the iteration order and a
primary slice is a contiguous range of the sorted key list.
"""

from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

__all__ = [
    'Representation',
    'CoordinateStorage',
    'CompressedStorage',
]


class Representation(Enum):
    """Active representation of a sparse matrix.

    Attributes:
        UNCOMPRESSED: Coordinate map, supports insertion and growth.
        COMPRESSED: Offset/index/value arrays, fixed structure.
    """
    UNCOMPRESSED = 'uncompressed'
    COMPRESSED = 'compressed'


# =============================================================================
# Coordinate Storage (uncompressed form)
# =============================================================================

@dataclass
class CoordinateStorage:
    """Ordered coordinate map.

    Attributes:
        entries: Mapping (primary, secondary) -> value. Never holds zeros.
        _keys: Sorted key cache, rebuilt lazily after structural changes.
    """
    entries: Dict[Tuple[int, int], Any] = field(default_factory=dict)
    _keys: Optional[List[Tuple[int, int]]] = field(default=None, repr=False)

    representation = Representation.UNCOMPRESSED

    @property
    def nnz(self) -> int:
        return len(self.entries)

    def get(self, key: Tuple[int, int], default: Any = None) -> Any:
        return self.entries.get(key, default)

    def set(self, key: Tuple[int, int], value: Any) -> None:
        if key not in self.entries:
            self._keys = None
        self.entries[key] = value

    def discard(self, key: Tuple[int, int]) -> None:
        if self.entries.pop(key, None) is not None:
            self._keys = None

    def keys(self) -> List[Tuple[int, int]]:
        """Keys in ordering-policy order."""
        if self._keys is None:
            self._keys = sorted(self.entries)
        return self._keys

    def items(self) -> Iterator[Tuple[Tuple[int, int], Any]]:
        entries = self.entries
        for key in self.keys():
            yield key, entries[key]

    def slice_keys(self, primary: int) -> List[Tuple[int, int]]:
        """Keys of one primary slice, found by range lookup."""
        keys = self.keys()
        start = bisect_left(keys, (primary,))
        end = bisect_left(keys, (primary + 1,), start)
        return keys[start:end]

    def prune(self, primary_size: int, secondary_size: int) -> int:
        """Drop keys outside [0, primary_size) x [0, secondary_size)."""
        stale = [
            key for key in self.entries
            if key[0] >= primary_size or key[1] >= secondary_size
        ]
        for key in stale:
            del self.entries[key]
        if stale:
            self._keys = None
        return len(stale)

    def copy(self) -> 'CoordinateStorage':
        return CoordinateStorage(entries=dict(self.entries))


# =============================================================================
# Compressed Storage (CSR / CSC)
# =============================================================================

@dataclass
class CompressedStorage:
    """Compressed sparse row/column arrays.

    Attributes:
        indptr: Offsets, length primary_size + 1, indptr[0] == 0.
        indices: Secondary coordinate of each entry, strictly increasing
            within a slice.
        data: Value of each entry.
    """
    indptr: np.ndarray
    indices: np.ndarray
    data: np.ndarray

    representation = Representation.COMPRESSED

    @property
    def nnz(self) -> int:
        return int(self.indptr[-1]) if len(self.indptr) else 0

    @property
    def primary_size(self) -> int:
        return len(self.indptr) - 1

    def bounds(self, primary: int) -> Tuple[int, int]:
        """[start, end) range of one primary slice."""
        return int(self.indptr[primary]), int(self.indptr[primary + 1])

    def find(self, primary: int, secondary: int) -> int:
        """Position of (primary, secondary) in data, or -1 when absent."""
        start, end = self.bounds(primary)
        indices = self.indices
        for k in range(start, end):
            if indices[k] == secondary:
                return k
        return -1

    def iter_slice(self, primary: int) -> Iterator[Tuple[int, Any]]:
        """Yield (secondary, value) pairs of one slice."""
        start, end = self.bounds(primary)
        for k in range(start, end):
            yield int(self.indices[k]), self.data[k]

    def copy(self) -> 'CompressedStorage':
        return CompressedStorage(
            indptr=self.indptr.copy(),
            indices=self.indices.copy(),
            data=self.data.copy(),
        )
