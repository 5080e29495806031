"""Storage ordering policy.

The ordering policy decides which axis is primary. Under ROW ordering the
coordinate store iterates row by row and the compressed store is CSR; under
COLUMN ordering it iterates column by column and the compressed store is CSC.

Coordinates are stored as (primary, secondary) pairs so that plain tuple
comparison is the policy's order.
"""

from enum import Enum
from typing import Tuple, Union

from .error import InvalidArgumentError

__all__ = ['StorageOrder', 'NormType']


class StorageOrder(Enum):
    """Storage ordering of a sparse matrix.

    Attributes:
        ROW: Pairs compare by row, then column. Rows are the primary axis.
        COLUMN: Pairs compare by column, then row. Columns are the primary axis.
    """
    ROW = 'row'
    COLUMN = 'column'

    @classmethod
    def parse(cls, value: Union[str, 'StorageOrder']) -> 'StorageOrder':
        """Accept a member or its name ('row', 'csr', 'column', 'col', 'csc')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ('row', 'rows', 'csr'):
                return cls.ROW
            if key in ('column', 'col', 'columns', 'csc'):
                return cls.COLUMN
        raise InvalidArgumentError(f"Unknown storage order: {value!r}")

    @property
    def format(self) -> str:
        """Compressed format name ('csr' or 'csc')."""
        return 'csr' if self is StorageOrder.ROW else 'csc'

    def to_storage(self, row: int, col: int) -> Tuple[int, int]:
        """Map (row, col) to the (primary, secondary) storage key."""
        if self is StorageOrder.ROW:
            return row, col
        return col, row

    def to_coords(self, primary: int, secondary: int) -> Tuple[int, int]:
        """Map a (primary, secondary) storage key back to (row, col)."""
        if self is StorageOrder.ROW:
            return primary, secondary
        return secondary, primary

    def less(self, lhs: Tuple[int, int], rhs: Tuple[int, int]) -> bool:
        """Whether coordinate pair lhs sorts before rhs under this ordering."""
        return self.to_storage(*lhs) < self.to_storage(*rhs)

    def primary_size(self, shape: Tuple[int, int]) -> int:
        """Extent of the primary axis for a (rows, cols) shape."""
        return shape[0] if self is StorageOrder.ROW else shape[1]


class NormType(Enum):
    """Matrix norm kind.

    Attributes:
        ONE: Maximum absolute column sum.
        INFINITY: Maximum absolute row sum.
        FROBENIUS: Square root of the sum of squared magnitudes.
    """
    ONE = 'one'
    INFINITY = 'infinity'
    FROBENIUS = 'frobenius'

    @classmethod
    def parse(cls, value: Union[str, int, 'NormType']) -> 'NormType':
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ('one', '1', 'l1'):
            return cls.ONE
        if key in ('inf', 'infinity', 'max'):
            return cls.INFINITY
        if key in ('fro', 'frobenius', 'f'):
            return cls.FROBENIUS
        raise InvalidArgumentError(f"Unknown norm type: {value!r}")
