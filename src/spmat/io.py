"""
Matrix-Market Import

Reads the coordinate flavour of the Matrix-Market text format:

    %%MatrixMarket matrix coordinate real general
    % comment lines start with '%'
    5 3 8                      <- rows, cols, number of entry lines
    1 1 1.0                    <- 1-based row, 1-based column, value
    ...

Parsing is delegated to scipy.io (mminfo for the banner and size line,
mmread for the body, which also expands symmetric, skew-symmetric and
hermitian storage). This module turns scipy's result into 0-based triples,
drops explicit zeros and resolves duplicate coordinates according to
IOConfig.duplicates.

Parsing always completes before a matrix is touched, so a malformed file
never leaves a half-populated matrix behind.

Example:
    >>> from spmat.io import read_matrix_market
    >>> m = read_matrix_market("lnsp_131.mtx", order="column")
    >>> m.compress()
"""

import io
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, Iterable, List, Tuple, Union

from scipy.io import mminfo, mmread

from ._config import config
from ._dtypes import is_complex_dtype, is_int_dtype
from ._matrix import SparseMatrix
from ._ordering import StorageOrder
from ._typing import DTypeLike, OrderLike, Triple
from .error import InvalidArgumentError, MalformedInputError

logger = logging.getLogger("spmat.io")

__all__ = [
    'MatrixMarketHeader',
    'MatrixMarketData',
    'parse_matrix_market',
    'load_matrix_market',
    'read_matrix_market',
    'check_field',
]

_FIELDS = ('real', 'double', 'integer', 'complex', 'pattern')
_SYMMETRIES = ('general', 'symmetric', 'skew-symmetric', 'hermitian')
_DUPLICATE_POLICIES = ('last', 'sum', 'error')

Source = Union[str, os.PathLike, Iterable[str]]


@dataclass(frozen=True)
class MatrixMarketHeader:
    """Banner line of a Matrix-Market file."""
    format: str = 'coordinate'
    field: str = 'real'
    symmetry: str = 'general'


@dataclass
class MatrixMarketData:
    """Parsed content: header, declared shape and 0-based entries."""
    header: MatrixMarketHeader
    shape: Tuple[int, int]
    entries: List[Triple] = field(default_factory=list)

    @property
    def nnz(self) -> int:
        return len(self.entries)


# =============================================================================
# scipy glue
# =============================================================================

def _opener(source: Source) -> Callable[[], BinaryIO]:
    """Return a callable that opens a fresh binary stream over source.

    scipy reads the banner and the body in two passes, so the source has to
    be opened twice. Text sources are read once and kept in memory.
    """
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        logger.debug("Reading Matrix Market file %s", path)
        return lambda: open(path, 'rb')

    try:
        text = source.read() if hasattr(source, 'read') else ''.join(source)
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"undecodable input: {e.reason}") from e
    raw = text if isinstance(text, bytes) else text.encode('utf-8')
    return lambda: io.BytesIO(raw)


def _scipy_read(func: Callable[[BinaryIO], Any], opener: Callable[[], BinaryIO]) -> Any:
    with opener() as fh:
        try:
            return func(fh)
        except (ValueError, OverflowError) as e:
            # UnicodeDecodeError is a ValueError as well
            raise MalformedInputError(str(e) or type(e).__name__) from e


def _check_header(header: MatrixMarketHeader) -> None:
    if header.format != 'coordinate':
        raise MalformedInputError(f"unsupported format {header.format!r}, only 'coordinate'")
    if header.field not in _FIELDS:
        raise MalformedInputError(f"unsupported field {header.field!r}")
    if header.symmetry not in _SYMMETRIES:
        raise MalformedInputError(f"unsupported symmetry {header.symmetry!r}")


def _collect(rows: Iterable[int], cols: Iterable[int], values: Iterable[Any],
             policy: str) -> Dict[Tuple[int, int], Any]:
    entries: Dict[Tuple[int, int], Any] = {}
    for i, j, value in zip(rows, cols, values):
        key = (i, j)
        if key in entries:
            if policy == 'error':
                raise MalformedInputError(f"duplicate entry ({i + 1}, {j + 1})")
            if policy == 'sum':
                entries[key] += value
                continue
            logger.warning("duplicate entry (%d, %d), keeping the last value", i + 1, j + 1)
        entries[key] = value
    return entries


# =============================================================================
# Public API
# =============================================================================

def parse_matrix_market(source: Source) -> MatrixMarketData:
    """Parse Matrix-Market coordinate content.

    Args:
        source: Path, open file (text or binary) or iterable of text lines.

    Returns:
        MatrixMarketData with 0-based entries, explicit zeros dropped.

    Raises:
        MalformedInputError: If scipy cannot parse the content, the file is
            not in coordinate format, or it holds fewer entries than its
            size line declares.
        OSError: If a path cannot be opened.
    """
    policy = config.io.duplicates
    if policy not in _DUPLICATE_POLICIES:
        raise InvalidArgumentError(
            f"Unknown duplicate policy {policy!r}, expected one of {_DUPLICATE_POLICIES}"
        )

    opener = _opener(source)
    rows, cols, declared, fmt, fld, symmetry = _scipy_read(mminfo, opener)
    header = MatrixMarketHeader(format=fmt, field=fld, symmetry=symmetry)
    _check_header(header)
    logger.debug("Matrix Market header: %s, declared %d entries", header, declared)

    coo = _scipy_read(mmread, opener)
    if symmetry == 'general' and coo.nnz != declared:
        raise MalformedInputError(f"expected {declared} entries, found {coo.nnz}")

    entries = _collect(coo.row.tolist(), coo.col.tolist(), coo.data.tolist(), policy)
    triples = [(i, j, v) for (i, j), v in entries.items() if v != 0]
    if len(triples) < len(entries):
        logger.debug("Skipped %d explicit zero entries", len(entries) - len(triples))
    return MatrixMarketData(header=header, shape=(int(rows), int(cols)), entries=triples)


def load_matrix_market(source: Source) -> MatrixMarketData:
    """Parse a Matrix-Market source and log a summary."""
    data = parse_matrix_market(source)
    logger.info("Read %dx%d %s matrix with %d entries",
                data.shape[0], data.shape[1], data.header.field, data.nnz)
    return data


def check_field(header: MatrixMarketHeader, dtype: str) -> None:
    """Check that values of header.field can be stored in dtype.

    Raises:
        MalformedInputError: For complex values into a real dtype, or
            floating values into an integer dtype.
    """
    if header.field == 'complex' and not is_complex_dtype(dtype):
        raise MalformedInputError(f"complex entries cannot be stored as {dtype}")
    if header.field in ('real', 'double') and is_int_dtype(dtype):
        raise MalformedInputError(f"real entries cannot be stored as {dtype}")


def read_matrix_market(
    source: Source,
    dtype: DTypeLike = 'float64',
    order: OrderLike = StorageOrder.ROW,
) -> SparseMatrix:
    """Read a Matrix-Market file into a new uncompressed SparseMatrix."""
    return SparseMatrix(0, 0, dtype=dtype, order=order).read(source)
