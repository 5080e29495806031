"""Diagnostic textual rendering of sparse matrices.

Not a stable format. Small matrices render as a dense grid (uncompressed
form) or as their three raw arrays (compressed form); anything with a
dimension above DisplayConfig.dense_threshold renders as a listing of
(row, column, value) triples for stored entries only.
"""

from typing import Any, Iterable, List

import numpy as np

from ._config import DisplayConfig
from ._typing import SparseView

__all__ = ['render', 'format_value']


def format_value(value: Any, precision: int = 6) -> str:
    """Format one scalar: integers verbatim, others with `precision` digits."""
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (complex, np.complexfloating)):
        value = complex(value)
        return f"({value.real:.{precision}g}{value.imag:+.{precision}g}j)"
    return f"{float(value):.{precision}g}"


def _join(values: Iterable[Any], precision: int) -> str:
    return "[" + " ".join(format_value(v, precision) for v in values) + "]"


def _title(view: SparseView) -> str:
    form = "Compressed" if view.is_compressed else "Uncompressed"
    layout = view.order.format if view.is_compressed else f"{view.order.value} order"
    return (
        f"{form} sparse matrix ({layout}), shape={view.shape}, "
        f"nnz={view.nnz}, dtype={view.dtype}"
    )


def _render_dense(view: SparseView, precision: int) -> List[str]:
    rows, cols = view.shape
    grid = [["0"] * cols for _ in range(rows)]
    for i, j, value in view.entries():
        grid[i][j] = format_value(value, precision)
    width = max((len(cell) for line in grid for cell in line), default=1)
    return [" ".join(cell.rjust(width) for cell in line) for line in grid]


def _render_arrays(view: SparseView, precision: int) -> List[str]:
    indptr, indices, data = view.compressed_arrays()
    return [
        f"indptr:  {_join(indptr, precision)}",
        f"indices: {_join(indices, precision)}",
        f"data:    {_join(data, precision)}",
    ]


def _render_triples(view: SparseView, precision: int, limit: int) -> List[str]:
    lines = []
    for count, (i, j, value) in enumerate(view.entries()):
        if count >= limit:
            lines.append(f"... ({view.nnz - limit} more entries)")
            break
        lines.append(f"({i}, {j}): {format_value(value, precision)}")
    return lines


def render(view: SparseView, display: DisplayConfig) -> str:
    """Render a matrix view according to the display configuration."""
    rows, cols = view.shape
    small = rows <= display.dense_threshold and cols <= display.dense_threshold
    if small and view.is_compressed:
        body = _render_arrays(view, display.precision)
    elif small:
        body = _render_dense(view, display.precision)
    else:
        body = _render_triples(view, display.precision, display.max_listed_entries)
    return "\n".join([_title(view)] + body)
