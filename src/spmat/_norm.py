"""Matrix norms over a read-only sparse view.

All norms work on element magnitudes (modulus for complex entries), so
comparisons are always between real numbers.

- ONE: max absolute column sum
- INFINITY: max absolute row sum
- FROBENIUS: sqrt of the sum of squared magnitudes

For ONE and INFINITY, when the summed axis is the primary axis each slice
already holds one full line and its sum is taken directly; otherwise the
magnitudes are accumulated per secondary index.
"""

import math
from typing import Union

import numpy as np

from ._ordering import NormType, StorageOrder
from ._typing import SparseView

__all__ = ['norm']


def _magnitudes(values) -> np.ndarray:
    """Element magnitudes as float64."""
    arr = np.asarray(values)
    # integers go to float first: abs(int8(-128)) wraps and squares overflow
    if arr.dtype.kind in 'iu':
        arr = arr.astype(np.float64)
    return np.abs(arr).astype(np.float64, copy=False)


def _frobenius(view: SparseView) -> float:
    total = 0.0
    for _, _, values in view.slices():
        mags = _magnitudes(values)
        total += float(np.sum(mags * mags))
    return math.sqrt(total)


def _max_slice_sum(view: SparseView) -> float:
    best = 0.0
    for _, _, values in view.slices():
        best = max(best, float(np.sum(_magnitudes(values))))
    return best


def _max_accumulated_sum(view: SparseView, size: int) -> float:
    if size == 0:
        return 0.0
    acc = np.zeros(size, dtype=np.float64)
    for _, secondaries, values in view.slices():
        np.add.at(acc, np.asarray(secondaries, dtype=np.intp), _magnitudes(values))
    return float(acc.max())


def norm(view: SparseView, kind: Union[NormType, str] = NormType.FROBENIUS) -> float:
    """Compute a matrix norm.

    Args:
        view: Read-only matrix view.
        kind: NormType member or name ('one', 'inf', 'fro', ...).

    Returns:
        The norm as a Python float; 0.0 for a matrix without entries.
    """
    kind = NormType.parse(kind)
    if kind is NormType.FROBENIUS:
        return _frobenius(view)

    rows, cols = view.shape
    if kind is NormType.ONE:
        if view.order is StorageOrder.COLUMN:
            return _max_slice_sum(view)
        return _max_accumulated_sum(view, cols)

    if view.order is StorageOrder.ROW:
        return _max_slice_sum(view)
    return _max_accumulated_sum(view, rows)
