"""
Command-line interface for spmat.

Usage:
    python -m spmat <command> [options]

Commands:
    demo     Small worked example: norms and products before/after compression
    info     Read a Matrix-Market file and print its summary and norms
    bench    Time matrix-vector products in uncompressed and compressed form
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from ._dtypes import validate_dtype
from ._matrix import SparseMatrix
from ._ops import generate_random_vector
from ._ordering import NormType, StorageOrder
from .error import MatrixError
from .io import read_matrix_market

logger = logging.getLogger("spmat.cli")


def _print_norms(mat: SparseMatrix, label: str) -> None:
    for kind in NormType:
        print(f"{kind.value.capitalize()}-norm ({label}): {mat.norm(kind):.6g}")


def _timed(func: Callable[[], np.ndarray], repeat: int) -> tuple[np.ndarray, float]:
    """Run func `repeat` times; return the last result and the best time in us."""
    best = float("inf")
    result = None
    for _ in range(max(repeat, 1)):
        t0 = time.perf_counter()
        result = func()
        best = min(best, time.perf_counter() - t0)
    return result, best * 1e6


def run_demo() -> int:
    """Replay the worked 5x3 example and a small complex example."""
    print("### Small matrix stored in ROW ordering ###")
    a = SparseMatrix(5, 3, dtype="float64", order=StorageOrder.ROW)
    for (i, j), value in {
        (0, 0): 1, (0, 2): 3, (1, 0): 4, (1, 1): 5,
        (2, 1): 8, (2, 2): 6, (3, 1): 1, (4, 0): 2,
    }.items():
        a[i, j] = value
    a.show()
    _print_norms(a, "uncompressed")

    v = [1.0, 2.0, 3.0]
    print(f"\nv = {v}")
    print(f"A @ v (uncompressed): {a @ v}")

    a.compress()
    print()
    a.show()
    _print_norms(a, "compressed")
    print(f"A @ v (compressed): {a @ v}")

    b = SparseMatrix(3, 1, order=StorageOrder.ROW)
    for i, value in enumerate(v):
        b[i, 0] = value
    b.compress()
    print(f"A @ B, B a single-column matrix: {a @ b}")

    print("\n### Complex matrix ###")
    c = SparseMatrix(3, 3, dtype="complex128")
    c[0, 0] = 1 + 2j
    c[1, 1] = 3 + 4j
    c[2, 2] = 5 + 6j
    c.show()
    w = SparseMatrix(3, 1, dtype="complex128")
    w[0, 0] = 1 + 1j
    w[1, 0] = 2 + 2j
    w[2, 0] = 3 + 3j
    print(f"C @ w: {c @ w}")
    _print_norms(c, "uncompressed")
    return 0


def run_info(path: Path, order: StorageOrder, dtype: str) -> int:
    """Print shape, density, norms and rendering of a Matrix-Market file."""
    mat = read_matrix_market(path, dtype=dtype, order=order)
    print(f"{path}: shape={mat.shape}, nnz={mat.nnz}, density={mat.density:.4g}")
    _print_norms(mat, "uncompressed")
    mat.show()
    return 0


def run_bench(path: Path, order: StorageOrder, seed: Optional[int], repeat: int) -> int:
    """Time products by a random vector before and after compression."""
    mat = read_matrix_market(path, order=order)
    vec = generate_random_vector(mat, seed=seed)
    logger.info("Benchmarking %r with %d repetitions", mat, repeat)

    uncompressed, t_unc = _timed(lambda: mat @ vec, repeat)
    print(f"M @ v, uncompressed ({order.value} order): {t_unc:.1f} us")

    mat.compress()
    compressed, t_cmp = _timed(lambda: mat @ vec, repeat)
    print(f"M @ v, compressed ({mat.format}): {t_cmp:.1f} us")

    diff = float(np.max(np.abs(uncompressed - compressed))) if len(compressed) else 0.0
    print(f"max |difference|: {diff:.3g}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="spmat",
        description="Sparse matrix driver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Worked example
  python -m spmat demo

  # Summary of a Matrix-Market file stored by columns
  python -m spmat info lnsp_131.mtx --order column

  # Time products with a seeded random vector
  python -m spmat bench lnsp_131.mtx --seed 0 --repeat 5
""",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Verbose output (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demo", help="Run the worked example")

    info_parser = subparsers.add_parser("info", help="Summarize a Matrix-Market file")
    info_parser.add_argument("file", type=Path, help="Matrix-Market file")
    info_parser.add_argument(
        "--order", choices=["row", "column"], default="row",
        help="Storage order (default: row)",
    )
    info_parser.add_argument(
        "--dtype", type=validate_dtype, default="float64",
        help="Element dtype (default: float64)",
    )

    bench_parser = subparsers.add_parser("bench", help="Time matrix-vector products")
    bench_parser.add_argument("file", type=Path, help="Matrix-Market file")
    bench_parser.add_argument(
        "--order", choices=["row", "column"], default="row",
        help="Storage order (default: row)",
    )
    bench_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    bench_parser.add_argument("--repeat", type=int, default=1, help="Repetitions")

    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "demo":
            return run_demo()
        elif args.command == "info":
            return run_info(args.file, StorageOrder.parse(args.order), args.dtype)
        elif args.command == "bench":
            return run_bench(args.file, StorageOrder.parse(args.order),
                             args.seed, args.repeat)
    except (MatrixError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1
