"""
Pytest configuration and shared fixtures for spmat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from spmat import SparseMatrix, StorageOrder, config

# 5x3 worked example
#
#     [[1, 0, 3],
#      [4, 5, 0],
#      [0, 8, 6],
#      [0, 1, 0],
#      [2, 0, 0]]
EXAMPLE_ENTRIES = {
    (0, 0): 1.0, (0, 2): 3.0,
    (1, 0): 4.0, (1, 1): 5.0,
    (2, 1): 8.0, (2, 2): 6.0,
    (3, 1): 1.0,
    (4, 0): 2.0,
}

EXAMPLE_MTX = """%%MatrixMarket matrix coordinate real general
% worked example
5 3 8
1 1 1.0
1 3 3.0
2 1 4.0
2 2 5.0
3 2 8.0
3 3 6.0
4 2 1.0
5 1 2.0
"""


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Restore default configuration after each test."""
    yield
    config.reset()


@pytest.fixture(params=[StorageOrder.ROW, StorageOrder.COLUMN], ids=["row", "column"])
def order(request):
    """Both storage orders."""
    return request.param


@pytest.fixture
def example_matrix(order):
    """The 5x3 worked example, uncompressed, in each storage order."""
    return make_matrix(EXAMPLE_ENTRIES, (5, 3), order=order)


@pytest.fixture
def row_matrix():
    """The 5x3 worked example in row order."""
    return make_matrix(EXAMPLE_ENTRIES, (5, 3), order=StorageOrder.ROW)


@pytest.fixture
def column_matrix():
    """The 5x3 worked example in column order."""
    return make_matrix(EXAMPLE_ENTRIES, (5, 3), order=StorageOrder.COLUMN)


@pytest.fixture
def complex_diagonal():
    """3x3 complex diagonal matrix diag(1+2j, 3+4j, 5+6j)."""
    mat = SparseMatrix(3, 3, dtype="complex128")
    mat[0, 0] = 1 + 2j
    mat[1, 1] = 3 + 4j
    mat[2, 2] = 5 + 6j
    return mat


@pytest.fixture
def mtx_file(tmp_path):
    """The worked example written as a Matrix-Market file."""
    path = tmp_path / "example.mtx"
    path.write_text(EXAMPLE_MTX)
    return path


@pytest.fixture
def random_matrix(order):
    """A random 40x30 sparse matrix with about 10% density."""
    rng = np.random.default_rng(42)
    dense = rng.standard_normal((40, 30))
    dense[rng.random((40, 30)) > 0.1] = 0.0
    return SparseMatrix.from_dense(dense, order=order), dense


# =============================================================================
# Helper Functions
# =============================================================================

def make_matrix(entries, shape, dtype="float64", order=StorageOrder.ROW):
    """Build an uncompressed matrix from a {(i, j): value} dict."""
    mat = SparseMatrix(shape[0], shape[1], dtype=dtype, order=order)
    for (i, j), value in entries.items():
        mat[i, j] = value
    return mat


def assert_same_elements(mat, dense, rtol=1e-12):
    """Assert every in-range element of mat matches the dense reference."""
    dense = np.asarray(dense)
    assert mat.shape == dense.shape
    for i in range(dense.shape[0]):
        for j in range(dense.shape[1]):
            np.testing.assert_allclose(mat[i, j], dense[i, j], rtol=rtol)
