"""
Tests for SparseMatrix construction, element access and resizing.
"""

import pytest
import numpy as np
from spmat import (
    SparseMatrix,
    StorageOrder,
    Representation,
    MatrixView,
    SparseView,
    OutOfRangeError,
    InvalidArgumentError,
    MatrixStateError,
    MatrixError,
)

from conftest import EXAMPLE_ENTRIES, make_matrix


class TestSparseMatrixCreation:
    """Test SparseMatrix construction."""

    def test_create_empty(self):
        """Test default construction."""
        mat = SparseMatrix()
        assert mat.shape == (0, 0)
        assert mat.nnz == 0
        assert mat.dtype == 'float64'
        assert mat.order is StorageOrder.ROW
        assert not mat.is_compressed

    def test_create_with_shape(self):
        """Test construction with explicit dimensions."""
        mat = SparseMatrix(5, 3, dtype='int32', order='column')
        assert mat.shape == (5, 3)
        assert mat.rows == 5
        assert mat.cols == 3
        assert mat.dtype == 'int32'
        assert mat.order is StorageOrder.COLUMN
        assert mat.format == 'csc'

    def test_python_scalar_dtypes(self):
        """Test Python scalar types as dtype."""
        assert SparseMatrix(1, 1, dtype=float).dtype == 'float64'
        assert SparseMatrix(1, 1, dtype=complex).dtype == 'complex128'

    @pytest.mark.parametrize("dtype", ['bool', 'object', 'str', 'datetime64[s]'])
    def test_invalid_dtype(self, dtype):
        """Test that non-numeric element types are rejected."""
        with pytest.raises(TypeError):
            SparseMatrix(2, 2, dtype=dtype)

    def test_negative_dimension(self):
        """Test that negative dimensions are rejected."""
        with pytest.raises(InvalidArgumentError):
            SparseMatrix(-1, 3)

    def test_invalid_order(self):
        """Test that unknown orders are rejected."""
        with pytest.raises(InvalidArgumentError):
            SparseMatrix(2, 2, order='diagonal')

    def test_from_triples(self):
        """Test building from triples without a shape."""
        mat = SparseMatrix.from_triples([(0, 0, 1.0), (3, 2, 5.0)])
        assert mat.shape == (4, 3)
        assert mat.nnz == 2
        assert mat[3, 2] == 5.0

    def test_from_triples_with_shape(self):
        """Test that triples outside a given shape are rejected."""
        mat = SparseMatrix.from_triples([(0, 1, 2.0)], shape=(2, 2))
        assert mat.shape == (2, 2)
        with pytest.raises(OutOfRangeError):
            SparseMatrix.from_triples([(2, 0, 1.0)], shape=(2, 2))

    def test_from_triples_last_wins(self):
        """Test that later triples overwrite earlier ones."""
        mat = SparseMatrix.from_triples([(1, 1, 2.0), (1, 1, 7.0)])
        assert mat.nnz == 1
        assert mat[1, 1] == 7.0

    def test_from_dense(self):
        """Test building from a dense 2D list."""
        dense = [
            [1.0, 0.0, 2.0, 0.0],
            [0.0, 3.0, 0.0, 4.0],
            [5.0, 0.0, 0.0, 6.0],
        ]
        mat = SparseMatrix.from_dense(dense, dtype='float32')
        assert mat.shape == (3, 4)
        assert mat.nnz == 6
        assert mat.dtype == 'float32'
        np.testing.assert_array_equal(mat.to_dense(), np.array(dense, dtype=np.float32))

    def test_from_dense_rejects_1d(self):
        """Test that from_dense needs a 2-D input."""
        with pytest.raises(InvalidArgumentError):
            SparseMatrix.from_dense([1.0, 2.0])


class TestStorageOrder:
    """Test the ordering policy."""

    @pytest.mark.parametrize("name,expected", [
        ("row", StorageOrder.ROW),
        ("CSR", StorageOrder.ROW),
        ("col", StorageOrder.COLUMN),
        ("csc", StorageOrder.COLUMN),
    ])
    def test_parse(self, name, expected):
        """Test order names."""
        assert StorageOrder.parse(name) is expected

    def test_parse_rejects_non_string(self):
        """Test that only names and members are accepted."""
        with pytest.raises(InvalidArgumentError):
            StorageOrder.parse(0)

    def test_row_less(self):
        """Test row order compares by row, then column."""
        less = StorageOrder.ROW.less
        assert less((0, 2), (1, 0))
        assert less((1, 0), (1, 1))
        assert not less((1, 0), (0, 2))
        assert not less((1, 1), (1, 1))

    def test_column_less(self):
        """Test column order compares by column, then row."""
        less = StorageOrder.COLUMN.less
        assert less((1, 0), (0, 2))
        assert less((0, 1), (1, 1))
        assert not less((0, 2), (1, 0))
        assert not less((1, 1), (1, 1))

    def test_items_follow_less(self, example_matrix):
        """Test entry iteration is sorted by the policy comparison."""
        coords = [(i, j) for i, j, _ in example_matrix.items()]
        less = example_matrix.order.less
        assert all(less(a, b) for a, b in zip(coords, coords[1:]))


class TestSparseMatrixProperties:
    """Test SparseMatrix properties."""

    def test_example_properties(self, example_matrix):
        """Test metadata of the worked example."""
        assert example_matrix.shape == (5, 3)
        assert example_matrix.nnz == 8
        assert example_matrix.size == 15
        assert example_matrix.density == pytest.approx(8 / 15)
        assert len(example_matrix) == 5
        assert bool(example_matrix)

    def test_empty_is_falsy(self):
        """Test truthiness of a matrix without entries."""
        assert not SparseMatrix(3, 3)
        assert SparseMatrix().density == 0.0

    def test_representation(self, row_matrix):
        """Test representation tracking."""
        assert row_matrix.representation is Representation.UNCOMPRESSED
        row_matrix.compress()
        assert row_matrix.representation is Representation.COMPRESSED

    def test_repr(self, row_matrix):
        """Test string representation."""
        assert repr(row_matrix) == (
            "SparseMatrix(shape=(5, 3), nnz=8, dtype=float64, order=row, uncompressed)"
        )

    def test_view_protocol(self, row_matrix):
        """Test that the view satisfies the SparseView protocol."""
        view = row_matrix.view()
        assert isinstance(view, MatrixView)
        assert isinstance(view, SparseView)
        assert view.shape == (5, 3)
        assert view.nnz == 8

    def test_view_follows_matrix(self, row_matrix):
        """Test that a view reports the current representation."""
        view = row_matrix.view()
        assert not view.is_compressed
        row_matrix.compress()
        assert view.is_compressed

    def test_arrays_require_compressed(self, row_matrix):
        """Test that raw arrays are unavailable when uncompressed."""
        with pytest.raises(MatrixStateError):
            row_matrix.indptr
        with pytest.raises(MatrixStateError):
            row_matrix.view().compressed_arrays()


class TestElementRead:
    """Test element reads."""

    def test_read_stored(self, example_matrix):
        """Test reading every stored entry."""
        for (i, j), value in EXAMPLE_ENTRIES.items():
            assert example_matrix[i, j] == value

    def test_read_absent_is_zero(self, example_matrix):
        """Test that absent in-range elements read as zero."""
        assert example_matrix[0, 1] == 0
        assert example_matrix[4, 2] == 0
        assert example_matrix.nnz == 8

    def test_read_absent_compressed(self, example_matrix):
        """Test zero reads in compressed form."""
        example_matrix.compress()
        assert example_matrix[3, 0] == 0
        assert example_matrix[2, 1] == 8.0

    def test_read_zero_dtype(self):
        """Test that the zero matches the element type."""
        mat = SparseMatrix(2, 2, dtype='complex128')
        assert isinstance(mat[0, 0], np.complex128)

    def test_read_out_of_range(self, example_matrix):
        """Test that reads outside the shape fail."""
        with pytest.raises(OutOfRangeError):
            example_matrix[5, 0]
        with pytest.raises(OutOfRangeError):
            example_matrix[0, 3]

    def test_read_out_of_range_compressed(self, example_matrix):
        """Test out-of-range reads in compressed form."""
        example_matrix.compress()
        with pytest.raises(IndexError):
            example_matrix[10, 10]

    def test_negative_index(self, example_matrix):
        """Test that negative indices are rejected."""
        with pytest.raises(OutOfRangeError):
            example_matrix[-1, 0]

    def test_bad_key(self, example_matrix):
        """Test that keys other than (row, col) pairs are rejected."""
        with pytest.raises(TypeError):
            example_matrix[1]
        with pytest.raises(TypeError):
            example_matrix[0, 0, 0]
        with pytest.raises(TypeError):
            example_matrix[1.5, 0]

    def test_at_method(self, example_matrix):
        """Test the named accessor."""
        assert example_matrix.at(1, 1) == 5.0

    def test_error_codes(self, example_matrix):
        """Test that access errors carry a numeric code."""
        with pytest.raises(MatrixError) as exc_info:
            example_matrix[7, 7]
        assert exc_info.value.code == OutOfRangeError.code


class TestUncompressedWrite:
    """Test element writes in uncompressed form."""

    def test_overwrite(self, example_matrix):
        """Test overwriting an entry."""
        example_matrix[0, 0] = 9.0
        assert example_matrix[0, 0] == 9.0
        assert example_matrix.nnz == 8

    def test_insert(self, example_matrix):
        """Test inserting a new in-range entry."""
        example_matrix[4, 2] = 7.0
        assert example_matrix[4, 2] == 7.0
        assert example_matrix.nnz == 9
        assert example_matrix.shape == (5, 3)

    def test_grow(self):
        """Test that writes outside the shape grow the matrix."""
        mat = SparseMatrix()
        mat[2, 3] = 1.0
        assert mat.shape == (3, 4)
        mat[1, 1] = 2.0
        assert mat.shape == (3, 4)
        mat[5, 0] = 3.0
        assert mat.shape == (6, 4)
        assert mat.nnz == 3

    def test_zero_write_removes(self, example_matrix):
        """Test that writing zero removes the entry."""
        example_matrix[1, 1] = 0.0
        assert example_matrix.nnz == 7
        assert example_matrix[1, 1] == 0

    def test_in_place_update(self, example_matrix):
        """Test read-modify-write through item access."""
        example_matrix[2, 2] += 1.5
        assert example_matrix[2, 2] == 7.5

    def test_value_conversion(self):
        """Test that values are converted to the element type."""
        mat = SparseMatrix(2, 2, dtype='int64')
        mat[0, 0] = 3
        assert isinstance(mat[0, 0], np.int64)
        assert mat[0, 0] == 3

    def test_items_in_row_order(self, row_matrix):
        """Test entry iteration order under row storage."""
        assert [(i, j) for i, j, _ in row_matrix.items()] == [
            (0, 0), (0, 2), (1, 0), (1, 1), (2, 1), (2, 2), (3, 1), (4, 0),
        ]

    def test_items_in_column_order(self, column_matrix):
        """Test entry iteration order under column storage."""
        assert [(i, j) for i, j, _ in column_matrix.items()] == [
            (0, 0), (1, 0), (4, 0), (1, 1), (2, 1), (3, 1), (0, 2), (2, 2),
        ]

    def test_items_order_after_inserts(self):
        """Test that iteration order is independent of insertion order."""
        mat = SparseMatrix(3, 3, order=StorageOrder.COLUMN)
        for i, j in [(2, 2), (0, 1), (1, 0), (0, 0)]:
            mat[i, j] = 1.0
        assert [(i, j) for i, j, _ in mat.items()] == [(0, 0), (1, 0), (0, 1), (2, 2)]


class TestCompressedWrite:
    """Test element writes in compressed form."""

    def test_overwrite_existing(self, example_matrix):
        """Test that existing entries can be overwritten."""
        example_matrix.compress()
        example_matrix[2, 1] = 10.0
        assert example_matrix[2, 1] == 10.0
        assert example_matrix.nnz == 8

    def test_in_place_update(self, example_matrix):
        """Test read-modify-write on an existing entry."""
        example_matrix.compress()
        example_matrix[0, 2] *= 2
        assert example_matrix[0, 2] == 6.0

    def test_insert_rejected(self, example_matrix):
        """Test that new entries cannot be added."""
        example_matrix.compress()
        with pytest.raises(OutOfRangeError):
            example_matrix[0, 1] = 1.0
        assert example_matrix.nnz == 8
        assert example_matrix[0, 1] == 0

    def test_no_growth(self, example_matrix):
        """Test that a compressed matrix never grows."""
        example_matrix.compress()
        with pytest.raises(OutOfRangeError):
            example_matrix[5, 3] = 1.0
        assert example_matrix.shape == (5, 3)

    def test_zero_write_keeps_slot(self, example_matrix):
        """Test that writing zero in compressed form keeps the entry."""
        example_matrix.compress()
        example_matrix[1, 1] = 0.0
        assert example_matrix.nnz == 8
        assert example_matrix[1, 1] == 0


class TestResize:
    """Test resize()."""

    def test_grow(self, example_matrix):
        """Test enlarging the shape."""
        example_matrix.resize(10, 10)
        assert example_matrix.shape == (10, 10)
        assert example_matrix.nnz == 8
        assert example_matrix[9, 9] == 0

    def test_shrink_prunes(self, example_matrix):
        """Test that shrinking drops entries outside the new shape."""
        example_matrix.resize(2, 2)
        assert example_matrix.shape == (2, 2)
        assert example_matrix.nnz == 3
        assert sorted((i, j) for i, j, _ in example_matrix.items()) == [
            (0, 0), (1, 0), (1, 1),
        ]
        example_matrix.resize(5, 3)
        assert example_matrix[4, 0] == 0
        assert example_matrix[0, 2] == 0

    def test_compressed_is_ignored(self, example_matrix):
        """Test that resizing a compressed matrix warns and does nothing."""
        example_matrix.compress()
        with pytest.warns(RuntimeWarning):
            example_matrix.resize(10, 10)
        assert example_matrix.shape == (5, 3)

    def test_negative(self, example_matrix):
        """Test that negative sizes are rejected."""
        with pytest.raises(InvalidArgumentError):
            example_matrix.resize(-1, 2)


class TestConversion:
    """Test copy and dense/scipy conversion."""

    def test_copy_is_independent(self, example_matrix):
        """Test that a copy does not share storage."""
        dup = example_matrix.copy()
        dup[0, 0] = 42.0
        assert example_matrix[0, 0] == 1.0
        assert dup.order is example_matrix.order

    def test_copy_compressed(self, example_matrix):
        """Test copying a compressed matrix."""
        example_matrix.compress()
        dup = example_matrix.copy()
        assert dup.is_compressed
        dup[0, 0] = 42.0
        assert example_matrix[0, 0] == 1.0

    def test_to_dense(self, example_matrix):
        """Test dense conversion."""
        expected = np.zeros((5, 3))
        for (i, j), value in EXAMPLE_ENTRIES.items():
            expected[i, j] = value
        np.testing.assert_array_equal(example_matrix.to_dense(), expected)
        example_matrix.compress()
        np.testing.assert_array_equal(example_matrix.to_dense(), expected)

    @pytest.mark.parametrize("compressed", [False, True])
    def test_to_scipy(self, example_matrix, compressed):
        """Test conversion to scipy sparse matrices."""
        if compressed:
            example_matrix.compress()
        sp_mat = example_matrix.to_scipy()
        assert sp_mat.format == example_matrix.format
        assert sp_mat.shape == (5, 3)
        assert sp_mat.nnz == 8
        np.testing.assert_array_equal(sp_mat.toarray(), example_matrix.to_dense())
