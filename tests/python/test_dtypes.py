"""
Tests for element type handling and error codes.
"""

import pytest
import numpy as np
from spmat import (
    SparseMatrix,
    DType,
    float32,
    complex128,
    validate_dtype,
    MatrixError,
    InvalidArgumentError,
    DimensionMismatchError,
    OutOfRangeError,
    MalformedInputError,
    MatrixStateError,
)
from spmat._dtypes import (
    normalize_dtype,
    is_complex_dtype,
    is_int_dtype,
    is_float_dtype,
    zero_of,
)
from spmat import error


class TestDType:
    """Test DType enum and helpers."""

    def test_enum_values(self):
        """Test enum values match numpy names."""
        for member in DType:
            assert np.dtype(member.value).name == member.value

    def test_str_and_repr(self):
        """Test string forms."""
        assert str(float32) == 'float32'
        assert repr(complex128) == 'DType.complex128'

    @pytest.mark.parametrize("value,expected", [
        (DType.int32, 'int32'),
        ('float64', 'float64'),
        (np.float32, 'float32'),
        (np.dtype('complex64'), 'complex64'),
        (float, 'float64'),
        (complex, 'complex128'),
        ('f8', 'float64'),
    ])
    def test_normalize(self, value, expected):
        """Test normalization of dtype spellings."""
        assert normalize_dtype(value) == expected

    def test_normalize_unknown(self):
        """Test that uninterpretable dtypes raise TypeError."""
        with pytest.raises(TypeError):
            normalize_dtype("not-a-dtype")

    @pytest.mark.parametrize("dtype", ['int8', 'uint16', 'int64', 'float16',
                                       'float64', 'complex64', 'complex128'])
    def test_validate_accepts_numeric(self, dtype):
        """Test that integer, floating and complex types are accepted."""
        assert validate_dtype(dtype) == dtype

    @pytest.mark.parametrize("dtype", [bool, 'bool', object, str, 'S4', 'datetime64[ns]'])
    def test_validate_rejects(self, dtype):
        """Test that other types are rejected."""
        with pytest.raises(TypeError):
            validate_dtype(dtype)

    def test_kind_predicates(self):
        """Test dtype classification helpers."""
        assert is_complex_dtype('complex64')
        assert not is_complex_dtype('float64')
        assert is_int_dtype('uint8')
        assert not is_int_dtype('float32')
        assert is_float_dtype(DType.float32)
        assert not is_float_dtype('int32')

    def test_zero_of(self):
        """Test typed zeros."""
        zero = zero_of('complex64')
        assert zero == 0
        assert isinstance(zero, np.complex64)

    def test_matrix_accepts_enum(self):
        """Test DType members as matrix dtype."""
        mat = SparseMatrix(2, 2, dtype=DType.complex64)
        assert mat.dtype == 'complex64'


class TestErrors:
    """Test the error hierarchy."""

    @pytest.mark.parametrize("cls,builtin", [
        (InvalidArgumentError, ValueError),
        (DimensionMismatchError, ValueError),
        (OutOfRangeError, IndexError),
        (MalformedInputError, ValueError),
        (MatrixStateError, RuntimeError),
    ])
    def test_builtin_bases(self, cls, builtin):
        """Test that errors derive from MatrixError and a builtin."""
        assert issubclass(cls, MatrixError)
        assert issubclass(cls, builtin)

    def test_dimension_mismatch_is_invalid_argument(self):
        """Test that dimension mismatches are invalid arguments."""
        assert issubclass(DimensionMismatchError, InvalidArgumentError)

    def test_default_message(self):
        """Test that the code's message is used when none is given."""
        err = OutOfRangeError()
        assert err.code == error.SPMAT_ERROR_INDEX_OUT_OF_BOUNDS
        assert str(err) == "Index out of bounds"

    def test_from_code(self):
        """Test construction from a code with context."""
        err = MatrixError.from_code(error.SPMAT_ERROR_DIMENSION_MISMATCH, "matvec")
        assert err.code == error.SPMAT_ERROR_DIMENSION_MISMATCH
        assert str(err) == "matvec: Dimension mismatch"

    def test_malformed_from_code(self):
        """Test from_code on a subclass."""
        err = MalformedInputError.from_code(error.SPMAT_ERROR_READ_ERROR)
        assert isinstance(err, ValueError)
        assert str(err) == "Read error"

    def test_unknown_code(self):
        """Test messages for unknown codes."""
        assert error.error_message(999) == "Unknown error (code=999)"
