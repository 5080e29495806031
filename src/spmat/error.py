"""
Error handling for spmat.

Every failure the library reports is a MatrixError carrying a numeric code.
Concrete subclasses also derive from the matching builtin exception so that
callers can catch IndexError / ValueError / RuntimeError as usual.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
SPMAT_OK = 0

# General errors (1-9)
SPMAT_ERROR_UNKNOWN = 1
SPMAT_ERROR_INVALID_STATE = 2

# Argument errors (10-19)
SPMAT_ERROR_INVALID_ARGUMENT = 10
SPMAT_ERROR_DIMENSION_MISMATCH = 11
SPMAT_ERROR_INDEX_OUT_OF_BOUNDS = 14

# I/O errors (30-39)
SPMAT_ERROR_READ_ERROR = 33


# Error code to message mapping
_ERROR_MESSAGES = {
    SPMAT_OK: "Success",
    SPMAT_ERROR_UNKNOWN: "Unknown error",
    SPMAT_ERROR_INVALID_STATE: "Invalid matrix state",
    SPMAT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    SPMAT_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    SPMAT_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    SPMAT_ERROR_READ_ERROR: "Read error",
}


def error_message(code: int) -> str:
    """Default message for an error code."""
    return _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")


# =============================================================================
# Exception Classes
# =============================================================================

class MatrixError(Exception):
    """
    Base exception for all spmat errors.
    """

    code = SPMAT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = error_message(self.code)
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MatrixError":
        """Create exception from error code with optional context."""
        base_msg = error_message(code)
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code=code)


class InvalidArgumentError(MatrixError, ValueError):
    """An argument has an unacceptable value."""

    code = SPMAT_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(InvalidArgumentError):
    """Operand sizes are incompatible with the left operand."""

    code = SPMAT_ERROR_DIMENSION_MISMATCH


class OutOfRangeError(MatrixError, IndexError):
    """Coordinate outside the declared shape, or new entry in compressed form."""

    code = SPMAT_ERROR_INDEX_OUT_OF_BOUNDS


class MalformedInputError(MatrixError, ValueError):
    """Import source cannot be parsed or does not fit the target matrix."""

    code = SPMAT_ERROR_READ_ERROR


class MatrixStateError(MatrixError, RuntimeError):
    """Operation not available in the matrix's current representation."""

    code = SPMAT_ERROR_INVALID_STATE


__all__ = [
    "SPMAT_OK",
    "SPMAT_ERROR_UNKNOWN",
    "SPMAT_ERROR_INVALID_STATE",
    "SPMAT_ERROR_INVALID_ARGUMENT",
    "SPMAT_ERROR_DIMENSION_MISMATCH",
    "SPMAT_ERROR_INDEX_OUT_OF_BOUNDS",
    "SPMAT_ERROR_READ_ERROR",
    "error_message",
    "MatrixError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "OutOfRangeError",
    "MalformedInputError",
    "MatrixStateError",
]
