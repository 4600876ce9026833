from __future__ import annotations
from enum import IntEnum
from typing import Union


class ErrorCode(IntEnum):
    """Status codes reported by estimator operations."""
    OK = 0
    NULL_ARGUMENT = -1
    INVALID_PRECISION = -2
    UNINITIALIZED = -3
    ALLOCATION_FAILURE = -4
    INCOMPATIBLE_HASH = -5


_ERROR_STRINGS = {
    ErrorCode.OK: "ok",
    ErrorCode.NULL_ARGUMENT: "required argument is missing",
    ErrorCode.INVALID_PRECISION: "precision is out of range",
    ErrorCode.UNINITIALIZED: "estimator is not initialized",
    ErrorCode.ALLOCATION_FAILURE: "could not allocate register array",
    ErrorCode.INCOMPATIBLE_HASH: "hash configuration is incompatible",
}

UNKNOWN_ERROR = "unknown error"


class HLLError(Exception):
    """Base class for all estimator errors."""
    code = ErrorCode.OK

    def __init__(self, message: str = ""):
        super().__init__(message or error_string(self.code))


class NullArgumentError(HLLError, TypeError):
    code = ErrorCode.NULL_ARGUMENT


class InvalidPrecisionError(HLLError, ValueError):
    code = ErrorCode.INVALID_PRECISION


class UninitializedError(HLLError, RuntimeError):
    code = ErrorCode.UNINITIALIZED


class AllocationError(HLLError, MemoryError):
    code = ErrorCode.ALLOCATION_FAILURE


class IncompatibleHashError(HLLError, ValueError):
    code = ErrorCode.INCOMPATIBLE_HASH


class HashSizeError(IncompatibleHashError):
    """Raised when the hash width is not one of the supported sizes."""


def error_string(error: Union[int, ErrorCode, HLLError]) -> str:
    """Map an error code (or an HLLError) to a human-readable string.

    Args:
        error: An ErrorCode, its integer value, or an HLLError instance

    Returns:
        Description of the error. Non-negative codes map to "ok" and
        unrecognized negative codes map to "unknown error".
    """
    if isinstance(error, HLLError):
        error = error.code
    if error >= 0:
        return _ERROR_STRINGS[ErrorCode.OK]
    try:
        return _ERROR_STRINGS[ErrorCode(error)]
    except ValueError:
        return UNKNOWN_ERROR
