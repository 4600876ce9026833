from .hyperloglog import HyperLogLog, init, destroy, add, count, merge
from .config import HLLConfig, PRECISION_MIN, PRECISION_MAX, DEFAULT_PRECISION
from .errors import (ErrorCode, HLLError, NullArgumentError, InvalidPrecisionError,
                     UninitializedError, AllocationError, IncompatibleHashError,
                     HashSizeError, error_string)
from .hashing import hash_string, integer_hash, XXHash

__all__ = [
    'HyperLogLog',
    'HLLConfig',
    'init',
    'destroy',
    'add',
    'count',
    'merge',
    'PRECISION_MIN',
    'PRECISION_MAX',
    'DEFAULT_PRECISION',
    'ErrorCode',
    'HLLError',
    'NullArgumentError',
    'InvalidPrecisionError',
    'UninitializedError',
    'AllocationError',
    'IncompatibleHashError',
    'HashSizeError',
    'error_string',
    'hash_string',
    'integer_hash',
    'XXHash'
]
