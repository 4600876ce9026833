"""
hllcount - Python Library for HyperLogLog Cardinality Estimation
"""

from hllcount.lib.hyperloglog import HyperLogLog, init, destroy, add, count, merge
from hllcount.lib.config import HLLConfig, PRECISION_MIN, PRECISION_MAX, DEFAULT_PRECISION
from hllcount.lib.errors import (ErrorCode, HLLError, NullArgumentError, InvalidPrecisionError,
                                 UninitializedError, AllocationError, IncompatibleHashError,
                                 HashSizeError, error_string)
from hllcount.lib.hashing import hash_string, integer_hash, XXHash

__version__ = '0.1.0'

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
