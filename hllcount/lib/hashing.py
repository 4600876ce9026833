"""Hash functions for HyperLogLog estimators.

Every hash here follows the same contract: ``hash(element, element_len)``
returns a deterministic unsigned integer of a fixed bit width. The
estimator takes the register index from the top bits of that value and
the run statistic from the bottom bits, so the output should be close to
uniform over the whole width.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Union
import xxhash # type: ignore
from hllcount.lib.errors import HashSizeError

Element = Union[bytes, bytearray, memoryview, str, int]
HashFunc = Callable[[Element, int], int]

MASK32 = 0xFFFFFFFF


def element_length(element: Element) -> int:
    """Default length in bytes of an element.

    Strings are measured after UTF-8 encoding. Integers are treated as
    4-byte words when they fit in 32 bits and as 8-byte words otherwise.
    """
    if isinstance(element, str):
        return len(element.encode('utf-8'))
    if isinstance(element, int):
        bits = element.bit_length()
        if bits <= 32:
            return 4
        if bits <= 64:
            return 8
        return (bits + 7) // 8
    return len(element)


def as_bytes(element: Element, element_len: Optional[int] = None) -> bytes:
    """Convert an element to the first ``element_len`` bytes it hashes over.

    Args:
        element: bytes-like, str (UTF-8 encoded) or int (little endian,
                 two's complement truncated to element_len bytes)
        element_len: Number of bytes to keep (default: element_length)

    Returns:
        The bytes to feed to a hash function
    """
    if element_len is None:
        element_len = element_length(element)
    if isinstance(element, int):
        value = element & ((1 << (8 * element_len)) - 1)
        return value.to_bytes(element_len, byteorder='little')
    if isinstance(element, str):
        element = element.encode('utf-8')
    return bytes(element[:element_len])


def hash_string(element: Element, element_len: Optional[int] = None) -> int:
    """32-bit multiplicative string hash (djb2: h = h * 33 + c, h0 = 5381).

    Bytes are added as signed chars, so values >= 0x80 contribute
    negatively before the result wraps to 32 bits.
    """
    h = 5381
    for b in as_bytes(element, element_len):
        if b > 127:
            b -= 256
        h = (h * 33 + b) & MASK32
    return h


def integer_hash(element: Element, element_len: Optional[int] = None) -> int:
    """Bob Jenkins' 4-byte integer mixing hash.

    Only the low 32 bits of an integer element are mixed; the length is
    ignored. Non-integer elements are read as a little endian word.
    """
    if isinstance(element, int):
        a = element & MASK32
    else:
        a = int.from_bytes(as_bytes(element, element_len)[:4], byteorder='little')
    a = (a ^ 61) ^ (a >> 16)
    a = (a + (a << 3)) & MASK32
    a = a ^ (a >> 4)
    a = (a * 0x27d4eb2d) & MASK32
    a = a ^ (a >> 15)
    return a


@dataclass(frozen=True)
class XXHash:
    """Seeded xxHash strategy producing 32- or 64-bit values.

    Instances compare by value, so two estimators built with
    ``XXHash(seed=7)`` are recognized as hash-compatible.
    """
    seed: int = 0
    hash_size: int = 32

    def __post_init__(self):
        if self.hash_size not in (32, 64):
            raise HashSizeError("hash_size must be 32 or 64")

    def __call__(self, element: Element, element_len: Optional[int] = None) -> int:
        if self.hash_size == 32:
            hasher = xxhash.xxh32(seed=self.seed)
        else:
            hasher = xxhash.xxh64(seed=self.seed)
        hasher.update(as_bytes(element, element_len))
        return hasher.intdigest()


def default_hash(hash_size: int = 32) -> HashFunc:
    """Library default hash for a given output width."""
    if hash_size == 32:
        return hash_string
    return XXHash(seed=0, hash_size=hash_size)
