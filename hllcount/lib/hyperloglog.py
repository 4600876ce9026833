from __future__ import annotations
import math
import warnings
from typing import Iterable, Optional
import numpy as np # type: ignore
from hllcount.lib.abstractsketch import AbstractSketch
from hllcount.lib.config import (DEFAULT_HASH_SIZE, DEFAULT_PRECISION,
                                 PRECISION_MAX, PRECISION_MIN, HLLConfig)
from hllcount.lib.errors import (AllocationError, HashSizeError,
                                 IncompatibleHashError, InvalidPrecisionError,
                                 NullArgumentError, UninitializedError)
from hllcount.lib.hashing import Element, HashFunc, default_hash, element_length


class HyperLogLog(AbstractSketch):
    """HyperLogLog distinct-count estimator.

    Each element is hashed to a hash_size-bit value. The top `precision`
    bits pick one of 2^precision registers; the run of zero bits at the
    bottom of the value (scanning the low `precision` bits from bit 0)
    plus one is the rank, and each register keeps the largest rank it has
    seen. The two bit fields never overlap.

    The registers are released by destroy(); any later operation raises
    UninitializedError.
    """

    # Absent until __init__ allocates it and again after destroy()
    registers: Optional[np.ndarray] = None

    def __init__(self,
                 precision: int = DEFAULT_PRECISION,
                 hash: Optional[HashFunc] = None,
                 hash_size: int = DEFAULT_HASH_SIZE,
                 debug: bool = False):
        """Initialize HyperLogLog estimator.

        Args:
            precision: Number of bits for register indexing
                      (PRECISION_MIN-PRECISION_MAX). Standard error is
                      about 1.04 / sqrt(2^precision).
            hash: Hash function called as hash(element, element_len).
                  None selects the library default for hash_size.
            hash_size: Width of the hash output in bits (32 or 64)
            debug: Whether to print debug information

        Raises:
            InvalidPrecisionError: If precision is out of range
            HashSizeError: If hash_size is not 32 or 64
            NullArgumentError: If hash is not callable
            AllocationError: If the register array cannot be allocated
        """
        super().__init__()

        if (isinstance(precision, bool)
                or not isinstance(precision, (int, np.integer))
                or not PRECISION_MIN <= precision <= PRECISION_MAX):
            raise InvalidPrecisionError(
                f"Precision must be an integer in {PRECISION_MIN}..{PRECISION_MAX}, got {precision!r}")
        if hash_size not in (32, 64):
            raise HashSizeError("hash_size must be 32 or 64")
        if hash is None:
            hash = default_hash(hash_size)
        elif not callable(hash):
            raise NullArgumentError(f"hash must be callable, got {type(hash).__name__}")

        self._precision = int(precision)
        self.num_registers = 1 << self._precision
        self.hash = hash
        self.hash_size = hash_size
        self.debug = debug

        # Bit layout: index from the top bits, run window at the bottom
        self._hash_mask = (1 << hash_size) - 1
        self._index_shift = hash_size - self._precision
        self._index_mask = (self.num_registers - 1) << self._index_shift
        self._run_mask = self.num_registers - 1

        # Calculate alpha_mm (bias correction factor)
        if self.num_registers == 16:
            self.alpha_mm = 0.673
        elif self.num_registers == 32:
            self.alpha_mm = 0.697
        elif self.num_registers == 64:
            self.alpha_mm = 0.709
        else:
            self.alpha_mm = 0.7213 / (1 + 1.079 / self.num_registers)

        try:
            self.registers = np.zeros(self.num_registers, dtype=np.uint8)
        except MemoryError as e:
            raise AllocationError(
                f"Could not allocate {self.num_registers} registers") from e

    @classmethod
    def from_config(cls, config: Optional[HLLConfig] = None, **overrides) -> 'HyperLogLog':
        """Build an estimator from defaults, replacing only the given fields.

        Example:
            HyperLogLog.from_config(precision=12)
        """
        if config is None:
            config = HLLConfig()
        config = config.override(**overrides)
        return cls(precision=config.precision, hash=config.hash,
                   hash_size=config.hash_size, debug=config.debug)

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def config(self) -> HLLConfig:
        """Configuration this estimator was built with."""
        return HLLConfig(precision=self._precision, hash=self.hash,
                         hash_size=self.hash_size, debug=self.debug)

    def _check_initialized(self) -> None:
        if self.registers is None:
            raise UninitializedError(
                "HyperLogLog has no registers (never initialized or already destroyed)")

    def destroy(self) -> None:
        """Release the register array.

        Raises:
            UninitializedError: If the estimator was already destroyed
        """
        self._check_initialized()
        self.registers = None

    def __enter__(self) -> 'HyperLogLog':
        self._check_initialized()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.registers is not None:
            self.destroy()

    def _index(self, hash_val: int) -> int:
        """Register index from the top `precision` bits."""
        return (hash_val & self._index_mask) >> self._index_shift

    def _rho(self, hash_val: int) -> int:
        """Zero run in the low `precision` bits, counted from bit 0, plus one.

        An all-zero window scans the full hash width.
        """
        window = hash_val & self._run_mask
        if window == 0:
            return self.hash_size + 1
        return (window & -window).bit_length()

    def _hash(self, element: Element, element_len: Optional[int]) -> int:
        if element_len is None:
            element_len = element_length(element)
        return int(self.hash(element, element_len)) & self._hash_mask

    def add(self, element: Element, element_len: Optional[int] = None) -> None:
        """Add an element to the estimator.

        Args:
            element: Element to add (bytes, str or int for the built-in hashes)
            element_len: Length in bytes handed to the hash function
                         (default: element_length(element))
        """
        self._check_initialized()
        hash_val = self._hash(element, element_len)
        idx = self._index(hash_val)
        rank = self._rho(hash_val)
        if rank > self.registers[idx]:
            self.registers[idx] = rank

    def add_batch(self, elements: Iterable[Element]) -> None:
        """Add multiple elements to the estimator.

        All elements are hashed before any register changes, so a failing
        hash leaves the estimator untouched.

        Args:
            elements: Elements to add
        """
        self._check_initialized()
        hashes = [self._hash(e, None) for e in elements]
        if not hashes:
            return
        indices = np.fromiter((self._index(h) for h in hashes), dtype=np.intp, count=len(hashes))
        ranks = np.fromiter((self._rho(h) for h in hashes), dtype=self.registers.dtype, count=len(hashes))
        np.maximum.at(self.registers, indices, ranks)

    def raw_estimate(self) -> float:
        """Calculate the raw cardinality estimate before corrections.

        Returns:
            alpha_m * m^2 / sum(2^-register) over all m registers
        """
        self._check_initialized()
        sum_inv = np.sum(np.exp2(-self.registers.astype(np.float64)))
        return self.alpha_mm * self.num_registers * self.num_registers / float(sum_inv)

    def estimate_cardinality(self) -> float:
        """Estimate the cardinality with small- and large-range corrections.

        Small range (raw <= 5/2 m): linear counting over the empty
        registers, or the raw estimate when none is empty.
        Intermediate (raw <= 2^W / 30): the raw estimate.
        Large range: -2^W * ln(1 - raw / 2^W). Once raw reaches 2^W the
        logarithm's argument is clamped to 2^-W, so the estimate
        saturates at 2^W * W * ln 2 instead of going negative.
        """
        self._check_initialized()
        m = float(self.num_registers)
        raw = self.raw_estimate()

        if raw <= 2.5 * m:
            zeros = int(np.count_nonzero(self.registers == 0))
            if self.debug:
                print(f"DEBUG: raw={raw:.1f}, zero_registers={zeros}, range=small")
            if zeros == 0:
                return raw
            return m * math.log(m / zeros)

        max_value = float(1 << self.hash_size)
        if raw <= max_value / 30.0:
            if self.debug:
                print(f"DEBUG: raw={raw:.1f}, range=intermediate")
            return raw

        log_arg = 1.0 - raw / max_value
        if log_arg < 1.0 / max_value:
            warnings.warn(
                f"Raw estimate {raw:.4g} exceeds the {self.hash_size}-bit hash space; "
                "the estimate is saturated.", RuntimeWarning)
            log_arg = 1.0 / max_value
        if self.debug:
            print(f"DEBUG: raw={raw:.1f}, range=large")
        return -max_value * math.log(log_arg)

    def count(self) -> int:
        """Estimated number of distinct elements, truncated toward zero."""
        return int(self.estimate_cardinality())

    def _check_compatible(self, other: 'HyperLogLog') -> None:
        if self.hash_size != other.hash_size:
            raise IncompatibleHashError(
                f"Cannot merge HyperLogLog sketches with different hash sizes "
                f"({self.hash_size} vs {other.hash_size})")
        if self.hash != other.hash:
            raise IncompatibleHashError(
                "Cannot merge HyperLogLog sketches built with different hash functions")

    def merge(self, other: 'HyperLogLog', strict: bool = True) -> None:
        """Merge another HLL sketch into this one.

        Takes the element-wise maximum of the registers, after which this
        sketch estimates the cardinality of the union of both streams.
        `other` is not modified.

        Args:
            other: Another HyperLogLog sketch to merge into this one
            strict: Reject sketches of a different precision. When False,
                    only the registers both sketches have are merged and a
                    RuntimeWarning reports the truncation.

        Raises:
            NullArgumentError: If other is None
            TypeError: If other is not a HyperLogLog
            UninitializedError: If either sketch has no registers
            InvalidPrecisionError: If strict and the precisions differ
            IncompatibleHashError: If the hash configurations differ
        """
        if other is None:
            raise NullArgumentError("Cannot merge with None")
        if not isinstance(other, HyperLogLog):
            raise TypeError("Can only merge with another HyperLogLog sketch")
        self._check_initialized()
        other._check_initialized()
        self._check_compatible(other)

        if self.precision != other.precision:
            if strict:
                raise InvalidPrecisionError(
                    f"Cannot merge HyperLogLog sketches with different precisions "
                    f"({self.precision} vs {other.precision})")
            warnings.warn(
                f"Merging precision {other.precision} into precision {self.precision}: "
                f"only the first {min(self.num_registers, other.num_registers)} registers "
                "are combined, accuracy is degraded.", RuntimeWarning)

        n = min(self.num_registers, other.num_registers)
        np.maximum(self.registers[:n], other.registers[:n], out=self.registers[:n])
        if self.debug:
            print(f"DEBUG: merged {n} registers")

    def copy(self) -> 'HyperLogLog':
        """Independent estimator with the same configuration and registers."""
        self._check_initialized()
        sketch = HyperLogLog.from_config(self.config)
        sketch.registers[:] = self.registers
        return sketch

    def union(self, other: 'HyperLogLog') -> 'HyperLogLog':
        """New estimator for the union of both streams; neither input changes."""
        merged = self.copy()
        merged.merge(other)
        return merged

    def estimate_union(self, other: 'HyperLogLog') -> float:
        """Estimate union cardinality with another HyperLogLog sketch."""
        return self.union(other).estimate_cardinality()

    def is_empty(self) -> bool:
        """Check if no element has been added."""
        self._check_initialized()
        return not self.registers.any()

    def standard_error(self) -> float:
        """Theoretical relative standard error for this precision."""
        return 1.04 / math.sqrt(self.num_registers)


def _require(hll: Optional[HyperLogLog], name: str = "hll") -> HyperLogLog:
    if hll is None:
        raise NullArgumentError(f"{name} is None")
    return hll


def init(precision: int = DEFAULT_PRECISION,
         hash: Optional[HashFunc] = None,
         hash_size: int = DEFAULT_HASH_SIZE,
         debug: bool = False) -> HyperLogLog:
    """Allocate a zero-filled estimator (see HyperLogLog.__init__)."""
    return HyperLogLog(precision=precision, hash=hash, hash_size=hash_size, debug=debug)


def destroy(hll: Optional[HyperLogLog]) -> None:
    """Release an estimator's registers."""
    _require(hll).destroy()


def add(hll: Optional[HyperLogLog], element: Element, element_len: Optional[int] = None) -> None:
    """Add one element to an estimator."""
    _require(hll).add(element, element_len)


def count(hll: Optional[HyperLogLog]) -> int:
    """Point-in-time distinct-count estimate of an estimator."""
    return _require(hll).count()


def merge(dest: Optional[HyperLogLog], src: Optional[HyperLogLog], strict: bool = True) -> None:
    """Fold `src` into `dest` by register-wise maximum."""
    _require(dest, "dest").merge(_require(src, "src"), strict=strict)
