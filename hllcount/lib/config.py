from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Optional
from hllcount.lib.hashing import HashFunc

# Valid precision range and the library-wide default
PRECISION_MIN = 4
PRECISION_MAX = 16
DEFAULT_PRECISION = 10

DEFAULT_HASH_SIZE = 32


@dataclass(frozen=True)
class HLLConfig:
    """Construction defaults for a HyperLogLog estimator.

    Only the fields that differ from the defaults need to be given:

        HLLConfig().override(precision=12)

    Args:
        precision: Number of index bits (PRECISION_MIN..PRECISION_MAX)
        hash: Hash function called as hash(element, element_len); None
              selects the library default for hash_size
        hash_size: Width in bits of the hash output (32 or 64)
        debug: Whether to print debug information
    """
    precision: int = DEFAULT_PRECISION
    hash: Optional[HashFunc] = None
    hash_size: int = DEFAULT_HASH_SIZE
    debug: bool = False

    def override(self, **overrides) -> 'HLLConfig':
        """Return a copy with the given fields replaced.

        Raises:
            TypeError: If a name is not a configuration field
        """
        names = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - names)
        if unknown:
            raise TypeError(f"Unknown HLLConfig field(s): {', '.join(unknown)}")
        return replace(self, **overrides)
