#!/usr/bin/env python
"""Feed pseudo-random integers to a HyperLogLog and compare with the exact count."""
from __future__ import annotations
import sys
import argparse
from typing import Iterator, List, Optional, Tuple
import numpy as np # type: ignore
from hllcount.lib.config import PRECISION_MAX, PRECISION_MIN
from hllcount.lib.errors import HLLError
from hllcount.lib.hashing import XXHash, integer_hash
from hllcount.lib.hyperloglog import HyperLogLog

# LCG parameters (Numerical Recipes multiplier and increment, modulus 2^31)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 1 << 31

DEFAULT_SEED = 6969
DEFAULT_MAX_NUMBER = 5000
DEFAULT_ITERATIONS = 3000


def lcg(seed: int) -> int:
    """Next value of the linear congruential generator."""
    return (LCG_MULTIPLIER * seed + LCG_INCREMENT) % LCG_MODULUS


def lcg_stream(seed: int, n: int) -> Iterator[int]:
    """Yield n LCG values, starting with the successor of seed."""
    value = lcg(seed)
    for _ in range(n):
        yield value
        value = lcg(value)


def run_demo(precision: int = 10,
             seed: int = DEFAULT_SEED,
             max_number: int = DEFAULT_MAX_NUMBER,
             iterations: int = DEFAULT_ITERATIONS,
             hash_size: int = 32,
             debug: bool = False) -> Tuple[int, int]:
    """Add `iterations` values from [0, max_number) and count them two ways.

    Returns:
        (expected, estimate): exact distinct count and HyperLogLog count
    """
    hash_func = integer_hash if hash_size == 32 else XXHash(hash_size=hash_size)
    unique_numbers = np.zeros(max_number, dtype=bool)

    with HyperLogLog(precision=precision, hash=hash_func, hash_size=hash_size, debug=debug) as hll:
        for random_value in lcg_stream(seed, iterations):
            value = random_value % max_number
            unique_numbers[value] = True
            hll.add(value, 4)
        estimate = hll.count()

    expected = int(np.count_nonzero(unique_numbers))
    return expected, estimate


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    arg_parser = argparse.ArgumentParser(
        description="Compare a HyperLogLog estimate with the exact number of distinct "
                    "values in a seeded pseudo-random integer stream.")
    arg_parser.add_argument("--precision", "-p", type=int, default=10,
                            help=f"Precision for HyperLogLog sketching ({PRECISION_MIN}-{PRECISION_MAX})")
    arg_parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed of the LCG")
    arg_parser.add_argument("--max-number", "-n", type=int, default=DEFAULT_MAX_NUMBER,
                            dest="max_number", help="Size of the value domain")
    arg_parser.add_argument("--iterations", "-i", type=int, default=DEFAULT_ITERATIONS,
                            help="Number of values to add")
    arg_parser.add_argument('--hashsize', type=int, default=32, choices=[32, 64],
                            help='Hash size in bits (32 or 64, default: 32)', dest='hash_size')
    arg_parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = arg_parser.parse_args(argv)
    if args.max_number < 1:
        arg_parser.error("--max-number must be positive")
    if args.iterations < 0:
        arg_parser.error("--iterations must be non-negative")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for hllcount-demo."""
    args = parse_args(argv)
    try:
        expected, estimate = run_demo(precision=args.precision, seed=args.seed,
                                      max_number=args.max_number, iterations=args.iterations,
                                      hash_size=args.hash_size, debug=args.debug)
    except HLLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Expected: {expected}")
    print(f"Estimate: {estimate}")
    if expected:
        print(f"Relative error: {abs(estimate - expected) / expected:.4f}")
    print(f"Standard error: {1.04 / np.sqrt(1 << args.precision):.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
