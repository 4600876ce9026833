from __future__ import annotations
import pytest # type: ignore
from hllcount.lib.errors import HashSizeError
from hllcount.lib.hashing import (XXHash, as_bytes, default_hash, element_length,
                                  hash_string, integer_hash)


@pytest.mark.quick
class TestElementBytes:
    """Conversion of elements to the bytes a hash sees."""

    def test_element_length(self):
        assert element_length(b"abc") == 3
        assert element_length(bytearray(b"abcd")) == 4
        assert element_length("héllo") == 6
        assert element_length(0) == 4
        assert element_length(2**32 - 1) == 4
        assert element_length(2**32) == 8
        assert element_length(2**70) == 9

    def test_as_bytes(self):
        assert as_bytes(b"abcdef", 3) == b"abc"
        assert as_bytes("é") == b"\xc3\xa9"
        assert as_bytes(1, 4) == b"\x01\x00\x00\x00"
        assert as_bytes(-1, 4) == b"\xff\xff\xff\xff"
        assert as_bytes(0x0102030405, 4) == b"\x05\x04\x03\x02"
        assert as_bytes(memoryview(b"xyz")) == b"xyz"


@pytest.mark.quick
class TestHashString:
    """The default multiplicative string hash."""

    def test_known_values(self):
        assert hash_string(b"") == 5381
        assert hash_string(b"a") == 5381 * 33 + 97
        assert hash_string(b"ab") == ((5381 * 33 + 97) * 33 + 98) & 0xFFFFFFFF

    def test_high_bytes_are_signed(self):
        assert hash_string(b"\xff") == 5381 * 33 - 1

    def test_wraps_to_32_bits(self):
        h = hash_string(b"a fairly long string that overflows 32 bits" * 4)
        assert 0 <= h < 2**32

    def test_length_limits_input(self):
        assert hash_string(b"abcdef", 3) == hash_string(b"abc")

    def test_str_and_bytes_agree(self):
        assert hash_string("hello") == hash_string(b"hello")

    def test_deterministic(self):
        assert hash_string(b"repeat") == hash_string(b"repeat")


@pytest.mark.quick
class TestIntegerHash:
    """Bob Jenkins' 4-byte integer hash."""

    def test_range_and_determinism(self):
        values = [integer_hash(i, 4) for i in range(1000)]
        assert all(0 <= v < 2**32 for v in values)
        assert values == [integer_hash(i, 4) for i in range(1000)]
        assert len(set(values)) == 1000

    def test_length_is_ignored(self):
        assert integer_hash(42, 4) == integer_hash(42, 8)

    def test_bytes_read_as_little_endian_word(self):
        assert integer_hash(b"\x05\x00\x00\x00") == integer_hash(5)

    def test_only_low_32_bits_are_mixed(self):
        assert integer_hash(2**32 + 7) == integer_hash(7)

    def test_spreads_top_bits(self):
        """Small consecutive integers land in many different top nibbles."""
        top = {integer_hash(i) >> 28 for i in range(256)}
        assert len(top) == 16


@pytest.mark.quick
class TestXXHash:
    """Seeded xxHash strategy."""

    def test_hash_sizes(self):
        assert 0 <= XXHash(hash_size=32)(b"abc") < 2**32
        assert any(XXHash(hash_size=64)(i) >= 2**32 for i in range(10))

    def test_invalid_hash_size(self):
        with pytest.raises(HashSizeError):
            XXHash(hash_size=16)
        with pytest.raises(ValueError):
            XXHash(hash_size=128)

    def test_value_equality(self):
        assert XXHash(seed=1) == XXHash(seed=1)
        assert XXHash(seed=1) != XXHash(seed=2)
        assert XXHash(seed=1, hash_size=32) != XXHash(seed=1, hash_size=64)

    def test_seed_changes_output(self):
        assert XXHash(seed=1)(b"abc") != XXHash(seed=2)(b"abc")

    def test_int_and_bytes_agree(self):
        h = XXHash(seed=9)
        assert h(5, 4) == h(b"\x05\x00\x00\x00", 4)

    def test_default_hash(self):
        assert default_hash(32) is hash_string
        assert default_hash(64) == XXHash(seed=0, hash_size=64)
