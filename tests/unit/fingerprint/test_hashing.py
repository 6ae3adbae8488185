# tests/unit/fingerprint/test_hashing.py
"""Tests for fingerprint/hashing.py."""

from __future__ import annotations

from plagscan.fingerprint.hashing import (
    RK_PRIME_SMALL,
    RK_RADIX,
    calculate_kgram_hash,
    hash_byte_kgram,
    hash_byte_kgrams,
    hash_token_kgram,
)


class TestCalculateKgramHash:
    def test_empty(self):
        assert calculate_kgram_hash(b"") == 0

    def test_single_char(self):
        # 65 % 101
        assert calculate_kgram_hash(b"A") == 65

    def test_two_chars(self):
        # (65 * 256 + 66) % 101 = 16706 % 101
        assert calculate_kgram_hash(b"AB") == 41

    def test_three_chars(self):
        # (41 * 256 + 67) % 101 = 10563 % 101
        assert calculate_kgram_hash(b"ABC") == 59

    def test_custom_prime(self):
        assert calculate_kgram_hash(b"a", prime=257) == 97
        # (97 * 256 + 98) % 257 = 24930 % 257
        assert calculate_kgram_hash(b"ab", prime=257) == 1

    def test_matches_closed_form(self):
        data = b"plagiarism"
        m = len(data)
        expected = sum(b * RK_RADIX ** (m - 1 - i) for i, b in enumerate(data)) % RK_PRIME_SMALL
        assert calculate_kgram_hash(data) == expected


class TestTokenKgramHash:
    def test_equal_sequences_hash_equal(self):
        assert hash_token_kgram(("int", "main", "return", "0")) == hash_token_kgram(["int", "main", "return", "0"])

    def test_order_matters(self):
        assert hash_token_kgram(("a", "b")) != hash_token_kgram(("b", "a"))

    def test_token_boundaries_matter(self):
        assert hash_token_kgram(("ab", "c")) != hash_token_kgram(("a", "bc"))

    def test_fits_in_64_bits(self):
        assert 0 <= hash_token_kgram(("x", "y", "z")) < 2**64

    def test_families_differ_for_same_text(self):
        assert hash_token_kgram(("abc",)) != hash_byte_kgram(b"abc")


class TestByteKgramHashes:
    def test_pairs_carry_offsets(self):
        pairs = hash_byte_kgrams(b"abcab", 2)
        assert [pos for _, pos in pairs] == [0, 1, 2, 3]

    def test_same_window_same_hash(self):
        pairs = hash_byte_kgrams(b"abcab", 2)
        assert pairs[0][0] == pairs[3][0]
        assert pairs[0][0] != pairs[1][0]

    def test_degenerate_inputs(self):
        assert hash_byte_kgrams(b"abc", 0) == []
        assert hash_byte_kgrams(b"ab", 3) == []
        assert hash_byte_kgrams(b"", 1) == []
