# src/fingerprint/hashing.py
"""K-gram hash functions.

Two hash families serve the similarity comparators:
- token k-grams (MOSS-like comparator), stable 64-bit BLAKE2b digests;
- byte k-grams (byte-level comparator), BLAKE2b with its own personalisation,
  emitted with the window start offset.

``calculate_kgram_hash`` is the Rabin-Karp polynomial hash used by the exact
substring matcher in ``plagscan.search.rabin_karp``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

RK_RADIX = 256
RK_PRIME_SMALL = 101  # keeps hand-computed test values small
RK_PRIME_LARGE = 1_000_000_007

_TOKEN_PERSON = b"plagscan-tok"
_BYTE_PERSON = b"plagscan-byte"
_TOKEN_SEPARATOR = "\x00"


def _digest64(data: bytes, person: bytes) -> int:
    return int.from_bytes(
        hashlib.blake2b(data, digest_size=8, person=person).digest(), "big"
    )


def hash_token_kgram(kgram: Sequence[str]) -> int:
    """Hash an ordered token k-gram to an unsigned 64-bit integer.

    Tokens are joined with NUL so ("ab", "c") and ("a", "bc") differ.
    """
    return _digest64(_TOKEN_SEPARATOR.join(kgram).encode("utf-8"), _TOKEN_PERSON)


def hash_byte_kgram(kgram: bytes) -> int:
    """Hash one byte window to an unsigned 64-bit integer."""
    return _digest64(bytes(kgram), _BYTE_PERSON)


def hash_byte_kgrams(data: bytes, k: int) -> list[tuple[int, int]]:
    """Hash every byte window of length k, paired with its start offset."""
    if k <= 0 or len(data) < k:
        return []
    view = memoryview(data)
    return [
        (hash_byte_kgram(view[i : i + k]), i)
        for i in range(len(data) - k + 1)
    ]


def calculate_kgram_hash(
    kgram: bytes | Sequence[int],
    radix: int = RK_RADIX,
    prime: int = RK_PRIME_SMALL,
) -> int:
    """Rabin-Karp hash: sum(b[i] * radix^(m-1-i)) mod prime, computed iteratively.

    Empty input hashes to 0.
    """
    hash_value = 0
    for byte_val in kgram:
        hash_value = (hash_value * radix + byte_val) % prime
    return hash_value
