# src/search/rabin_karp.py
"""Rabin-Karp exact substring search over bytes.

Locates verbatim copied fragments: every offset where a pattern occurs in a
text. Hash equality is always confirmed by a direct byte comparison.
"""

from __future__ import annotations

import logging

from plagscan.fingerprint.hashing import RK_PRIME_LARGE, RK_RADIX, calculate_kgram_hash

logger = logging.getLogger(__name__)


class RollingHash:
    """Polynomial hash of a fixed-size byte window, updated in O(1) per shift.

    Usage:
        rh = RollingHash(b"abc")
        rh.roll(ord("a"), ord("d"))  # now the hash of b"bcd"
    """

    def __init__(
        self,
        window: bytes,
        radix: int = RK_RADIX,
        prime: int = RK_PRIME_LARGE,
    ) -> None:
        self.radix = radix
        self.prime = prime
        self.size = len(window)
        self.value = calculate_kgram_hash(window, radix, prime)
        # radix^(m-1) mod prime: weight of the outgoing byte
        self._high_order = pow(radix, self.size - 1, prime) if self.size else 0

    def roll(self, outgoing: int, incoming: int) -> int:
        """Drop the leading byte, append a trailing byte and return the new hash."""
        h = (self.value + self.prime - (outgoing * self._high_order) % self.prime) % self.prime
        self.value = (h * self.radix + incoming) % self.prime
        return self.value


def rabin_karp_search(
    text: str | bytes,
    pattern: str | bytes,
    radix: int = RK_RADIX,
    prime: int = RK_PRIME_LARGE,
) -> list[int]:
    """Return every byte offset of text where pattern occurs, overlaps included.

    str arguments are UTF-8 encoded. Empty pattern, empty text or a pattern
    longer than the text yield no matches.
    """
    data = text.encode("utf-8") if isinstance(text, str) else text
    needle = pattern.encode("utf-8") if isinstance(pattern, str) else pattern

    m = len(needle)
    n = len(data)
    if m == 0 or n == 0 or m > n:
        return []

    target = calculate_kgram_hash(needle, radix, prime)
    rolling = RollingHash(data[:m], radix, prime)

    matches: list[int] = []
    collisions = 0
    for offset in range(n - m + 1):
        if offset > 0:
            rolling.roll(data[offset - 1], data[offset + m - 1])
        if rolling.value == target:
            if data[offset : offset + m] == needle:
                matches.append(offset)
            else:
                collisions += 1

    if collisions:
        logger.debug("Rabin-Karp: %d hash collisions rejected", collisions)
    return matches
