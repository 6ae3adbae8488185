# src/fingerprint/kgrams.py
"""Contiguous k-gram windows over token lists, strings or bytes."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def generate_kgrams(sequence: Sequence[T] | bytes | str, k: int) -> list:
    """Return every window of length k, one per start offset 0..len-k.

    Windows are independent copies: tuples for token sequences, slices for
    bytes and str. Empty when k is 0 or the sequence is shorter than k.
    """
    n = len(sequence)
    if k <= 0 or n < k:
        return []
    if isinstance(sequence, (bytes, bytearray, str)):
        return [sequence[i : i + k] for i in range(n - k + 1)]
    return [tuple(sequence[i : i + k]) for i in range(n - k + 1)]
