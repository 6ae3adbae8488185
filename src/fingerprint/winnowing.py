# src/fingerprint/winnowing.py
"""Winnowing fingerprint selection (Schleimer, Wilkerson and Aiken, 2003).

Any substring shared by two documents that spans at least window + k - 1
tokens yields at least one shared selected fingerprint.
"""

from __future__ import annotations

from collections.abc import Sequence

HashPair = tuple[int, int]


def _rightmost_min(pairs: Sequence[HashPair]) -> HashPair:
    """Minimum hash; ties go to the largest position."""
    best = pairs[0]
    for pair in pairs[1:]:
        if pair[0] < best[0] or (pair[0] == best[0] and pair[1] > best[1]):
            best = pair
    return best


def winnow(pairs: Sequence[HashPair], window: int) -> set[HashPair]:
    """Select (hash, position) fingerprints by sliding-window local minima.

    Args:
        pairs: Ordered (hash, position) pairs, one per k-gram.
        window: Number of consecutive pairs per window.

    Returns:
        Deduplicated set of selected pairs. Empty when window is 0 or there
        are no pairs; a single pair when there are fewer pairs than window.
    """
    if window <= 0 or not pairs:
        return set()
    if len(pairs) < window:
        return {_rightmost_min(pairs)}

    selected: set[HashPair] = set()
    for start in range(len(pairs) - window + 1):
        selected.add(_rightmost_min(pairs[start : start + window]))
    return selected
