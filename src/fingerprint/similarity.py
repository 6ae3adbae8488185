# src/fingerprint/similarity.py
"""Jaccard index over fingerprint sets."""

from __future__ import annotations

from collections.abc import Set
from typing import Any


def jaccard(set_a: Set[Any], set_b: Set[Any]) -> float:
    """Return |A ∩ B| / |A ∪ B|.

    Two empty sets are identical (1.0). An empty union with a non-empty
    operand cannot happen; it is answered with 0.0.
    """
    if not set_a and not set_b:
        return 1.0
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return len(set_a & set_b) / union
