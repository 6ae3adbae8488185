# src/fingerprint/tokenizer.py
"""Text tokenizer for the MOSS-like comparator."""

from __future__ import annotations

import re

# Maximal runs of Unicode letters/digits (\w minus the underscore).
_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Split text into lower-cased alphanumeric tokens, in order of appearance.

    Case folding happens before splitting; every non-alphanumeric character
    (whitespace, punctuation, underscore) is a separator.
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())
