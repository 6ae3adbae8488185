# src/fingerprint/byte_kgram.py
"""Byte-level k-gram comparator.

Every byte window is fingerprinted (no winnowing) and the two documents are
compared by Jaccard over their (hash, offset) sets. The offset is part of
the set element, so shifted content counts only where offsets line up.
"""

from __future__ import annotations

import logging

from plagscan.core.models import RabinKarpResult
from plagscan.fingerprint.hashing import hash_byte_kgrams
from plagscan.fingerprint.similarity import jaccard

logger = logging.getLogger(__name__)

DEFAULT_RABIN_KARP_K = 25


def compare_documents_rabin_karp(
    doc1: str | bytes,
    doc2: str | bytes,
    k: int = DEFAULT_RABIN_KARP_K,
) -> RabinKarpResult:
    """Compare two documents by Jaccard over their byte k-gram fingerprints.

    Returns a zero result when either document is empty, k is 0, or either
    document is shorter than k bytes.
    """
    data1 = doc1.encode("utf-8") if isinstance(doc1, str) else doc1
    data2 = doc2.encode("utf-8") if isinstance(doc2, str) else doc2

    if not data1 or not data2 or k <= 0:
        return RabinKarpResult(similarity_score=0.0)

    set1 = set(hash_byte_kgrams(data1, k))
    set2 = set(hash_byte_kgrams(data2, k))
    if not set1 or not set2:
        return RabinKarpResult(similarity_score=0.0)

    matched = len(set1 & set2)
    score = jaccard(set1, set2)
    logger.debug(
        "Byte k-grams: %d/%d windows, %d matched, score=%.4f",
        len(set1), len(set2), matched, score,
    )
    return RabinKarpResult(
        similarity_score=score,
        kgrams_doc1=len(set1),
        kgrams_doc2=len(set2),
        matched_kgrams=matched,
    )
