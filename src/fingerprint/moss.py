# src/fingerprint/moss.py
"""MOSS-like document comparator.

Pipeline: tokenize -> token k-grams -> (hash, index) -> winnow -> hash-only
set -> Jaccard.
"""

from __future__ import annotations

import logging

from plagscan.core.models import MossResult
from plagscan.fingerprint.hashing import hash_token_kgram
from plagscan.fingerprint.kgrams import generate_kgrams
from plagscan.fingerprint.similarity import jaccard
from plagscan.fingerprint.tokenizer import tokenize
from plagscan.fingerprint.winnowing import winnow

logger = logging.getLogger(__name__)

DEFAULT_MOSS_K = 4
DEFAULT_MOSS_WINDOW = 5


def kgram_hash_pairs(text: str, k: int = DEFAULT_MOSS_K) -> list[tuple[int, int]]:
    """Hash every token k-gram of text, paired with its k-gram index."""
    return [
        (hash_token_kgram(kgram), index)
        for index, kgram in enumerate(generate_kgrams(tokenize(text), k))
    ]


def document_fingerprints(
    text: str,
    k: int = DEFAULT_MOSS_K,
    window: int = DEFAULT_MOSS_WINDOW,
) -> set[int]:
    """Winnowed fingerprint hashes of one document (positions dropped)."""
    return {h for h, _ in winnow(kgram_hash_pairs(text, k), window)}


def compare_documents_moss_like(
    doc1: str,
    doc2: str,
    k: int = DEFAULT_MOSS_K,
    window: int = DEFAULT_MOSS_WINDOW,
) -> MossResult:
    """Compare two documents by their winnowed token fingerprints.

    Documents too short to yield a k-gram are empty: two empty documents
    are identical (1.0), one empty document matches nothing (0.0).
    """
    pairs1 = kgram_hash_pairs(doc1, k)
    pairs2 = kgram_hash_pairs(doc2, k)

    if not pairs1 and not pairs2:
        return MossResult(similarity_score=1.0)

    fp1 = {h for h, _ in winnow(pairs1, window)}
    fp2 = {h for h, _ in winnow(pairs2, window)}

    if not pairs1 or not pairs2:
        return MossResult(
            similarity_score=0.0,
            fingerprints_doc1=len(fp1),
            fingerprints_doc2=len(fp2),
        )

    matched = len(fp1 & fp2)
    score = jaccard(fp1, fp2)
    logger.debug(
        "MOSS: %d/%d fingerprints, %d matched, score=%.4f",
        len(fp1), len(fp2), matched, score,
    )
    return MossResult(
        similarity_score=score,
        fingerprints_doc1=len(fp1),
        fingerprints_doc2=len(fp2),
        matched_fingerprints=matched,
    )
