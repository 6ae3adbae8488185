# tests/unit/fingerprint/test_byte_kgram.py
"""Tests for fingerprint/byte_kgram.py: byte-level comparator."""

from __future__ import annotations

import pytest

from plagscan.fingerprint.byte_kgram import compare_documents_rabin_karp

DOC = "The quick brown fox jumps over the lazy dog while the cat sleeps soundly.\n"


class TestCompareDocumentsRabinKarp:
    def test_identical_documents(self):
        result = compare_documents_rabin_karp(DOC, DOC)
        assert result.similarity_score == 1.0
        assert result.kgrams_doc1 == len(DOC.encode()) - 25 + 1
        assert result.matched_kgrams == result.kgrams_doc1 == result.kgrams_doc2

    def test_empty_document(self):
        result = compare_documents_rabin_karp("", DOC)
        assert result.similarity_score == 0.0
        assert (result.kgrams_doc1, result.kgrams_doc2, result.matched_kgrams) == (0, 0, 0)

    def test_k_zero(self):
        assert compare_documents_rabin_karp(DOC, DOC, k=0).similarity_score == 0.0

    def test_shorter_than_k(self):
        assert compare_documents_rabin_karp("short", "short").similarity_score == 0.0

    def test_offsets_are_part_of_the_fingerprint(self):
        # Same content shifted by one byte shares hashes but not positions.
        result = compare_documents_rabin_karp(DOC, "X" + DOC)
        assert result.similarity_score == 0.0
        assert result.matched_kgrams == 0

    def test_appended_tail(self):
        tail = "Another sentence is appended at the very end.\n"
        result = compare_documents_rabin_karp(DOC, DOC + tail)
        n1 = len(DOC.encode()) - 24
        n2 = len((DOC + tail).encode()) - 24
        assert result.matched_kgrams == n1
        assert result.similarity_score == pytest.approx(n1 / n2)

    def test_accepts_bytes(self):
        data = DOC.encode()
        assert compare_documents_rabin_karp(data, data).similarity_score == 1.0

    def test_custom_k(self):
        result = compare_documents_rabin_karp("abcdef", "abcxyz", k=3)
        # windows at offsets 0..3; only offset 0 ("abc") matches
        assert result.matched_kgrams == 1
        assert result.similarity_score == pytest.approx(1 / 7)
