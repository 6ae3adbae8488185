# src/comparison/orchestrator.py
"""Pairwise project comparison.

For every eligible file of project A, scans the same-extension files of
project B, runs both comparators on pairs that pass the size heuristics and
keeps the best-scoring partner. Whole-project comparison runs both
comparators on the two concatenated sources.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from plagscan.config.settings import Settings
from plagscan.core.models import (
    FileComparisonResult,
    MossResult,
    NormalizedProject,
    ProcessedFile,
    ProjectComparisonReport,
    RabinKarpResult,
)
from plagscan.fingerprint.byte_kgram import compare_documents_rabin_karp
from plagscan.fingerprint.moss import compare_documents_moss_like
from plagscan.logging.context import comparison_scope
from plagscan.project.ignore import DEFAULT_IGNORE_PATTERNS, ignore_key, is_ignored

logger = logging.getLogger(__name__)


def combined_score(moss_score: float, rabin_karp_score: float, settings: Settings) -> float:
    """Weighted average of the two algorithm scores, normalized by the weight sum."""
    return (
        moss_score * settings.moss_weight + rabin_karp_score * settings.rabin_karp_weight
    ) / settings.weight_sum


def is_candidate_pair(file_a: ProcessedFile, file_b: ProcessedFile, settings: Settings) -> bool:
    """Size heuristics: both files large enough and of comparable length."""
    if (
        file_a.char_length < settings.min_char_length
        or file_b.char_length < settings.min_char_length
        or file_a.line_count < settings.min_line_count
        or file_b.line_count < settings.min_line_count
    ):
        return False

    len_a = file_a.char_length
    len_b = file_b.char_length
    if len_a > 0 and len_b > 0:
        ratio = max(len_a, len_b) / min(len_a, len_b)
        if ratio > settings.max_length_ratio:
            return False
    return True


def _eligible_files(
    project: NormalizedProject, ignore_set: Iterable[str],
) -> list[ProcessedFile]:
    return [
        f for f in project.sorted_files()
        if not is_ignored(ignore_key(f.relative_path), ignore_set)
    ]


def compare_documents(
    doc1: str, doc2: str, settings: Settings,
) -> tuple[MossResult, RabinKarpResult, float]:
    """Run both comparators on two documents and blend their scores."""
    moss = compare_documents_moss_like(doc1, doc2, settings.moss_k, settings.moss_window)
    rk = compare_documents_rabin_karp(doc1, doc2, settings.rabin_karp_k)
    return moss, rk, combined_score(moss.similarity_score, rk.similarity_score, settings)


def compare_normalized_projects(
    project_a: NormalizedProject,
    project_b: NormalizedProject,
    settings: Settings | None = None,
    ignore_set: Iterable[str] | None = None,
) -> ProjectComparisonReport:
    """Compare two normalized projects file by file and as a whole.

    Args:
        project_a: Project whose files drive the scan.
        project_b: Project searched for partners.
        settings: Thresholds and algorithm parameters. Loaded from .env if None.
        ignore_set: Entries excluding files from comparison. Defaults to the
            set captured when project_a was normalized, else the defaults.

    Returns:
        ProjectComparisonReport with at most one FileComparisonResult per
        eligible file of project A.
    """
    settings = settings or Settings()
    if ignore_set is None:
        ignore_set = (
            project_a.ignore_set if project_a.ignore_set is not None else DEFAULT_IGNORE_PATTERNS
        )
    with comparison_scope(project_a.project_id, project_b.project_id):
        return _compare_projects(project_a, project_b, settings, frozenset(ignore_set))


def _compare_projects(
    project_a: NormalizedProject,
    project_b: NormalizedProject,
    settings: Settings,
    ignore_set: frozenset[str],
) -> ProjectComparisonReport:
    files_a = _eligible_files(project_a, ignore_set)
    files_b = _eligible_files(project_b, ignore_set)

    consumed_b: set[str] = set()
    file_comparisons: list[FileComparisonResult] = []

    for file_a in files_a:
        best: FileComparisonResult | None = None
        claimed = False
        for file_b in files_b:
            if file_b.relative_path in consumed_b:
                continue
            if file_b.extension != file_a.extension:
                continue
            if not is_candidate_pair(file_a, file_b, settings):
                continue

            moss, rk, score = compare_documents(file_a.content, file_b.content, settings)

            # One high-confidence partner per A file; the scan goes on for the best score.
            if score > settings.high_confidence_threshold and not claimed:
                claimed = True
                consumed_b.add(file_b.relative_path)
                logger.debug(
                    "High-confidence match %s <-> %s (%.4f)",
                    file_a.relative_path, file_b.relative_path, score,
                )

            if best is None or score > best.combined_score:
                best = FileComparisonResult(
                    file1_path=file_a.relative_path,
                    file2_path=file_b.relative_path,
                    moss_result=moss,
                    rabin_karp_result=rk,
                    combined_score=score,
                    file1_char_length=file_a.char_length,
                    file1_line_count=file_a.line_count,
                )

        if best is not None:
            file_comparisons.append(best)

    whole_moss: MossResult | None = None
    whole_rk: RabinKarpResult | None = None
    whole_score: float | None = None

    src_a = project_a.concatenated_source_code
    src_b = project_b.concatenated_source_code
    if src_a is not None and src_b is not None:
        if len(src_a) >= settings.min_char_length and len(src_b) >= settings.min_char_length:
            whole_moss, whole_rk, whole_score = compare_documents(src_a, src_b, settings)
        else:
            logger.debug(
                "Whole-project comparison skipped: lengths %d/%d below %d",
                len(src_a), len(src_b), settings.min_char_length,
            )

    logger.info(
        "Compared %s with %s: %d file matches, whole-project score=%s",
        project_a.project_id, project_b.project_id, len(file_comparisons),
        f"{whole_score:.4f}" if whole_score is not None else "n/a",
    )
    return ProjectComparisonReport(
        project1_id=project_a.project_id,
        project2_id=project_b.project_id,
        file_to_file_comparisons=file_comparisons,
        whole_project_moss_result=whole_moss,
        whole_project_rabin_karp_result=whole_rk,
        whole_project_combined_score=whole_score,
    )
