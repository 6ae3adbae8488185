# src/api/facade.py
"""Public API facade: single entry point for a plagiarism check.

Usage:
    from plagscan.api.facade import check_projects
    response = await check_projects(request, base_dir)

The caller resolves the project/promotion identifiers to a base directory of
extracted submissions; this module normalizes every submission, compares
every unordered pair once and turns the reports into percentages and flags.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from pathlib import Path

from plagscan.api.models import (
    FolderPlagiarismDetail,
    PlagiarismCheckRequest,
    PlagiarismCheckResponse,
    PlagiarismMatch,
)
from plagscan.batch.models import NormalizationBatch
from plagscan.batch.scanner import SubmissionScanner
from plagscan.comparison.orchestrator import compare_normalized_projects
from plagscan.config.settings import Settings
from plagscan.core.models import NormalizedProject, ProjectComparisonReport

logger = logging.getLogger(__name__)

FLAG_VERY_HIGH_SIMILARITY = "VERY_HIGH_SIMILARITY"
FLAG_HIGH_SIMILARITY = "HIGH_SIMILARITY"
FLAG_SIGNIFICANT_MOSS_MATCH = "SIGNIFICANT_MOSS_MATCH"
FLAG_SIGNIFICANT_RABIN_KARP_MATCH = "SIGNIFICANT_RABIN_KARP_MATCH"


async def check_projects(
    request: PlagiarismCheckRequest,
    base_dir: Path,
    settings: Settings | None = None,
) -> PlagiarismCheckResponse:
    """Run a plagiarism check over every submission under base_dir.

    Args:
        request: Project/promotion identifiers plus optional overrides.
        base_dir: Directory whose subdirectories are extracted submissions.
        settings: Global settings. Loaded from .env if None.

    Returns:
        PlagiarismCheckResponse with one folder result per submission,
        including submissions that failed to normalize (zero matches).

    Raises:
        ValueError: If base_dir is not a directory.
    """
    settings = settings or Settings()
    settings = _apply_overrides(settings, request)

    logger.info(
        "Starting plagiarism check: project_id=%s, promotion_id=%s, base_dir=%s",
        request.project_id, request.promotion_id, base_dir,
    )

    scanner = SubmissionScanner(settings=settings)
    batch = await scanner.scan_and_normalize(base_dir)
    reports = await compare_all(batch.projects, settings)
    folder_results = build_folder_results(batch, reports, settings)

    logger.info(
        "Plagiarism check complete: %d submissions, %d pairs, %d failures",
        len(folder_results), len(reports), len(batch.failures),
    )
    return PlagiarismCheckResponse(
        project_id=request.project_id,
        promotion_id=request.promotion_id,
        folder_results=folder_results,
    )


def run_plagiarism_check(
    project_id: str,
    promotion_id: str,
    base_dir: Path,
    settings: Settings | None = None,
) -> PlagiarismCheckResponse:
    """Synchronous convenience wrapper around check_projects()."""
    request = PlagiarismCheckRequest(project_id=project_id, promotion_id=promotion_id)
    return asyncio.run(check_projects(request, base_dir, settings=settings))


async def compare_all(
    projects: list[NormalizedProject],
    settings: Settings,
) -> dict[tuple[str, str], ProjectComparisonReport]:
    """Compare every unordered pair once; keys are (earlier_id, later_id) in id order."""
    ordered = sorted(projects, key=lambda p: p.project_id)
    pairs = list(itertools.combinations(ordered, 2))
    reports = await asyncio.gather(*(
        asyncio.to_thread(compare_normalized_projects, a, b, settings)
        for a, b in pairs
    ))
    return {
        (a.project_id, b.project_id): report
        for (a, b), report in zip(pairs, reports)
    }


def pair_scores(report: ProjectComparisonReport) -> tuple[float, float, float]:
    """(moss, rabin_karp, combined) scores in [0, 1] for one project pair.

    Whole-project results take precedence; otherwise the best file pair is
    used; a pair with neither scores zero.
    """
    if (
        report.whole_project_moss_result is not None
        and report.whole_project_rabin_karp_result is not None
        and report.whole_project_combined_score is not None
    ):
        return (
            report.whole_project_moss_result.similarity_score,
            report.whole_project_rabin_karp_result.similarity_score,
            report.whole_project_combined_score,
        )

    best = report.best_file_comparison()
    if best is None:
        return 0.0, 0.0, 0.0
    return (
        best.moss_result.similarity_score,
        best.rabin_karp_result.similarity_score,
        best.combined_score,
    )


def derive_flags(moss_pct: float, rabin_karp_pct: float, settings: Settings) -> list[str]:
    """Qualitative flags from the two algorithm percentages."""
    flags: list[str] = []
    if (
        moss_pct > settings.flag_very_high_threshold
        and rabin_karp_pct > settings.flag_very_high_threshold
    ):
        flags.append(FLAG_VERY_HIGH_SIMILARITY)
    elif (
        moss_pct > settings.flag_high_threshold
        or rabin_karp_pct > settings.flag_high_threshold
    ):
        flags.append(FLAG_HIGH_SIMILARITY)

    if moss_pct > settings.flag_significant_moss_threshold:
        flags.append(FLAG_SIGNIFICANT_MOSS_MATCH)
    if rabin_karp_pct > settings.flag_significant_rabin_karp_threshold:
        flags.append(FLAG_SIGNIFICANT_RABIN_KARP_MATCH)
    return flags


def build_match(
    matched_folder: str,
    report: ProjectComparisonReport,
    settings: Settings,
) -> PlagiarismMatch:
    """Turn one pair report into a percentage match entry."""
    moss, rk, combined = pair_scores(report)
    moss_pct = moss * 100.0
    rk_pct = rk * 100.0
    combined_pct = combined * 100.0
    return PlagiarismMatch(
        matched_folder=matched_folder,
        overall_match_percentage=combined_pct,
        combined_score=combined_pct,
        moss_score=moss_pct,
        rabin_karp_score=rk_pct,
        flags=derive_flags(moss_pct, rk_pct, settings),
        file_comparisons=(
            list(report.file_to_file_comparisons) if settings.include_file_details else None
        ),
    )


def build_folder_results(
    batch: NormalizationBatch,
    reports: dict[tuple[str, str], ProjectComparisonReport],
    settings: Settings,
) -> list[FolderPlagiarismDetail]:
    """One folder result per submission, sorted by name.

    A submission's plagiarism percentage is its highest match percentage.
    """
    hashes = {p.project_id: p.concatenated_source_hash for p in batch.projects}
    results: list[FolderPlagiarismDetail] = []

    for folder in batch.submission_ids:
        matches: list[PlagiarismMatch] = []
        for (id_a, id_b), report in reports.items():
            if folder == id_a:
                matches.append(build_match(id_b, report, settings))
            elif folder == id_b:
                matches.append(build_match(id_a, report, settings))
        matches.sort(key=lambda m: m.matched_folder)

        results.append(FolderPlagiarismDetail(
            folder_name=folder,
            sha1=hashes.get(folder),
            plagiarism_percentage=max(
                (m.overall_match_percentage for m in matches), default=0.0,
            ),
            matches=matches,
        ))
    return results


def _apply_overrides(settings: Settings, request: PlagiarismCheckRequest) -> Settings:
    """Apply per-request config overrides if provided."""
    if request.config_overrides is None:
        return settings
    overrides = request.config_overrides.model_dump(exclude_none=True)
    if not overrides:
        return settings
    current = settings.model_dump()
    current.update(overrides)
    return Settings(_env_file=None, **current)
