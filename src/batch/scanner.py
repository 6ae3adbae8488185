# src/batch/scanner.py
"""Submission scanner: discover extracted submissions and normalize them.

Each subdirectory of the base directory is one submission, named by its
directory. A submission that fails to normalize is recorded as a failure
and the batch continues with the others.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from plagscan.batch.models import NormalizationBatch, SubmissionEntry
from plagscan.logging.context import project_scope
from plagscan.project.processor import ProjectProcessingError, process_project_folder

if TYPE_CHECKING:
    from plagscan.config.settings import Settings
    from plagscan.core.models import NormalizedProject

logger = logging.getLogger(__name__)


class SubmissionScanner:
    """Scan a base directory for submissions and normalize them.

    Workflow:
        1. List every subdirectory (sorted by name)
        2. Normalize each one in a worker thread, bounded by a timeout
        3. Collect normalized projects and per-submission failures
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def scan(self, base_dir: Path) -> list[SubmissionEntry]:
        """Discover submission directories.

        Raises:
            ValueError: If base_dir is not a directory.
        """
        if not base_dir.is_dir():
            msg = f"Base directory is not a directory: {base_dir}"
            raise ValueError(msg)

        entries = [
            SubmissionEntry(submission_id=path.name, path=str(path.resolve()))
            for path in sorted(base_dir.iterdir())
            if path.is_dir()
        ]
        logger.info("Scanned %s: found %d submissions", base_dir, len(entries))
        return entries

    async def normalize_all(
        self, entries: list[SubmissionEntry], base_dir: str = "",
    ) -> NormalizationBatch:
        """Normalize every entry, isolating failures per submission."""
        t0 = time.perf_counter()
        timeout = self._settings.normalize_timeout_seconds if self._settings else None

        projects: list[NormalizedProject] = []
        failures: dict[str, str] = {}

        for entry in entries:
            try:
                project = await asyncio.wait_for(
                    asyncio.to_thread(_normalize_entry, entry), timeout=timeout,
                )
            except ProjectProcessingError as exc:
                failures[entry.submission_id] = str(exc)
                logger.warning("Skipping submission %s: %s", entry.submission_id, exc)
                continue
            except asyncio.TimeoutError:
                failures[entry.submission_id] = f"Normalization timed out after {timeout}s"
                logger.warning(
                    "Skipping submission %s: normalization timed out", entry.submission_id,
                )
                continue
            projects.append(project)

        return NormalizationBatch(
            base_dir=base_dir,
            projects=projects,
            failures=failures,
            duration_seconds=round(time.perf_counter() - t0, 2),
        )

    async def scan_and_normalize(self, base_dir: Path) -> NormalizationBatch:
        """Full pipeline: scan -> normalize."""
        entries = self.scan(base_dir)
        return await self.normalize_all(entries, base_dir=str(base_dir))


def _normalize_entry(entry: SubmissionEntry) -> NormalizedProject:
    with project_scope(entry.submission_id, step="normalize"):
        return process_project_folder(Path(entry.path), entry.submission_id)
