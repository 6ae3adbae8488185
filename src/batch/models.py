# src/batch/models.py
"""Batch models: SubmissionEntry, NormalizationBatch."""

from __future__ import annotations

from pydantic import BaseModel, Field

from plagscan.core.models import NormalizedProject


class SubmissionEntry(BaseModel):
    """A single submission directory discovered under the base directory."""

    submission_id: str
    path: str


class NormalizationBatch(BaseModel):
    """Outcome of normalizing every discovered submission."""

    base_dir: str
    projects: list[NormalizedProject] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def submission_ids(self) -> list[str]:
        """Every discovered submission, normalized or not, sorted."""
        return sorted({p.project_id for p in self.projects} | set(self.failures))
