# src/api/models.py
"""API-level models: PlagiarismCheckRequest, ConfigOverrides and the check response.

Wire field names are camelCase; Python attributes stay snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from plagscan.core.models import FileComparisonResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConfigOverrides(_CamelModel):
    """Per-request overrides, a validated subset of Settings."""

    moss_k: int | None = None
    moss_window: int | None = None
    rabin_karp_k: int | None = None
    min_char_length: int | None = None
    min_line_count: int | None = None
    max_length_ratio: float | None = None
    moss_weight: float | None = None
    rabin_karp_weight: float | None = None
    high_confidence_threshold: float | None = None
    include_file_details: bool | None = None


class PlagiarismCheckRequest(_CamelModel):
    """Identifies the batch of submissions to check (opaque identifiers)."""

    project_id: str
    promotion_id: str
    config_overrides: ConfigOverrides | None = None


class PlagiarismMatch(_CamelModel):
    """Similarity of one submission to another, as percentages."""

    matched_folder: str
    overall_match_percentage: float
    combined_score: float
    moss_score: float
    rabin_karp_score: float
    flags: list[str] = Field(default_factory=list)
    file_comparisons: list[FileComparisonResult] | None = None


class FolderPlagiarismDetail(_CamelModel):
    """Per-submission result: its hash, worst-case percentage and every match."""

    folder_name: str
    sha1: str | None = None
    plagiarism_percentage: float = 0.0
    matches: list[PlagiarismMatch] = Field(default_factory=list)


class PlagiarismCheckResponse(_CamelModel):
    """Return value of facade.check_projects()."""

    project_id: str
    promotion_id: str
    folder_results: list[FolderPlagiarismDetail] = Field(default_factory=list)
