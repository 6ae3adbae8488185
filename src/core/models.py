# src/core/models.py
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Result models are embedded in API responses; by_alias dumps are camelCase.
_RESULT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === PROJECT NORMALIZATION ===


class SourceLanguage(str, Enum):
    """Language detected from a file extension."""

    RUST = "rust"
    PYTHON = "python"
    TEXT = "text"
    UNKNOWN = "unknown"


class ProcessedFile(BaseModel):
    """A single file read from a submission, immutable once built."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    content: str
    language: SourceLanguage
    sha1_hash: str
    char_length: int
    line_count: int

    @property
    def extension(self) -> str:
        """Lower-cased suffix including the dot ('' when there is none)."""
        return Path(self.relative_path).suffix.lower()


class NormalizedProject(BaseModel):
    """A submission snapshot: files keyed by relative path plus its concatenated sources."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    files: dict[str, ProcessedFile] = Field(default_factory=dict)
    concatenated_source_code: str | None = None
    concatenated_source_hash: str | None = None
    root_path: Path | None = None
    ignore_set: frozenset[str] | None = None

    def sorted_files(self) -> list[ProcessedFile]:
        """Files in ascending relative-path order."""
        return [self.files[path] for path in sorted(self.files)]


# === ALGORITHM RESULTS ===


class MossResult(BaseModel):
    """Outcome of the token-winnowing comparison of two documents."""

    model_config = _RESULT_CONFIG

    similarity_score: float
    fingerprints_doc1: int = 0
    fingerprints_doc2: int = 0
    matched_fingerprints: int = 0


class RabinKarpResult(BaseModel):
    """Outcome of the byte k-gram comparison of two documents."""

    model_config = _RESULT_CONFIG

    similarity_score: float
    kgrams_doc1: int = 0
    kgrams_doc2: int = 0
    matched_kgrams: int = 0


# === PROJECT COMPARISON ===


class FileComparisonResult(BaseModel):
    """Best-matching B file for one file of project A."""

    model_config = _RESULT_CONFIG

    file1_path: str
    file2_path: str
    moss_result: MossResult
    rabin_karp_result: RabinKarpResult
    combined_score: float
    file1_char_length: int
    file1_line_count: int


class ProjectComparisonReport(BaseModel):
    """Comparison of two normalized projects."""

    model_config = _RESULT_CONFIG

    project1_id: str
    project2_id: str
    file_to_file_comparisons: list[FileComparisonResult] = Field(default_factory=list)
    whole_project_moss_result: MossResult | None = None
    whole_project_rabin_karp_result: RabinKarpResult | None = None
    whole_project_combined_score: float | None = None

    def best_file_comparison(self) -> FileComparisonResult | None:
        """File pair with the highest combined score (first in path order on ties)."""
        best: FileComparisonResult | None = None
        for comparison in self.file_to_file_comparisons:
            if best is None or comparison.combined_score > best.combined_score:
                best = comparison
        return best
