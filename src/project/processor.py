# src/project/processor.py
"""Project normalizer: turn a submission directory into a NormalizedProject.

Walks the tree in sorted order, applies the ignore set, classifies files by
extension, hashes contents and builds the canonical concatenation of source
files used for whole-project comparison.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path, PurePosixPath

from plagscan.core.models import NormalizedProject, ProcessedFile, SourceLanguage
from plagscan.project.ignore import build_ignore_set, ignore_key, is_ignored

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "\n\n---FILE_SEPARATOR---\n\n"

LANGUAGE_BY_EXTENSION: dict[str, SourceLanguage] = {
    ".rs": SourceLanguage.RUST,
    ".py": SourceLanguage.PYTHON,
    ".txt": SourceLanguage.TEXT,
    ".c": SourceLanguage.TEXT,
}

# Text-classified extensions that still count as source code.
_TEXT_SOURCE_EXTENSIONS = frozenset({".c"})


class ProjectProcessingError(Exception):
    """Raised when a submission directory cannot be traversed."""

    def __init__(self, project_id: str, cause: OSError) -> None:
        super().__init__(f"Failed to process project {project_id!r}: {cause}")
        self.project_id = project_id
        self.cause = cause


def detect_language(path: Path | str) -> SourceLanguage:
    """Classify a file by its extension."""
    return LANGUAGE_BY_EXTENSION.get(Path(path).suffix, SourceLanguage.UNKNOWN)


def is_concatenated_source(path: str, language: SourceLanguage) -> bool:
    """True for files that take part in the whole-project concatenation."""
    if language in (SourceLanguage.RUST, SourceLanguage.PYTHON):
        return True
    return language == SourceLanguage.TEXT and PurePosixPath(path).suffix in _TEXT_SOURCE_EXTENSIONS


def calculate_sha1(content: str) -> str:
    """Hex SHA-1 of UTF-8 encoded text."""
    return hashlib.sha1(content.encode("utf-8")).hexdigest()  # noqa: S324


def count_lines(content: str) -> int:
    """Newline-delimited line count; a trailing newline does not open a new line."""
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


def relative_key(path: Path, project_path: Path, project_id: str) -> str:
    """POSIX path relative to the root, minus a leading component equal to project_id."""
    parts = path.relative_to(project_path).parts
    if len(parts) > 1 and parts[0] == project_id:
        parts = parts[1:]
    return PurePosixPath(*parts).as_posix()


def _raise_walk_error(err: OSError) -> None:
    raise err


def process_project_folder(project_path: Path | str, project_id: str) -> NormalizedProject:
    """Normalize one submission directory.

    Args:
        project_path: Submission root directory.
        project_id: Submission identifier (usually the directory name).

    Returns:
        Frozen NormalizedProject. concatenated_source_code and its hash are
        None when the submission holds no source file. ignore_set keeps the
        entries applied during the walk for later comparisons.

    Raises:
        ProjectProcessingError: If the tree or its .gitignore cannot be read.
            Files that cannot be decoded as UTF-8 text are skipped instead.
    """
    root = Path(project_path)
    if not root.is_dir():
        raise ProjectProcessingError(
            project_id, NotADirectoryError(f"Not a directory: {root}"),
        )

    try:
        ignore_set = build_ignore_set(root)
        files = _collect_files(root, project_id, ignore_set)
    except OSError as exc:
        raise ProjectProcessingError(project_id, exc) from exc

    sources = [
        files[key].content
        for key in sorted(files)
        if is_concatenated_source(key, files[key].language)
    ]
    concatenated = FILE_SEPARATOR.join(sources) if sources else None
    concatenated_hash = calculate_sha1(concatenated) if concatenated is not None else None

    logger.info(
        "Normalized %s: %d files, %d source files concatenated",
        project_id, len(files), len(sources),
    )
    return NormalizedProject(
        project_id=project_id,
        files=files,
        concatenated_source_code=concatenated,
        concatenated_source_hash=concatenated_hash,
        root_path=root,
        ignore_set=ignore_set,
    )


def _collect_files(
    root: Path, project_id: str, ignore_set: frozenset[str],
) -> dict[str, ProcessedFile]:
    files: dict[str, ProcessedFile] = {}

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current = Path(dirpath)
        kept_dirs = []
        for name in sorted(dirnames):
            rel_dir = ignore_key((current / name).relative_to(root).as_posix(), is_dir=True)
            if is_ignored(rel_dir, ignore_set):
                logger.debug("Skipping ignored directory: %s", rel_dir)
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in sorted(filenames):
            path = current / name
            rel_str = ignore_key(path.relative_to(root).as_posix())
            if is_ignored(rel_str, ignore_set):
                logger.debug("Skipping ignored file: %s", rel_str)
                continue
            if not path.is_file():
                continue

            processed = _read_file(path, relative_key(path, root, project_id))
            if processed is not None:
                files[processed.relative_path] = processed

    return files


def _read_file(path: Path, key: str) -> ProcessedFile | None:
    try:
        content = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read %s as text, skipping: %s", path, exc)
        return None

    return ProcessedFile(
        relative_path=key,
        content=content,
        language=detect_language(path),
        sha1_hash=calculate_sha1(content),
        char_length=len(content),
        line_count=count_lines(content),
    )
