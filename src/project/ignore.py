# src/project/ignore.py
"""Ignore list for submission trees: default build/VCS/binary entries plus .gitignore literals."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Trailing separators keep directory entries from matching file names.
DEFAULT_IGNORE_PATTERNS: frozenset[str] = frozenset({
    "target/",
    "node_modules/",
    "dist/",
    "build/",
    ".next/",
    ".git/",
    ".svn/",
    ".hg/",
    ".idea/",
    ".vscode/",
    ".vscode\\",
    ".exe",
    ".DS_Store",
    ".dll",
    ".lock",
    ".log",
    ".zip",
    ".md",
    ".github/",
    ".github\\",
    "LICENSE",
})


def parse_gitignore(content: str) -> set[str]:
    """Keep literal .gitignore lines: no comments, wildcards or negations."""
    entries: set[str] = set()
    for line in content.splitlines():
        entry = line.strip()
        if not entry or entry.startswith("#") or "*" in entry or "!" in entry:
            continue
        entries.add(entry)
    return entries


def build_ignore_set(project_path: Path | None = None) -> frozenset[str]:
    """Default ignore entries unioned with the project's root .gitignore literals.

    Raises:
        OSError: If the .gitignore exists but cannot be read.
    """
    if project_path is None:
        return DEFAULT_IGNORE_PATTERNS

    gitignore = project_path / ".gitignore"
    if not gitignore.is_file():
        return DEFAULT_IGNORE_PATTERNS

    extra = parse_gitignore(gitignore.read_text(encoding="utf-8", errors="replace"))
    logger.debug("Loaded %d literal entries from %s", len(extra), gitignore)
    return DEFAULT_IGNORE_PATTERNS | extra


def is_ignored(path_str: str, ignore_set: Iterable[str]) -> bool:
    """True when any ignore entry is a substring of path_str."""
    return any(entry in path_str for entry in ignore_set)


def ignore_key(relative_path: str, is_dir: bool = False) -> str:
    """Root-anchored form of a relative POSIX path used for ignore matching.

    "src/target" as a directory becomes "/src/target/", so both "target/"
    and "/src" style entries match it.
    """
    key = "/" + relative_path.strip("/")
    return key + "/" if is_dir else key
