# tests/conftest.py
"""Shared test fixtures for all unit and integration tests.

Provides settings without .env lookup, in-memory projects and helpers that
lay out submission trees on disk.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from plagscan.config.settings import Settings
from plagscan.core.models import NormalizedProject, ProcessedFile, SourceLanguage
from plagscan.project.processor import calculate_sha1, count_lines, detect_language


# === HELPERS ===


def make_file(path: str, content: str, language: SourceLanguage | None = None) -> ProcessedFile:
    """Build a ProcessedFile the way the normalizer would."""
    return ProcessedFile(
        relative_path=path,
        content=content,
        language=language or detect_language(path),
        sha1_hash=calculate_sha1(content),
        char_length=len(content),
        line_count=count_lines(content),
    )


def make_project(project_id: str, files: dict[str, str], concatenated: str | None = None) -> NormalizedProject:
    """Build a NormalizedProject from a {path: content} mapping."""
    return NormalizedProject(
        project_id=project_id,
        files={path: make_file(path, content) for path, content in files.items()},
        concatenated_source_code=concatenated,
        concatenated_source_hash=calculate_sha1(concatenated) if concatenated else None,
    )


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write {relative_path: content} under root and return root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


# === FIXTURES: Sample data ===


SAMPLE_C_PROGRAM = (
    "#include <stdio.h>\n"
    "\n"
    "int factorial(int n) {\n"
    "    int fact = 1;\n"
    "    for (int i = 1; i <= n; ++i)\n"
    "        fact *= i;\n"
    "    return fact;\n"
    "}\n"
    "\n"
    "int main() {\n"
    "    printf(\"Factorial: %d\\n\", factorial(5));\n"
    "    return 0;\n"
    "}\n"
)

SAMPLE_PY_PROGRAM = (
    "def fizzbuzz(limit):\n"
    "    for value in range(1, limit + 1):\n"
    "        if value % 15 == 0:\n"
    "            print('FizzBuzz')\n"
    "        elif value % 3 == 0:\n"
    "            print('Fizz')\n"
    "        elif value % 5 == 0:\n"
    "            print('Buzz')\n"
    "        else:\n"
    "            print(value)\n"
)


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_c_program() -> str:
    return SAMPLE_C_PROGRAM


@pytest.fixture
def sample_py_program() -> str:
    return SAMPLE_PY_PROGRAM


# === FIXTURES: Temp dirs ===


@pytest.fixture
def submissions_dir(tmp_path: Path) -> Path:
    """Base directory holding three submissions; two are identical."""
    base = tmp_path / "extract"
    write_tree(base / "alice", {"main.c": SAMPLE_C_PROGRAM})
    write_tree(base / "bob", {"main.c": SAMPLE_C_PROGRAM})
    write_tree(base / "carol", {"fizz.py": SAMPLE_PY_PROGRAM})
    return base


# === FIXTURES: Factories ===


@pytest.fixture
def file_factory():
    """make_file(path, content) -> ProcessedFile."""
    return make_file


@pytest.fixture
def project_factory():
    """make_project(project_id, {path: content}, concatenated=None) -> NormalizedProject."""
    return make_project


@pytest.fixture
def tree_writer():
    """write_tree(root, {path: content}) -> root."""
    return write_tree
