# tests/unit/test_main.py
"""Tests for main.py: CLI entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from plagscan.main import _build_parser, main


@pytest.fixture(autouse=True)
def _reset_plagscan_logger():
    yield
    logger = logging.getLogger("plagscan")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _no_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "plagscan" in capsys.readouterr().out

    def test_check_subcommand(self):
        args = _build_parser().parse_args([
            "check", "/extract", "--project-id", "p1", "--promotion-id", "2024",
            "-o", "/tmp/report.json", "--details",
        ])
        assert args.command == "check"
        assert args.base_dir == Path("/extract")
        assert args.project_id == "p1"
        assert args.promotion_id == "2024"
        assert args.output == Path("/tmp/report.json")
        assert args.details is True

    def test_check_requires_ids(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["check", "/extract"])

    def test_compare_subcommand(self):
        args = _build_parser().parse_args(["compare", "a", "b"])
        assert args.dir_a == Path("a")
        assert args.dir_b == Path("b")
        assert args.details is False

    def test_search_subcommand(self):
        args = _build_parser().parse_args(["search", "main.c", "factorial"])
        assert args.file == Path("main.c")
        assert args.pattern == "factorial"


# ---------------------------------------------------------------------------
# Command tests
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_search(self, tmp_path, capsys):
        target = tmp_path / "spell.txt"
        target.write_text("abracadabra")
        assert main(["search", str(target), "abra"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["offsets"] == [0, 7]
        assert payload["pattern"] == "abra"

    def test_search_missing_file(self, tmp_path):
        assert main(["search", str(tmp_path / "missing.txt"), "x"]) == 1

    def test_check_writes_report(self, submissions_dir, tmp_path):
        out = tmp_path / "reports" / "check.json"
        code = main([
            "check", str(submissions_dir),
            "--project-id", "p1", "--promotion-id", "2024", "-o", str(out),
        ])
        assert code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["projectId"] == "p1"
        assert [f["folderName"] for f in data["folderResults"]] == ["alice", "bob", "carol"]

    def test_check_missing_dir(self, tmp_path):
        assert main([
            "check", str(tmp_path / "nope"), "--project-id", "p", "--promotion-id", "q",
        ]) == 1

    def test_compare(self, submissions_dir, capsys):
        code = main(["compare", str(submissions_dir / "alice"), str(submissions_dir / "bob"), "--details"])
        assert code == 0
        out = capsys.readouterr().out
        assert "alice <-> bob" in out
        assert "main.c -> main.c: 1.0000" in out
