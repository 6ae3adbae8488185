# tests/integration/api/test_int_check.py
"""End-to-end plagiarism check over a directory of extracted submissions."""

from __future__ import annotations

from pathlib import Path

import pytest

from plagscan.api.facade import (
    FLAG_SIGNIFICANT_MOSS_MATCH,
    FLAG_SIGNIFICANT_RABIN_KARP_MATCH,
    FLAG_VERY_HIGH_SIMILARITY,
    check_projects,
    run_plagiarism_check,
)
from plagscan.api.models import ConfigOverrides, PlagiarismCheckRequest


@pytest.fixture
def request_model() -> PlagiarismCheckRequest:
    return PlagiarismCheckRequest(project_id="proj-1", promotion_id="2024")


class TestCheckProjects:
    @pytest.mark.asyncio
    async def test_identical_pair_detected(self, submissions_dir, settings, request_model):
        response = await check_projects(request_model, submissions_dir, settings)
        results = {r.folder_name: r for r in response.folder_results}

        assert response.project_id == "proj-1"
        assert response.promotion_id == "2024"
        assert sorted(results) == ["alice", "bob", "carol"]

        alice = results["alice"]
        assert alice.plagiarism_percentage == pytest.approx(100.0)
        assert [m.matched_folder for m in alice.matches] == ["bob", "carol"]
        bob_match = alice.matches[0]
        assert bob_match.moss_score == pytest.approx(100.0)
        assert bob_match.rabin_karp_score == pytest.approx(100.0)
        assert bob_match.flags == [
            FLAG_VERY_HIGH_SIMILARITY,
            FLAG_SIGNIFICANT_MOSS_MATCH,
            FLAG_SIGNIFICANT_RABIN_KARP_MATCH,
        ]
        assert alice.sha1 == results["bob"].sha1
        assert results["carol"].sha1 != alice.sha1

    @pytest.mark.asyncio
    async def test_unrelated_submission_scores_low(self, submissions_dir, settings, request_model):
        response = await check_projects(request_model, submissions_dir, settings)
        carol = next(r for r in response.folder_results if r.folder_name == "carol")
        assert len(carol.matches) == 2
        assert carol.plagiarism_percentage < 50.0
        assert all(FLAG_VERY_HIGH_SIMILARITY not in m.flags for m in carol.matches)

    @pytest.mark.asyncio
    async def test_file_details_override(self, submissions_dir, settings):
        request = PlagiarismCheckRequest(
            project_id="proj-1", promotion_id="2024",
            config_overrides=ConfigOverrides(include_file_details=True),
        )
        response = await check_projects(request, submissions_dir, settings)
        alice = response.folder_results[0]
        details = alice.matches[0].file_comparisons
        assert details is not None
        assert details[0].file1_path == "main.c"

    @pytest.mark.asyncio
    async def test_unreadable_submission_still_listed(
        self, submissions_dir: Path, settings, request_model, tree_writer,
    ):
        tree_writer(submissions_dir / "dave", {"blob.py": b"\xff\xfe\xfd"})
        response = await check_projects(request_model, submissions_dir, settings)
        dave = next(r for r in response.folder_results if r.folder_name == "dave")
        assert dave.sha1 is None
        assert dave.plagiarism_percentage == 0.0

    @pytest.mark.asyncio
    async def test_missing_base_dir(self, tmp_path, settings, request_model):
        with pytest.raises(ValueError):
            await check_projects(request_model, tmp_path / "missing", settings)


def test_sync_wrapper(submissions_dir, settings):
    response = run_plagiarism_check("proj-1", "2024", submissions_dir, settings)
    assert len(response.folder_results) == 3
    dumped = response.model_dump(by_alias=True)
    assert "folderResults" in dumped
