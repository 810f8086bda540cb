from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from remotebranch.core.models import RepoSnapshot
from remotebranch.git.observe import NotOnGitRepositoryError, RepoObserver

from tests.fakes import REV_PARSE, SYMBOLIC_REF, FakeGitFacade, GitResponse, repository_script

if TYPE_CHECKING:
    from pathlib import Path

    from remotebranch.io.logging import StructuredLogger


def test_snapshot_reads_branch_state(tmp_path: Path, logger: StructuredLogger) -> None:
    """Create a snapshot from rev-parse, symbolic-ref and for-each-ref output."""
    facade = FakeGitFacade(
        repo_path=tmp_path,
        logger=logger,
        script=repository_script("feature", ["feature", "main"]),
    )

    snapshot = RepoObserver(facade).snapshot()

    assert isinstance(snapshot, RepoSnapshot)
    assert snapshot.repo_path == tmp_path
    assert snapshot.current_branch == "feature"
    assert snapshot.local_branches == frozenset({"feature", "main"})


def test_detached_head_has_no_current_branch(tmp_path: Path, logger: StructuredLogger) -> None:
    facade = FakeGitFacade(
        repo_path=tmp_path,
        logger=logger,
        script=repository_script(None, ["main"]),
    )

    snapshot = RepoObserver(facade).snapshot()

    assert snapshot.current_branch is None
    assert snapshot.local_branches == frozenset({"main"})


def test_snapshot_outside_repository_raises(tmp_path: Path, logger: StructuredLogger) -> None:
    facade = FakeGitFacade(
        repo_path=tmp_path,
        logger=logger,
        script={REV_PARSE: GitResponse(returncode=128, stderr="fatal: not a git repository")},
    )

    with pytest.raises(NotOnGitRepositoryError) as exc:
        RepoObserver(facade).snapshot()
    assert exc.value.repo_path == tmp_path


def test_missing_directory_is_not_a_repository(tmp_path: Path, logger: StructuredLogger) -> None:
    facade = FakeGitFacade(repo_path=tmp_path / "missing", logger=logger, script={})

    assert RepoObserver(facade).is_repository() is False
    assert facade.command_history == ()


def test_observation_runs_during_dry_run(tmp_path: Path, logger: StructuredLogger) -> None:
    """Inspection is read-only, so dry-run still observes the real branch state."""
    facade = FakeGitFacade(
        repo_path=tmp_path,
        logger=logger,
        dry_run=True,
        script=repository_script("main", ["main"]),
    )

    observer = RepoObserver(facade)

    assert observer.current_branch() == "main"
    assert observer.local_branches() == frozenset({"main"})
    assert [entry["command"] for entry in facade.command_history][0] == list(SYMBOLIC_REF)
