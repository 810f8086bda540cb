from __future__ import annotations

import io
import subprocess
from pathlib import Path

import pytest

from remotebranch.git.facade import GitCommandError, GitFacade
from remotebranch.io.logging import StructuredLogger


@pytest.fixture
def logger() -> StructuredLogger:
    """Provide a structured logger backed by an in-memory stream."""
    return StructuredLogger(name="test", stream=io.StringIO())


@pytest.fixture
def facade(tmp_path: Path, logger: StructuredLogger) -> GitFacade:
    """Create a GitFacade bound to a temporary directory."""
    workspace = Path(tmp_path)
    return GitFacade(workspace, logger)


def test_run_invokes_subprocess_and_logs(
    monkeypatch: pytest.MonkeyPatch, facade: GitFacade,
) -> None:
    """Ensure run() delegates to subprocess and records history."""
    captured: dict[str, object] = {}

    def fake_run(command: tuple[str, ...], **kwargs: object) -> subprocess.CompletedProcess[str]:
        captured["command"] = command
        captured["kwargs"] = kwargs
        return subprocess.CompletedProcess(command, 0, stdout="ok", stderr="")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    result = facade.run(["git", "status"])

    assert result.stdout == "ok"
    assert captured["command"] == ("git", "status")
    assert captured["kwargs"]["cwd"] == str(facade.repo_path)  # type: ignore[index]
    history = facade.command_history
    assert len(history) == 1
    assert history[0]["returncode"] == 0


def test_run_raises_on_nonzero_exit(
    monkeypatch: pytest.MonkeyPatch, facade: GitFacade,
) -> None:
    """Raise GitCommandError when the underlying command fails."""

    def fake_run(command: tuple[str, ...]) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(command, 1, stdout="", stderr="boom")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    with pytest.raises(GitCommandError) as exc:
        facade.run(["git", "status"])
    assert exc.value.returncode == 1
    assert exc.value.stderr == "boom"
    assert facade.command_history[0]["returncode"] == 1


def test_run_without_check_returns_failure(
    monkeypatch: pytest.MonkeyPatch, facade: GitFacade,
) -> None:
    def fake_run(command: tuple[str, ...], **_: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(command, 128, stdout="", stderr="fatal")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    result = facade.run(["git", "rev-parse", "--git-dir"], check=False)
    assert result.returncode == 128


def test_run_dry_run_records_without_execution(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    logger: StructuredLogger,
) -> None:
    """Dry-run mode should not invoke subprocess."""
    workspace = Path(tmp_path)
    facade = GitFacade(workspace, logger, dry_run=True)

    def fake_run(*_: object, **__: object) -> None:  # pragma: no cover - guard
        raise AssertionError("subprocess should not be executed in dry-run mode")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    result = facade.run(["git", "push", "origin", ":refs/heads/feature"])
    assert result.returncode == 0
    assert facade.command_history[0]["dry_run"] is True


def test_read_only_commands_run_during_dry_run(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    logger: StructuredLogger,
) -> None:
    """Inspection commands still run so dry-run output reflects the real repository."""
    facade = GitFacade(Path(tmp_path), logger, dry_run=True)
    calls: list[tuple[str, ...]] = []

    def fake_run(command: tuple[str, ...], **_: object) -> subprocess.CompletedProcess[str]:
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout="main\n", stderr="")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    result = facade.git("symbolic-ref", "--quiet", "--short", "HEAD", read_only=True)
    assert result.stdout == "main\n"
    assert calls == [("git", "symbolic-ref", "--quiet", "--short", "HEAD")]
    assert facade.command_history[0]["dry_run"] is False


def test_run_step_splits_and_prefixes_binary(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, logger: StructuredLogger,
) -> None:
    """run_step() turns a step string into a git argument vector."""
    facade = GitFacade(Path(tmp_path), logger, git_binary="/opt/git/bin/git")
    calls: list[list[str]] = []

    def fake_run(args: list[str], **_: object) -> subprocess.CompletedProcess[str]:
        calls.append(list(args))
        return subprocess.CompletedProcess(tuple(args), 0, stdout="", stderr="")

    monkeypatch.setattr(facade, "run", fake_run)
    facade.run_step("config branch.feature.merge refs/heads/feature")
    assert calls[0] == [
        "/opt/git/bin/git",
        "config",
        "branch.feature.merge",
        "refs/heads/feature",
    ]


def test_run_logs_invocation(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    stream = io.StringIO()
    facade = GitFacade(Path(tmp_path), StructuredLogger(name="git", json_mode=True, stream=stream))

    def fake_run(command: tuple[str, ...], **_: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    monkeypatch.setattr(facade, "_subprocess_run", fake_run)
    facade.run_step("fetch origin")
    assert '"command": ["git", "fetch", "origin"]' in stream.getvalue()
