"""Git command execution facade."""

from __future__ import annotations

import inspect
import shlex
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, MutableSequence, Sequence
    from remotebranch.io.logging import StructuredLogger


class GitCommandError(RuntimeError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> None:
        """Initialise the error with details from a git command invocation."""
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        message = (
            "git command failed",
            f"command={self.command}",
            f"returncode={returncode}",
        )
        super().__init__("; ".join(message))


class GitFacade:
    """Provide a safe wrapper around subprocess-based git invocations."""

    def __init__(
        self,
        repo_path: Path,
        logger: StructuredLogger,
        *,
        dry_run: bool = False,
        env: Mapping[str, str] | None = None,
        git_binary: str = "git",
    ) -> None:
        """Create a facade bound to a repository root and logger."""
        self._repo_path = Path(repo_path)
        self._logger = logger
        self._dry_run = dry_run
        self._env = dict(env or {})
        self._git_binary = git_binary
        self._command_history: MutableSequence[dict[str, object]] = []
        self._subprocess_run: Callable[
            ..., subprocess.CompletedProcess[str],
        ] = subprocess.run

    @property
    def repo_path(self) -> Path:
        """Return the repository root for the facade."""
        return self._repo_path

    @property
    def dry_run(self) -> bool:
        """Return whether the facade operates in dry-run mode."""
        return self._dry_run

    @property
    def git_binary(self) -> str:
        """Return the executable used for git commands."""
        return self._git_binary

    @property
    def command_history(self) -> Sequence[dict[str, object]]:
        """Return an immutable view of recorded commands."""
        return tuple(self._command_history)

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
        capture_output: bool = True,
        read_only: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """Execute a git command while handling dry-run and logging.

        ``read_only`` commands run even in dry-run mode, since they cannot
        change the repository.
        """
        command = tuple(str(part) for part in args)
        working_dir = Path(cwd) if cwd is not None else self._repo_path
        skip = self._dry_run and not read_only
        self._logger.info(
            "executing git command",
            command=list(command),
            cwd=str(working_dir),
            dry_run=skip,
        )
        if skip:
            completed = subprocess.CompletedProcess(command, 0, stdout="", stderr="")
            self._command_history.append(
                {
                    "command": list(command),
                    "cwd": str(working_dir),
                    "returncode": 0,
                    "dry_run": True,
                },
            )
            return completed

        kwargs: dict[str, object] = {
            "cwd": str(working_dir),
            "capture_output": capture_output,
            "text": True,
            "check": False,
            "env": self._env or None,
        }
        filtered_kwargs = _filter_runner_kwargs(self._subprocess_run, kwargs)
        completed = self._subprocess_run(command, **filtered_kwargs)
        self._command_history.append(
            {
                "command": list(command),
                "cwd": str(working_dir),
                "returncode": completed.returncode,
                "dry_run": False,
            },
        )
        if completed.stdout:
            self._logger.debug("git stdout", stdout=completed.stdout)
        if completed.stderr:
            self._logger.debug("git stderr", stderr=completed.stderr)
        if check and completed.returncode != 0:
            raise GitCommandError(command, completed.returncode, completed.stdout, completed.stderr)
        return completed

    def git(
        self,
        *args: str,
        check: bool = True,
        read_only: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``git <args>`` with the configured binary."""
        return self.run([self._git_binary, *args], check=check, read_only=read_only)

    def run_step(self, step: str, *, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run a step string such as ``"fetch origin"`` as a git command."""
        return self.git(*shlex.split(step), check=check)


__all__ = ["GitCommandError", "GitFacade"]


def _filter_runner_kwargs(
    runner: Callable[..., subprocess.CompletedProcess[str]],
    kwargs: dict[str, object],
) -> dict[str, object]:
    """Limit keyword arguments to those supported by the runner callable."""
    try:
        signature = inspect.signature(runner)
    except (TypeError, ValueError):
        return kwargs
    parameters = tuple(signature.parameters.values())
    if any(parameter.kind is inspect.Parameter.VAR_KEYWORD for parameter in parameters):
        return kwargs
    accepted = {
        parameter.name
        for parameter in parameters
        if parameter.kind in {inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY}
    }
    return {name: value for name, value in kwargs.items() if name in accepted}
