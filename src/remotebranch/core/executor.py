"""Sequential execution of step lists against the repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from remotebranch.git.facade import GitCommandError

from .explain import render_command

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from collections.abc import Sequence

    from remotebranch.git.facade import GitFacade
    from remotebranch.io.logging import StructuredLogger


class CommandEcho(Protocol):
    """Callable protocol used to show commands and their output."""

    def __call__(self, text: str, *, command: bool = False) -> None:
        """Display ``text``; ``command`` marks a rendered git command line."""
        ...


class CommandExecutionFailure(RuntimeError):
    """Raised when a step exits with a non-zero status."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stderr: str,
        executed: Sequence[str],
    ) -> None:
        """Record the failing command and the steps completed before it."""
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.executed = tuple(executed)
        super().__init__(f"command failed with exit status {returncode}: {command}")


@dataclass(slots=True, frozen=True)
class ExecutionResult:
    """Result information for a single executor run."""

    executed: tuple[str, ...]
    dry_run: bool = False


class StepExecutor:
    """Run step lists one command at a time, stopping at the first failure."""

    def __init__(
        self,
        *,
        facade: GitFacade,
        logger: StructuredLogger,
        echo: CommandEcho,
        verbose: bool = False,
    ) -> None:
        """Initialise the executor with the injected collaborators."""
        self._facade = facade
        self._logger = logger
        self._echo = echo
        self._verbose = verbose

    def execute(self, steps: Sequence[str]) -> ExecutionResult:
        """Run ``steps`` in order.

        Each command is echoed before it starts and the next one only starts
        after it returns. With ``verbose`` the command's own output is echoed
        as well.

        Raises:
            CommandExecutionFailure: a command exited with a non-zero status;
                no later command is started.

        """
        executed: list[str] = []
        for step in steps:
            self._echo(render_command(step, self._facade.git_binary), command=True)
            try:
                completed = self._facade.run_step(step)
            except GitCommandError as error:
                self._show_output(error.stdout, error.stderr)
                self._logger.error(
                    "step failed",
                    step=step,
                    returncode=error.returncode,
                    executed=list(executed),
                )
                raise CommandExecutionFailure(
                    render_command(step, self._facade.git_binary),
                    error.returncode,
                    error.stderr,
                    executed,
                ) from error
            self._show_output(completed.stdout, completed.stderr)
            executed.append(step)
            if self._verbose:
                self._echo("")

        self._logger.info("steps completed", count=len(executed), dry_run=self._facade.dry_run)
        return ExecutionResult(executed=tuple(executed), dry_run=self._facade.dry_run)

    def _show_output(self, stdout: str | None, stderr: str | None) -> None:
        if not self._verbose:
            return
        for text in (stdout, stderr):
            if text:
                self._echo(text.rstrip("\n"))


__all__ = ["CommandEcho", "CommandExecutionFailure", "ExecutionResult", "StepExecutor"]
