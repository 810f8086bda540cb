"""CLI entry point for remotebranch built with Typer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from remotebranch.cli.runtime import (
    WorkflowContext,
    build_params,
    build_workflow_context,
    load_cli_config,
    take_snapshot,
)
from remotebranch.cli.usage import PROG_NAME, package_version, usage_text, welcome_text
from remotebranch.core.catalog import build_default_registry
from remotebranch.core.executor import CommandExecutionFailure, StepExecutor
from remotebranch.core.explain import explain_steps, render_explanation
from remotebranch.core.registry import UnknownActionError
from remotebranch.core.steps import MissingParameterError
from remotebranch.git.observe import NotOnGitRepositoryError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from remotebranch.core.models import ActionId, Config


app = typer.Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})

EXPLAIN_KEYWORD = "explain"
HELP_KEYWORD = "help"
_MAX_POSITIONALS = 2

WordsArgument = Annotated[
    list[str] | None,
    typer.Argument(
        help="[explain] ACTION BRANCH_NAME [ORIGIN_SERVER]; run 'grb help' for the action list.",
        show_default=False,
    ),
]
VerboseFlag = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show git output and structured logs."),
]
RepoOption = Annotated[Path | None, typer.Option(help="Path to the repository.")]
ConfigOption = Annotated[Path | None, typer.Option(help="Path to a configuration TOML.")]
JsonLogsFlag = Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON lines.")]
DryRunFlag = Annotated[
    bool,
    typer.Option("--dry-run", help="Echo commands without running those that modify the repository."),
]
VersionFlag = Annotated[bool, typer.Option("--version", help="Show the version and exit.")]


def _resolve_repo(repo: Path | None) -> Path:
    return repo.resolve() if repo is not None else Path.cwd()


def _echo(text: str, *, command: bool = False) -> None:
    """Write ``text`` to stdout; command lines are highlighted."""
    typer.echo(typer.style(text, fg=typer.colors.RED) if command else text)


def _fail(message: str, *, code: int) -> typer.Exit:
    typer.echo(f"{PROG_NAME}: {message}", err=True)
    return typer.Exit(code=code)


def _load_config(config_path: Path | None) -> Config:
    try:
        return load_cli_config(config_path)
    except FileNotFoundError as exc:
        raise _fail(f"Configuration file not found: {exc}", code=2) from exc
    except ValueError as exc:
        raise _fail(str(exc), code=2) from exc


def _prepare_context(
    repo: Path | None,
    config: Config,
    *,
    verbose: bool,
    json_logs: bool,
    dry_run: bool,
) -> WorkflowContext:
    return build_workflow_context(
        _resolve_repo(repo),
        config,
        verbose=verbose or config.verbose,
        json_logs=json_logs or config.json_logs,
        dry_run=dry_run,
    )


def _compute(
    context: WorkflowContext,
    action_id: ActionId,
    positionals: Sequence[str],
    *,
    explain: bool,
) -> list[str]:
    branch_name = positionals[0] if positionals else None
    origin = positionals[1] if len(positionals) > 1 else None
    try:
        snapshot = take_snapshot(context, explain=explain)
        params = build_params(
            action_id,
            branch_name,
            origin,
            snapshot,
            context.config,
            explain=explain,
        )
        steps = context.computer.compute_steps(action_id, params, snapshot.local_branches)
    except NotOnGitRepositoryError as exc:
        raise _fail(str(exc), code=2) from exc
    except MissingParameterError as exc:
        raise _fail(str(exc), code=2) from exc
    context.logger.info(
        "computed steps",
        action=action_id.value,
        steps=steps,
        local_branches=sorted(snapshot.local_branches),
    )
    return steps


@app.command(no_args_is_help=False)
def grb_command(
    words: WordsArgument = None,
    verbose: VerboseFlag = False,
    repo: RepoOption = None,
    config: ConfigOption = None,
    json_logs: JsonLogsFlag = False,
    dry_run: DryRunFlag = False,
    version: VersionFlag = False,
) -> None:
    """Create, publish, rename, delete, track, retrack and unfork remote branches."""
    if version:
        typer.echo(f"{PROG_NAME} version {package_version()}")
        return

    tokens = list(words or [])
    explain = bool(tokens) and tokens[0] == EXPLAIN_KEYWORD
    if explain:
        tokens = tokens[1:]

    settings = _load_config(config)
    if not tokens or tokens[0] == HELP_KEYWORD:
        typer.echo(welcome_text())
        typer.echo(usage_text(build_default_registry(), default_origin=settings.default_origin))
        return

    alias, *positionals = tokens
    if len(positionals) > _MAX_POSITIONALS:
        extra = " ".join(positionals[_MAX_POSITIONALS:])
        raise _fail(f"unexpected arguments: {extra} (see '{PROG_NAME} help')", code=2)

    context = _prepare_context(
        repo,
        settings,
        verbose=verbose,
        json_logs=json_logs,
        dry_run=dry_run,
    )
    try:
        action_id = context.resolver.resolve(alias)
    except UnknownActionError as exc:
        raise _fail(f"{exc} (see '{PROG_NAME} help')", code=2) from exc

    steps = _compute(context, action_id, positionals, explain=explain)

    if explain:
        explanation = explain_steps(
            context.registry,
            action_id,
            steps,
            git_binary=context.facade.git_binary,
        )
        commands = set(explanation.commands)
        for line in render_explanation(explanation):
            _echo(line, command=line in commands)
        return

    executor = StepExecutor(
        facade=context.facade,
        logger=context.logger,
        echo=_echo,
        verbose=verbose or context.config.verbose,
    )
    try:
        executor.execute(steps)
    except CommandExecutionFailure as exc:
        remaining = len(steps) - len(exc.executed) - 1
        message = f"{exc}; {remaining} remaining step(s) not run"
        raise _fail(message, code=1) from exc


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the grb CLI and return the exit status."""
    command = typer.main.get_command(app)
    try:
        command.main(args=list(argv) if argv is not None else None, prog_name=PROG_NAME)
    except SystemExit as exc:  # pragma: no cover - Typer propagates exit codes via SystemExit
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
