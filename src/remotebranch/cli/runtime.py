"""Helpers shared by the CLI for computing and running step lists."""

from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

from remotebranch.core.catalog import build_default_registry
from remotebranch.core.models import ActionId, Config, RepoSnapshot, StepParams
from remotebranch.core.resolver import AliasResolver
from remotebranch.core.steps import MissingParameterError, StepComputer
from remotebranch.git.facade import GitFacade
from remotebranch.git.observe import NotOnGitRepositoryError, RepoObserver
from remotebranch.io import StructuredLogger, load_config

if TYPE_CHECKING:
    from pathlib import Path
    from remotebranch.core.registry import ActionRegistry

PLACEHOLDER_CURRENT_BRANCH = "current_branch"


@dataclass(slots=True)
class WorkflowContext:
    """Container bundling CLI dependencies for step computation and execution."""

    repo_path: Path
    config: Config
    logger: StructuredLogger
    facade: GitFacade
    observer: RepoObserver
    registry: ActionRegistry
    resolver: AliasResolver
    computer: StepComputer


def default_config() -> Config:
    """Return the default configuration used when no config file is provided."""
    return Config()


def load_cli_config(config_path: Path | None) -> Config:
    """Load configuration from ``config_path`` or fall back to defaults."""
    if config_path is None:
        return default_config()
    return load_config(path=config_path)


def build_workflow_context(
    repo_path: Path,
    config: Config,
    *,
    verbose: bool,
    json_logs: bool,
    dry_run: bool,
    registry: ActionRegistry | None = None,
) -> WorkflowContext:
    """Assemble the context required by the CLI.

    Logs are written to stderr only in verbose mode.
    """
    stream = sys.stderr if verbose else io.StringIO()
    logger = StructuredLogger(name="remotebranch.cli", json_mode=json_logs, stream=stream)
    facade = GitFacade(
        repo_path=repo_path,
        logger=logger,
        dry_run=dry_run,
        git_binary=config.git_binary,
    )
    catalog = registry if registry is not None else build_default_registry()
    return WorkflowContext(
        repo_path=repo_path,
        config=config,
        logger=logger,
        facade=facade,
        observer=RepoObserver(facade),
        registry=catalog,
        resolver=AliasResolver(catalog),
        computer=StepComputer(catalog),
    )


def take_snapshot(context: WorkflowContext, *, explain: bool) -> RepoSnapshot:
    """Read repository state once for this invocation.

    Explain mode works outside a repository: it falls back to an empty
    branch set and no current branch.
    """
    try:
        return context.observer.snapshot()
    except NotOnGitRepositoryError:
        if not explain:
            raise
        context.logger.warning("explaining outside a git repository", repo=str(context.repo_path))
        return RepoSnapshot(repo_path=context.repo_path)


def build_params(
    action_id: ActionId,
    branch_name: str | None,
    origin: str | None,
    snapshot: RepoSnapshot,
    config: Config,
    *,
    explain: bool,
) -> StepParams:
    """Assemble the parameter set for ``action_id``.

    In explain mode missing values are replaced by readable placeholders so
    the command list can always be shown.
    """
    current_branch = snapshot.current_branch
    if explain:
        branch_name = branch_name or f"branch_to_{action_id.value}"
        current_branch = current_branch or PLACEHOLDER_CURRENT_BRANCH
    if not branch_name:
        raise MissingParameterError("branch_name", action_id)
    return StepParams(
        branch_name=branch_name,
        origin=origin or config.default_origin,
        current_branch=current_branch,
        trunk_branch=config.trunk_branch,
    )


__all__ = [
    "PLACEHOLDER_CURRENT_BRANCH",
    "WorkflowContext",
    "build_params",
    "build_workflow_context",
    "default_config",
    "load_cli_config",
    "take_snapshot",
]
