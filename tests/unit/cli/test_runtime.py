from __future__ import annotations

from pathlib import Path

import pytest

from remotebranch.cli.runtime import (
    PLACEHOLDER_CURRENT_BRANCH,
    build_params,
    build_workflow_context,
    default_config,
    take_snapshot,
)
from remotebranch.core.models import ActionId, Config, RepoSnapshot
from remotebranch.core.steps import MissingParameterError
from remotebranch.git.observe import NotOnGitRepositoryError

from tests.fakes import REV_PARSE, GitResponse, ScriptQueue, repository_script


SNAPSHOT = RepoSnapshot(repo_path=Path("/opt/mock-repo"), current_branch="main", local_branches=frozenset({"main"}))


def test_build_params_uses_config_defaults() -> None:
    config = Config(default_origin="upstream", trunk_branch="trunk")

    params = build_params(ActionId.delete, "feature", None, SNAPSHOT, config, explain=False)

    assert params.origin == "upstream"
    assert params.trunk_branch == "trunk"
    assert params.current_branch == "main"


def test_build_params_explicit_origin_wins() -> None:
    params = build_params(ActionId.track, "feature", "github", SNAPSHOT, default_config(), explain=False)

    assert params.origin == "github"


def test_build_params_requires_branch_outside_explain() -> None:
    with pytest.raises(MissingParameterError) as exc:
        build_params(ActionId.publish, None, None, SNAPSHOT, default_config(), explain=False)
    assert exc.value.field == "branch_name"


def test_build_params_placeholders_in_explain_mode() -> None:
    snapshot = RepoSnapshot(repo_path=Path("/opt/mock-repo"))

    params = build_params(ActionId.rename, None, None, snapshot, default_config(), explain=True)

    assert params.branch_name == "branch_to_rename"
    assert params.current_branch == PLACEHOLDER_CURRENT_BRANCH


def test_take_snapshot_falls_back_only_when_explaining(
    tmp_path: Path, configure_fake_git_facade: ScriptQueue,
) -> None:
    configure_fake_git_facade.push({REV_PARSE: GitResponse(returncode=128)})
    configure_fake_git_facade.push({REV_PARSE: GitResponse(returncode=128)})
    config = default_config()

    explaining = build_workflow_context(tmp_path, config, verbose=False, json_logs=False, dry_run=False)
    executing = build_workflow_context(tmp_path, config, verbose=False, json_logs=False, dry_run=False)

    assert take_snapshot(explaining, explain=True) == RepoSnapshot(repo_path=tmp_path)
    with pytest.raises(NotOnGitRepositoryError):
        take_snapshot(executing, explain=False)


def test_build_workflow_context_wires_collaborators(
    tmp_path: Path, configure_fake_git_facade: ScriptQueue,
) -> None:
    configure_fake_git_facade.push(repository_script("main", ["main"]))
    config = Config(git_binary="/usr/local/bin/git")

    context = build_workflow_context(tmp_path, config, verbose=False, json_logs=True, dry_run=True)

    assert context.facade.git_binary == "/usr/local/bin/git"
    assert context.facade.dry_run is True
    assert context.logger.json_mode is True
    assert context.resolver.resolve("new") is ActionId.create
    assert context.computer.registry is context.registry
