"""The built-in catalog of branch actions."""

from __future__ import annotations

from .models import (
    Action,
    ActionId,
    CommandTemplate,
    DynamicComputation,
    FixedTemplate,
    StepParams,
)
from .registry import ActionRegistry
from .steps import compute_track, compute_unfork


def _on_target_branch(params: StepParams) -> bool:
    return params.current_branch == params.branch_name


def _fixed(*commands: str | CommandTemplate) -> FixedTemplate:
    return FixedTemplate(
        commands=tuple(
            command if isinstance(command, CommandTemplate) else CommandTemplate(command)
            for command in commands
        ),
    )


DEFAULT_ACTIONS: tuple[Action, ...] = (
    Action(
        action_id=ActionId.create,
        description="create a new remote branch and track it locally",
        aliases=("create", "new"),
        strategy=_fixed(
            "push {origin} {current_branch}:refs/heads/{branch_name}",
            "fetch {origin}",
            "branch --track {branch_name} {origin}/{branch_name}",
            "checkout {branch_name}",
        ),
        required=("current_branch",),
    ),
    Action(
        action_id=ActionId.publish,
        description="publish an exiting local branch",
        aliases=("publish", "remotize", "share"),
        strategy=_fixed(
            "push {origin} {branch_name}:refs/heads/{branch_name}",
            "fetch {origin}",
            "config branch.{branch_name}.remote {origin}",
            "config branch.{branch_name}.merge refs/heads/{branch_name}",
            "checkout {branch_name}",
        ),
    ),
    Action(
        action_id=ActionId.rename,
        description="rename a remote branch and its local tracking branch",
        aliases=("rename", "rn", "mv", "move"),
        strategy=_fixed(
            "push {origin} {current_branch}:refs/heads/{branch_name}",
            "fetch {origin}",
            "branch --track {branch_name} {origin}/{branch_name}",
            "checkout {branch_name}",
            "push {origin} :refs/heads/{current_branch}",
            "branch -d {current_branch}",
        ),
        required=("current_branch",),
    ),
    Action(
        action_id=ActionId.delete,
        description="delete a local and a remote branch",
        aliases=("delete", "destroy", "kill", "remove", "rm"),
        strategy=_fixed(
            "push {origin} :refs/heads/{branch_name}",
            CommandTemplate("checkout {trunk_branch}", guard=_on_target_branch),
            "branch -d {branch_name}",
        ),
        required=("current_branch",),
    ),
    Action(
        action_id=ActionId.retrack,
        description="delete and then track a remote branch",
        aliases=("retrack",),
        strategy=_fixed(
            "checkout {trunk_branch}",
            "branch -D {branch_name}",
            "fetch {origin}",
            "branch --track {branch_name} {origin}/{branch_name}",
            "checkout {branch_name}",
        ),
    ),
    Action(
        action_id=ActionId.track,
        description="track an existing remote branch",
        aliases=("track", "follow", "grab", "fetch"),
        strategy=DynamicComputation(compute=compute_track),
    ),
    Action(
        action_id=ActionId.unfork,
        description="unfork a remote (e.g. github) branch",
        aliases=("unfork",),
        strategy=DynamicComputation(compute=compute_unfork),
        required=("current_branch",),
    ),
)


def build_default_registry() -> ActionRegistry:
    """Return a freshly validated registry holding the built-in actions."""
    return ActionRegistry(DEFAULT_ACTIONS)


__all__ = ["DEFAULT_ACTIONS", "build_default_registry"]
