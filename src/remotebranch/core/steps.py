"""Step computation: turn an action and its parameters into git commands."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

from .models import ActionId, DynamicComputation, FixedTemplate, StepParams

if TYPE_CHECKING:
    from collections.abc import Collection

    from .registry import ActionRegistry


class MissingParameterError(ValueError):
    """Raised when an action needs a parameter that was not supplied."""

    def __init__(self, field: str, action_id: ActionId | None = None) -> None:
        """Record the missing field and, when known, the action that needs it."""
        self.field = field
        self.action_id = action_id
        suffix = f" for action {action_id.value!r}" if action_id is not None else ""
        super().__init__(f"missing required parameter {field!r}{suffix}")


def track_steps(
    branch_name: str,
    origin: str,
    local_branches: Collection[str],
) -> list[str]:
    """Return the commands making ``branch_name`` track ``origin``.

    An existing local branch has its tracking configuration repointed;
    otherwise a new tracking branch is created from ``origin/branch_name``.
    """
    branch = shlex.quote(branch_name)
    remote = shlex.quote(origin)
    steps = [f"fetch {remote}"]
    if branch_name in local_branches:
        steps.append(f"config branch.{branch}.remote {remote}")
        steps.append(f"config branch.{branch}.merge refs/heads/{branch}")
    else:
        steps.append(f"branch --track {branch} {remote}/{branch}")
    steps.append(f"checkout {branch}")
    return steps


def unfork_steps(
    branch_name: str,
    origin: str,
    current_branch: str,
    local_branches: Collection[str],
) -> list[str]:
    """Return the commands re-homing ``current_branch`` onto ``origin``.

    ``branch_name`` is the remote reference the current branch was forked
    from. Both tracking phases consult the same ``local_branches`` snapshot.
    """
    steps = track_steps(current_branch, branch_name, local_branches)
    current = shlex.quote(current_branch)
    steps.append(f"push -f {shlex.quote(origin)} {current}:refs/heads/{current}")
    steps.extend(track_steps(current_branch, origin, local_branches))
    return steps


def compute_track(params: StepParams, local_branches: frozenset[str]) -> list[str]:
    """Adapt :func:`track_steps` to the dynamic strategy signature."""
    return track_steps(params.branch_name, params.origin, local_branches)


def compute_unfork(params: StepParams, local_branches: frozenset[str]) -> list[str]:
    """Adapt :func:`unfork_steps` to the dynamic strategy signature."""
    if params.current_branch is None:
        raise MissingParameterError("current_branch", ActionId.unfork)
    return unfork_steps(params.branch_name, params.origin, params.current_branch, local_branches)


class StepComputer:
    """Compute the ordered step list for an action."""

    def __init__(self, registry: ActionRegistry) -> None:
        """Bind the computer to an action catalog."""
        self._registry = registry

    @property
    def registry(self) -> ActionRegistry:
        """Return the catalog used for lookups."""
        return self._registry

    def compute_steps(
        self,
        action_id: ActionId | str,
        params: StepParams,
        local_branches: Collection[str] = frozenset(),
    ) -> list[str]:
        """Return the commands for ``action_id`` given ``params`` and a branch snapshot.

        Raises:
            UnknownActionError: ``action_id`` is not registered.
            MissingParameterError: a field the action requires is absent.

        """
        action = self._registry.get(action_id)
        for field in action.required:
            if getattr(params, field, None) is None:
                raise MissingParameterError(field, action.action_id)

        strategy = action.strategy
        if isinstance(strategy, FixedTemplate):
            rendered = (template.render(params) for template in strategy.commands)
            return [command for command in rendered if command is not None]
        if isinstance(strategy, DynamicComputation):
            return strategy.compute(params, frozenset(local_branches))
        msg = f"unsupported step strategy for {action.action_id.value!r}: {strategy!r}"
        raise TypeError(msg)


__all__ = [
    "MissingParameterError",
    "StepComputer",
    "compute_track",
    "compute_unfork",
    "track_steps",
    "unfork_steps",
]
