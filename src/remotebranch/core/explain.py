"""Utilities for explaining step lists to users."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import ActionId
    from .registry import ActionRegistry


def render_command(step: str, git_binary: str = "git") -> str:
    """Return the command line shown to the user for ``step``.

    Explain and execute mode both print through this function, so the text
    of a command never differs between the two. ``step`` is already quoted
    for the shell; the binary is quoted here.
    """
    return f"{shlex.quote(git_binary)} {step}"


@dataclass(frozen=True, slots=True)
class Explanation:
    """Human readable explanation of the commands an action would run."""

    action_id: ActionId
    description: str
    commands: tuple[str, ...]


def explain_steps(
    registry: ActionRegistry,
    action_id: ActionId,
    steps: Sequence[str],
    *,
    git_binary: str = "git",
) -> Explanation:
    """Build an :class:`Explanation` for ``steps`` computed for ``action_id``.

    Args:
        registry: Catalog providing the action description.
        action_id: The action the steps were computed for.
        steps: The step list, in execution order.
        git_binary: Binary name prefixed to every command.

    Returns:
        An explanation whose ``commands`` mirror the order of ``steps``.

    """
    return Explanation(
        action_id=action_id,
        description=registry.describe(action_id),
        commands=tuple(render_command(step, git_binary) for step in steps),
    )


def render_explanation(explanation: Explanation) -> list[str]:
    """Return the output lines for ``explanation``."""
    return [
        f"List of operations to do to {explanation.description}:",
        "",
        *explanation.commands,
        "",
    ]


__all__ = ["Explanation", "explain_steps", "render_command", "render_explanation"]
