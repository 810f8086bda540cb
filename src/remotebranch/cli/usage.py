"""Welcome and usage text for the grb command."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

from remotebranch.core.models import ActionId

if TYPE_CHECKING:
    from remotebranch.core.registry import ActionRegistry

PROG_NAME = "grb"
DISTRIBUTION = "remotebranch"

_POSITIONAL_ACTIONS = (
    ActionId.create,
    ActionId.publish,
    ActionId.rename,
    ActionId.delete,
    ActionId.track,
    ActionId.retrack,
)


def package_version() -> str:
    """Return the installed version of remotebranch."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "unknown"


def welcome_text() -> str:
    """Return the version banner printed above the usage text."""
    return f"{PROG_NAME} version {package_version()}\n"


def usage_text(registry: ActionRegistry, *, default_origin: str = "origin") -> str:
    """Return the full usage listing, ending with the alias table."""
    lines = ["  Usage:", ""]
    for action_id in _POSITIONAL_ACTIONS:
        lines.append(f"  {PROG_NAME} {action_id.value} branch_name [origin_server]")
        lines.append("")
    lines.extend(
        [
            f"  {PROG_NAME} {ActionId.unfork.value} remote_branch_ref [origin_server]",
            "",
            "  Notes:",
            f"  - If origin_server is not specified, the name '{default_origin}' is assumed",
            "  - The rename functionality renames the current branch",
            "  - The unfork command operates on current branch - enforces the current",
            "    branch (e.g. master) to follow the remote repository (again)",
            "",
            "  The explain meta-command: you can also prepend any command with the keyword",
            "  'explain'. Instead of executing the command, grb will simply output the list",
            "  of commands you need to run to accomplish that goal.",
            "  Example:",
            f"    {PROG_NAME} explain create",
            f"    {PROG_NAME} explain create my_branch github",
            "",
            "  Commands also have aliases:",
        ],
    )
    lines.extend(
        f"  {action_id.value}: {', '.join(aliases)}"
        for action_id, aliases, _ in registry.list_all()
    )
    return "\n".join(lines) + "\n"


__all__ = ["PROG_NAME", "package_version", "usage_text", "welcome_text"]
