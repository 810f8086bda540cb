"""Core data models for remotebranch."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import pathlib
import shlex
import typing

from pydantic import BaseModel, ConfigDict, Field, field_validator

if typing.TYPE_CHECKING:
    from collections.abc import Callable


class ActionId(str, Enum):
    """Canonical identifiers of the supported branch actions."""

    create = "create"
    delete = "delete"
    publish = "publish"
    rename = "rename"
    retrack = "retrack"
    track = "track"
    unfork = "unfork"


class StepParams(BaseModel):
    """Runtime parameters substituted into the commands of an action."""

    branch_name: str = Field(min_length=1)
    origin: str = Field(default="origin", min_length=1)
    current_branch: str | None = None
    trunk_branch: str = Field(default="master", min_length=1)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("current_branch")
    @classmethod
    def _blank_current_branch(cls, value: str | None) -> str | None:
        """Treat an empty current branch the same as an unknown one."""
        return value or None


@dataclass(frozen=True, slots=True)
class CommandTemplate:
    """A command pattern that is always emitted or emitted only when ``guard`` holds."""

    pattern: str
    guard: Callable[[StepParams], bool] | None = None

    def render(self, params: StepParams) -> str | None:
        """Return the concrete command, or ``None`` when the guard rejects ``params``.

        Substituted values are shell-quoted so the command splits back into
        the same arguments whatever characters a branch name holds.
        """
        if self.guard is not None and not self.guard(params):
            return None
        values = {
            key: shlex.quote(value) if isinstance(value, str) else value
            for key, value in params.model_dump().items()
        }
        return self.pattern.format(**values)


@dataclass(frozen=True, slots=True)
class FixedTemplate:
    """Ordered command templates instantiated by plain substitution."""

    commands: tuple[CommandTemplate, ...]


@dataclass(frozen=True, slots=True)
class DynamicComputation:
    """Steps produced by a routine that consults the local branch snapshot."""

    compute: Callable[[StepParams, frozenset[str]], list[str]]


StepStrategy = FixedTemplate | DynamicComputation


@dataclass(frozen=True, slots=True)
class Action:
    """Immutable catalog entry describing one branch action."""

    action_id: ActionId
    description: str
    aliases: tuple[str, ...]
    strategy: StepStrategy
    required: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Reject actions that could never be resolved from the command line."""
        if not self.aliases:
            msg = f"action {self.action_id.value!r} must declare at least one alias"
            raise ValueError(msg)


class RepoSnapshot(BaseModel):
    """Repository facts read once per invocation."""

    repo_path: pathlib.Path
    current_branch: str | None = None
    local_branches: frozenset[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True, extra="forbid")


class Config(BaseModel):
    """Top level configuration schema validated from TOML files."""

    default_origin: str = Field(default="origin", min_length=1)
    trunk_branch: str = Field(default="master", min_length=1)
    git_binary: str = Field(default="git", min_length=1)
    verbose: bool = False
    json_logs: bool = False

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "Action",
    "ActionId",
    "CommandTemplate",
    "Config",
    "DynamicComputation",
    "FixedTemplate",
    "RepoSnapshot",
    "StepParams",
    "StepStrategy",
]
