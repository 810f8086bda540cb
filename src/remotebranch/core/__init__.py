"""Core step computation components for remotebranch."""

from .models import (
    Action,
    ActionId,
    CommandTemplate,
    Config,
    DynamicComputation,
    FixedTemplate,
    RepoSnapshot,
    StepParams,
)
from .registry import ActionRegistry, DuplicateActionError, DuplicateAliasError, UnknownActionError
from .steps import MissingParameterError, StepComputer, track_steps, unfork_steps
from .catalog import DEFAULT_ACTIONS, build_default_registry
from .resolver import AliasResolver
from .explain import Explanation, explain_steps, render_command, render_explanation
from .executor import CommandExecutionFailure, ExecutionResult, StepExecutor

__all__ = [
    "DEFAULT_ACTIONS",
    "Action",
    "ActionId",
    "ActionRegistry",
    "AliasResolver",
    "CommandExecutionFailure",
    "CommandTemplate",
    "Config",
    "DuplicateActionError",
    "DuplicateAliasError",
    "DynamicComputation",
    "ExecutionResult",
    "Explanation",
    "FixedTemplate",
    "MissingParameterError",
    "RepoSnapshot",
    "StepComputer",
    "StepExecutor",
    "StepParams",
    "UnknownActionError",
    "build_default_registry",
    "explain_steps",
    "render_command",
    "render_explanation",
    "track_steps",
    "unfork_steps",
]
