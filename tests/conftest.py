"""Shared fixtures for the remotebranch test suite."""
from __future__ import annotations
import io
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

import pytest
from remotebranch.core.catalog import build_default_registry
from remotebranch.core.registry import ActionRegistry
from remotebranch.core.steps import StepComputer
from remotebranch.io.logging import StructuredLogger
from tests.fakes import FakeGitFacade, ScriptQueue

@pytest.fixture
def configure_fake_git_facade(monkeypatch: pytest.MonkeyPatch) -> Iterator[ScriptQueue]:
    """Patch :class:`GitFacade` with a scripted fake for tests."""
    queue = ScriptQueue()
    FakeGitFacade.script_queue = queue
    monkeypatch.setattr("remotebranch.cli.runtime.GitFacade", FakeGitFacade)
    yield queue
    queue.clear()
    FakeGitFacade.script_queue = None


@pytest.fixture
def logger() -> StructuredLogger:
    """Provide a structured logger backed by an in-memory stream."""
    return StructuredLogger(name="test", stream=io.StringIO())


@pytest.fixture
def registry() -> ActionRegistry:
    """Return a freshly built default registry."""
    return build_default_registry()


@pytest.fixture
def computer(registry: ActionRegistry) -> StepComputer:
    """Return a step computer over the default registry."""
    return StepComputer(registry)
