"""Alias resolution exposed to the command-line front-end."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ActionId
    from .registry import ActionRegistry


class AliasResolver:
    """Resolve user supplied tokens to canonical action identifiers."""

    def __init__(self, registry: ActionRegistry) -> None:
        """Wrap ``registry`` without copying any of its state."""
        self._registry = registry

    def resolve(self, token: str) -> ActionId:
        """Return the action claiming ``token`` or raise ``UnknownActionError``."""
        return self._registry.resolve_alias(token)


__all__ = ["AliasResolver"]
