"""Catalog of branch actions with alias lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import Action, ActionId

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class UnknownActionError(LookupError):
    """Raised when an alias or action identifier is not registered."""

    def __init__(self, token: str) -> None:
        """Record the token that failed to resolve."""
        self.token = token
        super().__init__(f"unknown action: {token!r}")


class DuplicateAliasError(ValueError):
    """Raised when two actions claim the same alias."""

    def __init__(self, alias: str, first: ActionId, second: ActionId) -> None:
        """Record the alias and both competing actions."""
        self.alias = alias
        self.first = first
        self.second = second
        super().__init__(
            f"duplicate alias {alias!r}: already defined for {first.value!r}, "
            f"also claimed by {second.value!r}",
        )


class DuplicateActionError(ValueError):
    """Raised when the same canonical action is registered twice."""

    def __init__(self, action_id: ActionId) -> None:
        """Record the repeated action identifier."""
        self.action_id = action_id
        super().__init__(f"action {action_id.value!r} is registered more than once")


class ActionRegistry:
    """Hold the action catalog and resolve aliases to canonical identifiers.

    The alias map is built and validated once, in the constructor, so a
    misconfigured catalog fails before any command is computed.
    """

    def __init__(self, actions: Iterable[Action]) -> None:
        """Build the catalog, rejecting duplicate actions and aliases."""
        self._actions: dict[ActionId, Action] = {}
        self._aliases: dict[str, ActionId] = {}
        for action in actions:
            if action.action_id in self._actions:
                raise DuplicateActionError(action.action_id)
            for alias in action.aliases:
                owner = self._aliases.get(alias)
                if owner is not None:
                    raise DuplicateAliasError(alias, owner, action.action_id)
                self._aliases[alias] = action.action_id
            self._actions[action.action_id] = action

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def resolve_alias(self, token: str) -> ActionId:
        """Return the action claiming ``token``; matching is case-sensitive."""
        try:
            return self._aliases[token]
        except KeyError:
            raise UnknownActionError(token) from None

    def get(self, action_id: ActionId | str) -> Action:
        """Return the catalog entry for ``action_id``."""
        try:
            key = ActionId(action_id)
        except ValueError:
            raise UnknownActionError(str(action_id)) from None
        action = self._actions.get(key)
        if action is None:
            raise UnknownActionError(key.value)
        return action

    def describe(self, action_id: ActionId | str) -> str:
        """Return the human readable description of ``action_id``."""
        return self.get(action_id).description

    def list_all(self) -> list[tuple[ActionId, tuple[str, ...], str]]:
        """Return ``(action, aliases, description)`` rows sorted by action name."""
        return [
            (action.action_id, action.aliases, action.description)
            for action in sorted(self._actions.values(), key=lambda item: item.action_id.value)
        ]


__all__ = [
    "ActionRegistry",
    "DuplicateActionError",
    "DuplicateAliasError",
    "UnknownActionError",
]
