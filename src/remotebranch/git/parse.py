"""Parsing utilities for git plumbing output."""

from __future__ import annotations

import logging

LOGGER = logging.getLogger(__name__)

_HEADS_PREFIX = "refs/heads/"


def parse_branch_list(output: str) -> frozenset[str]:
    """Return local branch names from ``for-each-ref --format=%(refname:short)`` output.

    Full ``refs/heads/`` names are shortened and a leading ``*`` marker, as
    printed by ``git branch``, is ignored so both formats are accepted.
    """
    branches: set[str] = set()
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if line.startswith("* "):
            line = line[2:].strip()
        if not line:
            continue
        if line.startswith("("):
            LOGGER.debug("Ignoring detached HEAD entry in branch listing: %s", line)
            continue
        branches.add(line.removeprefix(_HEADS_PREFIX))
    return frozenset(branches)


def parse_symbolic_ref(output: str) -> str | None:
    """Return the branch named by ``symbolic-ref`` output, or ``None`` when empty."""
    ref = output.strip()
    if not ref:
        return None
    return ref.removeprefix(_HEADS_PREFIX)


__all__ = ["parse_branch_list", "parse_symbolic_ref"]
