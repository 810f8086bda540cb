"""Git related helpers for remotebranch."""

from remotebranch.git.facade import GitCommandError, GitFacade
from remotebranch.git.observe import NotOnGitRepositoryError, RepoObserver
from remotebranch.git.parse import parse_branch_list, parse_symbolic_ref

__all__ = [
    "GitCommandError",
    "GitFacade",
    "NotOnGitRepositoryError",
    "RepoObserver",
    "parse_branch_list",
    "parse_symbolic_ref",
]
