from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from remotebranch.core.models import RepoSnapshot
from remotebranch.git.parse import parse_branch_list, parse_symbolic_ref

if TYPE_CHECKING:
    from remotebranch.git.facade import GitFacade

_GIT_DIR_ARGS = ("rev-parse", "--git-dir")
_CURRENT_BRANCH_ARGS = ("symbolic-ref", "--quiet", "--short", "HEAD")
_LOCAL_BRANCHES_ARGS = ("for-each-ref", "--format=%(refname:short)", "refs/heads/")


class NotOnGitRepositoryError(RuntimeError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, repo_path: Path) -> None:
        """Record the directory that was inspected."""
        self.repo_path = Path(repo_path)
        super().__init__(f"not a git repository: {self.repo_path}")


class RepoObserver:
    """Read the branch facts the step computer depends on."""

    def __init__(self, facade: GitFacade) -> None:
        """Initialise the observer with a facade."""
        self._facade = facade
        self._repo_path = Path(facade.repo_path)

    def is_repository(self) -> bool:
        """Return ``True`` when the facade points inside a git work tree."""
        if not self._repo_path.is_dir():
            return False
        result = self._facade.git(*_GIT_DIR_ARGS, check=False, read_only=True)
        return result.returncode == 0

    def current_branch(self) -> str | None:
        """Return the checked out branch, or ``None`` for a detached HEAD."""
        result = self._facade.git(*_CURRENT_BRANCH_ARGS, check=False, read_only=True)
        if result.returncode != 0:
            return None
        return parse_symbolic_ref(result.stdout or "")

    def local_branches(self) -> frozenset[str]:
        """Return the names of all local branches."""
        result = self._facade.git(*_LOCAL_BRANCHES_ARGS, read_only=True)
        return parse_branch_list(result.stdout or "")

    def snapshot(self) -> RepoSnapshot:
        """Return the current branch and local branch set in one snapshot.

        The snapshot is not refreshed while steps execute; commands run later
        may change the repository without it noticing.
        """
        if not self.is_repository():
            raise NotOnGitRepositoryError(self._repo_path)
        return RepoSnapshot(
            repo_path=self._repo_path,
            current_branch=self.current_branch(),
            local_branches=self.local_branches(),
        )


__all__ = ["NotOnGitRepositoryError", "RepoObserver"]
