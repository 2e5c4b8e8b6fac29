"""Helper functions shared across operations modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import GwConfig, load_config
from ..constants import DIR_SEPARATOR_MARKER, MAIN_WORKTREE
from ..exceptions import InvalidBranchError, WorktreeNotFoundError
from ..git_utils import get_current_worktree, get_repo_root, is_valid_branch_name
from ..naming import branch_to_dir, is_ambiguous, is_safe_dir_name
from ..registry import Registry, Worktree


@dataclass
class WorktreeContext:
    """
    Everything an operation needs to know about where it runs.

    Attributes:
        root: Directory holding all worktrees side by side
        top_level: Top level of the worktree the command was started in
        current: Same as top_level when the caller is inside a worktree
        registry: Fresh view of the repository
    """

    root: Path
    top_level: Path
    current: Path | None
    registry: Registry

    @property
    def main_path(self) -> Path:
        return self.root / MAIN_WORKTREE

    def worktree_path(self, branch: str) -> Path:
        return self.root / branch_to_dir(branch)

    def is_current(self, path: Path) -> bool:
        if self.current is None:
            return False
        try:
            return path.samefile(self.current)
        except OSError:
            return path.resolve() == self.current.resolve()

    def find_worktree(self, path: Path) -> Worktree | None:
        """Return the registered worktree at path, or None for any other directory."""
        for worktree in self.registry.list_worktrees():
            try:
                if worktree.path.samefile(path):
                    return worktree
            except OSError:
                if worktree.path.resolve() == path.resolve():
                    return worktree
        return None

    def load_config(self) -> GwConfig:
        return load_config(self.root)

    def require_main(self) -> Path:
        """Return the main worktree path, failing if it is missing."""
        if not self.main_path.is_dir():
            raise WorktreeNotFoundError(f"Main worktree not found at {self.main_path}")
        return self.main_path


def load_context(cwd: Path | None = None) -> WorktreeContext:
    """
    Locate the worktree root from the current directory.

    The root is the parent of the current worktree's top level.

    Raises:
        NotInRepositoryError: If not in a git repository
        NotInWorktreeError: If inside git metadata but outside any worktree
    """
    top_level = get_repo_root(cwd)
    current = get_current_worktree(cwd)
    root = top_level.parent
    return WorktreeContext(
        root=root,
        top_level=top_level,
        current=current,
        registry=Registry(top_level, current),
    )


def validate_new_branch_name(branch: str, repo: Path) -> None:
    """
    Reject branch names that cannot be given a worktree directory.

    Raises:
        InvalidBranchError: If git rejects the name, or the name contains the
            directory separator marker and would decode to a different branch
    """
    validate_dir_name(branch)
    if is_ambiguous(branch):
        raise InvalidBranchError(
            f"Branch name '{branch}' contains '{DIR_SEPARATOR_MARKER}', which is reserved "
            f"for '/' in worktree directory names"
        )
    if not is_valid_branch_name(branch, repo):
        raise InvalidBranchError(f"Invalid branch name: '{branch}'")


def validate_dir_name(branch: str) -> None:
    """
    Reject branch names whose directory would not be a single entry under the root.

    Raises:
        InvalidBranchError: For empty names, '.' and '..'
    """
    if not is_safe_dir_name(branch_to_dir(branch)):
        raise InvalidBranchError(f"Invalid branch name: '{branch}'")
