"""Mapping between branch names and flat worktree directory names.

Worktrees live side by side under one root, so a branch such as
``feature/api`` is stored in the directory ``feature__api``.
"""

from .constants import BRANCH_SEPARATOR, DIR_SEPARATOR_MARKER


def branch_to_dir(branch: str) -> str:
    """
    Convert a branch name to a directory name.

    Example:
        >>> branch_to_dir("feature/api-update")
        'feature__api-update'
    """
    return branch.replace(BRANCH_SEPARATOR, DIR_SEPARATOR_MARKER)


def dir_to_branch(dir_name: str) -> str:
    """
    Convert a directory name back to a branch name.

    Example:
        >>> dir_to_branch("user__branch")
        'user/branch'
    """
    return dir_name.replace(DIR_SEPARATOR_MARKER, BRANCH_SEPARATOR)


def is_ambiguous(branch: str) -> bool:
    """Check if a branch name would not survive a round trip through a directory name."""
    return DIR_SEPARATOR_MARKER in branch


def is_safe_dir_name(dir_name: str) -> bool:
    """Check that a directory name is one path segment below the worktree root."""
    return dir_name not in ("", ".", "..") and "/" not in dir_name
