"""Lifecycle operations: create-or-switch, delete, clean and list."""

from .clean import clean_worktrees
from .create import create_new_branch, switch_or_create
from .delete import delete_worktree
from .listing import list_worktrees, print_worktrees

__all__ = [
    "clean_worktrees",
    "create_new_branch",
    "delete_worktree",
    "list_worktrees",
    "print_worktrees",
    "switch_or_create",
]
