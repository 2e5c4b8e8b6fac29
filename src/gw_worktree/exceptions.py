"""Exception hierarchy for gw.

Every error carries a ``kind`` that the CLI uses as the diagnostic prefix,
so the user can tell failures apart without parsing the message.
"""

from __future__ import annotations

from pathlib import Path


class GwError(Exception):
    """Base exception for all gw errors."""

    kind = "Error"


class NotInRepositoryError(GwError):
    """Raised when the current directory is not inside a git repository."""

    kind = "NotInRepository"


class NotInWorktreeError(GwError):
    """Raised when an operation needs a current worktree and there is none."""

    kind = "NotInWorktree"


class NoMatchError(GwError):
    """Raised when user input resolves to neither a worktree nor a branch."""

    kind = "NoMatch"


class MainWorktreeProtectedError(GwError):
    """Raised on any attempt to delete the main worktree."""

    kind = "MainWorktreeProtected"


class WorktreeNotFoundError(GwError):
    """Raised when an exact worktree directory does not exist."""

    kind = "WorktreeNotFound"


class BranchNotFoundError(GwError):
    """Raised when a resolved branch has no local or remote ref."""

    kind = "BranchNotFound"


class InvalidBranchError(GwError):
    """Raised for branch names git rejects or that cannot be encoded safely."""

    kind = "InvalidBranchName"


class ConfigError(GwError):
    """Raised when .gwconfig exists but cannot be parsed."""

    kind = "InvalidConfig"


class HookError(GwError):
    """Raised when a hook command aborts an operation."""

    kind = "HookFailure"

    def __init__(self, phase: str, command: str, exit_status: int, cwd: Path | None = None):
        self.phase = phase
        self.command = command
        self.exit_status = exit_status
        self.cwd = cwd

        message = f"{phase} hook '{command}' exited with status {exit_status}"
        if cwd is not None:
            message += f" in {cwd}"
        super().__init__(message)


class GitError(GwError):
    """Raised when a git command fails (a refused or broken VCS mutation)."""

    kind = "VcsMutationFailure"

    def __init__(self, message: str, operation: str | None = None, reason: str = ""):
        self.operation = operation
        self.reason = reason
        super().__init__(message)
