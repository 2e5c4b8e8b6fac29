"""Delete a single worktree."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..console import get_console
from ..constants import MAIN_WORKTREE
from ..exceptions import (
    HookError,
    MainWorktreeProtectedError,
    NotInWorktreeError,
    WorktreeNotFoundError,
)
from ..git_utils import remove_worktree
from ..hooks import HookOutcome, HookPhase, HookPolicy, run_hooks
from ..naming import dir_to_branch, is_safe_dir_name
from ..protocol import Outcome
from .helpers import load_context

console = get_console()


def run_delete_hooks(worktree_path: Path, commands: Sequence[str]) -> HookOutcome:
    """
    Run pre-delete scripts, stopping at the first failure.

    Raises:
        HookError: If a script exits non-zero; the worktree must be kept
    """
    outcome = run_hooks(commands, worktree_path, HookPolicy.ABORT_ON_ERROR, HookPhase.DELETE)
    failure = outcome.first_failure
    if failure is not None:
        raise HookError(
            HookPhase.DELETE.value, failure.command, failure.exit_status, cwd=worktree_path
        )
    return outcome


def delete_worktree(target: str | None = None, cwd: Path | None = None) -> Outcome:
    """
    Delete a worktree by exact branch name, or the current worktree.

    Unlike switching, deletion never does substring matching: target must
    name the worktree's directory exactly once encoded.

    When the worktree to delete is the one the caller stands in, nothing is
    removed here; the outcome tells the shell to cd to main and remove it.

    Args:
        target: Branch name, or None/empty for the current worktree
        cwd: Directory to start from (defaults to the current directory)

    Returns:
        Outcome with either the removed path or the deferred removal

    Raises:
        NotInRepositoryError: If not in a git repository
        NotInWorktreeError: If no target was given and the caller is not in a worktree
        MainWorktreeProtectedError: If the target is the main worktree
        WorktreeNotFoundError: If no worktree directory matches target
        HookError: If a pre-delete script fails
        GitError: If git refuses the removal (e.g. untracked files)
    """
    ctx = load_context(cwd)

    if target:
        branch_name = target
    elif ctx.current is not None:
        branch_name = dir_to_branch(ctx.current.name)
    else:
        raise NotInWorktreeError("Not in a worktree.")

    if branch_name == MAIN_WORKTREE:
        raise MainWorktreeProtectedError("Cannot delete the main worktree.")

    if target:
        worktree_path = ctx.worktree_path(target)
        # Only registered worktrees; a plain directory never reaches the hooks
        if not is_safe_dir_name(worktree_path.name) or ctx.find_worktree(worktree_path) is None:
            raise WorktreeNotFoundError(
                f"Worktree for branch '{target}' does not exist at {worktree_path}"
            )
    else:
        assert ctx.current is not None
        worktree_path = ctx.current

    if worktree_path.resolve() == ctx.main_path.resolve():
        raise MainWorktreeProtectedError("Cannot delete the main worktree.")

    deleting_current = ctx.is_current(worktree_path)
    if deleting_current:
        main_path = ctx.require_main()

    config = ctx.load_config()
    hooks = run_delete_hooks(worktree_path, config.delete_scripts)

    if deleting_current:
        console.print(
            f"Current worktree will be removed after switching to [blue]{main_path}[/blue]"
        )
        return Outcome(switch_to=main_path, delete_after_cd=worktree_path, hooks=hooks)

    console.print(
        f"Deleting worktree for branch [green]{branch_name}[/green] at "
        f"[blue]{worktree_path}[/blue]"
    )
    repo = ctx.main_path if ctx.main_path.is_dir() else ctx.top_level
    remove_worktree(repo, worktree_path)
    console.print(f"[bold green]✓[/bold green] Deleted worktree for branch '{branch_name}'")

    return Outcome(removed=worktree_path, hooks=hooks)
