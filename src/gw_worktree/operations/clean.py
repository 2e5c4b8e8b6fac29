"""Bulk cleanup of worktrees that match their upstream exactly."""

from __future__ import annotations

from pathlib import Path

from ..console import get_console
from ..exceptions import HookError
from ..git_utils import fetch
from ..protocol import Outcome
from ..registry import Worktree
from .delete import run_delete_hooks
from .helpers import WorktreeContext, load_context

console = get_console()


def select_clean_candidates(ctx: WorktreeContext) -> list[Worktree]:
    """
    Pick worktrees that are neither ahead of nor behind their upstream.

    The main worktree, detached worktrees, worktrees whose directory is
    gone and branches without an upstream are skipped, never deleted.
    """
    selected: list[Worktree] = []
    main_path = ctx.main_path.resolve()

    for worktree in ctx.registry.list_worktrees():
        if worktree.is_main or worktree.path.resolve() == main_path:
            continue

        if worktree.is_detached:
            console.print(f"  [dim]Skipping {worktree.name} (detached HEAD)[/dim]")
            continue

        if not worktree.path.is_dir():
            console.print(f"  [dim]Skipping {worktree.name} (directory missing)[/dim]")
            continue

        status = ctx.registry.upstream_status(worktree.path)
        if status is None:
            console.print(f"  [dim]Skipping {worktree.name} (no tracking branch)[/dim]")
            continue

        if status.in_sync:
            console.print(
                f"  Marking [green]{worktree.name}[/green] for deletion "
                f"(up to date with {status.upstream})"
            )
            selected.append(worktree)
        else:
            console.print(
                f"  Keeping [cyan]{worktree.name}[/cyan] ({status.ahead} ahead, "
                f"{status.behind} behind {status.upstream})"
            )

    return selected


def clean_worktrees(cwd: Path | None = None) -> Outcome:
    """
    Clean up worktrees that are up to date with their tracking branches.

    Pre-delete scripts run independently per worktree: a failure keeps that
    worktree and moves on to the next. Removal itself is left to the shell
    wrapper, which receives the paths in the outcome.

    Args:
        cwd: Directory to start from (defaults to the current directory)

    Returns:
        Outcome listing the worktrees to remove (empty when nothing to clean)

    Raises:
        NotInRepositoryError: If not in a git repository
        GitError: If fetching from the remote fails
    """
    ctx = load_context(cwd)
    config = ctx.load_config()

    console.print("Fetching latest from remotes...")
    fetch(ctx.top_level)

    console.print("Checking worktrees for cleanup...")
    candidates = select_clean_candidates(ctx)

    safe: list[Path] = []
    failed: list[Path] = []
    for worktree in candidates:
        try:
            run_delete_hooks(worktree.path, config.delete_scripts)
        except HookError as e:
            console.print(
                f"[yellow]![/yellow] Skipping deletion of {worktree.path}: {e}"
            )
            failed.append(worktree.path)
        else:
            safe.append(worktree.path)

    if not safe:
        if failed:
            console.print("[yellow]No worktrees can be deleted due to script failures.[/yellow]")
        else:
            console.print("[bold green]✓[/bold green] No worktrees need cleaning.")
        return Outcome(clean_failed=failed)

    outcome = Outcome(clean_worktrees=safe, clean_failed=failed)
    if any(ctx.is_current(path) for path in safe):
        outcome.switch_to = ctx.require_main()

    console.print(f"[bold green]✓[/bold green] {len(safe)} worktree(s) ready for removal")
    return outcome
