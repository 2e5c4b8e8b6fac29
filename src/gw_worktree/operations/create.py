"""Create-or-switch: resolve input to a worktree, creating one when needed."""

from __future__ import annotations

from pathlib import Path

from ..config import GwConfig
from ..console import get_console
from ..exceptions import BranchNotFoundError, NoMatchError
from ..git_utils import add_tracking_worktree, add_worktree, add_worktree_new_branch, ref_exists
from ..hooks import HookPhase, HookPolicy, run_hooks
from ..links import apply_link_files
from ..logging_config import get_logger
from ..protocol import Outcome
from ..registry import Branch
from ..resolver import MatchKind, resolve
from .helpers import WorktreeContext, load_context, validate_dir_name, validate_new_branch_name

logger = get_logger(__name__)
console = get_console()


def setup_worktree(ctx: WorktreeContext, config: GwConfig, worktree_path: Path) -> Outcome:
    """
    Run the creation-time hooks for a freshly added worktree.

    Links first, then scripts. Both are best effort: failures are reported
    on the outcome and never fail the creation.
    """
    links = apply_link_files(config.link_files, ctx.main_path, worktree_path)
    hooks = run_hooks(
        config.scripts, worktree_path, HookPolicy.CONTINUE_ON_ERROR, HookPhase.CREATE
    )

    failed_links = [link for link in links if not link.ok]
    if failed_links or hooks.failures:
        console.print(
            f"[yellow]![/yellow] Worktree created with {len(failed_links)} link and "
            f"{len(hooks.failures)} script failure(s)"
        )

    return Outcome(switch_to=worktree_path, created=True, hooks=hooks, links=links)


def create_new_branch(branch: str, cwd: Path | None = None) -> Outcome:
    """
    Create a new branch and its worktree.

    Calling this again for the same branch returns the existing directory
    without touching git.

    Args:
        branch: Name of the branch to create
        cwd: Directory to start from (defaults to the current directory)

    Returns:
        Outcome switching to the worktree

    Raises:
        NotInRepositoryError: If not in a git repository
        InvalidBranchError: If the branch name is not usable
        GitError: If git refuses to create the branch or worktree
    """
    ctx = load_context(cwd)
    validate_dir_name(branch)
    worktree_path = ctx.worktree_path(branch)

    if worktree_path.is_dir():
        logger.debug("Worktree for %s already exists at %s", branch, worktree_path)
        return Outcome(switch_to=worktree_path)

    validate_new_branch_name(branch, ctx.top_level)
    config = ctx.load_config()

    console.print(
        f"Creating new branch [green]{branch}[/green] and worktree at "
        f"[blue]{worktree_path}[/blue]"
    )
    add_worktree_new_branch(ctx.top_level, worktree_path, branch)
    console.print("[bold green]✓[/bold green] Worktree created successfully")

    return setup_worktree(ctx, config, worktree_path)


def _create_for_branch(ctx: WorktreeContext, branch: Branch) -> Outcome:
    validate_dir_name(branch.name)
    worktree_path = ctx.worktree_path(branch.name)

    if worktree_path.is_dir():
        return Outcome(switch_to=worktree_path)

    validate_new_branch_name(branch.name, ctx.top_level)
    config = ctx.load_config()

    if ref_exists(f"refs/heads/{branch.name}", ctx.top_level):
        console.print(
            f"Creating worktree for existing local branch [green]{branch.name}[/green] "
            f"at [blue]{worktree_path}[/blue]"
        )
        add_worktree(ctx.top_level, worktree_path, branch.name)
    elif not branch.is_local and ref_exists(f"refs/remotes/{branch.ref}", ctx.top_level):
        console.print(
            f"Creating worktree for remote branch [green]{branch.ref}[/green] "
            f"at [blue]{worktree_path}[/blue]"
        )
        add_tracking_worktree(ctx.top_level, worktree_path, branch.name, branch.ref)
    else:
        raise BranchNotFoundError(f"Branch '{branch.name}' not found")

    console.print("[bold green]✓[/bold green] Worktree created successfully")
    return setup_worktree(ctx, config, worktree_path)


def switch_or_create(target: str, cwd: Path | None = None) -> Outcome:
    """
    Switch to the worktree matching target, creating one for an existing branch.

    Args:
        target: Worktree name, branch name or part of a worktree name
        cwd: Directory to start from (defaults to the current directory)

    Returns:
        Outcome switching to the matched or created worktree

    Raises:
        NotInRepositoryError: If not in a git repository
        NoMatchError: If nothing matches target
        BranchNotFoundError: If the matched branch disappeared meanwhile
        GitError: If git refuses to create the worktree
    """
    ctx = load_context(cwd)
    match = resolve(target, ctx.registry)
    logger.debug("Resolved %r to %s %r", target, match.kind.value, match.name)

    if match.kind in (MatchKind.EXACT_WORKTREE, MatchKind.SUBSTRING_WORKTREE):
        assert match.worktree is not None
        return Outcome(switch_to=match.worktree.path)

    if match.kind is MatchKind.EXACT_BRANCH:
        assert match.branch is not None
        return _create_for_branch(ctx, match.branch)

    raise NoMatchError(
        f"No matching worktree found for '{target}'.\n"
        "To create a worktree, you need an exact match to an existing branch name,\n"
        f"or use 'gw -b {target}' to create a new branch."
    )
