"""Git operations wrapper utilities."""

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .exceptions import GitError, NotInRepositoryError, NotInWorktreeError
from .logging_config import get_logger

logger = get_logger(__name__)


def run_command(
    cmd: List[str],
    cwd: Optional[Path] = None,
    check: bool = True,
    capture: bool = False,
) -> subprocess.CompletedProcess:
    """
    Run a command.

    Args:
        cmd: Command and arguments as a list
        cwd: Working directory for the command
        check: Raise exception on non-zero exit code
        capture: Capture stdout/stderr

    Returns:
        CompletedProcess instance

    Raises:
        GitError: If command fails and check=True
    """
    kwargs = {}
    if capture:
        kwargs["stdout"] = subprocess.PIPE
        kwargs["stderr"] = subprocess.PIPE
        kwargs["text"] = True
    else:
        # Keep stdout free for the result protocol
        kwargs["stdout"] = 2

    logger.debug("Running: %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        result = subprocess.run(cmd, cwd=cwd, check=False, **kwargs)
    except FileNotFoundError as e:
        raise GitError(f"Command not found: {cmd[0]}", operation=cmd[0]) from e

    if check and result.returncode != 0:
        output = ""
        if capture:
            output = (result.stderr or result.stdout or "").strip()
        operation = " ".join(cmd[:3])
        raise GitError(
            f"Command failed: {' '.join(cmd)}" + (f"\n{output}" if output else ""),
            operation=operation,
            reason=output,
        )
    return result


def git_command(
    *args: str,
    repo: Optional[Path] = None,
    check: bool = True,
    capture: bool = False,
) -> subprocess.CompletedProcess:
    """
    Run a git command.

    Args:
        *args: Git command arguments
        repo: Repository path
        check: Raise exception on non-zero exit code
        capture: Capture stdout/stderr

    Returns:
        CompletedProcess instance

    Raises:
        GitError: If git command fails
    """
    cmd = ["git"] + list(args)
    return run_command(cmd, cwd=repo, check=check, capture=capture)


def get_repo_root(path: Optional[Path] = None) -> Path:
    """
    Get the top-level directory of the current worktree.

    Args:
        path: Optional path to start from (defaults to current directory)

    Returns:
        Path to the worktree top level

    Raises:
        NotInRepositoryError: If not in a git repository
        NotInWorktreeError: If inside git metadata but not in a work tree
    """
    result = git_command("rev-parse", "--git-dir", repo=path, check=False, capture=True)
    if result.returncode != 0:
        raise NotInRepositoryError("Not in a git repository")

    result = git_command("rev-parse", "--show-toplevel", repo=path, check=False, capture=True)
    top_level = result.stdout.strip() if result.returncode == 0 else ""
    if not top_level:
        raise NotInWorktreeError("Not inside a worktree")
    return Path(top_level)


def get_current_worktree(path: Optional[Path] = None) -> Optional[Path]:
    """Return the top level of the worktree containing path, or None."""
    result = git_command(
        "rev-parse", "--is-inside-work-tree", repo=path, check=False, capture=True
    )
    if result.returncode != 0 or result.stdout.strip() != "true":
        return None
    result = git_command("rev-parse", "--show-toplevel", repo=path, check=False, capture=True)
    top_level = result.stdout.strip()
    return Path(top_level) if result.returncode == 0 and top_level else None


def is_valid_branch_name(branch: str, repo: Optional[Path] = None) -> bool:
    """Check a branch name with `git check-ref-format --branch`."""
    result = git_command(
        "check-ref-format", "--branch", branch, repo=repo, check=False, capture=True
    )
    return result.returncode == 0


def ref_exists(ref: str, repo: Optional[Path] = None) -> bool:
    """
    Check if a fully qualified ref exists.

    Args:
        ref: Ref name, e.g. refs/heads/main
        repo: Repository path

    Returns:
        True if ref exists, False otherwise
    """
    result = git_command(
        "show-ref", "--verify", "--quiet", ref, repo=repo, check=False, capture=True
    )
    return result.returncode == 0


def parse_worktrees(repo: Path) -> List[Tuple[str, Path, str]]:
    """
    Parse git worktree list output.

    Args:
        repo: Repository path

    Returns:
        List of (branch_ref_or_empty, path, head) tuples in git's order.
        Detached worktrees report an empty branch.
    """
    result = git_command("worktree", "list", "--porcelain", repo=repo, capture=True)
    lines = result.stdout.strip().splitlines()

    items: List[Tuple[str, Path, str]] = []
    cur_path: Optional[str] = None
    cur_branch = ""
    cur_head = ""

    for line in lines:
        if line.startswith("worktree "):
            cur_path = line.split(" ", 1)[1]
        elif line.startswith("HEAD "):
            cur_head = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            cur_branch = line.split(" ", 1)[1]
        elif line.strip() == "" and cur_path:
            items.append((cur_branch, Path(cur_path), cur_head))
            cur_path, cur_branch, cur_head = None, "", ""

    if cur_path:
        items.append((cur_branch, Path(cur_path), cur_head))

    return items


def normalize_branch_name(branch: str) -> str:
    """Strip the refs/heads/ prefix from a branch ref."""
    return branch[11:] if branch.startswith("refs/heads/") else branch


def list_branch_refs(repo: Path) -> List[str]:
    """
    List local and remote-tracking branch refs.

    Args:
        repo: Repository path

    Returns:
        Fully qualified refs, local branches first
    """
    result = git_command(
        "for-each-ref",
        "--format=%(refname)",
        "refs/heads",
        "refs/remotes",
        repo=repo,
        capture=True,
    )
    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def list_upstreams(repo: Path) -> Dict[str, str]:
    """
    Map local branch names to their configured upstream.

    Args:
        repo: Repository path

    Returns:
        {branch: upstream} for branches that track something, e.g.
        {"feature": "origin/feature"}
    """
    result = git_command(
        "for-each-ref",
        "--format=%(refname:lstrip=2) %(upstream:short)",
        "refs/heads",
        repo=repo,
        capture=True,
    )
    upstreams: Dict[str, str] = {}
    for line in result.stdout.splitlines():
        branch, _, upstream = line.strip().partition(" ")
        if branch and upstream:
            upstreams[branch] = upstream
    return upstreams


def get_upstream(worktree: Path) -> Optional[str]:
    """Return the upstream of the branch checked out in worktree, if configured."""
    result = git_command(
        "rev-parse",
        "--abbrev-ref",
        "HEAD@{upstream}",
        repo=worktree,
        check=False,
        capture=True,
    )
    upstream = result.stdout.strip()
    if result.returncode != 0 or not upstream:
        return None
    return upstream


def count_ahead_behind(worktree: Path, upstream: str) -> Tuple[int, int]:
    """
    Count commits ahead of and behind upstream.

    Args:
        worktree: Worktree path
        upstream: Upstream ref, e.g. origin/feature

    Returns:
        (ahead, behind) tuple
    """
    result = git_command(
        "rev-list", "--left-right", "--count", f"HEAD...{upstream}", repo=worktree, capture=True
    )
    ahead, behind = result.stdout.split()
    return int(ahead), int(behind)


def fetch(repo: Path) -> None:
    """Fetch from the default remote. Raises GitError on failure."""
    git_command("fetch", repo=repo)


def add_worktree_new_branch(repo: Path, path: Path, branch: str) -> None:
    """Create a new branch at HEAD and a worktree for it."""
    git_command("worktree", "add", "-b", branch, str(path), repo=repo, capture=True)


def add_worktree(repo: Path, path: Path, branch: str) -> None:
    """Create a worktree for an existing local branch."""
    git_command("worktree", "add", str(path), branch, repo=repo, capture=True)


def add_tracking_worktree(repo: Path, path: Path, branch: str, remote_ref: str) -> None:
    """Create a local branch tracking remote_ref and a worktree for it."""
    git_command(
        "worktree", "add", "--track", "-b", branch, str(path), remote_ref,
        repo=repo, capture=True,
    )


def remove_worktree(repo: Path, path: Path) -> None:
    """
    Remove a worktree without --force.

    Git refuses when the worktree has modified or untracked files; that
    refusal is raised as GitError with git's own message.
    """
    git_command("worktree", "remove", str(path), repo=repo, capture=True)
