"""Read-only view of the worktrees and branches of one repository.

Every query goes to git directly. Nothing is cached, so each operation
sees the repository as it is at that moment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import MAIN_WORKTREE
from .git_utils import (
    count_ahead_behind,
    get_upstream,
    list_branch_refs,
    list_upstreams,
    normalize_branch_name,
    parse_worktrees,
)
from .logging_config import get_logger
from .naming import dir_to_branch

logger = get_logger(__name__)


class BranchOrigin(Enum):
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class Branch:
    """A branch known to git, either local or remote-tracking."""

    name: str
    origin: BranchOrigin
    ref: str

    @property
    def is_local(self) -> bool:
        return self.origin is BranchOrigin.LOCAL


@dataclass(frozen=True)
class Worktree:
    """A worktree as reported by `git worktree list`."""

    path: Path
    branch: str
    head: str = ""
    is_current: bool = False
    upstream: str = ""

    @property
    def dir_name(self) -> str:
        return self.path.name

    @property
    def name(self) -> str:
        """Identifier used for matching and listing: the decoded directory name."""
        return dir_to_branch(self.dir_name)

    @property
    def is_detached(self) -> bool:
        return not self.branch

    @property
    def is_main(self) -> bool:
        return self.dir_name == MAIN_WORKTREE


@dataclass(frozen=True)
class UpstreamStatus:
    """Ahead/behind counts of a worktree's branch against its upstream."""

    upstream: str
    ahead: int
    behind: int

    @property
    def in_sync(self) -> bool:
        return self.ahead == 0 and self.behind == 0


def _same_path(a: Path, b: Path) -> bool:
    try:
        return a.samefile(b)
    except OSError:
        return a.resolve() == b.resolve()


class Registry:
    """
    Query worktrees, branches and upstream state of a repository.

    Args:
        repo: Any worktree of the repository, used as git's working directory
        current: Top level of the caller's worktree, or None
    """

    def __init__(self, repo: Path, current: Path | None = None):
        self.repo = repo
        self.current = current

    def list_worktrees(self) -> list[Worktree]:
        """Return all worktrees in the order git reports them."""
        worktrees: list[Worktree] = []
        upstreams = list_upstreams(self.repo)
        for branch_ref, path, head in parse_worktrees(self.repo):
            branch = normalize_branch_name(branch_ref)
            is_current = self.current is not None and _same_path(path, self.current)
            worktrees.append(
                Worktree(
                    path=path,
                    branch=branch,
                    head=head,
                    is_current=is_current,
                    upstream=upstreams.get(branch, ""),
                )
            )
        return worktrees

    def current_worktree(self) -> Worktree | None:
        for worktree in self.list_worktrees():
            if worktree.is_current:
                return worktree
        return None

    def list_branches(self) -> list[Branch]:
        """
        Return local and remote branches, one entry per name.

        A name present both locally and on a remote is reported once, as
        the local branch. Remote names lose their remote prefix
        (refs/remotes/origin/feature -> feature).
        """
        branches: dict[str, Branch] = {}
        for ref in list_branch_refs(self.repo):
            if ref.startswith("refs/heads/"):
                name = ref[len("refs/heads/"):]
                branches[name] = Branch(name=name, origin=BranchOrigin.LOCAL, ref=name)
            elif ref.startswith("refs/remotes/"):
                short_ref = ref[len("refs/remotes/"):]
                remote, _, name = short_ref.partition("/")
                if not name or name == "HEAD":
                    continue
                existing = branches.get(name)
                if existing is None:
                    branches[name] = Branch(
                        name=name, origin=BranchOrigin.REMOTE, ref=f"{remote}/{name}"
                    )
                elif not existing.is_local:
                    logger.debug(
                        "Branch %s exists on several remotes, using %s", name, existing.ref
                    )
        return list(branches.values())

    def upstream_status(self, worktree_path: Path) -> UpstreamStatus | None:
        """
        Compare a worktree's branch with its upstream.

        Returns:
            UpstreamStatus, or None if no upstream is configured
        """
        upstream = get_upstream(worktree_path)
        if upstream is None:
            return None
        ahead, behind = count_ahead_behind(worktree_path, upstream)
        return UpstreamStatus(upstream=upstream, ahead=ahead, behind=behind)
