"""Resolve free-text input to a worktree or branch.

Matching is tried in a fixed order and stops at the first hit:

1. a worktree whose name or checked-out branch equals the input
2. a local or remote branch whose name equals the input
3. the first worktree (in git's listing order) whose name or branch contains
   the input

An exact match can therefore never be shadowed by a substring match, and an
existing worktree wins over a branch of the same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .registry import Branch, Registry, Worktree


class MatchKind(Enum):
    EXACT_WORKTREE = "exact_worktree"
    EXACT_BRANCH = "exact_branch"
    SUBSTRING_WORKTREE = "substring_worktree"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class MatchResult:
    kind: MatchKind
    name: str = ""
    worktree: Worktree | None = None
    branch: Branch | None = None

    @property
    def matched(self) -> bool:
        return self.kind is not MatchKind.NO_MATCH


NO_MATCH = MatchResult(MatchKind.NO_MATCH)


def resolve(target: str, registry: Registry) -> MatchResult:
    """
    Resolve user input against the worktrees and branches of a repository.

    Args:
        target: Input as typed by the user
        registry: Repository to query

    Returns:
        MatchResult describing the first match found
    """
    if not target:
        return NO_MATCH

    worktrees = registry.list_worktrees()
    for worktree in worktrees:
        if target in (worktree.name, worktree.branch):
            return MatchResult(MatchKind.EXACT_WORKTREE, worktree.name, worktree=worktree)

    for branch in registry.list_branches():
        if branch.name == target:
            return MatchResult(MatchKind.EXACT_BRANCH, branch.name, branch=branch)

    for worktree in worktrees:
        if target in worktree.name or target in worktree.branch:
            return MatchResult(MatchKind.SUBSTRING_WORKTREE, worktree.name, worktree=worktree)

    return NO_MATCH
