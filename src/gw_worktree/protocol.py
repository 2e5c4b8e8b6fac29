"""Result protocol between gw and its shell wrapper.

gw runs as a child process and cannot change the caller's directory or
remove the worktree the caller is standing in. Operations instead return an
Outcome, rendered on stdout as:

- a bare absolute path: cd there
- ``DELETE_AFTER_CD:<path>`` after a path: cd to that path, then
  ``git worktree remove <path>``
- ``CLEAN_WORKTREES:<p1>:<p2>...``, optionally after a path: cd first if a
  path was given, then remove each listed worktree, tolerating failures
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .constants import CLEAN_WORKTREES_PREFIX, CLEAN_WORKTREES_SEPARATOR, DELETE_AFTER_CD_PREFIX
from .hooks import HookOutcome
from .links import LinkResult


@dataclass
class Outcome:
    """What the caller's shell should do after a successful operation."""

    switch_to: Path | None = None
    delete_after_cd: Path | None = None
    clean_worktrees: list[Path] = field(default_factory=list)
    clean_failed: list[Path] = field(default_factory=list)
    removed: Path | None = None
    created: bool = False
    hooks: HookOutcome | None = None
    links: list[LinkResult] = field(default_factory=list)

    def render(self) -> list[str]:
        """Return the stdout lines for the shell wrapper."""
        lines: list[str] = []
        if self.switch_to is not None:
            lines.append(str(self.switch_to))
        if self.delete_after_cd is not None:
            lines.append(f"{DELETE_AFTER_CD_PREFIX}{self.delete_after_cd}")
        if self.clean_worktrees:
            paths = CLEAN_WORKTREES_SEPARATOR.join(str(path) for path in self.clean_worktrees)
            lines.append(f"{CLEAN_WORKTREES_PREFIX}{paths}")
        return lines


def parse_result(output: str) -> Outcome:
    """
    Parse rendered stdout back into an Outcome.

    Only the machine-actionable fields survive the round trip.
    """
    outcome = Outcome()
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith(DELETE_AFTER_CD_PREFIX):
            outcome.delete_after_cd = Path(line[len(DELETE_AFTER_CD_PREFIX):])
        elif line.startswith(CLEAN_WORKTREES_PREFIX):
            paths = line[len(CLEAN_WORKTREES_PREFIX):].split(CLEAN_WORKTREES_SEPARATOR)
            outcome.clean_worktrees = [Path(path) for path in paths if path]
        else:
            outcome.switch_to = Path(line)
    return outcome
