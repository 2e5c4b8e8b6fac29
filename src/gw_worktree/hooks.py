"""Run user-declared hook commands in a worktree.

Creation hooks are conveniences: every command runs and failures are only
reported. Deletion hooks are gates: the first failure stops the sequence
and the caller must not remove the worktree.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from .console import get_console
from .logging_config import get_logger

logger = get_logger(__name__)

# Hook output goes to our stderr so stdout stays reserved for the result protocol
_STDERR_FD = 2


class HookPhase(Enum):
    CREATE = "create"
    DELETE = "delete"


class HookPolicy(Enum):
    CONTINUE_ON_ERROR = "continue"
    ABORT_ON_ERROR = "abort"


@dataclass(frozen=True)
class HookResult:
    command: str
    exit_status: int

    @property
    def ok(self) -> bool:
        return self.exit_status == 0


@dataclass
class HookOutcome:
    """Per-command results of one hook sequence."""

    policy: HookPolicy
    results: list[HookResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def failures(self) -> list[HookResult]:
        return [result for result in self.results if not result.ok]

    @property
    def first_failure(self) -> HookResult | None:
        failures = self.failures
        return failures[0] if failures else None

    @property
    def success(self) -> bool:
        """
        Overall success of the sequence.

        With CONTINUE_ON_ERROR the sequence succeeds once it has run to the
        end, whatever the individual exit statuses. With ABORT_ON_ERROR every
        command must have succeeded.
        """
        if self.policy is HookPolicy.CONTINUE_ON_ERROR:
            return not self.skipped
        return not self.failures and not self.skipped


def run_command_in(command: str, cwd: Path) -> int:
    """Run one shell command in cwd and return its exit status."""
    logger.debug("Hook: %s (cwd=%s)", command, cwd)
    try:
        result = subprocess.run(command, shell=True, cwd=cwd, stdout=_STDERR_FD, check=False)
    except OSError as e:
        logger.debug("Hook could not start: %s", e)
        return 127
    return result.returncode


def run_hooks(
    commands: Sequence[str],
    cwd: Path,
    policy: HookPolicy,
    phase: HookPhase,
) -> HookOutcome:
    """
    Run hook commands in order.

    Args:
        commands: Shell commands, run verbatim
        cwd: Worktree to run them in
        policy: What to do when a command exits non-zero
        phase: Lifecycle transition, used for messages

    Returns:
        HookOutcome with one result per executed command
    """
    outcome = HookOutcome(policy=policy)
    if not commands:
        return outcome

    console = get_console()
    heading = "Running configured scripts..." if phase is HookPhase.CREATE else (
        "Running pre-delete scripts..."
    )
    console.print(f"[cyan]{heading}[/cyan]")

    for index, command in enumerate(commands):
        console.print(f"  Running: {escape(command)}")
        status = run_command_in(command, cwd)
        outcome.results.append(HookResult(command=command, exit_status=status))

        if status == 0:
            console.print(f"  [green]✓[/green] Completed: {escape(command)}")
            continue

        console.print(f"  [red]✗[/red] Failed: {escape(command)} (exit status: {status})")
        if policy is HookPolicy.ABORT_ON_ERROR:
            outcome.skipped.extend(commands[index + 1:])
            break

    return outcome
