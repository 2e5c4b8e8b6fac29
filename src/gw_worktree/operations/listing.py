"""List worktrees, current one first."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .helpers import load_context

NAME_COLUMN_WIDTH = 30


@dataclass(frozen=True)
class WorktreeRow:
    name: str
    path: Path
    relative_path: str
    branch: str
    is_current: bool


def list_worktrees(cwd: Path | None = None) -> list[WorktreeRow]:
    """
    Collect the worktrees of the repository for display.

    Args:
        cwd: Directory paths are shown relative to (defaults to the current directory)

    Returns:
        Rows with the current worktree first, then the rest in git's order
    """
    ctx = load_context(cwd)
    base = cwd or Path.cwd()

    current: list[WorktreeRow] = []
    others: list[WorktreeRow] = []
    for worktree in ctx.registry.list_worktrees():
        # Detached worktrees are listed under their raw directory name
        name = worktree.dir_name if worktree.is_detached else worktree.name
        try:
            relative_path = os.path.relpath(worktree.path, base)
        except ValueError:
            relative_path = str(worktree.path)

        row = WorktreeRow(
            name=name,
            path=worktree.path,
            relative_path=relative_path,
            branch=worktree.branch,
            is_current=worktree.is_current,
        )
        (current if worktree.is_current else others).append(row)

    return current + others


def print_worktrees(rows: list[WorktreeRow], console: Console) -> None:
    """Print worktree rows as `* name  path`, marking the current worktree."""
    for row in rows:
        name = escape(f"{row.name:<{NAME_COLUMN_WIDTH}}")
        relative_path = escape(row.relative_path)
        if row.is_current:
            console.print(f"* [yellow]{name}[/yellow] [cyan]{relative_path}[/cyan]")
        else:
            console.print(f"  [green]{name}[/green] [cyan]{relative_path}[/cyan]")
