"""Share files from the main worktree into a new worktree via relative symlinks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from .console import get_console
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class LinkResult:
    path: str
    target: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def link_file(relative_path: str, main_path: Path, worktree_path: Path) -> LinkResult:
    """
    Link worktree_path/relative_path to the same path under main_path.

    The link is relative, so a worktree next to main gets ``../main/<path>``.
    An existing file or symlink at the destination is replaced.
    """
    source = main_path / relative_path
    destination = worktree_path / relative_path

    if not (source.is_file() or source.is_dir()):
        return LinkResult(relative_path, error="source not found in main worktree")

    link_target = os.path.relpath(source, destination.parent)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        if destination.is_symlink() or destination.is_file():
            destination.unlink()
        elif destination.exists():
            return LinkResult(relative_path, error="destination is an existing directory")
        destination.symlink_to(link_target)
    except OSError as e:
        return LinkResult(relative_path, error=str(e))

    logger.debug("Linked %s -> %s", destination, link_target)
    return LinkResult(relative_path, target=link_target)


def apply_link_files(
    link_files: Sequence[str], main_path: Path, worktree_path: Path
) -> list[LinkResult]:
    """
    Create links for every configured file.

    Failures are reported and never raised; worktree creation carries on.
    """
    results: list[LinkResult] = []
    if not link_files:
        return results

    console = get_console()
    console.print("[cyan]Creating symlinks for configured files...[/cyan]")

    for relative_path in link_files:
        result = link_file(relative_path, main_path, worktree_path)
        results.append(result)
        if result.ok:
            console.print(f"  Linked: {escape(relative_path)}")
        else:
            console.print(
                f"  [yellow]Warning:[/yellow] Failed to link {escape(relative_path)}: "
                f"{escape(result.error)}"
            )

    return results
