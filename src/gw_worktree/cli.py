"""Typer-based CLI interface for gw."""

from importlib.resources import files

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .console import get_console
from .constants import SUPPORTED_SHELLS
from .exceptions import GwError
from .git_utils import get_repo_root, list_branch_refs
from .logging_config import setup_logging
from .operations import (
    clean_worktrees,
    create_new_branch,
    delete_worktree,
    list_worktrees,
    print_worktrees,
    switch_or_create,
)
from .protocol import Outcome

HELP = """\
Git worktree manager: one flat directory per branch.

Branch names map to directory names by replacing '/' with '__'
(feature/api-update -> feature__api-update/). The main worktree lives in
main/ and holds the optional .gwconfig file:

    link_files: [".env.local", "config/local.yaml"]
    scripts: ["npm install", "make setup"]
    delete_scripts: ["git stash"]

Examples:

    gw                        List worktrees
    gw feature/new-api        Switch to (or create) feature__new-api/
    gw -b me/experiment       Create a new branch and worktree
    gw -d feature/old-api     Delete feature__old-api/ (exact match)
    gw -d                     Delete the current worktree
    gw -c                     Remove worktrees up to date with their upstream

To let gw change your shell's directory, load the shell function:

    source <(gw --shell-function bash)
"""

app = typer.Typer(
    name="gw",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"gw version {__version__}")
        raise typer.Exit()


def complete_branches() -> list[str]:
    """Autocomplete function for local and remote branch names."""
    try:
        refs = list_branch_refs(get_repo_root())
    except GwError:
        return []

    names: list[str] = []
    for ref in refs:
        if ref.startswith("refs/heads/"):
            name = ref[len("refs/heads/"):]
        else:
            name = ref[len("refs/remotes/"):].partition("/")[2]
        if name and name != "HEAD" and name not in names:
            names.append(name)
    return names


def emit(outcome: Outcome) -> None:
    """Write the machine-readable result for the shell wrapper to stdout."""
    for line in outcome.render():
        typer.echo(line)


def print_shell_function(shell: str) -> None:
    shell = shell.lower()
    if shell not in SUPPORTED_SHELLS:
        raise typer.BadParameter(
            f"Invalid shell '{shell}'. Must be one of: {', '.join(SUPPORTED_SHELLS)}",
            param_hint="--shell-function",
        )
    script = (files("gw_worktree") / "shell_functions" / f"gw.{shell}").read_text()
    typer.echo(script, nl=False)


@app.command(help=HELP)
def main(
    branch: str | None = typer.Argument(
        None,
        help="Branch or worktree to switch to; with -d, the worktree to delete",
        autocompletion=complete_branches,
        show_default=False,
    ),
    new_branch: str | None = typer.Option(
        None,
        "-b",
        "--new-branch",
        help="Create a new branch and worktree",
        metavar="BRANCH",
    ),
    delete: bool = typer.Option(
        False,
        "-d",
        "--delete",
        help="Delete the worktree for BRANCH (exact match), or the current one",
    ),
    clean: bool = typer.Option(
        False,
        "-c",
        "--clean",
        help="Clean up worktrees that are up to date with their tracking branches",
    ),
    list_: bool = typer.Option(
        False,
        "-l",
        "--list",
        help="List all worktrees",
    ),
    shell_function: str | None = typer.Option(
        None,
        "--shell-function",
        help="Print the shell function for bash or zsh",
        metavar="SHELL",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log git and hook commands",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Switch to, create, delete or clean up flat git worktrees."""
    setup_logging(debug=debug)

    actions = [new_branch is not None, delete, clean, list_, shell_function is not None]
    if sum(actions) > 1:
        raise typer.BadParameter("Use only one of -b, -d, -c, -l and --shell-function")
    if branch is not None and (new_branch is not None or clean or list_ or shell_function):
        raise typer.BadParameter(f"Unexpected argument '{branch}'")

    if shell_function is not None:
        print_shell_function(shell_function)
        return

    try:
        if new_branch is not None:
            emit(create_new_branch(new_branch))
        elif delete:
            emit(delete_worktree(branch))
        elif clean:
            emit(clean_worktrees())
        elif list_ or not branch:
            print_worktrees(list_worktrees(), console)
        else:
            emit(switch_or_create(branch))
    except GwError as e:
        get_console().print(f"[bold red]{e.kind}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
