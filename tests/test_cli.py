"""Tests for CLI interface."""

from pathlib import Path

from typer.testing import CliRunner

from gw_worktree import __version__
from gw_worktree.cli import app

runner = CliRunner()


def test_cli_help() -> None:
    """Test that help command works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Git worktree manager" in result.stdout
    assert "--new-branch" in result.stdout


def test_cli_short_help() -> None:
    result = runner.invoke(app, ["-h"])
    assert result.exit_code == 0
    assert "--clean" in result.stdout


def test_cli_version() -> None:
    """Test version flag."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"gw version {__version__}" in result.stdout


def test_new_branch_prints_path(flat_repo: Path) -> None:
    """stdout carries only the worktree path."""
    result = runner.invoke(app, ["-b", "feature/cli"])

    path = flat_repo / "feature__cli"
    assert result.exit_code == 0
    assert str(path) in result.stdout.splitlines()
    assert path.is_dir()


def test_switch_prints_path(flat_repo: Path, make_worktree) -> None:
    path = make_worktree("feature/switch-me", push=False)

    result = runner.invoke(app, ["switch-me"])

    assert result.exit_code == 0
    assert str(path) in result.stdout.splitlines()


def test_no_match_fails(flat_repo: Path) -> None:
    result = runner.invoke(app, ["does-not-exist"])
    assert result.exit_code == 1
    assert "NoMatch" in result.output
    assert "gw -b does-not-exist" in result.output


def test_delete_explicit(flat_repo: Path, make_worktree) -> None:
    path = make_worktree("gone", push=False)

    result = runner.invoke(app, ["-d", "gone"])

    assert result.exit_code == 0
    assert not path.exists()
    assert "DELETE_AFTER_CD" not in result.stdout


def test_delete_current(flat_repo: Path, make_worktree, monkeypatch) -> None:
    path = make_worktree("here", push=False)
    monkeypatch.chdir(path)

    result = runner.invoke(app, ["--delete"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert str(flat_repo / "main") in lines
    assert f"DELETE_AFTER_CD:{path}" in lines
    assert path.is_dir()


def test_delete_main_refused(flat_repo: Path) -> None:
    result = runner.invoke(app, ["-d", "main"])
    assert result.exit_code == 1
    assert "MainWorktreeProtected" in result.output


def test_clean(flat_repo: Path, make_worktree) -> None:
    path = make_worktree("merged")

    result = runner.invoke(app, ["-c"])

    assert result.exit_code == 0
    assert f"CLEAN_WORKTREES:{path}" in result.stdout.splitlines()


def test_list(flat_repo: Path, make_worktree) -> None:
    make_worktree("feature/listed", push=False)

    for args in ([], ["-l"], ["--list"]):
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert "* main" in result.stdout
        assert "feature/listed" in result.stdout


def test_outside_repository(tmp_path: Path, monkeypatch) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    monkeypatch.chdir(outside)

    result = runner.invoke(app, ["-b", "x"])

    assert result.exit_code == 1
    assert "NotInRepository" in result.output


def test_invalid_config_reported(flat_repo: Path, gwconfig) -> None:
    gwconfig("scripts: [unterminated")
    result = runner.invoke(app, ["-b", "x"])
    assert result.exit_code == 1
    assert "InvalidConfig" in result.output


def test_conflicting_actions() -> None:
    result = runner.invoke(app, ["-c", "-l"])
    assert result.exit_code != 0


def test_shell_function_bash() -> None:
    result = runner.invoke(app, ["--shell-function", "bash"])
    assert result.exit_code == 0
    assert "gw() {" in result.stdout
    assert "DELETE_AFTER_CD:" in result.stdout
    assert "complete -F _gw_completion gw" in result.stdout


def test_shell_function_zsh() -> None:
    result = runner.invoke(app, ["--shell-function", "zsh"])
    assert result.exit_code == 0
    assert "gw() {" in result.stdout
    assert "compdef _gw gw" in result.stdout


def test_shell_function_unknown_shell() -> None:
    result = runner.invoke(app, ["--shell-function", "fish"])
    assert result.exit_code != 0
