"""Shared fixtures: real git repositories in the flat worktree layout."""

import subprocess
from pathlib import Path

import pytest


def run_git(*args: str, cwd: Path) -> str:
    """Run git in cwd and return stdout; fail the test on error."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def isolated_git_env(tmp_path: Path, monkeypatch) -> None:
    """Keep the user's git configuration out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.delenv("GW_DEBUG", raising=False)


@pytest.fixture
def git():
    """Callable running git in a directory."""
    return run_git


@pytest.fixture
def flat_repo(tmp_path: Path, monkeypatch) -> Path:
    """
    Create a worktree root with a main worktree tracking a bare origin.

    Layout:
        <tmp>/origin.git        bare remote
        <tmp>/project/main      main worktree on branch main, README.md committed

    The current directory is set to the main worktree.

    Returns:
        The worktree root (<tmp>/project)
    """
    base = tmp_path.resolve()
    origin = base / "origin.git"
    root = base / "project"
    main = root / "main"
    main.mkdir(parents=True)

    run_git("init", "--bare", "--initial-branch=main", str(origin), cwd=base)
    run_git("init", "--initial-branch=main", cwd=main)
    run_git("config", "user.email", "test@example.com", cwd=main)
    run_git("config", "user.name", "Test User", cwd=main)
    run_git("config", "commit.gpgsign", "false", cwd=main)

    (main / "README.md").write_text("# Test Repo\n")
    run_git("add", "README.md", cwd=main)
    run_git("commit", "-m", "Initial commit", cwd=main)

    run_git("remote", "add", "origin", str(origin), cwd=main)
    run_git("push", "-u", "origin", "main", cwd=main)

    monkeypatch.chdir(main)
    return root


@pytest.fixture
def make_worktree(flat_repo: Path):
    """
    Factory adding a worktree for a new branch under the root.

    Args (of the returned callable):
        branch: Branch name; the directory uses '__' for '/'
        push: Push the branch and set it as upstream

    Returns:
        Path of the new worktree
    """

    def _make(branch: str, push: bool = True) -> Path:
        path = flat_repo / branch.replace("/", "__")
        run_git("worktree", "add", "-b", branch, str(path), cwd=flat_repo / "main")
        if push:
            run_git("push", "-u", "origin", branch, cwd=path)
        return path

    return _make


def write_gwconfig(root: Path, content: str) -> Path:
    """Write main/.gwconfig under root."""
    path = root / "main" / ".gwconfig"
    path.write_text(content)
    return path


@pytest.fixture
def gwconfig(flat_repo: Path):
    """Callable writing .gwconfig content into the main worktree."""
    return lambda content: write_gwconfig(flat_repo, content)
