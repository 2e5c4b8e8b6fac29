"""Allow running as `python -m gw_worktree`."""

from .cli import app

if __name__ == "__main__":
    app()
