"""gw: flat git worktree manager."""

__version__ = "0.4.0"
