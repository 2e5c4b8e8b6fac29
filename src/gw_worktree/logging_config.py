"""Logging configuration for gw."""

import logging
import os

from rich.logging import RichHandler

from .console import get_console
from .constants import ENV_DEBUG


def debug_requested() -> bool:
    """Check whether debug logging was requested through the environment."""
    return os.environ.get(ENV_DEBUG, "").strip().lower() in ("1", "true", "yes", "on")


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        debug: If True, show DEBUG level messages (git commands, hook commands)
    """
    level = logging.DEBUG if debug or debug_requested() else logging.WARNING

    root_logger = logging.getLogger("gw_worktree")
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=get_console(),
        show_time=debug,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    if not name.startswith("gw_worktree"):
        name = f"gw_worktree.{name}"
    return logging.getLogger(name)
