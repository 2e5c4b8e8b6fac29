"""Shared rich console for user-facing diagnostics.

Stdout belongs to the result protocol read by the shell wrapper, so
diagnostics always go to stderr.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the process-wide stderr console."""
    global _console
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console
