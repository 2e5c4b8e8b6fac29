"""Constants and conventions shared across gw."""

# Directory of the main worktree under the worktree root
MAIN_WORKTREE = "main"

# Per-repository configuration file, read from the main worktree
CONFIG_FILENAME = ".gwconfig"

# Branch names map to flat directory names by swapping the path separator
BRANCH_SEPARATOR = "/"
DIR_SEPARATOR_MARKER = "__"

# Result protocol consumed by the shell wrapper
DELETE_AFTER_CD_PREFIX = "DELETE_AFTER_CD:"
CLEAN_WORKTREES_PREFIX = "CLEAN_WORKTREES:"
CLEAN_WORKTREES_SEPARATOR = ":"

# Shells with a bundled wrapper function
SUPPORTED_SHELLS = ("bash", "zsh")

# Environment variables
ENV_DEBUG = "GW_DEBUG"
