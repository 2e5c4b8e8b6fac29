"""Per-repository hook configuration (.gwconfig).

The file lives in the main worktree and may be written either as JSON::

    {"link_files": [".env.local"], "scripts": ["npm install"]}

or as YAML, including the one-line-per-key form::

    link_files: [".env.local", "config/local.yaml"]
    scripts: ["npm install", "make setup"]
    delete_scripts: ["git stash"]

Both are parsed into a single GwConfig value; nothing else in the package
looks at the file's text.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .constants import CONFIG_FILENAME, MAIN_WORKTREE
from .exceptions import ConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

CONFIG_KEYS = ("link_files", "scripts", "delete_scripts")


@dataclass(frozen=True)
class GwConfig:
    """Hook configuration. Every field defaults to an empty sequence."""

    link_files: tuple[str, ...] = ()
    scripts: tuple[str, ...] = ()
    delete_scripts: tuple[str, ...] = ()


def get_config_path(root: Path) -> Path:
    """Return the config file location for a worktree root."""
    return root / MAIN_WORKTREE / CONFIG_FILENAME


def _parse_document(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e


def _string_list(value: Any, key: str, path: Path) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' in {path} must be a list of strings")

    items: list[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise ConfigError(f"'{key}' in {path} must contain only strings, got {item!r}")
        text = str(item).strip()
        if text:
            items.append(text)
    return tuple(items)


def parse_config(text: str, path: Path = Path(CONFIG_FILENAME)) -> GwConfig:
    """
    Parse .gwconfig content.

    Args:
        text: File content, JSON or YAML
        path: File path, used in error messages

    Returns:
        GwConfig with missing keys left empty

    Raises:
        ConfigError: If the content is not a mapping of string lists
    """
    if not text.strip():
        return GwConfig()

    data = _parse_document(text, path)
    if data is None:
        return GwConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of {', '.join(CONFIG_KEYS)}")

    unknown = sorted(str(key) for key in data if key not in CONFIG_KEYS)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))

    return GwConfig(**{key: _string_list(data.get(key), key, path) for key in CONFIG_KEYS})


def load_config(root: Path) -> GwConfig:
    """
    Load the configuration of a worktree root.

    A missing file yields an empty configuration.

    Raises:
        ConfigError: If the file exists but is malformed
    """
    path = get_config_path(root)
    if not path.is_file():
        logger.debug("No config file at %s", path)
        return GwConfig()

    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    config = parse_config(text, path)
    logger.debug("Loaded config from %s: %s", path, config)
    return config
