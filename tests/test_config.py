"""Tests for .gwconfig parsing."""

from pathlib import Path

import pytest

from gw_worktree.config import GwConfig, get_config_path, load_config, parse_config
from gw_worktree.exceptions import ConfigError


def test_parse_yaml_line_format() -> None:
    """The one-line-per-key format from the README."""
    config = parse_config(
        'link_files: [".env.local", ".env.production.local", "config/local.yaml"]\n'
        'scripts: ["npm install", "make setup"]\n'
    )
    assert config.link_files == (".env.local", ".env.production.local", "config/local.yaml")
    assert config.scripts == ("npm install", "make setup")
    assert config.delete_scripts == ()


def test_parse_json_format() -> None:
    config = parse_config(
        '{"link_files": [".env.local"], "scripts": ["npm install"], '
        '"delete_scripts": ["git stash", "./cleanup.sh"]}'
    )
    assert config == GwConfig(
        link_files=(".env.local",),
        scripts=("npm install",),
        delete_scripts=("git stash", "./cleanup.sh"),
    )


def test_parse_yaml_block_lists() -> None:
    config = parse_config(
        "scripts:\n"
        "  - npm install\n"
        "  - echo 'a, b'\n"
        "delete_scripts:\n"
        "  - git stash\n"
    )
    assert config.scripts == ("npm install", "echo 'a, b'")
    assert config.delete_scripts == ("git stash",)


def test_commas_inside_commands_are_kept() -> None:
    config = parse_config('scripts: ["echo one, two", "make"]')
    assert config.scripts == ("echo one, two", "make")


def test_empty_content_is_empty_config() -> None:
    assert parse_config("") == GwConfig()
    assert parse_config("   \n") == GwConfig()
    assert parse_config("# only a comment\n") == GwConfig()


def test_missing_keys_default_to_empty() -> None:
    config = parse_config("scripts: [make]")
    assert config.link_files == ()
    assert config.delete_scripts == ()


def test_single_string_is_one_item_list() -> None:
    assert parse_config("scripts: make setup").scripts == ("make setup",)


def test_null_key_is_empty() -> None:
    assert parse_config("scripts:\nlink_files: [a]").scripts == ()


def test_numbers_are_converted_to_strings() -> None:
    assert parse_config("scripts: [42]").scripts == ("42",)


def test_empty_items_are_dropped() -> None:
    assert parse_config('scripts: ["", "make", "  "]').scripts == ("make",)


def test_unknown_keys_are_ignored() -> None:
    assert parse_config("scripts: [make]\nextra: [x]").scripts == ("make",)


def test_non_mapping_is_rejected() -> None:
    with pytest.raises(ConfigError):
        parse_config('["npm install"]')


def test_nested_items_are_rejected() -> None:
    with pytest.raises(ConfigError, match="scripts"):
        parse_config("scripts: [[a, b]]")


def test_mapping_value_is_rejected() -> None:
    with pytest.raises(ConfigError, match="link_files"):
        parse_config("link_files: {a: b}")


def test_invalid_yaml_is_rejected() -> None:
    with pytest.raises(ConfigError, match="Cannot parse"):
        parse_config("scripts: [unterminated")


def test_load_missing_file(tmp_path: Path) -> None:
    (tmp_path / "main").mkdir()
    assert load_config(tmp_path) == GwConfig()


def test_load_from_main_worktree(tmp_path: Path) -> None:
    (tmp_path / "main").mkdir()
    get_config_path(tmp_path).write_text('link_files: ["README.md"]\nscripts: ["echo ok"]\n')

    config = load_config(tmp_path)
    assert config.link_files == ("README.md",)
    assert config.scripts == ("echo ok",)


def test_config_path_is_in_main(tmp_path: Path) -> None:
    assert get_config_path(tmp_path) == tmp_path / "main" / ".gwconfig"
