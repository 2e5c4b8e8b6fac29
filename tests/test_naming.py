"""Tests for branch <-> directory name mapping."""

import pytest

from gw_worktree.naming import branch_to_dir, dir_to_branch, is_ambiguous, is_safe_dir_name


@pytest.mark.parametrize(
    ("branch", "dir_name"),
    [
        ("main", "main"),
        ("feature/api-update", "feature__api-update"),
        ("user/team/branch", "user__team__branch"),
        ("no-slash", "no-slash"),
    ],
)
def test_branch_to_dir(branch: str, dir_name: str) -> None:
    assert branch_to_dir(branch) == dir_name
    assert dir_to_branch(dir_name) == branch


def test_round_trip_without_marker() -> None:
    """Names without '__' survive encode then decode."""
    for branch in ["a", "a/b", "a/b/c", "a_b/c", "x/_y", "trailing/"]:
        assert not is_ambiguous(branch)
        assert dir_to_branch(branch_to_dir(branch)) == branch


def test_marker_in_branch_is_ambiguous() -> None:
    """A literal '__' decodes to a different branch."""
    branch = "feature__x"
    assert is_ambiguous(branch)
    assert dir_to_branch(branch_to_dir(branch)) == "feature/x"


def test_encoded_dir_is_single_segment() -> None:
    assert "/" not in branch_to_dir("deep/nested/branch/name")


@pytest.mark.parametrize("dir_name", ["", ".", "..", "a/b"])
def test_unsafe_dir_names(dir_name: str) -> None:
    assert not is_safe_dir_name(dir_name)


def test_safe_dir_names() -> None:
    for dir_name in ["main", "feature__x", "..hidden", "a.b"]:
        assert is_safe_dir_name(dir_name)
