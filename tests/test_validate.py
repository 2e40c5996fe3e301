"""Tests for worktree name and existence validation"""
import os
import pytest

from git_phantom.exceptions import (
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
    WorktreeNotFoundError,
)
from git_phantom.paths import get_phantom_directory, get_worktree_path
from git_phantom.worktree.validate import (
    validate_phantom_directory_exists,
    validate_worktree_does_not_exist,
    validate_worktree_exists,
    validate_worktree_name,
)


class TestPaths:
    """Test worktree path layout."""

    def test_phantom_directory(self):
        assert get_phantom_directory("/repo") == os.path.join("/repo", ".git", "phantom", "worktrees")

    def test_custom_container(self):
        assert get_phantom_directory("/repo", "gardens") == os.path.join("/repo", ".git", "gardens", "worktrees")

    def test_worktree_path(self):
        assert get_worktree_path("/repo", "feature") == os.path.join(
            "/repo", ".git", "phantom", "worktrees", "feature"
        )

    def test_worktree_path_with_slash(self):
        path = get_worktree_path("/repo", "feature/login")
        assert path.endswith(os.path.join("worktrees", "feature/login"))


class TestValidateWorktreeName:
    """Test the worktree naming rules."""

    @pytest.mark.parametrize("name", ["feature", "feature/login", "v1.2.3", "fix_bug-42", "a"])
    def test_valid_names(self, name):
        assert validate_worktree_name(name).ok

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_empty_names(self, name):
        result = validate_worktree_name(name)
        assert not result.ok
        assert isinstance(result.error, InvalidWorktreeNameError)
        assert str(result.error) == "Phantom name cannot be empty"

    @pytest.mark.parametrize("name", ["has space", "semi;colon", "dollar$", "tilde~", "ünicode"])
    def test_invalid_characters(self, name):
        result = validate_worktree_name(name)
        assert not result.ok
        assert str(result.error) == (
            "Phantom name can only contain letters, numbers, hyphens, underscores, dots, and slashes"
        )

    @pytest.mark.parametrize("name", ["..", "a..b", "../escape", "feature/../main"])
    def test_consecutive_dots(self, name):
        result = validate_worktree_name(name)
        assert not result.ok
        assert str(result.error) == "Phantom name cannot contain consecutive dots"

    def test_character_rule_checked_before_dots(self):
        """A name breaking both rules reports the character rule."""
        result = validate_worktree_name("a..b c")
        assert "can only contain" in str(result.error)

    def test_error_carries_name(self):
        result = validate_worktree_name("bad name")
        assert result.error.name == "bad name"


class TestExistenceChecks:
    """Test worktree directory existence checks."""

    def test_missing_worktree(self, temp_dir):
        result = validate_worktree_exists(str(temp_dir), "missing")
        assert not result.ok
        assert isinstance(result.error, WorktreeNotFoundError)
        assert str(result.error) == "Worktree 'missing' not found"

    def test_existing_worktree(self, temp_dir):
        path = get_worktree_path(str(temp_dir), "present")
        os.makedirs(path)

        result = validate_worktree_exists(str(temp_dir), "present")
        assert result.ok
        assert result.value.path == path

    def test_does_not_exist_for_free_name(self, temp_dir):
        result = validate_worktree_does_not_exist(str(temp_dir), "new")
        assert result.ok
        assert result.value.path == get_worktree_path(str(temp_dir), "new")

    def test_does_not_exist_for_taken_name(self, temp_dir):
        os.makedirs(get_worktree_path(str(temp_dir), "taken"))

        result = validate_worktree_does_not_exist(str(temp_dir), "taken")
        assert not result.ok
        assert isinstance(result.error, WorktreeAlreadyExistsError)
        assert str(result.error) == "Worktree 'taken' already exists"

    def test_plain_file_counts_as_existing(self, temp_dir):
        os.makedirs(get_phantom_directory(str(temp_dir)))
        open(get_worktree_path(str(temp_dir), "file"), "w").close()

        assert validate_worktree_exists(str(temp_dir), "file").ok
        assert not validate_worktree_does_not_exist(str(temp_dir), "file").ok

    def test_phantom_directory_exists(self, temp_dir):
        assert validate_phantom_directory_exists(str(temp_dir)) is False
        os.makedirs(get_phantom_directory(str(temp_dir)))
        assert validate_phantom_directory_exists(str(temp_dir)) is True
        assert validate_phantom_directory_exists(str(temp_dir), "other") is False
