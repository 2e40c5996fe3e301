"""Tests for creating and attaching worktrees"""
import os
from unittest.mock import Mock

from git_phantom.exceptions import (
    BranchNotFoundError,
    GitOperationError,
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
)
from git_phantom.paths import get_worktree_path
from git_phantom.result import Err
from git_phantom.services.git.executor import GitCommandFailure, GitExecutor
from git_phantom.worktree.attach import attach_worktree
from git_phantom.worktree.create import CreateWorktreeOptions, create_worktree


class TestCreateWorktree:
    """Test create_worktree against a real repository."""

    def test_create_worktree(self, git_repo, git_root):
        result = create_worktree(git_root, "feature")

        assert result.ok
        expected_path = get_worktree_path(git_root, "feature")
        assert result.value.path == expected_path
        assert result.value.branch == "feature"
        assert result.value.message == f"Created worktree 'feature' at {expected_path}"
        assert os.path.isfile(os.path.join(expected_path, "README.md"))
        assert "feature" in [head.name for head in git_repo.heads]

    def test_create_with_slash_in_name(self, git_root):
        result = create_worktree(git_root, "feature/login")
        assert result.ok
        assert os.path.isdir(get_worktree_path(git_root, "feature/login"))

    def test_create_with_custom_branch_and_base(self, git_repo, git_root):
        first_commit = git_repo.head.commit.hexsha
        with open(os.path.join(git_root, "later.txt"), "w") as f:
            f.write("later")
        git_repo.index.add(["later.txt"])
        git_repo.index.commit("Second commit")

        result = create_worktree(
            git_root, "old", CreateWorktreeOptions(branch="topic", commitish=first_commit)
        )

        assert result.ok
        assert result.value.branch == "topic"
        assert git_repo.heads["topic"].commit.hexsha == first_commit
        assert not os.path.exists(os.path.join(result.value.path, "later.txt"))

    def test_create_twice_fails(self, git_root):
        assert create_worktree(git_root, "feature").ok

        result = create_worktree(git_root, "feature")

        assert not result.ok
        assert isinstance(result.error, WorktreeAlreadyExistsError)
        assert str(result.error) == "Worktree 'feature' already exists"

    def test_existing_directory_fails_without_git_call(self, git_root):
        os.makedirs(get_worktree_path(git_root, "taken"))
        executor = Mock(spec=GitExecutor)

        result = create_worktree(git_root, "taken", executor=executor)

        assert isinstance(result.error, WorktreeAlreadyExistsError)
        executor.run.assert_not_called()

    def test_invalid_name_fails_without_git_call(self, git_root):
        executor = Mock(spec=GitExecutor)

        result = create_worktree(git_root, "bad name", executor=executor)

        assert isinstance(result.error, InvalidWorktreeNameError)
        executor.run.assert_not_called()

    def test_lost_race_reported_as_already_exists(self, git_root):
        """git refusing an existing path maps to WorktreeAlreadyExistsError."""
        path = get_worktree_path(git_root, "racy")
        executor = Mock(spec=GitExecutor)
        executor.run.return_value = Err(GitCommandFailure(["worktree", "add"], 128, f"fatal: '{path}' already exists"))

        result = create_worktree(git_root, "racy", executor=executor)

        assert isinstance(result.error, WorktreeAlreadyExistsError)

    def test_existing_branch_is_git_error(self, git_repo, git_root):
        git_repo.create_head("taken-branch")

        result = create_worktree(git_root, "taken-branch")

        assert not result.ok
        assert isinstance(result.error, GitOperationError)
        assert str(result.error).startswith("Git worktree add failed:")

    def test_copy_files(self, git_root):
        with open(os.path.join(git_root, ".env"), "w") as f:
            f.write("SECRET=1\n")

        result = create_worktree(
            git_root, "feature", CreateWorktreeOptions(copy_files=[".env", "missing.txt"])
        )

        assert result.ok
        assert result.value.copied_files == [".env"]
        assert result.value.skipped_files == ["missing.txt"]
        with open(os.path.join(result.value.path, ".env")) as f:
            assert f.read() == "SECRET=1\n"

    def test_post_create_commands(self, git_root):
        result = create_worktree(
            git_root,
            "feature",
            CreateWorktreeOptions(post_create_commands=["touch created.txt", "echo $PHANTOM_NAME > name.txt"]),
        )

        assert result.ok
        assert result.value.command_error is None
        assert result.value.executed_commands == ["touch created.txt", "echo $PHANTOM_NAME > name.txt"]
        assert os.path.exists(os.path.join(result.value.path, "created.txt"))
        with open(os.path.join(result.value.path, "name.txt")) as f:
            assert f.read().strip() == "feature"

    def test_failing_post_create_command_keeps_worktree(self, git_root):
        result = create_worktree(
            git_root,
            "feature",
            CreateWorktreeOptions(post_create_commands=["exit 3", "touch never.txt"]),
        )

        assert result.ok
        assert "exit 3" in result.value.command_error
        assert result.value.executed_commands == []
        assert os.path.isdir(result.value.path)
        assert not os.path.exists(os.path.join(result.value.path, "never.txt"))


class TestAttachWorktree:
    """Test attach_worktree against a real repository."""

    def test_attach_existing_branch(self, git_repo, git_root):
        git_repo.create_head("existing")

        result = attach_worktree(git_root, "existing")

        assert result.ok
        assert result.value == get_worktree_path(git_root, "existing")
        assert os.path.isfile(os.path.join(result.value, "README.md"))

    def test_attach_missing_branch(self, git_root):
        result = attach_worktree(git_root, "nope")

        assert not result.ok
        assert isinstance(result.error, BranchNotFoundError)
        assert str(result.error) == "Branch 'nope' not found"

    def test_attach_invalid_name(self):
        executor = Mock(spec=GitExecutor)

        result = attach_worktree("/repo", "a..b", executor=executor)

        assert isinstance(result.error, InvalidWorktreeNameError)
        executor.run.assert_not_called()

    def test_attach_existing_worktree(self, git_repo, git_root, make_worktree):
        make_worktree("feature")

        result = attach_worktree(git_root, "feature")

        assert isinstance(result.error, WorktreeAlreadyExistsError)

    def test_attach_checked_out_branch(self, git_root):
        """git refuses a branch that is checked out elsewhere."""
        result = attach_worktree(git_root, "main")

        assert not result.ok
        assert isinstance(result.error, GitOperationError)
