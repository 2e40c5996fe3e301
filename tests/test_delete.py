"""Tests for deleting worktrees"""
import os
from unittest.mock import Mock
import pytest
import git

from git_phantom.exceptions import (
    DirtyWorktreeError,
    GitOperationError,
    InvalidWorktreeNameError,
    WorktreeNotFoundError,
)
from git_phantom.paths import get_phantom_directory, get_worktree_path
from git_phantom.result import Err, Ok
from git_phantom.services.git.executor import GitCommandFailure, GitExecutor, GitOutput
from git_phantom.worktree.create import CreateWorktreeOptions, create_worktree
from git_phantom.worktree.delete import (
    DeleteWorktreeOptions,
    count_changed_files,
    delete_worktree,
    get_worktree_status,
)


def _branch_names(repo):
    return [head.name for head in repo.heads]


class TestCountChangedFiles:
    """Test porcelain line counting."""

    def test_counts_non_empty_lines(self):
        assert count_changed_files(" M a.txt\n?? b.txt\n\n") == 2

    def test_empty_output(self):
        assert count_changed_files("") == 0


class TestWorktreeStatus:
    """Test uncommitted-change detection."""

    def test_clean(self, make_worktree):
        status = get_worktree_status(make_worktree("feature"))
        assert status.has_uncommitted_changes is False
        assert status.changed_files == 0

    def test_dirty(self, make_worktree):
        path = make_worktree("feature")
        with open(os.path.join(path, "new.txt"), "w") as f:
            f.write("x")
        with open(os.path.join(path, "README.md"), "a") as f:
            f.write("more\n")

        status = get_worktree_status(path)

        assert status.has_uncommitted_changes is True
        assert status.changed_files == 2

    def test_unreadable_status_counts_as_clean(self, failing_executor):
        status = get_worktree_status("/nowhere", failing_executor)
        assert status.has_uncommitted_changes is False


class TestDeleteWorktree:
    """Test delete_worktree against a real repository."""

    def test_delete_clean_worktree(self, git_repo, git_root, make_worktree):
        path = make_worktree("feature")

        result = delete_worktree(git_root, "feature")

        assert result.ok
        assert result.value.message == "Deleted worktree 'feature' and its branch 'feature'"
        assert result.value.has_uncommitted_changes is False
        assert result.value.changed_files is None
        assert result.value.branch_deleted is True
        assert not os.path.exists(path)
        assert "feature" not in _branch_names(git_repo)

    def test_custom_branch_is_kept(self, git_repo, git_root, make_worktree):
        make_worktree("feature", options=CreateWorktreeOptions(branch="topic"))

        result = delete_worktree(git_root, "feature")

        assert result.ok
        assert result.value.branch == "feature"
        assert result.value.branch_deleted is False
        assert "Note: could not delete branch 'feature'" in result.value.message
        assert "topic" in _branch_names(git_repo)

    def test_branch_switched_inside_worktree_is_kept(self, git_repo, git_root, make_worktree):
        git_repo.create_head("release")
        path = make_worktree("feature")
        worktree_repo = git.Repo(path)
        worktree_repo.git.checkout("release")
        with open(os.path.join(path, "x.txt"), "w") as f:
            f.write("release work\n")
        worktree_repo.git.add("x.txt")
        worktree_repo.git.commit("-m", "Release work")
        release_commit = worktree_repo.git.rev_parse("HEAD")
        worktree_repo.close()

        result = delete_worktree(git_root, "feature")

        assert result.ok
        assert result.value.branch == "feature"
        assert result.value.branch_deleted is True
        assert "feature" not in _branch_names(git_repo)
        assert "release" in _branch_names(git_repo)
        assert git_repo.heads.release.commit.hexsha == release_commit

    def test_invalid_name_is_rejected_before_any_lookup(self, git_root):
        os.makedirs(get_phantom_directory(git_root))
        executor = Mock(spec=GitExecutor)

        result = delete_worktree(git_root, "../../..", executor=executor)

        assert isinstance(result.error, InvalidWorktreeNameError)
        executor.run.assert_not_called()
        executor.run_in_directory.assert_not_called()

    def test_delete_missing_worktree_without_git_call(self, git_root):
        executor = Mock(spec=GitExecutor)

        result = delete_worktree(git_root, "missing", executor=executor)

        assert not result.ok
        assert isinstance(result.error, WorktreeNotFoundError)
        executor.run.assert_not_called()

    def test_dirty_worktree_is_refused(self, git_repo, git_root, make_worktree):
        path = make_worktree("feature")
        with open(os.path.join(path, "untracked.txt"), "w") as f:
            f.write("x")

        result = delete_worktree(git_root, "feature")

        assert not result.ok
        assert isinstance(result.error, DirtyWorktreeError)
        assert result.error.changed_files == 1
        assert str(result.error) == (
            "Worktree 'feature' has uncommitted changes (1 files). Use --force to delete anyway."
        )
        assert os.path.exists(path)
        assert "feature" in _branch_names(git_repo)

    def test_force_deletes_dirty_worktree(self, git_repo, git_root, make_worktree):
        path = make_worktree("feature")
        for name in ("one.txt", "two.txt"):
            with open(os.path.join(path, name), "w") as f:
                f.write(name)

        result = delete_worktree(git_root, "feature", DeleteWorktreeOptions(force=True))

        assert result.ok
        assert result.value.has_uncommitted_changes is True
        assert result.value.changed_files == 2
        assert result.value.message.startswith("Warning: Worktree 'feature' had uncommitted changes (2 files)\n")
        assert "Deleted worktree 'feature'" in result.value.message
        assert not os.path.exists(path)

    def test_detached_worktree_still_deletes_its_branch(self, git_repo, git_root, make_worktree):
        path = make_worktree("feature")
        git.Git(path).checkout("--detach")

        result = delete_worktree(git_root, "feature")

        assert result.ok
        assert result.value.branch == "feature"
        assert result.value.branch_deleted is True
        assert "feature" not in _branch_names(git_repo)
        assert "main" in _branch_names(git_repo)
        assert not os.path.exists(path)

    def test_custom_container(self, git_root):
        assert create_worktree(git_root, "feature", CreateWorktreeOptions(container="gardens")).ok

        assert isinstance(delete_worktree(git_root, "feature").error, WorktreeNotFoundError)
        assert delete_worktree(git_root, "feature", DeleteWorktreeOptions(container="gardens")).ok


class TestDeleteWorktreeCommands:
    """Test the git commands delete_worktree issues, with a mocked executor."""

    @pytest.fixture
    def worktree_path(self, git_root):
        path = get_worktree_path(git_root, "feature")
        os.makedirs(path)
        return path

    @pytest.fixture
    def executor(self):
        executor = Mock(spec=GitExecutor)
        executor.run_in_directory.return_value = Ok(GitOutput("", ""))
        return executor

    def _argv(self, executor):
        return [(c.args[0], c.kwargs.get("cwd")) for c in executor.run.call_args_list]

    def test_plain_removal_then_branch(self, git_root, worktree_path, executor):
        executor.run.side_effect = [Ok(GitOutput("", "")), Ok(GitOutput("", ""))]

        result = delete_worktree(git_root, "feature", executor=executor)

        assert result.ok
        assert result.value.branch_deleted is True
        executor.run_in_directory.assert_called_once_with(worktree_path, ["status", "--porcelain"])
        assert self._argv(executor) == [
            (["worktree", "remove", worktree_path], git_root),
            (["branch", "-D", "feature"], git_root),
        ]

    def test_force_retry_after_plain_removal_fails(self, git_root, worktree_path, executor):
        executor.run.side_effect = [
            Err(GitCommandFailure(["worktree", "remove", worktree_path], 128, "fatal: contains modified files")),
            Ok(GitOutput("", "")),
            Ok(GitOutput("", "")),
        ]

        result = delete_worktree(git_root, "feature", executor=executor)

        assert result.ok
        assert result.value.message == "Deleted worktree 'feature' and its branch 'feature'"
        assert self._argv(executor) == [
            (["worktree", "remove", worktree_path], git_root),
            (["worktree", "remove", "--force", worktree_path], git_root),
            (["branch", "-D", "feature"], git_root),
        ]

    def test_both_removals_fail(self, git_root, worktree_path, executor):
        executor.run.side_effect = [
            Err(GitCommandFailure(["worktree", "remove", worktree_path], 128, "fatal: locked")),
            Err(GitCommandFailure(["worktree", "remove", "--force", worktree_path], 128, "fatal: still locked")),
        ]

        result = delete_worktree(git_root, "feature", executor=executor)

        assert not result.ok
        assert isinstance(result.error, GitOperationError)
        assert result.error.operation == "worktree remove"
        assert result.error.details == "fatal: still locked"
        assert self._argv(executor) == [
            (["worktree", "remove", worktree_path], git_root),
            (["worktree", "remove", "--force", worktree_path], git_root),
        ]

    def test_branch_deletion_failure_is_a_note(self, git_root, worktree_path, executor):
        executor.run.side_effect = [
            Ok(GitOutput("", "")),
            Err(GitCommandFailure(["branch", "-D", "feature"], 1, "error: branch 'feature' not found.")),
        ]

        result = delete_worktree(git_root, "feature", executor=executor)

        assert result.ok
        assert result.value.branch_deleted is False
        assert result.value.message == (
            "Deleted worktree 'feature'\n"
            "Note: could not delete branch 'feature': error: branch 'feature' not found."
        )
        assert self._argv(executor)[-1] == (["branch", "-D", "feature"], git_root)
