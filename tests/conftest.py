"""Pytest fixtures for git-phantom tests"""
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_phantom.result import Err
from git_phantom.services.git.executor import GitCommandFailure, GitExecutor
from git_phantom.worktree.create import create_worktree


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(os.path.realpath(tmpdir))


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except Exception:
        pass

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_root(git_repo):
    """Root directory of the test repository as a string."""
    return str(git_repo.working_dir)


@pytest.fixture
def make_worktree(git_root):
    """Factory creating real worktrees in the test repository."""
    def _make(name, **kwargs):
        result = create_worktree(git_root, name, **kwargs)
        assert result.ok, result.error
        return result.value.path
    return _make


@pytest.fixture
def failing_executor():
    """A GitExecutor whose every command fails."""
    executor = Mock(spec=GitExecutor)
    executor.run.return_value = Err(GitCommandFailure(["status"], 128, "fatal: not a git repository"))
    executor.run_in_directory.return_value = Err(GitCommandFailure(["status"], 128, "fatal: not a git repository"))
    return executor
