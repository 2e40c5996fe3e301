"""Attaching a worktree to a branch that already exists."""

from typing import Optional, Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import (
    BranchNotFoundError,
    GitOperationError,
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
)
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitExecutor
from git_phantom.services.git.operations import GitOperations
from git_phantom.worktree.validate import validate_worktree_does_not_exist, validate_worktree_name


def attach_worktree(
    git_root: str,
    name: str,
    executor: Optional[GitExecutor] = None,
    container: str = DEFAULT_CONTAINER,
) -> Result[str, Union[InvalidWorktreeNameError, WorktreeAlreadyExistsError, BranchNotFoundError, GitOperationError]]:
    """Check out the existing branch ``name`` into a new worktree of the same name.

    Name and directory are validated before any git call, and the branch is
    looked up before ``worktree add`` so a missing branch is reported as
    BranchNotFoundError rather than a generic git failure.

    Returns:
        Ok(worktree path) on success
    """
    name_validation = validate_worktree_name(name)
    if not name_validation.ok:
        return name_validation

    validation = validate_worktree_does_not_exist(git_root, name, container)
    if not validation.ok:
        return Err(validation.error)
    worktree_path = validation.value.path

    git_ops = GitOperations(executor)
    branch_check = git_ops.branch_exists(git_root, name)
    if not branch_check.ok:
        return branch_check
    if not branch_check.value:
        return Err(BranchNotFoundError(name))

    attach_result = git_ops.attach_worktree(git_root, worktree_path, name)
    if not attach_result.ok:
        return Err(GitOperationError("worktree add", str(attach_result.error)))

    return Ok(worktree_path)
