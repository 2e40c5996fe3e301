"""Deleting worktrees and their branches."""

from dataclasses import dataclass
from typing import Optional, Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import (
    DirtyWorktreeError,
    GitOperationError,
    InvalidWorktreeNameError,
    WorktreeNotFoundError,
)
from git_phantom.logging_config import get_logger
from git_phantom.models.worktree import WorktreeStatus
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitExecutor
from git_phantom.services.git.operations import GitOperations
from git_phantom.worktree.validate import validate_worktree_exists, validate_worktree_name

logger = get_logger(__name__)


@dataclass
class DeleteWorktreeOptions:
    force: bool = False
    container: str = DEFAULT_CONTAINER


@dataclass
class DeleteWorktreeSuccess:
    message: str
    has_uncommitted_changes: bool
    changed_files: Optional[int] = None
    branch: Optional[str] = None
    branch_deleted: bool = False


def count_changed_files(porcelain: str) -> int:
    """Number of non-empty lines in ``status --porcelain`` output."""
    return sum(1 for line in porcelain.splitlines() if line.strip())


def get_worktree_status(worktree_path: str, executor: Optional[GitExecutor] = None) -> WorktreeStatus:
    """Uncommitted-change summary; an unreadable status counts as clean."""
    result = GitOperations(executor).get_status_porcelain(worktree_path)
    if not result.ok:
        logger.debug(f"Could not read status of {worktree_path}, assuming clean: {result.error}")
        return WorktreeStatus(has_uncommitted_changes=False, changed_files=0)

    changed_files = count_changed_files(result.value)
    return WorktreeStatus(has_uncommitted_changes=changed_files > 0, changed_files=changed_files)


def _remove_worktree(git_ops: GitOperations, git_root: str, worktree_path: str) -> Result[None, GitOperationError]:
    result = git_ops.remove_worktree(git_root, worktree_path)
    if result.ok:
        return result

    logger.debug(f"Plain removal of {worktree_path} failed, retrying with --force: {result.error}")
    result = git_ops.remove_worktree(git_root, worktree_path, force=True)
    if result.ok:
        return result
    return Err(GitOperationError("worktree remove", str(result.error)))


def delete_worktree(
    git_root: str,
    name: str,
    options: Optional[DeleteWorktreeOptions] = None,
    executor: Optional[GitExecutor] = None,
) -> Result[
    DeleteWorktreeSuccess,
    Union[InvalidWorktreeNameError, WorktreeNotFoundError, DirtyWorktreeError, GitOperationError],
]:
    """Remove the worktree ``name`` and, best-effort, the branch of the same name.

    Only the branch named after the worktree is deleted, never whatever the
    worktree happens to have checked out. A worktree with uncommitted
    changes is only removed with ``force``. Failing to delete the branch
    does not fail the operation; it is noted in the success message instead.
    """
    options = options or DeleteWorktreeOptions()

    name_validation = validate_worktree_name(name)
    if not name_validation.ok:
        return name_validation

    validation = validate_worktree_exists(git_root, name, options.container)
    if not validation.ok:
        return Err(validation.error)
    worktree_path = validation.value.path

    status = get_worktree_status(worktree_path, executor)
    if status.has_uncommitted_changes and not options.force:
        return Err(DirtyWorktreeError(name, status.changed_files))

    git_ops = GitOperations(executor)

    removal = _remove_worktree(git_ops, git_root, worktree_path)
    if not removal.ok:
        return removal

    branch_deleted = False
    delete_result = git_ops.delete_branch(git_root, name)
    if delete_result.ok:
        branch_deleted = True
        message = f"Deleted worktree '{name}' and its branch '{name}'"
    else:
        logger.debug(f"Could not delete branch {name}: {delete_result.error}")
        message = (
            f"Deleted worktree '{name}'\n"
            f"Note: could not delete branch '{name}': {delete_result.error}"
        )

    if status.has_uncommitted_changes:
        message = (
            f"Warning: Worktree '{name}' had uncommitted changes ({status.changed_files} files)\n"
            f"{message}"
        )

    return Ok(DeleteWorktreeSuccess(
        message=message,
        has_uncommitted_changes=status.has_uncommitted_changes,
        changed_files=status.changed_files if status.has_uncommitted_changes else None,
        branch=name,
        branch_deleted=branch_deleted,
    ))
