"""Creating new worktrees."""

import os
from dataclasses import dataclass, field
from typing import List, Optional, Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import (
    GitOperationError,
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
)
from git_phantom.logging_config import get_logger
from git_phantom.paths import get_phantom_directory
from git_phantom.process.exec import exec_in_directory
from git_phantom.process.env import get_user_shell
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitExecutor
from git_phantom.services.git.operations import GitOperations
from git_phantom.worktree.file_copier import copy_files
from git_phantom.worktree.validate import validate_worktree_does_not_exist, validate_worktree_name

logger = get_logger(__name__)


@dataclass
class CreateWorktreeOptions:
    """Options for :func:`create_worktree`."""

    branch: Optional[str] = None  # defaults to the worktree name
    commitish: Optional[str] = None  # defaults to HEAD
    copy_files: List[str] = field(default_factory=list)
    post_create_commands: List[str] = field(default_factory=list)
    container: str = DEFAULT_CONTAINER


@dataclass
class CreateWorktreeSuccess:
    """A created worktree plus the outcome of its post-create steps."""

    message: str
    path: str
    branch: str
    copied_files: Optional[List[str]] = None
    skipped_files: Optional[List[str]] = None
    copy_error: Optional[str] = None
    executed_commands: Optional[List[str]] = None
    command_error: Optional[str] = None


def _is_path_collision(message: str, worktree_path: str) -> bool:
    # git: "fatal: '<path>' already exists"
    return f"'{worktree_path}' already exists" in message


def _run_post_create_commands(name: str, worktree_path: str, commands: List[str], success: CreateWorktreeSuccess) -> None:
    shell = get_user_shell()
    success.executed_commands = []
    for command in commands:
        logger.info(f"Running post-create command in {name}: {command}")
        result = exec_in_directory(name, worktree_path, [shell, "-c", command])
        if not result.ok:
            success.command_error = f"Post-create command '{command}' failed: {result.error}"
            logger.warning(success.command_error)
            return
        success.executed_commands.append(command)


def create_worktree(
    git_root: str,
    name: str,
    options: Optional[CreateWorktreeOptions] = None,
    executor: Optional[GitExecutor] = None,
) -> Result[CreateWorktreeSuccess, Union[InvalidWorktreeNameError, WorktreeAlreadyExistsError, GitOperationError]]:
    """Create the worktree ``name`` on a new branch.

    The directory check happens before git is invoked; if another process
    wins the race, git's own "already exists" failure is reported as
    WorktreeAlreadyExistsError as well. File copies and post-create commands
    run after the worktree exists and never undo it: their failures are
    reported in ``copy_error`` / ``command_error`` of the success value.

    Args:
        git_root: Repository root
        name: Worktree name (also the default branch name)
        options: Branch, start point and post-create actions
        executor: Git executor (defaults to the shared one)
    """
    options = options or CreateWorktreeOptions()

    name_validation = validate_worktree_name(name)
    if not name_validation.ok:
        return name_validation

    branch = options.branch or name
    commitish = options.commitish or "HEAD"

    worktrees_path = get_phantom_directory(git_root, options.container)
    try:
        os.makedirs(worktrees_path, exist_ok=True)
    except OSError as e:
        return Err(GitOperationError("worktree add", f"Could not create {worktrees_path}: {e}"))

    validation = validate_worktree_does_not_exist(git_root, name, options.container)
    if not validation.ok:
        return Err(validation.error)
    worktree_path = validation.value.path

    add_result = GitOperations(executor).add_worktree(git_root, worktree_path, branch, commitish)
    if not add_result.ok:
        message = str(add_result.error)
        if _is_path_collision(message, worktree_path):
            return Err(WorktreeAlreadyExistsError(name))
        return Err(GitOperationError("worktree add", message))

    success = CreateWorktreeSuccess(
        message=f"Created worktree '{name}' at {worktree_path}",
        path=worktree_path,
        branch=branch,
    )

    if options.copy_files:
        copy_result = copy_files(git_root, worktree_path, options.copy_files)
        if copy_result.ok:
            success.copied_files = copy_result.value.copied_files
            success.skipped_files = copy_result.value.skipped_files
        else:
            success.copy_error = str(copy_result.error)

    if options.post_create_commands:
        _run_post_create_commands(name, worktree_path, options.post_create_commands, success)

    return Ok(success)
