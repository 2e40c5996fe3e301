"""Interactive shells inside a worktree."""

from typing import Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import InvalidWorktreeNameError, ProcessError, WorktreeNotFoundError
from git_phantom.process.env import build_child_env, get_user_shell
from git_phantom.process.spawn import SpawnConfig, SpawnSuccess, spawn_process
from git_phantom.result import Err, Result
from git_phantom.worktree.validate import validate_worktree_exists, validate_worktree_name


def shell_in_directory(worktree_name: str, worktree_path: str) -> Result[SpawnSuccess, ProcessError]:
    """Start the user's shell in an already resolved worktree path."""
    return spawn_process(SpawnConfig(
        command=get_user_shell(),
        cwd=worktree_path,
        env=build_child_env(worktree_name, worktree_path),
    ))


def shell_in_worktree(
    git_root: str, worktree_name: str, container: str = DEFAULT_CONTAINER
) -> Result[SpawnSuccess, Union[InvalidWorktreeNameError, WorktreeNotFoundError, ProcessError]]:
    """Start ``$SHELL`` (or /bin/sh) inside the named worktree and wait for it."""
    name_validation = validate_worktree_name(worktree_name)
    if not name_validation.ok:
        return name_validation

    validation = validate_worktree_exists(git_root, worktree_name, container)
    if not validation.ok:
        return Err(validation.error)
    return shell_in_directory(worktree_name, validation.value.path)
