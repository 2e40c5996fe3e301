"""Running arbitrary commands inside a worktree."""

from typing import Sequence, Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import InvalidWorktreeNameError, ProcessError, ProcessSpawnError, WorktreeNotFoundError
from git_phantom.process.env import build_child_env
from git_phantom.process.spawn import SpawnConfig, SpawnSuccess, spawn_process
from git_phantom.result import Err, Result
from git_phantom.worktree.validate import validate_worktree_exists, validate_worktree_name


def exec_in_directory(
    worktree_name: str,
    worktree_path: str,
    command: Sequence[str],
    capture_output: bool = False,
) -> Result[SpawnSuccess, ProcessError]:
    """Run ``command`` (an argument vector) in an already resolved worktree path."""
    if not command:
        return Err(ProcessSpawnError("", "No command given"))
    return spawn_process(SpawnConfig(
        command=command[0],
        args=list(command[1:]),
        cwd=worktree_path,
        env=build_child_env(worktree_name, worktree_path),
        capture_output=capture_output,
    ))


def exec_in_worktree(
    git_root: str,
    worktree_name: str,
    command: Sequence[str],
    container: str = DEFAULT_CONTAINER,
    capture_output: bool = False,
) -> Result[SpawnSuccess, Union[InvalidWorktreeNameError, WorktreeNotFoundError, ProcessError]]:
    """Run ``command`` inside the named worktree and wait for it."""
    name_validation = validate_worktree_name(worktree_name)
    if not name_validation.ok:
        return name_validation

    validation = validate_worktree_exists(git_root, worktree_name, container)
    if not validation.ok:
        return Err(validation.error)
    return exec_in_directory(worktree_name, validation.value.path, command, capture_output)
