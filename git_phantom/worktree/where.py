"""Resolving a worktree name to its directory."""

import os
from dataclasses import dataclass
from typing import Optional, Union

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import GitOperationError, InvalidWorktreeNameError, WorktreeNotFoundError
from git_phantom.paths import get_phantom_directory
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitExecutor, get_default_executor
from git_phantom.worktree.validate import validate_worktree_exists, validate_worktree_name


@dataclass
class WhereWorktreeSuccess:
    path: str


def where_worktree(
    git_root: str, name: str, container: str = DEFAULT_CONTAINER
) -> Result[WhereWorktreeSuccess, Union[InvalidWorktreeNameError, WorktreeNotFoundError]]:
    name_validation = validate_worktree_name(name)
    if not name_validation.ok:
        return name_validation

    validation = validate_worktree_exists(git_root, name, container)
    if not validation.ok:
        return Err(validation.error)
    return Ok(WhereWorktreeSuccess(path=validation.value.path))


def get_current_worktree(
    git_root: str,
    cwd: Optional[str] = None,
    executor: Optional[GitExecutor] = None,
    container: str = DEFAULT_CONTAINER,
) -> Result[Optional[str], GitOperationError]:
    """Name of the worktree containing ``cwd``, or None outside any worktree.

    Uses ``rev-parse --show-toplevel`` so a subdirectory of a worktree
    resolves to the worktree itself.
    """
    base = os.path.abspath(cwd or os.getcwd())
    result = (executor or get_default_executor()).run(["rev-parse", "--show-toplevel"], cwd=base)
    if not result.ok:
        return Err(GitOperationError("rev-parse", str(result.error)))

    toplevel = os.path.realpath(result.value.stdout)
    phantom_dir = os.path.realpath(get_phantom_directory(git_root, container))
    if os.path.commonpath([toplevel, phantom_dir]) != phantom_dir or toplevel == phantom_dir:
        return Ok(None)
    return Ok(os.path.relpath(toplevel, phantom_dir).replace(os.sep, "/"))
