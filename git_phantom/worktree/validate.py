"""Name grammar and existence checks for phantom worktrees."""

import os
import re

from git_phantom.constants import DEFAULT_CONTAINER
from git_phantom.exceptions import (
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
    WorktreeNotFoundError,
)
from git_phantom.models.worktree import WorktreeLocation
from git_phantom.paths import get_phantom_directory, get_worktree_path
from git_phantom.result import Err, Ok, Result

# Letters, digits, hyphen, underscore, dot and slash
VALID_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\-_./]+$")


def validate_worktree_name(name: str) -> Result[None, InvalidWorktreeNameError]:
    """Check ``name`` against the worktree naming rules.

    Rules are applied in order: non-empty after trimming, allowed characters
    only, no ``..``.
    """
    if not name or not name.strip():
        return Err(InvalidWorktreeNameError("Phantom name cannot be empty", name))

    if not VALID_NAME_PATTERN.match(name):
        return Err(InvalidWorktreeNameError(
            "Phantom name can only contain letters, numbers, hyphens, underscores, dots, and slashes",
            name,
        ))

    if ".." in name:
        return Err(InvalidWorktreeNameError("Phantom name cannot contain consecutive dots", name))

    return Ok(None)


def validate_worktree_exists(
    git_root: str, name: str, container: str = DEFAULT_CONTAINER
) -> Result[WorktreeLocation, WorktreeNotFoundError]:
    """Succeed with the worktree path if its directory exists."""
    worktree_path = get_worktree_path(git_root, name, container)
    if os.path.exists(worktree_path):
        return Ok(WorktreeLocation(path=worktree_path))
    return Err(WorktreeNotFoundError(name))


def validate_worktree_does_not_exist(
    git_root: str, name: str, container: str = DEFAULT_CONTAINER
) -> Result[WorktreeLocation, WorktreeAlreadyExistsError]:
    """Succeed with the would-be worktree path if nothing occupies it yet."""
    worktree_path = get_worktree_path(git_root, name, container)
    if os.path.exists(worktree_path):
        return Err(WorktreeAlreadyExistsError(name))
    return Ok(WorktreeLocation(path=worktree_path))


def validate_phantom_directory_exists(git_root: str, container: str = DEFAULT_CONTAINER) -> bool:
    """Return True if the worktrees container directory exists."""
    return os.path.exists(get_phantom_directory(git_root, container))
