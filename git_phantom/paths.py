"""Canonical locations of phantom worktrees inside a repository."""

import os

from git_phantom.constants import DEFAULT_CONTAINER, WORKTREES_SUBDIR


def get_phantom_directory(git_root: str, container: str = DEFAULT_CONTAINER) -> str:
    """Return the directory holding all worktrees: ``<root>/.git/<container>/worktrees``."""
    return os.path.join(git_root, ".git", container, WORKTREES_SUBDIR)


def get_worktree_path(git_root: str, name: str, container: str = DEFAULT_CONTAINER) -> str:
    """Return the directory of the worktree called ``name``."""
    return os.path.join(get_phantom_directory(git_root, container), name)
