"""Enumerating worktrees with their branch and clean/dirty state."""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, NoReturn, Optional

from git_phantom.constants import DEFAULT_CONTAINER, UNKNOWN_BRANCH
from git_phantom.logging_config import get_logger
from git_phantom.models.worktree import WorktreeInfo
from git_phantom.paths import get_phantom_directory
from git_phantom.result import Ok, Result
from git_phantom.services.git.executor import GitExecutor
from git_phantom.services.git.operations import GitOperations
from git_phantom.utils.threading import get_optimal_worker_count
from git_phantom.worktree.validate import validate_phantom_directory_exists

logger = get_logger(__name__)


@dataclass
class ListWorktreesSuccess:
    worktrees: List[WorktreeInfo] = field(default_factory=list)
    message: Optional[str] = None


def find_worktree_names(phantom_dir: str) -> List[str]:
    """Names of all worktree directories under ``phantom_dir``, sorted.

    A directory holding a ``.git`` entry is a worktree. Other directories
    with subdirectories are searched further so names containing slashes
    (``feature/login``) are found; empty leftovers are reported as-is
    (without branch or status).
    """
    names: List[str] = []

    def walk(directory: str, prefix: str) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            logger.debug(f"Could not read {directory}: {e}")
            return
        for entry in entries:
            if not entry.is_dir(follow_symlinks=False):
                continue
            name = f"{prefix}{entry.name}"
            if os.path.exists(os.path.join(entry.path, ".git")):
                names.append(name)
                continue
            if _has_subdirectories(entry.path):
                walk(entry.path, f"{name}/")
            else:
                names.append(name)

    walk(phantom_dir, "")
    return sorted(names)


def _has_subdirectories(directory: str) -> bool:
    try:
        with os.scandir(directory) as entries:
            return any(entry.is_dir(follow_symlinks=False) for entry in entries)
    except OSError:
        return False


def _query_result(future, fallback, description: str):
    if future is None:
        return fallback
    try:
        return future.result()
    except Exception as e:
        logger.error(f"Error reading {description}: {e}")
        return fallback


def get_worktree_branch(worktree_path: str, executor: Optional[GitExecutor] = None) -> str:
    """Current branch, DETACHED_HEAD, or UNKNOWN_BRANCH if git fails."""
    result = GitOperations(executor).get_current_branch(worktree_path)
    if not result.ok:
        logger.debug(f"Could not read branch of {worktree_path}: {result.error}")
        return UNKNOWN_BRANCH
    return result.value


def get_worktree_clean(worktree_path: str, executor: Optional[GitExecutor] = None) -> bool:
    """True when ``status --porcelain`` is empty; an unreadable status counts as clean."""
    result = GitOperations(executor).get_status_porcelain(worktree_path)
    if not result.ok:
        logger.debug(f"Could not read status of {worktree_path}: {result.error}")
        return True
    return not result.value.strip()


def list_worktrees(
    git_root: str,
    executor: Optional[GitExecutor] = None,
    container: str = DEFAULT_CONTAINER,
    max_workers: Optional[int] = None,
) -> Result[ListWorktreesSuccess, NoReturn]:
    """List all worktrees, querying branch and status for each in parallel.

    Never fails: a missing or empty worktrees directory yields an empty list
    with a message, and a failed query only degrades its own entry.

    Args:
        git_root: Repository root
        executor: Git executor (defaults to the shared one)
        container: Container directory name under .git
        max_workers: Upper bound on concurrent git queries (None = auto)
    """
    if not validate_phantom_directory_exists(git_root, container):
        return Ok(ListWorktreesSuccess(message="No worktrees found (worktrees directory doesn't exist)"))

    phantom_dir = get_phantom_directory(git_root, container)
    names = find_worktree_names(phantom_dir)
    if not names:
        return Ok(ListWorktreesSuccess(message="No worktrees found"))

    workers = get_optimal_worker_count(max_workers, task_count=len(names) * 2)
    logger.debug(f"Listing {len(names)} worktrees with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        pending = []
        for name in names:
            path = os.path.join(phantom_dir, name)
            if not os.path.exists(os.path.join(path, ".git")):
                # Leftover directory: git would answer for the enclosing repository
                logger.debug(f"{path} has no .git entry, not querying git")
                pending.append((name, path, None, None))
                continue
            pending.append((
                name,
                path,
                pool.submit(get_worktree_branch, path, executor),
                pool.submit(get_worktree_clean, path, executor),
            ))

        worktrees = [
            WorktreeInfo(
                name=name,
                path=path,
                branch=_query_result(branch, UNKNOWN_BRANCH, f"branch of {name}"),
                is_clean=_query_result(clean, True, f"status of {name}"),
            )
            for name, path, branch, clean in pending
        ]

    return Ok(ListWorktreesSuccess(worktrees=worktrees))
