"""Threading utilities for sizing the per-worktree git query pool."""

import os
import sys
from typing import Optional


def is_free_threading_enabled() -> bool:
    """Detect if Python is running with free-threading enabled.

    Returns:
        True if running on Python 3.13+ with the GIL disabled
    """
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None:
        return False
    return not is_gil_enabled()


def get_optimal_worker_count(user_specified: Optional[int] = None, task_count: Optional[int] = None) -> int:
    """Calculate the worker count for running git queries in parallel.

    Args:
        user_specified: User-specified worker count, if provided
        task_count: Number of queries to run; the pool never exceeds it

    Returns:
        Number of workers, always at least 1
    """
    if user_specified is not None and user_specified > 0:
        workers = user_specified
    else:
        cpu_count = os.cpu_count() or 1
        if is_free_threading_enabled():
            workers = min(64, cpu_count * 2)
        else:
            # Git queries are I/O-bound subprocesses
            workers = min(32, cpu_count + 4)

    if task_count is not None:
        workers = min(workers, task_count)
    return max(1, workers)
