"""Utility functions for git-phantom.

This package provides utility modules:
- threading: worker-count helpers for the parallel worktree listing
"""

from .threading import (
    is_free_threading_enabled,
    get_optimal_worker_count,
)

__all__ = [
    "is_free_threading_enabled",
    "get_optimal_worker_count",
]
