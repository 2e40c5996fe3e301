"""
git-phantom - Manage isolated git worktrees under the repository's .git directory
"""

from .__version__ import __version__
from .result import Ok, Err, Result, is_ok, is_err

__all__ = ["Ok", "Err", "Result", "is_ok", "is_err", "__version__"]
