"""Git-related services for git-phantom."""

from .executor import GitExecutor, GitOutput, GitCommandFailure, get_default_executor
from .operations import GitOperations

__all__ = [
    "GitExecutor",
    "GitOutput",
    "GitCommandFailure",
    "GitOperations",
    "get_default_executor",
]
