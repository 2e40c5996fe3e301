"""Worktree data models."""

from dataclasses import dataclass


@dataclass
class WorktreeLocation:
    """Resolved location of a worktree directory."""

    path: str


@dataclass
class WorktreeStatus:
    """Uncommitted-change summary of a worktree."""

    has_uncommitted_changes: bool
    changed_files: int


@dataclass
class WorktreeInfo:
    """Information about a phantom worktree."""

    name: str
    path: str
    branch: str  # DETACHED_HEAD or UNKNOWN_BRANCH when no branch could be read
    is_clean: bool

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "clean" if self.is_clean else "dirty"
        return f"{self.name} ({self.branch}) @ {self.path} [{status}]"
