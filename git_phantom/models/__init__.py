"""Data models for git-phantom."""

from .worktree import WorktreeInfo, WorktreeLocation, WorktreeStatus

__all__ = ["WorktreeInfo", "WorktreeLocation", "WorktreeStatus"]
