"""Worktree lifecycle: validate, create, attach, delete, list, locate, select."""

from .validate import (
    validate_worktree_name,
    validate_worktree_exists,
    validate_worktree_does_not_exist,
    validate_phantom_directory_exists,
)
from .file_copier import CopyFilesResult, copy_files
from .create import CreateWorktreeOptions, CreateWorktreeSuccess, create_worktree
from .attach import attach_worktree
from .delete import DeleteWorktreeOptions, DeleteWorktreeSuccess, delete_worktree, get_worktree_status
from .list import ListWorktreesSuccess, list_worktrees
from .where import WhereWorktreeSuccess, where_worktree, get_current_worktree
from .select import select_worktree

__all__ = [
    "validate_worktree_name",
    "validate_worktree_exists",
    "validate_worktree_does_not_exist",
    "validate_phantom_directory_exists",
    "CopyFilesResult",
    "copy_files",
    "CreateWorktreeOptions",
    "CreateWorktreeSuccess",
    "create_worktree",
    "attach_worktree",
    "DeleteWorktreeOptions",
    "DeleteWorktreeSuccess",
    "delete_worktree",
    "get_worktree_status",
    "ListWorktreesSuccess",
    "list_worktrees",
    "WhereWorktreeSuccess",
    "where_worktree",
    "get_current_worktree",
    "select_worktree",
]
