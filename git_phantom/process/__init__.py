"""Launching shells, commands, multiplexer panes and fzf for worktrees."""

from .spawn import SpawnConfig, SpawnSuccess, spawn_process
from .env import get_phantom_env, get_user_shell
from .shell import shell_in_worktree, shell_in_directory
from .exec import exec_in_worktree, exec_in_directory
from .multiplexer import (
    Multiplexer,
    MultiplexerOptions,
    SplitDirection,
    detect_multiplexer,
    execute_in_multiplexer,
)
from .fzf import select_with_fzf

__all__ = [
    "SpawnConfig",
    "SpawnSuccess",
    "spawn_process",
    "get_phantom_env",
    "get_user_shell",
    "shell_in_worktree",
    "shell_in_directory",
    "exec_in_worktree",
    "exec_in_directory",
    "Multiplexer",
    "MultiplexerOptions",
    "SplitDirection",
    "detect_multiplexer",
    "execute_in_multiplexer",
    "select_with_fzf",
]
