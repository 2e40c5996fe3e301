"""Environment variables identifying the worktree a process runs in."""

import os
from typing import Dict

from git_phantom.constants import DEFAULT_SHELL, ENV_PHANTOM, ENV_PHANTOM_NAME, ENV_PHANTOM_PATH


def get_phantom_env(worktree_name: str, worktree_path: str) -> Dict[str, str]:
    """Variables injected into every process launched inside a worktree."""
    return {
        ENV_PHANTOM: "1",
        ENV_PHANTOM_NAME: worktree_name,
        ENV_PHANTOM_PATH: worktree_path,
    }


def get_user_shell() -> str:
    return os.environ.get("SHELL") or DEFAULT_SHELL


def build_child_env(worktree_name: str, worktree_path: str) -> Dict[str, str]:
    """The current environment plus the phantom variables."""
    env = os.environ.copy()
    env.update(get_phantom_env(worktree_name, worktree_path))
    return env
