"""Shared constants for git-phantom."""

# Worktrees live under <root>/.git/<container>/worktrees/<name>
DEFAULT_CONTAINER = "phantom"
WORKTREES_SUBDIR = "worktrees"

CONFIG_FILENAME = "phantom.config.json"

# Branch placeholders used by list/select
DETACHED_HEAD = "(detached HEAD)"
UNKNOWN_BRANCH = "unknown"

DEFAULT_SHELL = "/bin/sh"

# Environment injected into shells, commands and multiplexer panes
ENV_PHANTOM = "PHANTOM"
ENV_PHANTOM_NAME = "PHANTOM_NAME"
ENV_PHANTOM_PATH = "PHANTOM_PATH"


class ExitCode:
    """Process exit codes used by the CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    VALIDATION_ERROR = 3


# fzf exit codes that mean "nothing selected"
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130

FZF_PROMPT = "Select worktree> "
FZF_HEADER = "Git Worktrees"


# Legend text for `phantom list`
LEGEND_TEXT = """
Legend:
clean = No uncommitted changes
dirty = Modified, staged or untracked files
"""
