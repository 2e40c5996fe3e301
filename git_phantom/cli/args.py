"""Command-line argument parsing for git-phantom."""

import argparse

from git_phantom.__version__ import __version__
from git_phantom.cli.completion import SUPPORTED_SHELLS
from git_phantom.constants import DEFAULT_CONTAINER

# --tmux / --kitty flags all store into args.window
WINDOW_CHOICES = {
    "tmux": ("tmux", "new"),
    "tmux-vertical": ("tmux", "vertical"),
    "tmux-horizontal": ("tmux", "horizontal"),
    "kitty": ("kitty", "new"),
    "kitty-vertical": ("kitty", "vertical"),
    "kitty-horizontal": ("kitty", "horizontal"),
}


def _add_window_arguments(group) -> None:
    group.add_argument(
        "-t", "--tmux", dest="window", action="store_const", const="tmux",
        help="Open the worktree in a new tmux window",
    )
    group.add_argument(
        "--tmux-vertical", "--tmux-v", dest="window", action="store_const", const="tmux-vertical",
        help="Open the worktree in a vertical tmux split",
    )
    group.add_argument(
        "--tmux-horizontal", "--tmux-h", dest="window", action="store_const", const="tmux-horizontal",
        help="Open the worktree in a horizontal tmux split",
    )
    group.add_argument(
        "--kitty", dest="window", action="store_const", const="kitty",
        help="Open the worktree in a new kitty tab",
    )
    group.add_argument(
        "--kitty-vertical", "--kitty-v", dest="window", action="store_const", const="kitty-vertical",
        help="Open the worktree in a vertical kitty split",
    )
    group.add_argument(
        "--kitty-horizontal", "--kitty-h", dest="window", action="store_const", const="kitty-horizontal",
        help="Open the worktree in a horizontal kitty split",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``phantom`` argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="phantom",
        description="Manage isolated git worktrees stored under .git/<container>/worktrees",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-phantom {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--container",
        default=DEFAULT_CONTAINER,
        help=f"Directory under .git that holds the worktrees (default: {DEFAULT_CONTAINER})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel git queries for list (default: auto-detect based on CPU and threading mode)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    create = subparsers.add_parser("create", help="Create a worktree on a new branch")
    create.add_argument("name", help="Worktree name (also the branch name unless --branch is given)")
    create.add_argument("-b", "--branch", help="Name of the branch to create")
    create.add_argument("--base", metavar="COMMITISH", help="Commit, branch or tag to start from (default: HEAD)")
    create.add_argument(
        "--copy-file",
        dest="copy_files",
        action="append",
        metavar="FILE",
        help="Copy an untracked file from the repository into the worktree (repeatable; overrides the config file)",
    )
    create_after = create.add_mutually_exclusive_group()
    create_after.add_argument("-s", "--shell", action="store_true", help="Open a shell in the new worktree")
    create_after.add_argument("-x", "--exec", dest="exec_command", metavar="CMD", help="Run a command in the new worktree")
    _add_window_arguments(create_after)

    attach = subparsers.add_parser("attach", help="Create a worktree for an existing branch")
    attach.add_argument("name", help="Existing branch name (also the worktree name)")
    attach_after = attach.add_mutually_exclusive_group()
    attach_after.add_argument("-s", "--shell", action="store_true", help="Open a shell in the worktree")
    attach_after.add_argument("-x", "--exec", dest="exec_command", metavar="CMD", help="Run a command in the worktree")

    delete = subparsers.add_parser("delete", help="Delete a worktree and its branch")
    delete.add_argument("name", nargs="?", help="Worktree name")
    delete.add_argument("-f", "--force", action="store_true", help="Delete even with uncommitted changes")
    delete_target = delete.add_mutually_exclusive_group()
    delete_target.add_argument("--current", action="store_true", help="Delete the worktree you are in")
    delete_target.add_argument("--fzf", action="store_true", help="Pick the worktree with fzf")

    list_parser = subparsers.add_parser("list", help="List worktrees")
    list_parser.add_argument("--names", action="store_true", help="Print worktree names only")
    list_parser.add_argument("--fzf", action="store_true", help="Pick a worktree with fzf and print its name")
    list_parser.add_argument("--legend", action="store_true", help="Show a legend below the table")

    where = subparsers.add_parser("where", help="Print the path of a worktree")
    where.add_argument("name", nargs="?", help="Worktree name")
    where.add_argument("--fzf", action="store_true", help="Pick the worktree with fzf")

    shell = subparsers.add_parser("shell", help="Open a shell in a worktree")
    shell.add_argument("name", nargs="?", help="Worktree name")
    shell.add_argument("--fzf", action="store_true", help="Pick the worktree with fzf")
    _add_window_arguments(shell.add_mutually_exclusive_group())

    exec_parser = subparsers.add_parser("exec", help="Run a command in a worktree")
    exec_parser.add_argument("--fzf", action="store_true", help="Pick the worktree with fzf")
    exec_parser.add_argument(
        "arguments",
        nargs=argparse.REMAINDER,
        metavar="[name] command ...",
        help="Worktree name (omitted with --fzf) followed by the command and its arguments",
    )

    subparsers.add_parser("version", help="Show version information")

    completion = subparsers.add_parser("completion", help="Print a shell completion script")
    completion.add_argument("shell", choices=SUPPORTED_SHELLS, help="Shell to generate the script for")

    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
