"""Command-line interface for git-phantom"""

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

from git_phantom.__version__ import __version__
from git_phantom.cli.args import WINDOW_CHOICES, build_parser
from git_phantom.cli.completion import generate_completion
from git_phantom.config import Settings, load_config
from git_phantom.constants import ExitCode
from git_phantom.exceptions import (
    BranchNotFoundError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    InvalidWorktreeNameError,
    ProcessError,
    WorktreeAlreadyExistsError,
    WorktreeNotFoundError,
)
from git_phantom.logging_config import get_logger, setup_logging
from git_phantom.process.env import get_phantom_env, get_user_shell
from git_phantom.process.exec import exec_in_directory, exec_in_worktree
from git_phantom.process.kitty import is_inside_kitty
from git_phantom.process.multiplexer import Multiplexer, MultiplexerOptions, SplitDirection, execute_in_multiplexer
from git_phantom.process.shell import shell_in_directory, shell_in_worktree
from git_phantom.process.tmux import is_inside_tmux
from git_phantom.services.display_service import DisplayService
from git_phantom.services.git.operations import GitOperations
from git_phantom.utils.threading import get_optimal_worker_count, is_free_threading_enabled
from git_phantom.worktree import (
    CreateWorktreeOptions,
    DeleteWorktreeOptions,
    attach_worktree,
    create_worktree,
    delete_worktree,
    get_current_worktree,
    list_worktrees,
    select_worktree,
    where_worktree,
)

console = Console()
error_console = Console(stderr=True)
logger = get_logger(__name__)

NOT_FOUND_ERRORS = (WorktreeNotFoundError, BranchNotFoundError)
VALIDATION_ERRORS = (
    InvalidWorktreeNameError,
    WorktreeAlreadyExistsError,
    ConfigParseError,
    ConfigValidationError,
)


def exit_code_for(error: Exception) -> int:
    """Map an error value to the process exit code."""
    if isinstance(error, ProcessError):
        return error.exit_code or ExitCode.GENERAL_ERROR
    if isinstance(error, NOT_FOUND_ERRORS):
        return ExitCode.NOT_FOUND
    if isinstance(error, VALIDATION_ERRORS):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.GENERAL_ERROR


def _fail(error, exit_code: Optional[int] = None) -> int:
    error_console.print(f"[red]Error: {escape(str(error))}[/red]")
    if exit_code is None:
        exit_code = exit_code_for(error) if isinstance(error, Exception) else ExitCode.GENERAL_ERROR
    return exit_code


def _process_exit(result) -> int:
    if result.ok:
        return result.value.exit_code
    return _fail(result.error)


def _resolve_name(args, settings: Settings, git_root: str):
    """Worktree name from the positional argument or an fzf pick.

    Returns:
        (name, None) on success, (None, exit code) otherwise. A cancelled
        selection exits successfully.
    """
    if getattr(args, "fzf", False):
        if getattr(args, "name", None):
            return None, _fail("Cannot specify both a worktree name and --fzf", ExitCode.VALIDATION_ERROR)
        selection = select_worktree(git_root, container=settings.container)
        if not selection.ok:
            return None, _fail(selection.error)
        if selection.value is None:
            return None, ExitCode.SUCCESS
        return selection.value.name, None

    if not getattr(args, "name", None):
        return None, _fail("Please provide a worktree name or use --fzf", ExitCode.VALIDATION_ERROR)
    return args.name, None


def _check_window(window: str) -> Optional[int]:
    backend, _ = WINDOW_CHOICES[window]
    if backend == "tmux" and not is_inside_tmux():
        return _fail("The --tmux option can only be used inside a tmux session", ExitCode.VALIDATION_ERROR)
    if backend == "kitty" and not is_inside_kitty():
        return _fail("The --kitty option can only be used inside a kitty terminal", ExitCode.VALIDATION_ERROR)
    return None


def _open_in_window(window: str, name: str, path: str) -> int:
    backend, direction = WINDOW_CHOICES[window]
    split = SplitDirection(direction)
    options = MultiplexerOptions(
        direction=split,
        command=get_user_shell(),
        cwd=path,
        env=get_phantom_env(name, path),
        window_name=name if split is SplitDirection.NEW else None,
    )
    console.print(f"Opening worktree '{escape(name)}' in {backend}")
    return _process_exit(execute_in_multiplexer(options, Multiplexer(backend)))


def _run_after(args, name: str, path: str) -> int:
    """Follow-up action of create/attach: multiplexer, shell or command."""
    if getattr(args, "window", None):
        return _open_in_window(args.window, name, path)

    if getattr(args, "shell", False):
        console.print(f"Entering worktree '{escape(name)}' at {escape(path)}")
        console.print("[dim]Type 'exit' to return to your original directory[/dim]")
        return _process_exit(shell_in_directory(name, path))

    if getattr(args, "exec_command", None):
        console.print(f"Executing command in worktree '{escape(name)}': {escape(args.exec_command)}")
        return _process_exit(exec_in_directory(name, path, [get_user_shell(), "-c", args.exec_command]))

    return ExitCode.SUCCESS


def handle_create(args, settings: Settings, git_root: str) -> int:
    if getattr(args, "window", None):
        window_error = _check_window(args.window)
        if window_error is not None:
            return window_error

    copy_files = []
    commands = []
    config_result = load_config(git_root)
    if config_result.ok:
        copy_files = config_result.value.post_create.copy_files
        commands = config_result.value.post_create.commands
    elif not isinstance(config_result.error, ConfigNotFoundError):
        error_console.print(f"[yellow]Warning: {escape(str(config_result.error))}[/yellow]")

    if args.copy_files:
        copy_files = args.copy_files

    result = create_worktree(
        git_root,
        args.name,
        CreateWorktreeOptions(
            branch=args.branch,
            commitish=args.base,
            copy_files=copy_files,
            post_create_commands=commands,
            container=settings.container,
        ),
    )
    if not result.ok:
        return _fail(result.error)

    success = result.value
    console.print(f"[green]{escape(success.message)}[/green]")
    if success.copied_files:
        console.print(f"  Copied files: {escape(', '.join(success.copied_files))}")
    if success.skipped_files:
        console.print(f"  [dim]Skipped (missing or not a regular file): {escape(', '.join(success.skipped_files))}[/dim]")
    if success.copy_error:
        error_console.print(f"[yellow]Warning: {escape(success.copy_error)}[/yellow]")
    if success.executed_commands:
        console.print(f"  Ran {len(success.executed_commands)} post-create command(s)")
    if success.command_error:
        return _fail(success.command_error, ExitCode.GENERAL_ERROR)

    return _run_after(args, args.name, success.path)


def handle_attach(args, settings: Settings, git_root: str) -> int:
    result = attach_worktree(git_root, args.name, container=settings.container)
    if not result.ok:
        return _fail(result.error)

    console.print(f"[green]Attached worktree '{escape(args.name)}' at {escape(result.value)}[/green]")
    return _run_after(args, args.name, result.value)


def handle_delete(args, settings: Settings, git_root: str) -> int:
    if args.current:
        if args.name:
            return _fail("Cannot specify both a worktree name and --current", ExitCode.VALIDATION_ERROR)
        current = get_current_worktree(git_root, container=settings.container)
        if not current.ok:
            return _fail(current.error)
        if current.value is None:
            return _fail(
                "Not in a worktree directory. The --current option can only be used from within a worktree.",
                ExitCode.VALIDATION_ERROR,
            )
        name = current.value
    else:
        name, exit_code = _resolve_name(args, settings, git_root)
        if name is None:
            return exit_code

    result = delete_worktree(
        git_root, name, DeleteWorktreeOptions(force=args.force, container=settings.container)
    )
    if not result.ok:
        return _fail(result.error)

    success = result.value
    for line in success.message.splitlines():
        if line.startswith("Warning:"):
            error_console.print(f"[yellow]{escape(line)}[/yellow]")
        elif line.startswith("Note:"):
            console.print(f"[dim]{escape(line)}[/dim]")
        else:
            console.print(f"[green]{escape(line)}[/green]")
    return ExitCode.SUCCESS


def handle_list(args, settings: Settings, git_root: str) -> int:
    if args.fzf:
        selection = select_worktree(git_root, container=settings.container)
        if not selection.ok:
            return _fail(selection.error)
        if selection.value is not None:
            console.print(selection.value.name, markup=False, highlight=False)
        return ExitCode.SUCCESS

    result = list_worktrees(git_root, container=settings.container, max_workers=settings.workers)
    if not result.ok:
        return _fail(result.error)

    display = DisplayService(console, verbose=settings.verbose)
    worktrees = result.value.worktrees
    if args.names:
        display.display_worktree_names(worktrees)
    elif not worktrees:
        console.print(result.value.message)
    else:
        display.display_worktree_table(worktrees, show_legend=args.legend)
    return ExitCode.SUCCESS


def handle_where(args, settings: Settings, git_root: str) -> int:
    name, exit_code = _resolve_name(args, settings, git_root)
    if name is None:
        return exit_code

    result = where_worktree(git_root, name, settings.container)
    if not result.ok:
        return _fail(result.error)
    console.print(result.value.path, markup=False, highlight=False, soft_wrap=True)
    return ExitCode.SUCCESS


def handle_shell(args, settings: Settings, git_root: str) -> int:
    if args.window:
        window_error = _check_window(args.window)
        if window_error is not None:
            return window_error

    name, exit_code = _resolve_name(args, settings, git_root)
    if name is None:
        return exit_code

    location = where_worktree(git_root, name, settings.container)
    if not location.ok:
        return _fail(location.error)
    path = location.value.path

    if args.window:
        return _open_in_window(args.window, name, path)

    console.print(f"Entering worktree '{escape(name)}' at {escape(path)}")
    console.print("[dim]Type 'exit' to return to your original directory[/dim]")
    return _process_exit(shell_in_worktree(git_root, name, settings.container))


def handle_exec(args, settings: Settings, git_root: str) -> int:
    arguments = list(args.arguments)
    if arguments and arguments[0] == "--":
        arguments = arguments[1:]

    if args.fzf:
        name, exit_code = _resolve_name(args, settings, git_root)
        if name is None:
            return exit_code
        command = arguments
    else:
        if len(arguments) < 2:
            return _fail("Usage: phantom exec <name> <command> [args...]", ExitCode.VALIDATION_ERROR)
        name, command = arguments[0], arguments[1:]

    if not command:
        return _fail("No command given", ExitCode.VALIDATION_ERROR)

    return _process_exit(exec_in_worktree(git_root, name, command, settings.container))


COMMANDS = {
    "create": handle_create,
    "attach": handle_attach,
    "delete": handle_delete,
    "list": handle_list,
    "where": handle_where,
    "shell": handle_shell,
    "exec": handle_exec,
}


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parser = build_parser()
        parsed_args = parser.parse_args(argv)

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        try:
            settings = Settings(
                container=parsed_args.container,
                verbose=parsed_args.verbose,
                debug=parsed_args.debug,
                workers=parsed_args.workers,
            )
        except ValueError as e:
            return _fail(f"Invalid settings: {e}", ExitCode.VALIDATION_ERROR)

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"  Free-threading enabled: {is_free_threading_enabled()}")
            console.print(f"  Optimal workers: {get_optimal_worker_count(settings.workers)}")
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in settings.to_dict().items():
                console.print(f"  {key}: {value}")

        if parsed_args.command is None:
            parser.print_help()
            return ExitCode.GENERAL_ERROR

        if parsed_args.command == "version":
            console.print(f"git-phantom {__version__}")
            return ExitCode.SUCCESS

        if parsed_args.command == "completion":
            script = generate_completion(parsed_args.shell, parser)
            console.print(script, end="", markup=False, highlight=False, emoji=False, soft_wrap=True)
            return ExitCode.SUCCESS

        root_result = GitOperations().get_git_root(os.getcwd())
        if not root_result.ok:
            return _fail(root_result.error)
        logger.debug(f"Repository root: {root_result.value}")

        return COMMANDS[parsed_args.command](parsed_args, settings, root_result.value)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return ExitCode.GENERAL_ERROR
    except Exception as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return ExitCode.GENERAL_ERROR


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
