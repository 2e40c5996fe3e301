"""Custom exceptions for git-phantom.

Core functions return these wrapped in :class:`~git_phantom.result.Err`
instead of raising them.
"""

from typing import Optional


class PhantomError(Exception):
    """Base exception for all git-phantom errors."""
    pass


class InvalidWorktreeNameError(PhantomError):
    """Exception raised when a worktree name breaks the naming rules."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class WorktreeNotFoundError(PhantomError):
    """Exception raised when a worktree directory does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Worktree '{name}' not found")


class WorktreeAlreadyExistsError(PhantomError):
    """Exception raised when a worktree with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Worktree '{name}' already exists")


class BranchNotFoundError(PhantomError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Branch '{branch}' not found")


class DirtyWorktreeError(PhantomError):
    """Exception raised when deleting a worktree with uncommitted changes."""

    def __init__(self, name: str, changed_files: int):
        self.name = name
        self.changed_files = changed_files
        super().__init__(
            f"Worktree '{name}' has uncommitted changes ({changed_files} files). "
            "Use --force to delete anyway."
        )


class GitOperationError(PhantomError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, details: str):
        self.operation = operation
        self.details = details
        super().__init__(f"Git {operation} failed: {details}")


class FileCopyError(PhantomError):
    """Exception raised when copying a file into a new worktree fails."""

    def __init__(self, file: str, details: str):
        self.file = file
        self.details = details
        super().__init__(f"Failed to copy {file}: {details}")


class ProcessError(PhantomError):
    """Base exception for spawned process failures."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        self.exit_code = exit_code
        super().__init__(message)


class ProcessExecutionError(ProcessError):
    """Exception raised when a child process exits with a non-zero code."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        super().__init__(f"Command '{command}' failed with exit code {exit_code}", exit_code)


class ProcessSignalError(ProcessError):
    """Exception raised when a child process is terminated by a signal."""

    def __init__(self, signal_name: str):
        self.signal_name = signal_name
        exit_code = 128 + (15 if signal_name == "SIGTERM" else 1)
        super().__init__(f"Command terminated by signal: {signal_name}", exit_code)


class ProcessSpawnError(ProcessError):
    """Exception raised when a child process cannot be started at all."""

    def __init__(self, command: str, details: str):
        self.command = command
        self.details = details
        super().__init__(f"Error executing command '{command}': {details}")


class SelectorError(PhantomError):
    """Exception raised when the interactive selector (fzf) fails."""
    pass


class MultiplexerError(PhantomError):
    """Exception raised when no supported terminal multiplexer is available."""
    pass


class ConfigNotFoundError(PhantomError):
    """Exception raised when phantom.config.json does not exist."""

    def __init__(self):
        super().__init__("phantom.config.json not found")


class ConfigParseError(PhantomError):
    """Exception raised when phantom.config.json is not valid JSON."""

    def __init__(self, message: str):
        super().__init__(f"Failed to parse phantom.config.json: {message}")


class ConfigValidationError(PhantomError):
    """Exception raised when phantom.config.json has the wrong shape."""

    def __init__(self, message: str):
        super().__init__(f"Invalid phantom.config.json: {message}")
