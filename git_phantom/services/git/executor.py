"""Git command execution for git-phantom."""

from dataclasses import dataclass
from typing import Optional, Sequence

import git

from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result

logger = get_logger(__name__)

# Exit status reported when the git binary or the working directory is missing
COMMAND_NOT_FOUND_STATUS = 127


@dataclass
class GitOutput:
    """Captured output of a successful git command."""

    stdout: str
    stderr: str


@dataclass
class GitCommandFailure:
    """A git command that exited non-zero or could not be started."""

    argv: list[str]
    status: int
    message: str

    def __str__(self) -> str:
        return self.message or f"git {' '.join(self.argv)} failed with exit code {self.status}"


class GitExecutor:
    """Runs git with argument vectors through GitPython.

    Arguments are always passed as a list, never through a shell, so names
    with unusual characters cannot break quoting.
    """

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> Result[GitOutput, GitCommandFailure]:
        """Run ``git <args>``.

        Args:
            args: Arguments following the ``git`` executable
            cwd: Directory to run in (defaults to the process working directory)

        Returns:
            Ok(GitOutput) with trimmed stdout/stderr, or Err(GitCommandFailure)
            carrying the exit status and git's error message.
        """
        argv = list(args)
        logger.debug(f"git {' '.join(argv)} (cwd={cwd or '.'})")
        try:
            status, stdout, stderr = git.Git(cwd).execute(
                ["git", *argv],
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            logger.debug(f"Could not start git: {e}")
            return Err(GitCommandFailure(argv, COMMAND_NOT_FOUND_STATUS, str(e)))

        stdout = (stdout or "").strip()
        stderr = (stderr or "").strip()
        if status != 0:
            message = stderr or stdout
            logger.debug(f"git {' '.join(argv)} exited {status}: {message}")
            return Err(GitCommandFailure(argv, status, message))

        return Ok(GitOutput(stdout=stdout, stderr=stderr))

    def run_in_directory(self, directory: str, args: Sequence[str]) -> Result[GitOutput, GitCommandFailure]:
        """Run ``git -C <directory> <args>``."""
        return self.run(["-C", directory, *args])


_default_executor = GitExecutor()


def get_default_executor() -> GitExecutor:
    """Executor used when callers do not supply their own."""
    return _default_executor
