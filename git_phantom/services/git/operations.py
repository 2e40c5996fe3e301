"""Named git queries and commands used by the worktree lifecycle."""

import os
from typing import Optional

from git_phantom.constants import DETACHED_HEAD
from git_phantom.exceptions import GitOperationError
from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitCommandFailure, GitExecutor, get_default_executor

logger = get_logger(__name__)


class GitOperations:
    """Git operations bound to one executor."""

    def __init__(self, executor: Optional[GitExecutor] = None):
        """Initialize the service.

        Args:
            executor: Executor used for every git call (defaults to the shared one)
        """
        self.executor = executor or get_default_executor()

    def get_git_root(self, cwd: Optional[str] = None) -> Result[str, GitOperationError]:
        """Find the main repository root, even when called from inside a worktree.

        ``rev-parse --git-common-dir`` points at the shared ``.git`` directory
        for the main checkout and for every linked worktree, so its parent is
        the root. Bare or unusual layouts fall back to ``--show-toplevel``.
        """
        base = os.path.abspath(cwd or os.getcwd())
        result = self.executor.run(["rev-parse", "--git-common-dir"], cwd=base)
        if not result.ok:
            return Err(GitOperationError("rev-parse", str(result.error)))

        common_dir = os.path.normpath(os.path.join(base, result.value.stdout))
        if os.path.basename(common_dir) == ".git":
            return Ok(os.path.dirname(common_dir))

        result = self.executor.run(["rev-parse", "--show-toplevel"], cwd=base)
        if not result.ok:
            return Err(GitOperationError("rev-parse", str(result.error)))
        return Ok(result.value.stdout)

    def add_worktree(self, git_root: str, path: str, branch: str, commitish: str = "HEAD") -> Result[None, GitCommandFailure]:
        """Create a worktree at ``path`` on a new branch started from ``commitish``."""
        result = self.executor.run(["worktree", "add", path, "-b", branch, commitish], cwd=git_root)
        if not result.ok:
            return result
        logger.info(f"Added worktree at {path} on new branch {branch}")
        return Ok(None)

    def attach_worktree(self, git_root: str, path: str, branch: str) -> Result[None, GitCommandFailure]:
        """Create a worktree at ``path`` checking out the existing ``branch``."""
        result = self.executor.run(["worktree", "add", path, branch], cwd=git_root)
        if not result.ok:
            return result
        logger.info(f"Attached worktree at {path} to branch {branch}")
        return Ok(None)

    def branch_exists(self, git_root: str, branch: str) -> Result[bool, GitOperationError]:
        """Check whether a local branch exists.

        ``show-ref --verify --quiet`` exits 1 for a missing ref; any other
        failure means the question could not be answered.
        """
        result = self.executor.run(
            ["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"], cwd=git_root
        )
        if result.ok:
            return Ok(True)
        if result.error.status == 1:
            return Ok(False)
        return Err(GitOperationError("show-ref", f"Failed to check branch existence: {result.error}"))

    def get_current_branch(self, worktree_path: str) -> Result[str, GitCommandFailure]:
        """Branch checked out in ``worktree_path``, or DETACHED_HEAD."""
        result = self.executor.run_in_directory(worktree_path, ["branch", "--show-current"])
        if not result.ok:
            return result
        return Ok(result.value.stdout or DETACHED_HEAD)

    def get_status_porcelain(self, worktree_path: str) -> Result[str, GitCommandFailure]:
        """Raw ``status --porcelain`` output for ``worktree_path``."""
        result = self.executor.run_in_directory(worktree_path, ["status", "--porcelain"])
        if not result.ok:
            return result
        return Ok(result.value.stdout)

    def remove_worktree(self, git_root: str, path: str, force: bool = False) -> Result[None, GitCommandFailure]:
        """Run ``worktree remove`` for ``path``."""
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(path)

        result = self.executor.run(args, cwd=git_root)
        if not result.ok:
            return result
        logger.info(f"Removed worktree at {path}")
        return Ok(None)

    def delete_branch(self, git_root: str, branch: str) -> Result[None, GitCommandFailure]:
        """Force-delete a local branch."""
        result = self.executor.run(["branch", "-D", branch], cwd=git_root)
        if not result.ok:
            return result
        logger.info(f"Deleted branch {branch}")
        return Ok(None)
