"""Picking a worktree interactively."""

from typing import Callable, List, Optional, Sequence

from git_phantom.constants import DEFAULT_CONTAINER, FZF_HEADER, FZF_PROMPT
from git_phantom.exceptions import PhantomError
from git_phantom.models.worktree import WorktreeInfo
from git_phantom.process.fzf import select_with_fzf
from git_phantom.result import Err, Ok, Result
from git_phantom.services.git.executor import GitExecutor
from git_phantom.worktree.list import list_worktrees

# (lines, prompt, header) -> selected line or None
Selector = Callable[..., Result]


def format_worktree_line(worktree: WorktreeInfo) -> str:
    """``name (branch)``, with `` [dirty]`` appended for unclean worktrees."""
    line = f"{worktree.name} ({worktree.branch})" if worktree.branch else worktree.name
    if not worktree.is_clean:
        line += " [dirty]"
    return line


def format_worktree_lines(worktrees: Sequence[WorktreeInfo]) -> List[str]:
    return [format_worktree_line(worktree) for worktree in worktrees]


def select_worktree(
    git_root: str,
    selector: Selector = select_with_fzf,
    executor: Optional[GitExecutor] = None,
    container: str = DEFAULT_CONTAINER,
) -> Result[Optional[WorktreeInfo], Exception]:
    """List worktrees, hand them to ``selector`` and map the choice back.

    Returns:
        Ok(WorktreeInfo) for a selection, Ok(None) when there is nothing to
        select or the user cancelled, Err for selector failures.
    """
    list_result = list_worktrees(git_root, executor=executor, container=container)
    if not list_result.ok:
        return list_result

    worktrees = list_result.value.worktrees
    if not worktrees:
        return Ok(None)

    selection = selector(format_worktree_lines(worktrees), prompt=FZF_PROMPT, header=FZF_HEADER)
    if not selection.ok:
        return selection
    if not selection.value:
        return Ok(None)

    selected_name = selection.value.split(" ")[0]
    for worktree in worktrees:
        if worktree.name == selected_name:
            return Ok(worktree)

    return Err(PhantomError("Selected worktree not found"))
