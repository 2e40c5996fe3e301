"""Display and formatting service for worktree information"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from git_phantom.constants import DETACHED_HEAD, LEGEND_TEXT, UNKNOWN_BRANCH
from git_phantom.logging_config import get_logger
from git_phantom.models.worktree import WorktreeInfo

logger = get_logger(__name__)

# (label, style) in display order
COLUMNS = [
    ("Name", "bold"),
    ("Branch", None),
    ("Status", None),
    ("Path", "dim"),
]

STATUS_DISPLAY = {
    True: "[green]clean[/green]",
    False: "[yellow]dirty[/yellow]",
}


def format_branch(branch: str) -> str:
    """Dim the placeholder branches so real names stand out."""
    if branch in (DETACHED_HEAD, UNKNOWN_BRANCH):
        return f"[dim]{branch}[/dim]"
    return branch


def format_status(is_clean: bool) -> str:
    return STATUS_DISPLAY[is_clean]


class DisplayService:
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def display_worktree_table(self, worktrees: List[WorktreeInfo], show_legend: bool = False) -> None:
        """Display a table of worktree information."""
        table = Table()
        for label, style in COLUMNS:
            table.add_column(label, style=style)

        for worktree in worktrees:
            table.add_row(
                worktree.name,
                format_branch(worktree.branch),
                format_status(worktree.is_clean),
                worktree.path,
            )

        self.console.print(table)

        if show_legend:
            self.console.print(LEGEND_TEXT)

        if self.verbose:
            dirty = sum(1 for worktree in worktrees if not worktree.is_clean)
            self.console.print(f"Total worktrees: {len(worktrees)}")
            self.console.print(f"With uncommitted changes: {dirty}")

    def display_worktree_names(self, worktrees: List[WorktreeInfo]) -> None:
        """One name per line, for scripts and shell completion."""
        for worktree in worktrees:
            # Plain print: no markup or wrapping in script output
            self.console.print(worktree.name, markup=False, highlight=False, soft_wrap=True)
