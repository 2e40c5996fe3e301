"""tmux windows and panes."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from git_phantom.exceptions import ProcessError
from git_phantom.process.spawn import SpawnConfig, SpawnSuccess, spawn_process
from git_phantom.result import Result


class TmuxSplitDirection(Enum):
    NEW = "new"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class TmuxOptions:
    direction: TmuxSplitDirection
    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None
    window_name: Optional[str] = None


def is_inside_tmux() -> bool:
    """tmux sets TMUX in every pane it starts."""
    return "TMUX" in os.environ


def build_tmux_args(options: TmuxOptions) -> List[str]:
    """Argument vector for ``tmux`` (without the binary itself)."""
    tmux_args: List[str] = []

    if options.direction is TmuxSplitDirection.NEW:
        tmux_args.append("new-window")
        if options.window_name:
            tmux_args.extend(["-n", options.window_name])
    elif options.direction is TmuxSplitDirection.VERTICAL:
        tmux_args.extend(["split-window", "-v"])
    else:
        tmux_args.extend(["split-window", "-h"])

    if options.cwd:
        tmux_args.extend(["-c", options.cwd])

    for key, value in (options.env or {}).items():
        tmux_args.extend(["-e", f"{key}={value}"])

    tmux_args.append(options.command)
    tmux_args.extend(options.args)
    return tmux_args


def execute_tmux_command(options: TmuxOptions) -> Result[SpawnSuccess, ProcessError]:
    """Open a tmux window or pane running ``options.command``."""
    return spawn_process(SpawnConfig(command="tmux", args=build_tmux_args(options)))
