"""kitty tabs and splits via remote control (``kitty @ launch``)."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from git_phantom.exceptions import ProcessError
from git_phantom.process.spawn import SpawnConfig, SpawnSuccess, spawn_process
from git_phantom.result import Result


class KittySplitDirection(Enum):
    NEW = "new"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class KittyOptions:
    direction: KittySplitDirection
    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None
    window_title: Optional[str] = None


def is_inside_kitty() -> bool:
    return os.environ.get("TERM") == "xterm-kitty" or "KITTY_WINDOW_ID" in os.environ


def build_kitty_args(options: KittyOptions) -> List[str]:
    """Argument vector for ``kitty`` (without the binary itself)."""
    kitty_args = ["@", "launch"]

    if options.direction is KittySplitDirection.NEW:
        kitty_args.append("--type=tab")
        if options.window_title:
            kitty_args.append(f"--tab-title={options.window_title}")
    elif options.direction is KittySplitDirection.VERTICAL:
        kitty_args.append("--location=vsplit")
    else:
        kitty_args.append("--location=hsplit")

    if options.cwd:
        kitty_args.append(f"--cwd={options.cwd}")

    for key, value in (options.env or {}).items():
        kitty_args.append(f"--env={key}={value}")

    kitty_args.append("--")
    kitty_args.append(options.command)
    kitty_args.extend(options.args)
    return kitty_args


def execute_kitty_command(options: KittyOptions) -> Result[SpawnSuccess, ProcessError]:
    """Open a kitty tab or split running ``options.command``."""
    return spawn_process(SpawnConfig(command="kitty", args=build_kitty_args(options)))
