"""Backend-neutral access to tmux and kitty."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from git_phantom.exceptions import MultiplexerError, ProcessError
from git_phantom.logging_config import get_logger
from git_phantom.process.kitty import KittyOptions, KittySplitDirection, execute_kitty_command, is_inside_kitty
from git_phantom.process.spawn import SpawnSuccess
from git_phantom.process.tmux import TmuxOptions, TmuxSplitDirection, execute_tmux_command, is_inside_tmux
from git_phantom.result import Err, Result

logger = get_logger(__name__)


class Multiplexer(Enum):
    TMUX = "tmux"
    KITTY = "kitty"
    NONE = "none"


class SplitDirection(Enum):
    NEW = "new"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class MultiplexerOptions:
    direction: SplitDirection
    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None
    window_name: Optional[str] = None


def detect_multiplexer() -> Multiplexer:
    """Which multiplexer session we are running in, tmux taking precedence."""
    if is_inside_tmux():
        return Multiplexer.TMUX
    if is_inside_kitty():
        return Multiplexer.KITTY
    return Multiplexer.NONE


def execute_in_multiplexer(
    options: MultiplexerOptions,
    multiplexer: Optional[Multiplexer] = None,
) -> Result[SpawnSuccess, Union[MultiplexerError, ProcessError]]:
    """Open a window/pane/tab in the active multiplexer.

    Args:
        options: What to run and where
        multiplexer: Backend to use; detected from the environment when omitted
    """
    if multiplexer is None:
        multiplexer = detect_multiplexer()
    logger.debug(f"Using multiplexer {multiplexer.value} ({options.direction.value})")

    if multiplexer is Multiplexer.TMUX:
        return execute_tmux_command(TmuxOptions(
            direction=TmuxSplitDirection(options.direction.value),
            command=options.command,
            args=options.args,
            cwd=options.cwd,
            env=options.env,
            window_name=options.window_name,
        ))

    if multiplexer is Multiplexer.KITTY:
        return execute_kitty_command(KittyOptions(
            direction=KittySplitDirection(options.direction.value),
            command=options.command,
            args=options.args,
            cwd=options.cwd,
            env=options.env,
            window_title=options.window_name,
        ))

    return Err(MultiplexerError("Not running inside tmux or kitty"))
