"""fzf as the interactive line selector."""

import subprocess
from typing import List, Optional, Sequence

from git_phantom.constants import FZF_INTERRUPTED, FZF_NO_MATCH
from git_phantom.exceptions import SelectorError
from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result

logger = get_logger(__name__)


def build_fzf_args(prompt: Optional[str] = None, header: Optional[str] = None, preview: Optional[str] = None) -> List[str]:
    args: List[str] = []
    if prompt:
        args.extend(["--prompt", prompt])
    if header:
        args.extend(["--header", header])
    if preview:
        args.extend(["--preview", preview])
    return args


def select_with_fzf(
    items: Sequence[str],
    prompt: Optional[str] = None,
    header: Optional[str] = None,
    preview: Optional[str] = None,
) -> Result[Optional[str], SelectorError]:
    """Let the user pick one of ``items``.

    Returns:
        Ok(line) for a selection, Ok(None) when the user cancelled or nothing
        matched, Err(SelectorError) when fzf is missing or fails.
    """
    # fzf draws its UI on the terminal; only stdout carries the selection
    try:
        completed = subprocess.run(
            ["fzf", *build_fzf_args(prompt, header, preview)],
            input="\n".join(items),
            stdout=subprocess.PIPE,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return Err(SelectorError("fzf command not found. Please install fzf first."))
    except OSError as e:
        return Err(SelectorError(f"Failed to run fzf: {e}"))

    if completed.returncode == 0:
        selected = (completed.stdout or "").strip()
        return Ok(selected or None)

    if completed.returncode in (FZF_NO_MATCH, FZF_INTERRUPTED):
        logger.debug(f"fzf selection cancelled (exit {completed.returncode})")
        return Ok(None)

    return Err(SelectorError(f"fzf exited with code {completed.returncode}"))
