"""Child process spawning with normalized exit handling."""

import signal
import subprocess
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from git_phantom.exceptions import (
    ProcessError,
    ProcessExecutionError,
    ProcessSignalError,
    ProcessSpawnError,
)
from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass
class SpawnConfig:
    """What to run and how."""

    command: str
    args: List[str] = field(default_factory=list)
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None
    # False: inherit the parent's stdin/stdout/stderr (interactive)
    capture_output: bool = False


@dataclass
class SpawnSuccess:
    """A child process that exited with code 0."""

    exit_code: int
    stdout: Optional[str] = None
    stderr: Optional[str] = None


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"SIG{signum}"


def _wait_interactive(argv: List[str], config: SpawnConfig) -> int:
    interrupted = False
    with subprocess.Popen(argv, cwd=config.cwd, env=config.env) as proc:
        while True:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                # Ctrl-C reached the child through the terminal too; let it decide.
                # A second one abandons a child that ignores SIGINT.
                if interrupted:
                    raise
                interrupted = True
                logger.debug(f"Interrupt received while waiting for {config.command}")


def spawn_process(config: SpawnConfig) -> Result[SpawnSuccess, ProcessError]:
    """Run a command to completion.

    Returns:
        Ok(SpawnSuccess) on exit code 0, otherwise Err with
        ProcessExecutionError (non-zero exit), ProcessSignalError (killed by
        a signal) or ProcessSpawnError (could not be started).
    """
    argv = [config.command, *config.args]
    logger.debug(f"Spawning {argv} (cwd={config.cwd or '.'})")

    stdout = stderr = None
    try:
        if config.capture_output:
            completed = subprocess.run(
                argv,
                cwd=config.cwd,
                env=config.env,
                capture_output=True,
                text=True,
                check=False,
            )
            returncode = completed.returncode
            stdout, stderr = completed.stdout, completed.stderr
        else:
            returncode = _wait_interactive(argv, config)
    except OSError as e:
        logger.debug(f"Failed to spawn {config.command}: {e}")
        return Err(ProcessSpawnError(config.command, e.strerror or str(e)))

    if returncode < 0:
        return Err(ProcessSignalError(_signal_name(-returncode)))
    if returncode != 0:
        return Err(ProcessExecutionError(config.command, returncode))
    return Ok(SpawnSuccess(exit_code=0, stdout=stdout, stderr=stderr))
