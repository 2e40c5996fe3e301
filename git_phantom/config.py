"""Configuration handling for git-phantom"""

import json
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from git_phantom.constants import CONFIG_FILENAME, DEFAULT_CONTAINER
from git_phantom.exceptions import ConfigNotFoundError, ConfigParseError, ConfigValidationError
from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass
class Settings:
    """Runtime settings for git-phantom with validation."""

    # Name of the directory under .git that holds the worktrees
    container: str = DEFAULT_CONTAINER

    verbose: bool = False
    debug: bool = False
    workers: Optional[int] = None  # Parallel git queries for `list` (None = auto-detect)

    def __post_init__(self):
        """Validate settings after initialization."""
        self._validate_container()
        self._validate_workers()

    def _validate_container(self):
        """Validate container is a single, non-empty path segment."""
        if not self.container or not self.container.strip():
            raise ValueError("container cannot be empty")
        self.container = self.container.strip()
        if "/" in self.container or os.sep in self.container or self.container in (".", ".."):
            raise ValueError(f"container must be a single directory name, got '{self.container}'")

    def _validate_workers(self):
        """Validate workers is positive when given."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")

    def to_dict(self) -> dict:
        return {
            "container": self.container,
            "verbose": self.verbose,
            "debug": self.debug,
            "workers": self.workers,
        }


@dataclass
class PostCreateConfig:
    """Actions performed right after a worktree is created."""

    copy_files: List[str] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)


@dataclass
class PhantomConfig:
    """Contents of phantom.config.json."""

    post_create: PostCreateConfig = field(default_factory=PostCreateConfig)


def _validate_string_list(value: Any, key: str) -> Optional[ConfigValidationError]:
    if not isinstance(value, list):
        return ConfigValidationError(f"postCreate.{key} must be an array")
    if not all(isinstance(item, str) for item in value):
        return ConfigValidationError(f"postCreate.{key} must contain only strings")
    return None


def validate_config(data: Any) -> Result[PhantomConfig, ConfigValidationError]:
    """Check the shape of a parsed config document and convert it.

    Args:
        data: Object produced by ``json.loads``

    Returns:
        Ok(PhantomConfig) or Err(ConfigValidationError)
    """
    if not isinstance(data, dict):
        return Err(ConfigValidationError("Configuration must be an object"))

    post_create = data.get("postCreate")
    if post_create is None:
        return Ok(PhantomConfig())

    if not isinstance(post_create, dict):
        return Err(ConfigValidationError("postCreate must be an object"))

    copy_files = post_create.get("copyFiles", [])
    error = _validate_string_list(copy_files, "copyFiles")
    if error:
        return Err(error)

    commands = post_create.get("commands", [])
    error = _validate_string_list(commands, "commands")
    if error:
        return Err(error)

    return Ok(PhantomConfig(post_create=PostCreateConfig(copy_files=list(copy_files), commands=list(commands))))


def load_config(
    git_root: str,
) -> Result[PhantomConfig, Union[ConfigNotFoundError, ConfigParseError, ConfigValidationError]]:
    """Load ``phantom.config.json`` from the repository root.

    Args:
        git_root: Repository root directory

    Returns:
        Ok(PhantomConfig), or Err with ConfigNotFoundError when the file is
        absent, ConfigParseError for invalid JSON or an unreadable file, and
        ConfigValidationError for a document of the wrong shape.
    """
    config_path = os.path.join(git_root, CONFIG_FILENAME)
    try:
        with open(config_path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        logger.debug(f"No config file at {config_path}")
        return Err(ConfigNotFoundError())
    except OSError as e:
        return Err(ConfigParseError(str(e)))

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return Err(ConfigParseError(str(e)))

    result = validate_config(data)
    if result.ok:
        logger.debug(f"Loaded config from {config_path}")
    return result
