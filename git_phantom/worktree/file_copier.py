"""Copy untracked files (e.g. .env) from the repository into a new worktree."""

import os
import shutil
import stat
from dataclasses import dataclass, field
from typing import List, Sequence

from git_phantom.exceptions import FileCopyError
from git_phantom.logging_config import get_logger
from git_phantom.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass
class CopyFilesResult:
    """Outcome of a copy run, in the order the files were requested."""

    copied_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)


def copy_files(source_dir: str, target_dir: str, files: Sequence[str]) -> Result[CopyFilesResult, FileCopyError]:
    """Copy ``files`` (relative paths) from ``source_dir`` to ``target_dir``.

    Missing sources and anything that is not a regular file are skipped.
    Any other I/O error stops the run and is reported with the offending path.
    """
    result = CopyFilesResult()

    for file in files:
        source_path = os.path.join(source_dir, file)
        target_path = os.path.join(target_dir, file)

        try:
            mode = os.stat(source_path).st_mode
            if not stat.S_ISREG(mode):
                logger.debug(f"Skipping {file}: not a regular file")
                result.skipped_files.append(file)
                continue

            os.makedirs(os.path.dirname(target_path), exist_ok=True)
            shutil.copy2(source_path, target_path)
            result.copied_files.append(file)
            logger.debug(f"Copied {file} to {target_dir}")
        except FileNotFoundError:
            logger.debug(f"Skipping {file}: not found in {source_dir}")
            result.skipped_files.append(file)
        except OSError as e:
            logger.warning(f"Failed to copy {file}: {e}")
            return Err(FileCopyError(file, e.strerror or str(e)))

    return Ok(result)
