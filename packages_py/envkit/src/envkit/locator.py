"""Locate the dotenv files that apply to a base directory and mode."""
import os
from typing import List, Optional

from .config import get_runtime_mode
from .constants import BASE_ENV_FILE, LOCAL_ENV_FILE
from .domain import FileOptions
from .filesystem import EnvironmentReader, FileSystem, LocalFileSystem
from .logger import get_logger

logger = get_logger()


def candidate_env_files(mode: str, options: Optional[FileOptions] = None) -> List[str]:
    """Candidate file names, highest priority first.

    Priority: .env.local > .env.{mode}.local > .env.{mode} > .env
    """
    options = options or FileOptions()

    if options.env_files is not None:
        return list(options.env_files)

    if not options.include_per_mode_files:
        return [BASE_ENV_FILE]

    return [
        LOCAL_ENV_FILE,
        f"{BASE_ENV_FILE}.{mode}.local",
        f"{BASE_ENV_FILE}.{mode}",
        BASE_ENV_FILE,
    ]


def locate_env_files(
    base_dir: str,
    mode: Optional[str] = None,
    options: Optional[FileOptions] = None,
    fs: Optional[FileSystem] = None,
    environ: Optional[EnvironmentReader] = None,
) -> List[str]:
    """Absolute paths of the candidate files that exist, highest priority first.

    Args:
        base_dir: Directory the candidate names are resolved against
        mode: Runtime mode; the live mode when None
        options: File options (per-mode files, explicit candidate list)
        fs: Filesystem capability used for existence checks
        environ: Environment used to read the live mode
    """
    fs = fs or LocalFileSystem()
    mode = mode or get_runtime_mode(environ)

    located = []
    for name in candidate_env_files(mode, options):
        path = os.path.abspath(os.path.join(base_dir, name))
        if fs.exists(path):
            located.append(path)
        else:
            logger.trace(f"  not found: {path}")

    # Keep the first (highest priority) occurrence of a repeated name
    unique = list(dict.fromkeys(located))

    logger.debug(f"Located env files (mode={mode}): {unique}")
    return unique
