"""Read-merge-write of a single dotenv target file."""
import os
from typing import Dict, Mapping, Optional

from .constants import DEFAULT_ENCODING
from .domain import WriteResult
from .errors import EnvKitError
from .filesystem import FileSystem, LocalFileSystem
from .logger import get_logger
from .parser import parse_env_text, serialize_env

logger = get_logger()


class FileMergeWriter:
    """Merges new values into a dotenv file and rewrites it in full.

    The rewrite drops comments and formatting of the original file, and
    values are written unquoted. There is no locking: two concurrent
    merge_write calls on one file race and the last writer wins.
    """

    def __init__(self, fs: Optional[FileSystem] = None, encoding: str = DEFAULT_ENCODING):
        self.fs = fs or LocalFileSystem()
        self.encoding = encoding

    def read_existing(self, path: str) -> Optional[Dict[str, str]]:
        """Parsed content of path, or None when the file does not exist."""
        if not self.fs.exists(path):
            return None
        return parse_env_text(self.fs.read_text(path, self.encoding))

    def merge(self, existing: Mapping[str, str], new_values: Mapping[str, str]) -> Dict[str, str]:
        # New values win on collision; existing keys keep their position
        return {**existing, **new_values}

    def merge_write(self, path: str, new_values: Mapping[str, str]) -> WriteResult:
        """Apply new_values to the file at path.

        Never raises for I/O problems: failures come back as
        WriteResult(success=False, error=...) and the file is left as it was.
        """
        path = os.path.abspath(path)
        logger.debug(f"Updating env file: {path}")

        try:
            existing = self.read_existing(path)
            created = existing is None
            merged = self.merge(existing or {}, new_values)
            content = serialize_env(merged)

            for key, value in new_values.items():
                if created or key not in existing:
                    logger.variable('debug', "SET", key, value)
                else:
                    logger.variable('debug', "OVERWRITE", key, value, previous=existing[key])

            self.fs.write_text(path, content, self.encoding)

        except (OSError, UnicodeError, EnvKitError) as e:
            logger.error(f"  status: FAILED")
            logger.error(f"  error: {str(e)}")
            return WriteResult(success=False, path=path, error=str(e))

        logger.info(f"Wrote {len(merged)} variables to {path} ({len(new_values)} updated)")
        return WriteResult(success=True, path=path, variables=merged, created=created)
