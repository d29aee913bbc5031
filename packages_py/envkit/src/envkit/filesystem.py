"""
Capabilities injected into the engine: disk access and the process environment.
"""
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from .constants import DEFAULT_ENCODING
from .errors import FileSystemUnavailableError


class FileSystem(ABC):
    """Abstract interface for the filesystem operations envkit performs."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Whether a regular file exists at path."""
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        """Whether path is a readable directory."""
        pass

    @abstractmethod
    def read_text(self, path: str, encoding: str = DEFAULT_ENCODING) -> str:
        pass

    @abstractmethod
    def write_text(self, path: str, content: str, encoding: str = DEFAULT_ENCODING) -> None:
        """Replace the whole content of path. Must not leave a partial file."""
        pass


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class LocalFileSystem(FileSystem):
    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path) and os.access(path, os.R_OK | os.X_OK)

    def read_text(self, path: str, encoding: str = DEFAULT_ENCODING) -> str:
        with open(path, 'r', encoding=encoding) as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = DEFAULT_ENCODING) -> None:
        """Atomic write to disk"""
        directory = os.path.dirname(path) or "."
        if not os.path.exists(directory):
            os.makedirs(directory)

        # Write to temp file first
        fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".envkit-", text=True)
        try:
            with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
                f.write(content)
            if os.path.exists(path):
                os.chmod(temp_path, os.stat(path).st_mode & 0o777)
            else:
                # mkstemp creates 0600; a new file gets the usual umask-derived mode
                os.chmod(temp_path, 0o666 & ~_current_umask())
            # Atomic rename
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise


class UnavailableFileSystem(FileSystem):
    """Filesystem for contexts without disk access: every operation is refused."""

    def __init__(self, reason: str = "Filesystem access is not available in this context"):
        self.reason = reason

    def exists(self, path: str) -> bool:
        raise FileSystemUnavailableError(self.reason)

    def is_dir(self, path: str) -> bool:
        raise FileSystemUnavailableError(self.reason)

    def read_text(self, path: str, encoding: str = DEFAULT_ENCODING) -> str:
        raise FileSystemUnavailableError(self.reason)

    def write_text(self, path: str, content: str, encoding: str = DEFAULT_ENCODING) -> None:
        raise FileSystemUnavailableError(self.reason)


class EnvironmentReader(ABC):
    """Read-only view of the live process environment."""

    @abstractmethod
    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the environment, taken once per merge."""
        pass

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.snapshot().get(key, default)


class ProcessEnvironment(EnvironmentReader):
    def snapshot(self) -> Dict[str, str]:
        return dict(os.environ)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return os.environ.get(key, default)


class StaticEnvironment(EnvironmentReader):
    """Fixed mapping standing in for the process environment."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self._values = dict(values or {})

    def snapshot(self) -> Dict[str, str]:
        return dict(self._values)
