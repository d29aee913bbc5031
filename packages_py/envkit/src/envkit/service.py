"""
Orchestration of the status (resolve, merge, validate) and update
(merge with existing, write, re-validate) operations.
"""
import os
import re
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .config import get_runtime_mode
from .constants import DEFAULT_ENCODING, PROCESS_ENV_SOURCE
from .domain import (
    EnvSource,
    FileOptions,
    PersistResult,
    ResolvedEnvironment,
    ValidationResult,
    VariableSpec,
    WriteResult,
)
from .errors import EnvKitError, EnvResolutionError, FileSystemUnavailableError
from .filesystem import EnvironmentReader, FileSystem, LocalFileSystem, ProcessEnvironment
from .locator import locate_env_files
from .logger import get_logger
from .merger import merge_environment
from .parser import parse_env_text
from .schema import create_specs, validate_env
from .writer import FileMergeWriter

logger = get_logger()

UpdateCallback = Callable[[Dict[str, str]], Any]

# Keys that parse back to themselves: no whitespace, no '=', not a comment
VALID_KEY_PATTERN = re.compile(r'^[^\s=#][^\s=]*$')


class ResolutionService:
    """Answers "is the configuration valid, and what is missing"."""

    def __init__(
        self,
        specs: Optional[Iterable[Any]] = None,
        fs: Optional[FileSystem] = None,
        environ: Optional[EnvironmentReader] = None,
        options: Optional[FileOptions] = None,
    ):
        self.specs: List[VariableSpec] = create_specs(specs or [])
        self.fs = fs or LocalFileSystem()
        self.environ = environ or ProcessEnvironment()
        self.options = options or FileOptions()

    def resolve(self, base_dir: str, mode: Optional[str] = None) -> ResolvedEnvironment:
        """Locate and parse every applicable source.

        A file that cannot be read contributes nothing; the failure is
        logged and recorded in failed_sources.

        Raises:
            EnvResolutionError: base_dir is not a readable directory
        """
        mode = mode or get_runtime_mode(self.environ)

        try:
            if not self.fs.is_dir(base_dir):
                raise EnvResolutionError(f"Env directory not readable: {base_dir}")
            located = locate_env_files(base_dir, mode, self.options, self.fs, self.environ)
        except FileSystemUnavailableError as e:
            raise EnvResolutionError(str(e)) from e

        sources: List[EnvSource] = []
        failed: Dict[str, str] = {}

        # Located is highest priority first; fold order is lowest first
        for priority, path in enumerate(reversed(located)):
            logger.debug(f"Loading file: {path}")
            try:
                values = parse_env_text(self.fs.read_text(path, self.options.encoding))
            except (OSError, UnicodeError, FileSystemUnavailableError) as e:
                logger.warn(f"  status: FAILED ({path})")
                logger.warn(f"  error: {str(e)}")
                failed[path] = str(e)
                continue

            logger.debug(f"  vars_loaded: {len(values)}")
            logger.variables('trace', "  values", values)
            sources.append(EnvSource(path, MappingProxyType(values), priority))

        process_env = self.environ.snapshot()
        sources.append(EnvSource(PROCESS_ENV_SOURCE, MappingProxyType(process_env), len(located)))

        return ResolvedEnvironment(
            sources=tuple(sources),
            mode=mode,
            failed_sources=MappingProxyType(failed),
        )

    def merged(self, base_dir: str, mode: Optional[str] = None) -> Dict[str, str]:
        return merge_environment(self.resolve(base_dir, mode))

    def status(
        self,
        base_dir: str,
        mode: Optional[str] = None,
        specs: Optional[Iterable[Any]] = None,
    ) -> ValidationResult:
        """Run Located -> Parsed -> Merged -> Validated and return the verdict.

        Raises:
            EnvResolutionError: the directory is unreadable, or every located
                file failed to read and a required key has no process
                environment value to fall back on
        """
        specs = create_specs(specs) if specs is not None else self.specs
        resolved = self.resolve(base_dir, mode)
        result = validate_env(specs, merge_environment(resolved))

        all_files_failed = resolved.failed_sources and not resolved.file_sources
        if all_files_failed and not result.is_valid:
            raise EnvResolutionError(
                f"No env file could be read ({', '.join(resolved.failed_sources)}) "
                f"and required variables are missing: {', '.join(result.missing_names)}"
            )

        logger.debug(
            f"Status (mode={resolved.mode}): valid={result.is_valid}, missing={result.missing_names}"
        )
        return result


def check_values(values: Any) -> Optional[str]:
    """Error message for values that cannot be written safely, else None."""
    if not isinstance(values, Mapping):
        return "Invalid variables data. Expected object with environment variables."
    if not values:
        return "No variables provided"

    for key, value in values.items():
        if not isinstance(key, str) or not VALID_KEY_PATTERN.match(key):
            return f"Invalid variable name: {key!r}"
        if not isinstance(value, str):
            return f"Invalid value for {key}: expected a string"
        if '\n' in value or '\r' in value:
            return f"Invalid value for {key}: multiline values are not supported"

    return None


class PersistenceService:
    """Applies new values to a target file, optionally re-validating afterwards."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        encoding: str = DEFAULT_ENCODING,
        resolution: Optional[ResolutionService] = None,
        on_update: Optional[UpdateCallback] = None,
    ):
        self.writer = FileMergeWriter(fs, encoding)
        self.resolution = resolution
        self.on_update = on_update

    def update(
        self,
        target_path: str,
        values: Mapping[str, str],
        revalidate: bool = False,
        base_dir: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> PersistResult:
        """Received -> Merged-with-existing -> Written -> (optional) Re-validated.

        Args:
            target_path: File to update; relative paths resolve against base_dir
            values: New key/value pairs; they win over existing keys
            revalidate: Run a status query after a successful write
            base_dir: Directory for relative targets and re-validation
            mode: Runtime mode for re-validation
        """
        if base_dir and not os.path.isabs(target_path):
            target_path = os.path.join(base_dir, target_path)
        target_path = os.path.abspath(target_path)

        error = check_values(values)
        if error:
            logger.warn(f"Rejected update of {target_path}: {error}")
            return PersistResult(WriteResult(success=False, path=target_path, error=error, rejected=True))

        write = self.writer.merge_write(target_path, values)
        if not write.success:
            return PersistResult(write)

        if self.on_update is not None:
            try:
                self.on_update(dict(values))
            except Exception as e:
                logger.error(f"on_update callback failed: {e}")

        validation = None
        if revalidate and self.resolution is not None:
            try:
                validation = self.resolution.status(base_dir or os.path.dirname(target_path), mode)
            except EnvKitError as e:
                logger.warn(f"Re-validation after update failed: {e}")

        return PersistResult(write, validation)

    def upload(self, target_path: str, content: str, **kwargs: Any) -> PersistResult:
        """Merge pasted or uploaded dotenv text into target_path."""
        values = parse_env_text(content)
        logger.debug(f"Parsed {len(values)} variables from uploaded content")
        if not values:
            path = os.path.abspath(os.path.join(kwargs.get("base_dir") or "", target_path))
            return PersistResult(
                WriteResult(success=False, path=path, error="No variables found in content", rejected=True)
            )
        return self.update(target_path, values, **kwargs)
