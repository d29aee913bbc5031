from .domain import (
    VariableSpec,
    EnvSource,
    ResolvedEnvironment,
    ValidationResult,
    FileOptions,
    WriteResult,
    PersistResult,
)
from .errors import (
    EnvKitError,
    EnvResolutionError,
    FileSystemUnavailableError,
    SpecDefinitionError,
    ConfigLoadError,
)
from .filesystem import (
    FileSystem,
    LocalFileSystem,
    UnavailableFileSystem,
    EnvironmentReader,
    ProcessEnvironment,
    StaticEnvironment,
)
from .parser import parse_env_text, serialize_env
from .locator import candidate_env_files, locate_env_files
from .merger import merge_sources, merge_environment
from .schema import create_specs, validate_env, get_missing_vars
from .writer import FileMergeWriter
from .service import ResolutionService, PersistenceService
from .config import (
    EnvKitOptions,
    EnvironmentConfig,
    FileOptionsModel,
    get_runtime_mode,
    is_production_mode,
    load_options,
)
from .types import StatusQuery, UpdateCommand, UploadCommand
from .api import EnvKitApi, ApiResponse
from .constants import NOT_AVAILABLE_MESSAGE, PROCESS_ENV_SOURCE
from .logger import EnvKitLogger, get_logger, set_log_level, get_log_level
from .sensitive import mask_value, set_log_mask

__all__ = [
    "VariableSpec",
    "EnvSource",
    "ResolvedEnvironment",
    "ValidationResult",
    "FileOptions",
    "WriteResult",
    "PersistResult",
    "EnvKitError",
    "EnvResolutionError",
    "FileSystemUnavailableError",
    "SpecDefinitionError",
    "ConfigLoadError",
    "FileSystem",
    "LocalFileSystem",
    "UnavailableFileSystem",
    "EnvironmentReader",
    "ProcessEnvironment",
    "StaticEnvironment",
    "parse_env_text",
    "serialize_env",
    "candidate_env_files",
    "locate_env_files",
    "merge_sources",
    "merge_environment",
    "create_specs",
    "validate_env",
    "get_missing_vars",
    "FileMergeWriter",
    "ResolutionService",
    "PersistenceService",
    "EnvKitOptions",
    "EnvironmentConfig",
    "FileOptionsModel",
    "get_runtime_mode",
    "is_production_mode",
    "load_options",
    "StatusQuery",
    "UpdateCommand",
    "UploadCommand",
    "EnvKitApi",
    "ApiResponse",
    "NOT_AVAILABLE_MESSAGE",
    "PROCESS_ENV_SOURCE",
    "EnvKitLogger",
    "get_logger",
    "set_log_level",
    "get_log_level",
    "mask_value",
    "set_log_mask",
]
