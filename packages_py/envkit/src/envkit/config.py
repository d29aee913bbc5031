"""
Configuration for envkit: runtime mode, options models and envkit.yaml loading.
"""
import os
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_ENCODING,
    DEFAULT_MODE,
    DEFAULT_TARGET_FILE,
    ENV_ENVKIT_ALLOW_IN_PRODUCTION,
    ENV_ENVKIT_BASE_DIR,
    ENV_ENVKIT_TARGET_FILE,
    MODE_ENV_KEYS,
    PRODUCTION_MODES,
)
from .domain import FileOptions, VariableSpec
from .errors import ConfigLoadError
from .filesystem import EnvironmentReader, ProcessEnvironment
from .logger import get_logger

logger = get_logger()

TRUTHY = ("true", "1", "yes", "on")


def resolve(
    arg: Any,
    env_keys: Union[str, List[str]],
    config: Optional[Dict[str, Any]],
    config_key: Optional[str],
    default: Any,
    environ: Optional[EnvironmentReader] = None,
) -> Any:
    """
    Resolve configuration value from multiple sources in priority order:
    1. Direct argument (if not None)
    2. Environment variables (first key set wins)
    3. Configuration dictionary
    4. Default value
    """
    if arg is not None:
        return arg

    environ = environ or ProcessEnvironment()
    if isinstance(env_keys, str):
        env_keys = [env_keys]

    for key in env_keys:
        if key:
            val = environ.get(key)
            if val:
                return val

    if config and config_key and config_key in config:
        return config[config_key]

    return default


def resolve_bool(
    arg: Any,
    env_keys: Union[str, List[str]],
    config: Optional[Dict[str, Any]],
    config_key: Optional[str],
    default: bool,
    environ: Optional[EnvironmentReader] = None,
) -> bool:
    """Resolve boolean value with string conversion support."""
    val = resolve(arg, env_keys, config, config_key, default, environ)

    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() in TRUTHY
    return bool(val)


def get_runtime_mode(environ: Optional[EnvironmentReader] = None) -> str:
    """The live runtime mode (ENVKIT_MODE, APP_ENV, NODE_ENV; default development)."""
    mode = resolve(None, MODE_ENV_KEYS, None, None, DEFAULT_MODE, environ)
    return str(mode).strip().lower() or DEFAULT_MODE


def is_production_mode(mode: Optional[str]) -> bool:
    return (mode or "").strip().lower() in PRODUCTION_MODES


class EnvironmentConfig(BaseModel):
    """Per-mode settings: which keys the mode requires and where updates go."""
    required_vars: List[VariableSpec] = Field(default_factory=list, description="Variables required in this mode")
    target_env_file: Optional[str] = Field(default=None, description="File that receives updates in this mode")

    @field_validator("required_vars", mode="before")
    @classmethod
    def coerce_specs(cls, v: Any) -> List[VariableSpec]:
        return _coerce_specs(v)


class FileOptionsModel(BaseModel):
    """Validated form of FileOptions."""
    encoding: str = Field(default=DEFAULT_ENCODING, description="Encoding used to read and write env files")
    target_path: str = Field(default=DEFAULT_TARGET_FILE, min_length=1, description="Default update target")
    include_per_mode_files: bool = Field(default=True, description="Load .env.local and .env.{mode}[.local]")
    env_files: Optional[List[str]] = Field(default=None, description="Explicit candidate names, highest priority first")

    def to_options(self) -> FileOptions:
        return FileOptions(
            encoding=self.encoding,
            target_path=self.target_path,
            include_per_mode_files=self.include_per_mode_files,
            env_files=tuple(self.env_files) if self.env_files is not None else None,
        )


class EnvKitOptions(BaseModel):
    """Settings for the status/update boundary."""
    base_dir: str = Field(default_factory=os.getcwd, description="Directory holding the env files")
    mode: Optional[str] = Field(default=None, description="Runtime mode; the live mode when unset")
    allow_in_production: bool = Field(default=False, description="Permit operations in production mode")
    gate_status: bool = Field(default=True, description="Apply the production gate to status queries too")
    required_vars: List[VariableSpec] = Field(default_factory=list, description="Variables required in every mode")
    environments: Dict[str, EnvironmentConfig] = Field(default_factory=dict, description="Per-mode settings")
    file: FileOptionsModel = Field(default_factory=FileOptionsModel)

    @field_validator("required_vars", mode="before")
    @classmethod
    def coerce_specs(cls, v: Any) -> List[VariableSpec]:
        return _coerce_specs(v)

    @field_validator("environments", mode="before")
    @classmethod
    def lower_mode_keys(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {str(k).lower(): cfg for k, cfg in v.items()}
        return v

    def environment_for(self, mode: str) -> Optional[EnvironmentConfig]:
        return self.environments.get(mode.lower())

    @classmethod
    def from_env(cls, environ: Optional[EnvironmentReader] = None, **overrides: Any) -> 'EnvKitOptions':
        """Build options from ENVKIT_* variables; keyword overrides win."""
        base_dir = resolve(overrides.pop("base_dir", None), ENV_ENVKIT_BASE_DIR, None, None, os.getcwd(), environ)
        allow = resolve_bool(
            overrides.pop("allow_in_production", None), ENV_ENVKIT_ALLOW_IN_PRODUCTION, None, None, False, environ
        )
        file_opts = overrides.pop("file", None) or {}
        if isinstance(file_opts, FileOptionsModel):
            file_opts = file_opts.model_dump()
        target = resolve(None, ENV_ENVKIT_TARGET_FILE, file_opts, "target_path", DEFAULT_TARGET_FILE, environ)
        file_opts = {**file_opts, "target_path": target}

        return cls(base_dir=base_dir, allow_in_production=allow, file=file_opts, **overrides)


def _coerce_specs(v: Any) -> List[VariableSpec]:
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        raise ValueError("required_vars must be a list")
    return [item if isinstance(item, VariableSpec) else VariableSpec.from_dict(item) for item in v]


def load_options(path: str, environ: Optional[EnvironmentReader] = None) -> EnvKitOptions:
    """Load EnvKitOptions from an envkit.yaml file.

    Relative base_dir values are resolved against the YAML file's directory.
    ENVKIT_* variables fill in anything the file leaves unset.
    """
    if not os.path.exists(path):
        raise ConfigLoadError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding=DEFAULT_ENCODING) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Error loading {path}: {e}"
        logger.error(msg)
        raise ConfigLoadError(msg) from e

    if not isinstance(data, dict):
        raise ConfigLoadError(f"{path}: top level must be a mapping")

    try:
        base_dir = data.pop("base_dir", None)
        if base_dir and not os.path.isabs(base_dir):
            base_dir = os.path.join(os.path.dirname(os.path.abspath(path)), base_dir)
        options = EnvKitOptions.from_env(environ, base_dir=base_dir, **data)
    except (ValidationError, AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Invalid envkit config {path}: {e}"
        logger.error(msg)
        raise ConfigLoadError(msg) from e

    logger.info(f"Loaded envkit config: {path}")
    return options
