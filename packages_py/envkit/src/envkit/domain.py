"""Data models for envkit."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .constants import DEFAULT_ENCODING, DEFAULT_TARGET_FILE, PROCESS_ENV_SOURCE
from .errors import SpecDefinitionError


@dataclass(frozen=True)
class VariableSpec:
    """A configuration key declared by the embedding application."""
    name: str
    required: bool = True
    description: Optional[str] = None
    default_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "required": self.required}
        if self.description is not None:
            data["description"] = self.description
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data

    @classmethod
    def from_dict(cls, data: Union[str, Dict[str, Any]]) -> 'VariableSpec':
        # A bare name declares a required key with no metadata
        if isinstance(data, str):
            return cls(name=data)
        if not isinstance(data, dict):
            raise SpecDefinitionError(f"Unsupported variable spec: {data!r}")

        name = data.get("name")
        if not isinstance(name, str):
            raise SpecDefinitionError(f"Variable spec is missing 'name': {data!r}")

        default = data.get("defaultValue", data.get("default_value"))
        return cls(
            name=name,
            required=bool(data.get("required", True)),
            description=data.get("description"),
            default_value=None if default is None else str(default),
        )


@dataclass(frozen=True)
class EnvSource:
    """One origin of key/value pairs: a file or the process environment."""
    identifier: str
    values: Mapping[str, str]
    priority: int = 0

    @property
    def is_process_env(self) -> bool:
        return self.identifier == PROCESS_ENV_SOURCE


@dataclass(frozen=True)
class ResolvedEnvironment:
    """Snapshot of every source taking part in one resolution call.

    Sources are ordered lowest to highest priority; the process environment,
    when present, is always last.
    """
    sources: Tuple[EnvSource, ...] = ()
    mode: Optional[str] = None
    failed_sources: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def identifiers(self) -> List[str]:
        return [s.identifier for s in self.sources]

    @property
    def file_sources(self) -> List[EnvSource]:
        return [s for s in self.sources if not s.is_process_env]

    @property
    def process_env(self) -> Mapping[str, str]:
        for s in self.sources:
            if s.is_process_env:
                return s.values
        return MappingProxyType({})


@dataclass
class ValidationResult:
    is_valid: bool
    missing_vars: List[VariableSpec] = field(default_factory=list)
    all_vars: List[VariableSpec] = field(default_factory=list)

    def __post_init__(self) -> None:
        # is_valid is derived; never trust a caller-supplied value
        self.is_valid = len(self.missing_vars) == 0

    @property
    def missing_names(self) -> List[str]:
        return [v.name for v in self.missing_vars]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "missingVars": [v.to_dict() for v in self.missing_vars],
            "allVars": [v.to_dict() for v in self.all_vars],
        }


@dataclass(frozen=True)
class FileOptions:
    encoding: str = DEFAULT_ENCODING
    target_path: str = DEFAULT_TARGET_FILE
    include_per_mode_files: bool = True
    # Explicit candidate names, highest priority first
    env_files: Optional[Tuple[str, ...]] = None


@dataclass
class WriteResult:
    """Result of one read-merge-write of a target file."""
    success: bool
    path: str
    error: Optional[str] = None
    variables: Dict[str, str] = field(default_factory=dict)
    created: bool = False
    # Input was refused before any file access
    rejected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"success": self.success, "path": self.path}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class PersistResult:
    """Outcome of PersistenceService.update, with optional re-validation."""
    write: WriteResult
    validation: Optional[ValidationResult] = None

    @property
    def success(self) -> bool:
        return self.write.success

    def to_dict(self) -> Dict[str, Any]:
        data = self.write.to_dict()
        if self.validation is not None:
            data["validation"] = self.validation.to_dict()
        return data
