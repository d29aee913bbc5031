"""
Request models for the status / update / upload boundary.
"""
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .domain import VariableSpec

# Keys of an update body that are never variables themselves
UPDATE_CONTROL_KEYS = ("targetFile", "target_file", "envFile", "targetEnv", "_targetEnv", "target_env")


class StatusQuery(BaseModel):
    """Input of a status query."""
    model_config = ConfigDict(populate_by_name=True)

    required_vars: List[VariableSpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("requiredVars", "required_vars"),
        description="Specs to validate; names or {name, required, description, defaultValue}",
    )
    base_dir: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("baseDir", "base_dir"),
        description="Directory holding the env files",
    )
    mode: Optional[str] = Field(default=None, description="Mode selecting per-mode files")

    @field_validator("required_vars", mode="before")
    @classmethod
    def coerce_specs(cls, v: Any) -> List[VariableSpec]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            raise ValueError("requiredVars must be a list")
        return [item if isinstance(item, VariableSpec) else VariableSpec.from_dict(item) for item in v]


class UpdateCommand(BaseModel):
    """Input of an update command."""
    model_config = ConfigDict(populate_by_name=True)

    target_file: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("targetFile", "target_file", "envFile"),
        description="File to update, relative to the base directory",
    )
    values: Dict[str, str] = Field(
        validation_alias=AliasChoices("values", "envVars"),
        description="Variables to merge into the target file",
    )
    target_env: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("targetEnv", "_targetEnv", "target_env"),
        description="Mode whose configured target file receives the update",
    )

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> 'UpdateCommand':
        """Accept either {values: {...}} or a flat object of variables.

        In the flat form every key except the control keys is a variable.
        """
        if not isinstance(body, dict) or any(k in body for k in ("values", "envVars")):
            return cls.model_validate(body)

        values = {k: v for k, v in body.items() if k not in UPDATE_CONTROL_KEYS}
        control = {k: v for k, v in body.items() if k in UPDATE_CONTROL_KEYS}
        return cls.model_validate({**control, "values": values})


class UploadCommand(BaseModel):
    """Input of an upload: raw dotenv text merged into the target file."""
    model_config = ConfigDict(populate_by_name=True)

    target_file: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("targetFile", "target_file", "targetEnvFile"),
    )
    content: str = Field(description="Dotenv text")
    target_env: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("targetEnv", "_targetEnv", "target_env"),
    )
