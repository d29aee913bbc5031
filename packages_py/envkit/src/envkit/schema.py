"""Validate declared variable specs against a merged environment."""
from typing import Any, Dict, Iterable, List, Mapping, Union

from .domain import ValidationResult, VariableSpec
from .errors import SpecDefinitionError

SpecLike = Union[str, Dict[str, Any], VariableSpec]


def create_specs(items: Iterable[SpecLike]) -> List[VariableSpec]:
    """Normalize names, dicts and VariableSpec objects into VariableSpec objects.

    Raises:
        SpecDefinitionError: on an empty or duplicate name, or an unsupported item
    """
    specs: List[VariableSpec] = []
    seen = set()

    for item in items:
        spec = item if isinstance(item, VariableSpec) else VariableSpec.from_dict(item)

        if not spec.name or not spec.name.strip():
            raise SpecDefinitionError("Variable spec name must not be empty")
        if spec.name in seen:
            raise SpecDefinitionError(f"Duplicate variable spec: {spec.name}")

        seen.add(spec.name)
        specs.append(spec)

    return specs


def is_satisfied(spec: VariableSpec, merged: Mapping[str, str]) -> bool:
    """A key is satisfied when present in the merged mapping or defaulted."""
    return spec.name in merged or bool(spec.default_value)


def validate_env(specs: Iterable[VariableSpec], merged: Mapping[str, str]) -> ValidationResult:
    """Compare specs against the merged environment.

    missing_vars keeps the input order; callers wanting required-first
    ordering sort it themselves.
    """
    all_vars = list(specs)
    missing = [s for s in all_vars if s.required and not is_satisfied(s, merged)]
    return ValidationResult(is_valid=not missing, missing_vars=missing, all_vars=all_vars)


def get_missing_vars(names: Iterable[str], merged: Mapping[str, str]) -> List[str]:
    """Names from a bare list of required keys that the environment lacks."""
    return [name for name in names if name not in merged]

