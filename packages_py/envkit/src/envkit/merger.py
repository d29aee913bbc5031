"""Fold prioritized sources into one flat mapping."""
from typing import Dict, Iterable, Mapping, Optional

from .domain import ResolvedEnvironment


def merge_sources(
    sources: Iterable[Mapping[str, str]],
    process_env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Merge source mappings given lowest to highest priority.

    Later sources override earlier ones; the process environment is folded
    last and therefore always wins.
    """
    merged: Dict[str, str] = {}
    for source in sources:
        merged.update(source)
    if process_env:
        merged.update(process_env)
    return merged


def merge_environment(resolved: ResolvedEnvironment) -> Dict[str, str]:
    """Merge a ResolvedEnvironment snapshot (sources already in priority order)."""
    return merge_sources(
        (s.values for s in resolved.file_sources),
        resolved.process_env,
    )
