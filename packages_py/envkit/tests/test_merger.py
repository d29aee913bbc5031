"""
Tests for priority merging.
"""
from types import MappingProxyType

from envkit import EnvSource, ResolvedEnvironment, merge_environment, merge_sources
from envkit.constants import PROCESS_ENV_SOURCE


def test_later_sources_override_earlier():
    base = {"A": "base", "B": "base"}
    local = {"A": "local"}
    assert merge_sources([base, local]) == {"A": "local", "B": "base"}


def test_process_env_always_wins():
    files = [{"A": "file", "B": "file"}, {"A": "local"}]
    assert merge_sources(files, {"A": "process"}) == {"A": "process", "B": "file"}


def test_empty_inputs():
    assert merge_sources([]) == {}
    assert merge_sources([], {}) == {}


def test_inputs_not_mutated():
    base = {"A": "1"}
    override = {"A": "2"}
    merge_sources([base, override], {"B": "3"})
    assert base == {"A": "1"}
    assert override == {"A": "2"}


def test_same_inputs_same_output():
    sources = [{"A": "1", "C": "x"}, {"A": "2"}]
    assert merge_sources(sources, {"B": "3"}) == merge_sources(sources, {"B": "3"})


def test_merge_environment_follows_source_order():
    resolved = ResolvedEnvironment(
        sources=(
            EnvSource("/app/.env", MappingProxyType({"API_KEY": "abc", "LOG": "info"}), 0),
            EnvSource("/app/.env.local", MappingProxyType({"API_KEY": "xyz"}), 1),
            EnvSource(PROCESS_ENV_SOURCE, MappingProxyType({"LOG": "debug"}), 2),
        )
    )
    assert merge_environment(resolved) == {"API_KEY": "xyz", "LOG": "debug"}
