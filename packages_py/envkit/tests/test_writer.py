"""
Tests for read-merge-write of target files.
"""
import os
import stat
import sys

import pytest
from envkit import FileMergeWriter, UnavailableFileSystem, parse_env_text


def test_merges_over_existing(env_dir, write_env):
    path = write_env(".env", "FOO=0\nBAR=2")

    result = FileMergeWriter().merge_write(str(path), {"FOO": "1"})

    assert result.success is True
    assert result.created is False
    assert parse_env_text(path.read_text()) == {"FOO": "1", "BAR": "2"}


def test_creates_missing_file(env_dir):
    path = env_dir / ".env.local"

    result = FileMergeWriter().merge_write(str(path), {"API_KEY": "xyz"})

    assert result.success is True
    assert result.created is True
    assert result.path == str(path)
    assert path.read_text() == "API_KEY=xyz\n"


def test_existing_order_kept_and_new_keys_appended(env_dir, write_env):
    path = write_env(".env", "B=1\nA=2\n")

    FileMergeWriter().merge_write(str(path), {"C": "3", "A": "9"})

    assert path.read_text() == "B=1\nA=9\nC=3\n"


def test_idempotent(env_dir, write_env):
    path = write_env(".env", "# comment\nFOO=0\nBAR='quoted'\n")
    writer = FileMergeWriter()

    writer.merge_write(str(path), {"FOO": "1", "NEW": "x"})
    once = path.read_text()
    writer.merge_write(str(path), {"FOO": "1", "NEW": "x"})

    assert path.read_text() == once


def test_comments_and_quotes_are_dropped(env_dir, write_env):
    path = write_env(".env", "# keep me?\nA=\"quoted\"\n")

    FileMergeWriter().merge_write(str(path), {"B": "2"})

    assert path.read_text() == "A=quoted\nB=2\n"


def test_creates_parent_directory(env_dir):
    path = env_dir / "config" / ".env"

    result = FileMergeWriter().merge_write(str(path), {"A": "1"})

    assert result.success is True
    assert path.read_text() == "A=1\n"


def test_unavailable_filesystem_reports_failure(env_dir):
    result = FileMergeWriter(UnavailableFileSystem()).merge_write(str(env_dir / ".env"), {"A": "1"})

    assert result.success is False
    assert "not available" in result.error


@pytest.mark.skipif(sys.platform == "win32" or os.geteuid() == 0, reason="permissions not enforced")
def test_permission_denied_leaves_file_untouched(env_dir, write_env):
    path = write_env(".env", "FOO=0\n")
    env_dir.chmod(stat.S_IRUSR | stat.S_IXUSR)
    try:
        result = FileMergeWriter().merge_write(str(path), {"FOO": "1"})
    finally:
        env_dir.chmod(stat.S_IRWXU)

    assert result.success is False
    assert result.error
    assert path.read_text() == "FOO=0\n"


def test_write_failure_leaves_no_partial_file(env_dir, write_env, monkeypatch):
    path = write_env(".env", "FOO=0\n")

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", fail_replace)
    result = FileMergeWriter().merge_write(str(path), {"FOO": "1"})

    assert result.success is False
    assert "disk full" in result.error
    assert path.read_text() == "FOO=0\n"
    assert [p.name for p in env_dir.iterdir()] == [".env"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX modes only")
def test_new_file_follows_umask(env_dir):
    path = env_dir / ".env"
    old_umask = os.umask(0o022)
    try:
        FileMergeWriter().merge_write(str(path), {"A": "1"})
    finally:
        os.umask(old_umask)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX modes only")
def test_existing_file_mode_kept(env_dir, write_env):
    path = write_env(".env", "A=0\n")
    path.chmod(0o600)

    FileMergeWriter().merge_write(str(path), {"A": "1"})

    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_unicode_line_separator_stays_in_value(env_dir):
    path = env_dir / ".env"

    FileMergeWriter().merge_write(str(path), {"A": "x\x0bINJECTED=1"})

    assert parse_env_text(path.read_text()) == {"A": "x\x0bINJECTED=1"}
