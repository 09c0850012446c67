# topmark:header:start
#
#   project      : CogMark
#   file         : test_commit.py
#   file_relpath : tests/engine/test_commit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the commit manager (exclusive output file, replace or discard)."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from cogmark.engine.commit import CommitManager, output_path_for
from cogmark.engine.errors import FilesystemConflict
from tests.engine.conftest import artifacts, make_context


def test_output_path_appends_suffix(tmp_path: Path) -> None:
    """The output file is ``<file>_cog``."""
    assert output_path_for(tmp_path / "a.go") == tmp_path / "a.go_cog"


def test_commit_replaces_original(tmp_path: Path) -> None:
    """On commit the output content becomes the original file."""
    target: Path = tmp_path / "doc.txt"
    target.write_bytes(b"old\n")
    commit = CommitManager(make_context(target))

    with commit.create() as out:
        out.write(b"new\n")
    commit.commit()

    assert target.read_bytes() == b"new\n"
    assert artifacts(tmp_path) == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_commit_keeps_permission_bits(tmp_path: Path) -> None:
    """An executable script stays executable after being rewritten."""
    target: Path = tmp_path / "tool.sh"
    target.write_bytes(b"#!/bin/sh\n")
    target.chmod(0o755)
    commit = CommitManager(make_context(target))

    with commit.create() as out:
        out.write(b"#!/bin/sh\necho hi\n")
    commit.commit()

    assert stat.S_IMODE(target.stat().st_mode) == 0o755


def test_discard_removes_output_and_keeps_original(tmp_path: Path) -> None:
    """Discarding leaves the original byte-identical."""
    target: Path = tmp_path / "doc.txt"
    target.write_bytes(b"original\n")
    commit = CommitManager(make_context(target))

    with commit.create() as out:
        out.write(b"partial")
    commit.discard()

    assert target.read_bytes() == b"original\n"
    assert artifacts(tmp_path) == []
    assert not commit.created


def test_existing_output_is_a_conflict_and_is_not_discarded(tmp_path: Path) -> None:
    """A pre-existing output file belongs to someone else: never delete it."""
    target: Path = tmp_path / "doc.txt"
    target.write_bytes(b"original\n")
    leftover: Path = output_path_for(target)
    leftover.write_bytes(b"other run\n")
    commit = CommitManager(make_context(target))

    with pytest.raises(FilesystemConflict):
        commit.create()
    commit.discard()

    assert leftover.read_bytes() == b"other run\n"
    assert target.read_bytes() == b"original\n"


def test_discard_without_create_is_a_noop(tmp_path: Path) -> None:
    """Nothing to remove when the output file was never created."""
    commit = CommitManager(make_context(tmp_path / "doc.txt"))
    commit.discard()
    assert artifacts(tmp_path) == []
