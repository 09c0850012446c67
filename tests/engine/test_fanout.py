# topmark:header:start
#
#   project      : CogMark
#   file         : test_fanout.py
#   file_relpath : tests/engine/test_fanout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the fan-out driver (`run_files`)."""

from __future__ import annotations

from pathlib import Path

import pytest

from cogmark.core.exit_codes import ExitCode
from cogmark.engine import FileResult, RunStatus, run_files
from tests.conftest import make_config, parametrize, read_text, write_bytes
from tests.engine.conftest import artifacts

pytestmark: pytest.MarkDecorator = pytest.mark.integration

GOOD = "[[[gocog\nprint('ok')\ngocog]]]\n[[[end]]]\n"
BAD = "[[[gocog\nprint('never closed')\n"
SLOW = "[[[gocog\nimport time\ntime.sleep(1)\nprint('x')\ngocog]]]\n[[[end]]]\n"


def make_files(tmp_path: Path, n: int) -> list[Path]:
    """Create ``n`` well-formed files."""
    return [write_bytes(tmp_path / f"f{i}.txt", GOOD) for i in range(n)]


@parametrize("serial", [True, False])
def test_all_files_processed_in_input_order(tmp_path: Path, serial: bool) -> None:
    """Results come back in input order, in serial and parallel mode."""
    files: list[Path] = make_files(tmp_path, 6)

    results, code = run_files(files, make_config(serial=serial, jobs=3))

    assert code is None
    assert [r.path for r in results] == files
    assert all(r.status == RunStatus.SUCCESS for r in results)
    assert all(read_text(f).endswith("ok\n[[[end]]]\n") for f in files)


def test_failure_does_not_abort_other_files(tmp_path: Path) -> None:
    """One malformed file is reported; the others are still rewritten."""
    good: list[Path] = make_files(tmp_path, 2)
    bad: Path = write_bytes(tmp_path / "bad.txt", BAD)

    results, code = run_files([good[0], bad, good[1]], make_config())

    statuses: list[RunStatus] = [r.status for r in results]
    assert statuses == [RunStatus.SUCCESS, RunStatus.MALFORMED_BLOCK, RunStatus.SUCCESS]
    assert code == ExitCode.MALFORMED_INPUT
    assert read_text(bad) == BAD


def test_first_error_code_wins(tmp_path: Path) -> None:
    """The reported exit code is the first failure in input order."""
    bad: Path = write_bytes(tmp_path / "bad.txt", BAD)
    missing: Path = tmp_path / "missing.txt"

    _results, code = run_files([missing, bad], make_config(serial=True))

    assert code == ExitCode.FILE_NOT_FOUND


def test_no_generator_blocks_is_not_an_error(tmp_path: Path) -> None:
    """Files without blocks do not affect the exit code."""
    plain: Path = write_bytes(tmp_path / "plain.txt", "text\n")

    results, code = run_files([plain], make_config())

    assert code is None
    assert results[0].status == RunStatus.NO_GENERATOR_BLOCKS


def test_sink_factory_called_per_file(tmp_path: Path) -> None:
    """Each file gets its own sink from the factory."""
    files: list[Path] = make_files(tmp_path, 3)
    requested: list[Path] = []

    def factory(path: Path) -> None:
        requested.append(path)
        return None

    results: list[FileResult]
    results, _code = run_files(files, make_config(serial=True), sink_factory=factory)

    assert requested == files
    assert len(results) == 3


def test_duplicate_inputs_are_processed_each_time(tmp_path: Path) -> None:
    """Duplicates are not removed; serial runs rewrite the file twice."""
    f: Path = make_files(tmp_path, 1)[0]

    results, code = run_files([f, f], make_config(serial=True))

    assert code is None
    assert len(results) == 2


def test_parallel_duplicates_conflict_without_clobbering(tmp_path: Path) -> None:
    """Two workers on one path: the second hits the first's output file and leaves it be."""
    f: Path = write_bytes(tmp_path / "slow.txt", SLOW)

    results, code = run_files([f, f], make_config(jobs=2))

    assert {r.status for r in results} == {RunStatus.SUCCESS, RunStatus.FILESYSTEM_CONFLICT}
    assert code == ExitCode.CANNOT_CREATE
    assert read_text(f) == SLOW.replace("[[[end]]]", "x\n[[[end]]]")
    assert artifacts(tmp_path) == []
