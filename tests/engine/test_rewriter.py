# topmark:header:start
#
#   project      : CogMark
#   file         : test_rewriter.py
#   file_relpath : tests/engine/test_rewriter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the rewrite state machine, driven over in-memory streams."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from cogmark.engine.errors import MalformedBlock, NoGeneratorBlocks
from cogmark.engine.rewriter import Rewriter
from cogmark.engine.status import Phase
from tests.conftest import parametrize
from tests.engine.conftest import make_context


class FakeRunner:
    """Generator runner stand-in returning canned output and recording its calls."""

    def __init__(self, output: bytes = b"new\n") -> None:
        self.output: bytes = output
        self.calls: list[tuple[list[bytes], bytes]] = []

    def run(self, source: list[bytes], prefix: bytes) -> bytes:
        self.calls.append((list(source), prefix))
        return self.output


def rewrite(
    text: str,
    tmp_path: Path,
    *,
    runner: FakeRunner | None = None,
    **overrides: object,
) -> str:
    """Run the rewriter on ``text`` and return the rewritten document."""
    ctx = make_context(tmp_path / "doc.txt", **overrides)
    out = io.BytesIO()
    src = io.BytesIO(text.encode())
    Rewriter(ctx, src, out, runner=runner or FakeRunner()).run()  # type: ignore[arg-type]
    return out.getvalue().decode()


def test_block_output_is_replaced(tmp_path: Path) -> None:
    """Stale output between the closing and end markers is replaced."""
    text = "pre\n[[[gocog\n code\ngocog]]]\nold\n[[[end]]]\npost\n"

    assert rewrite(text, tmp_path) == "pre\n[[[gocog\n code\ngocog]]]\nnew\n[[[end]]]\npost\n"


def test_generator_receives_source_without_closing_line(tmp_path: Path) -> None:
    """Only the lines between the start and closing markers are executed."""
    runner = FakeRunner()
    rewrite("// [[[gocog\n// a\n// b\n// gocog]]]\n// [[[end]]]\n", tmp_path, runner=runner)

    assert runner.calls == [([b"// a\n", b"// b\n"], b"// ")]


def test_prefix_is_not_reapplied_to_output(tmp_path: Path) -> None:
    """Generated lines are inserted raw, without the comment prefix."""
    text = "# [[[gocog\n# print('x')\n# gocog]]]\n# [[[end]]]\n"

    assert rewrite(text, tmp_path, runner=FakeRunner(b"x\n")) == (
        "# [[[gocog\n# print('x')\n# gocog]]]\nx\n# [[[end]]]\n"
    )


def test_multiple_blocks(tmp_path: Path) -> None:
    """Every block is regenerated, plain text between blocks is kept."""
    text = "[[[gocog\na\ngocog]]]\n1\n[[[end]]]\nmid\n[[[gocog\nb\ngocog]]]\n2\n[[[end]]]\ntail"
    runner = FakeRunner(b"N\n")

    result: str = rewrite(text, tmp_path, runner=runner)

    assert result == (
        "[[[gocog\na\ngocog]]]\nN\n[[[end]]]\nmid\n[[[gocog\nb\ngocog]]]\nN\n[[[end]]]\ntail"
    )
    assert len(runner.calls) == 2


def test_no_start_marker_raises(tmp_path: Path) -> None:
    """A file without blocks is reported, not rewritten."""
    with pytest.raises(NoGeneratorBlocks):
        rewrite("just text\n", tmp_path)


def test_empty_input_has_no_blocks(tmp_path: Path) -> None:
    """An empty file has no generator blocks."""
    with pytest.raises(NoGeneratorBlocks):
        rewrite("", tmp_path)


@parametrize(
    "text",
    [
        "[[[gocog",
        "pre\n[[[gocog\ncode\n",
        "[[[gocog\ncode\ngocog]]]\nold\n",
        "[[[gocog\ncode\ngocog]]]\n",
    ],
)
def test_unterminated_sections_are_malformed(text: str, tmp_path: Path) -> None:
    """Truncated starts, unclosed blocks and unterminated output are malformed."""
    with pytest.raises(MalformedBlock):
        rewrite(text, tmp_path)


def test_malformed_error_reports_block_line(tmp_path: Path) -> None:
    """The error points at the line of the offending start marker."""
    with pytest.raises(MalformedBlock) as excinfo:
        rewrite("a\nb\n[[[gocog\ncode\n", tmp_path)
    assert excinfo.value.line == 3


def test_assume_end_at_eof_accepts_missing_end_marker(tmp_path: Path) -> None:
    """With end-at-EOF, input ending at the closing marker is complete."""
    text = "[[[gocog\ncode\ngocog]]]\nstale\nmore stale\n"

    assert rewrite(text, tmp_path, assume_end_at_eof=True) == "[[[gocog\ncode\ngocog]]]\nnew\n"


def test_closing_marker_on_unterminated_last_line(tmp_path: Path) -> None:
    """Output after an unterminated closing line starts on its own line."""
    text = "[[[gocog\ncode\ngocog]]]"

    assert rewrite(text, tmp_path, assume_end_at_eof=True) == "[[[gocog\ncode\ngocog]]]\nnew\n"


def test_unterminated_end_marker_is_kept_verbatim(tmp_path: Path) -> None:
    """A final end marker without newline stays without newline."""
    text = "[[[gocog\ncode\ngocog]]]\nold\n[[[end]]]"

    assert rewrite(text, tmp_path) == "[[[gocog\ncode\ngocog]]]\nnew\n[[[end]]]"


def test_excise_drops_output_and_runs_nothing(tmp_path: Path) -> None:
    """Excise keeps the blocks, removes their output and executes nothing."""
    runner = FakeRunner()
    text = "pre\n[[[gocog\ncode\ngocog]]]\nold\n[[[end]]]\npost\n"

    result: str = rewrite(text, tmp_path, runner=runner, excise=True)

    assert result == "pre\n[[[gocog\ncode\ngocog]]]\n[[[end]]]\npost\n"
    assert runner.calls == []


def test_custom_markers(tmp_path: Path) -> None:
    """Delimiters are configurable and glued to the keywords."""
    text = "<!-- {{{gocog\ncode\ngocog}}} -->\nold\n<!-- {{{end}}} -->\n"

    result: str = rewrite(text, tmp_path, start_mark="{{{", end_mark="}}}")

    assert result == "<!-- {{{gocog\ncode\ngocog}}} -->\nnew\n<!-- {{{end}}} -->\n"


def test_default_markers_are_plain_text_with_custom_markers(tmp_path: Path) -> None:
    """With other delimiters, the default markers are not recognized."""
    with pytest.raises(NoGeneratorBlocks):
        rewrite("[[[gocog\ncode\ngocog]]]\n[[[end]]]\n", tmp_path, start_mark="{{{")


def test_phase_and_counters(tmp_path: Path) -> None:
    """The rewriter ends in the plain phase and counts blocks and lines."""
    ctx = make_context(tmp_path / "doc.txt")
    rw = Rewriter(
        ctx,
        io.BytesIO(b"[[[gocog\nx\ngocog]]]\n[[[end]]]\nz\n"),
        io.BytesIO(),
        runner=FakeRunner(),  # type: ignore[arg-type]
    )

    assert rw.run() == 1
    assert rw.phase is Phase.PLAIN
    assert ctx.line_no == 5
