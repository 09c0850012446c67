# topmark:header:start
#
#   project      : CogMark
#   file         : rewriter.py
#   file_relpath : src/cogmark/engine/rewriter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rewrite state machine.

The rewriter walks the input once, cycling through three phases:

``PLAIN``
    Copy lines up to and including the next ``<start>gocog`` line. Running out
    of input here ends the run successfully, unless no block was seen at all
    (`NoGeneratorBlocks`).
``GENERATOR``
    Copy the generator source up to and including the ``gocog<end>`` line,
    then run the source (prefix stripped) and write its output.
``STALE_OUTPUT``
    Drop previously generated lines and copy only the ``<start>end<end>`` line.
    Running out of input is a success only with ``assume_end_at_eof``.

Every input byte outside of stale output is reproduced exactly once and in
order, so running the rewriter on its own output gives the same result for
deterministic generators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

from cogmark.config.logging import get_logger
from cogmark.constants import END_KEYWORD, GENERATOR_KEYWORD
from cogmark.engine.errors import MalformedBlock, NoGeneratorBlocks
from cogmark.engine.generator import GeneratorRunner
from cogmark.engine.scanner import ScanResult, extract_prefix, scan_until
from cogmark.engine.status import Phase

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cogmark.config.logging import CogmarkLogger
    from cogmark.engine.context import EngineContext

logger: CogmarkLogger = get_logger(__name__)

MARKER_ENCODING = "utf-8"


class Rewriter:
    """Drive the phase loop for one input/output stream pair.

    Args:
        ctx (EngineContext): The per-file engine context.
        src (BinaryIO): Original file, opened for binary reading.
        out (BinaryIO): Output file, opened for binary writing.
        runner (GeneratorRunner | None): Generator runner; one bound to ``ctx`` by default.
    """

    def __init__(
        self,
        ctx: EngineContext,
        src: BinaryIO,
        out: BinaryIO,
        runner: GeneratorRunner | None = None,
    ) -> None:
        self.ctx: EngineContext = ctx
        self.src: BinaryIO = src
        self.out: BinaryIO = out
        self.runner: GeneratorRunner = runner or GeneratorRunner(ctx)
        self.phase: Phase = Phase.PLAIN

        cfg = ctx.config
        self.start_token: bytes = (cfg.start_mark + GENERATOR_KEYWORD).encode(MARKER_ENCODING)
        self.close_token: bytes = (GENERATOR_KEYWORD + cfg.end_mark).encode(MARKER_ENCODING)
        self.end_token: bytes = (cfg.start_mark + END_KEYWORD + cfg.end_mark).encode(
            MARKER_ENCODING
        )
        self._block_line: int = 0

    def run(self) -> int:
        """Rewrite the whole input.

        Returns:
            int: The number of generator blocks processed.

        Raises:
            NoGeneratorBlocks: If the input contains no start marker.
            MalformedBlock: If a block or its generated section is not terminated.
        """
        first_cycle: bool = True
        while True:
            prefix: bytes | None = self._plain(first_cycle)
            if prefix is None:
                break
            first_cycle = False

            self._generator(prefix)

            if not self._stale_output():
                break

        self.ctx.trace(f"Reached end of input after {self.ctx.line_no} line(s)")
        return self.ctx.blocks

    # ------------------------------------------------------------------ phases

    def _plain(self, first_cycle: bool) -> bytes | None:
        self._enter(Phase.PLAIN)
        res: ScanResult[bytes] = self._scan(self.start_token)
        if not res.found:
            if first_cycle:
                raise NoGeneratorBlocks(self.ctx.path, "no generator code found")
            self._write(res.lines)
            return None

        self._write(res.lines)
        self._block_line = self.ctx.line_no
        if res.at_eof:
            raise MalformedBlock(
                self.ctx.path,
                "start marker at end of input, generator code missing",
                line=self._block_line,
            )
        marker_line: bytes = res.lines[-1]
        return extract_prefix(marker_line, self.start_token)

    def _generator(self, prefix: bytes) -> None:
        self._enter(Phase.GENERATOR)
        res: ScanResult[bytes] = self._scan(self.close_token)
        self._write(res.lines)
        if not res.found:
            raise MalformedBlock(
                self.ctx.path,
                f"generator block not closed by {self.close_token.decode(MARKER_ENCODING)!r}",
                line=self._block_line,
            )
        self.ctx.blocks += 1

        if self.ctx.config.excise:
            self.ctx.trace(f"Excising output of block {self.ctx.blocks}")
            return

        output: bytes = self.runner.run(res.lines[:-1], prefix)
        if output and res.at_eof:
            # Closing marker was the unterminated last line.
            self.out.write(b"\n")
        self.out.write(output)
        self.ctx.trace(f"Block {self.ctx.blocks}: wrote {len(output)} byte(s) of generated output")

    def _stale_output(self) -> bool:
        self._enter(Phase.STALE_OUTPUT)
        res: ScanResult[bytes] = self._scan(self.end_token)
        if not res.found:
            if self.ctx.config.assume_end_at_eof:
                self.ctx.trace("No end marker, treating end of input as end marker")
                return False
            raise MalformedBlock(
                self.ctx.path,
                "generated output not terminated by "
                f"{self.end_token.decode(MARKER_ENCODING)!r}",
                line=self._block_line,
            )

        self.ctx.trace(f"Dropped {len(res.lines) - 1} line(s) of stale output")
        self._write(res.lines[-1:])
        return True

    # ----------------------------------------------------------------- helpers

    def _enter(self, phase: Phase) -> None:
        self.phase = phase
        logger.trace(
            "%s: entering phase %s at line %d", self.ctx.path, phase.value, self.ctx.line_no
        )

    def _scan(self, marker: bytes) -> ScanResult[bytes]:
        res: ScanResult[bytes] = scan_until(self.src, marker)
        self.ctx.line_no += len(res.lines)
        return res

    def _write(self, lines: Sequence[bytes]) -> None:
        self.out.writelines(lines)
