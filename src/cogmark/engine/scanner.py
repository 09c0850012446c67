# topmark:header:start
#
#   project      : CogMark
#   file         : scanner.py
#   file_relpath : src/cogmark/engine/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line scanning and comment-prefix helpers.

The scanner is byte-exact: lines are returned with their original terminators
and are never truncated or re-terminated. All helpers are generic over
``str``/``bytes`` so they work on text streams (handy in tests) as well as on the
binary streams the engine uses.

Example:
    ```python
    import io

    res = scan_until(io.StringIO("a\\nb\\nEND\\n"), "END")
    res.lines      # ['a\\n', 'b\\n', 'END\\n']
    res.found      # True
    res.terminal   # ScanTerminal.OK
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, AnyStr, Generic

from cogmark.engine.status import ScanTerminal


@dataclass(frozen=True)
class ScanResult(Generic[AnyStr]):
    """Outcome of `scan_until`.

    Attributes:
        lines (list[AnyStr]): Every line consumed, including the marker line when found.
        found (bool): True if a line containing the marker was read.
        terminal (ScanTerminal): ``END_OF_INPUT`` when the stream is exhausted.
            Both ``found`` and ``END_OF_INPUT`` hold when the marker line is the
            stream's last line and lacks a terminator.
    """

    lines: list[AnyStr] = field(default_factory=lambda: [])
    found: bool = False
    terminal: ScanTerminal = ScanTerminal.OK

    @property
    def at_eof(self) -> bool:
        """Return True if the scan ran into the end of the input."""
        return self.terminal is ScanTerminal.END_OF_INPUT


def _newline(sample: AnyStr) -> AnyStr:
    return "\n" if isinstance(sample, str) else b"\n"  # type: ignore[return-value]


def scan_until(stream: IO[AnyStr], marker: AnyStr) -> ScanResult[AnyStr]:
    """Read lines until one contains ``marker`` or the stream is exhausted.

    A line that does not end in ``\\n`` is the last line of the input. An empty
    read yields no line at all.

    Args:
        stream (IO[AnyStr]): Stream positioned at the first line to scan.
        marker (AnyStr): Substring to look for.

    Returns:
        ScanResult[AnyStr]: The consumed lines plus the found flag and terminal condition.
    """
    lines: list[AnyStr] = []
    while True:
        line: AnyStr = stream.readline()
        if not line:
            return ScanResult(lines=lines, found=False, terminal=ScanTerminal.END_OF_INPUT)

        lines.append(line)
        terminated: bool = line.endswith(_newline(line))

        if marker in line:
            terminal: ScanTerminal = ScanTerminal.OK if terminated else ScanTerminal.END_OF_INPUT
            return ScanResult(lines=lines, found=True, terminal=terminal)
        if not terminated:
            return ScanResult(lines=lines, found=False, terminal=ScanTerminal.END_OF_INPUT)


def extract_prefix(line: AnyStr, marker: AnyStr) -> AnyStr:
    """Return the text preceding ``marker`` on ``line``, leading whitespace trimmed.

    Args:
        line (AnyStr): The line holding the start marker.
        marker (AnyStr): The start marker token.

    Returns:
        AnyStr: The prefix (e.g. ``"// "``), or an empty value when ``marker`` is
        not on the line.
    """
    idx: int = line.find(marker)
    if idx < 0:
        return line[:0]
    return line[:idx].lstrip()


def strip_prefix(line: AnyStr, prefix: AnyStr) -> AnyStr:
    """Remove ``prefix`` from ``line`` when it is the first non-whitespace text.

    Leading whitespace is preserved; lines not starting with the prefix are
    returned unchanged.

    Args:
        line (AnyStr): A generator source line.
        prefix (AnyStr): The block prefix computed by `extract_prefix`.

    Returns:
        AnyStr: The de-prefixed line.
    """
    if not prefix:
        return line
    body: AnyStr = line.lstrip()
    if not body.startswith(prefix):
        return line
    lead: AnyStr = line[: len(line) - len(body)]
    return lead + body[len(prefix) :]
