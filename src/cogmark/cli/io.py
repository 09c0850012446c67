# topmark:header:start
#
#   project      : CogMark
#   file         : io.py
#   file_relpath : src/cogmark/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input expansion for the ``run`` command.

Positional inputs are either file paths or ``@FILELIST`` references. A filelist
is a text file whose non-blank lines (``#`` lines are comments) are split with
shell rules (`shlex`); every token is again an input, so filelists may nest.

Duplicates are kept: each occurrence is processed, and the engine's
exclusive-create artifacts make a racing duplicate fail instead of corrupting
the file.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import TYPE_CHECKING

from cogmark.cli.errors import CogmarkFileNotFoundError, CogmarkUsageError
from cogmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cogmark.config.logging import CogmarkLogger

logger: CogmarkLogger = get_logger(__name__)

FILELIST_PREFIX = "@"


def split_filelist_text(text: str, *, source: str = "<filelist>") -> list[str]:
    """Return the input tokens of a filelist's text.

    Args:
        text (str): Filelist contents.
        source (str): Filelist name, used in error messages.

    Returns:
        list[str]: Tokens in file order.

    Raises:
        CogmarkUsageError: If a line cannot be tokenized (e.g. unbalanced quotes).
    """
    tokens: list[str] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line: str = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            tokens.extend(shlex.split(line))
        except ValueError as e:
            raise CogmarkUsageError(f"{source}:{lineno}: {e}") from e
    return tokens


def _read_filelist(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read filelist '%s': %s", path, e)
        raise CogmarkFileNotFoundError(
            f"Failed to read filelist '{path}': {e.strerror or e}"
        ) from e


def expand_inputs(inputs: Iterable[str]) -> list[Path]:
    """Expand positional inputs into the ordered list of files to process.

    Args:
        inputs (Iterable[str]): Paths and ``@FILELIST`` references.

    Returns:
        list[Path]: Files to process, in the order they were given.

    Raises:
        CogmarkUsageError: If a filelist references itself (directly or through
            another filelist), or ``@`` is given without a name.
        CogmarkFileNotFoundError: If a filelist cannot be read.
    """
    files: list[Path] = []

    def visit(token: str, chain: tuple[Path, ...]) -> None:
        if not token.startswith(FILELIST_PREFIX):
            files.append(Path(token))
            return

        name: str = token[len(FILELIST_PREFIX) :]
        if not name:
            raise CogmarkUsageError("Missing filelist name after '@'.")
        filelist: Path = Path(name)
        key: Path = filelist.resolve()
        if key in chain:
            cycle: str = " -> ".join(str(p) for p in (*chain, key))
            raise CogmarkUsageError(f"Filelist cycle detected: {cycle}")

        logger.debug("Expanding filelist %s", filelist)
        for sub in split_filelist_text(_read_filelist(filelist), source=name):
            visit(sub, (*chain, key))

    for token in inputs:
        visit(token, ())

    logger.debug("Expanded %d file(s) from inputs", len(files))
    return files
