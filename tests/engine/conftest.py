# topmark:header:start
#
#   project      : CogMark
#   file         : conftest.py
#   file_relpath : tests/engine/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Engine test helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from cogmark.engine.context import EngineContext
from tests.conftest import make_config

if TYPE_CHECKING:
    from pathlib import Path

    from cogmark.core.diagnostics import Diagnostic


def make_context(path: Path, **overrides: Any) -> EngineContext:
    """Return an `EngineContext` for ``path`` using Python generators."""
    return EngineContext(path=path, config=make_config(**overrides))


def artifacts(directory: Path) -> list[str]:
    """Return the names of leftover ``_cog`` artifacts in ``directory``."""
    return sorted(p.name for p in directory.iterdir() if "_cog" in p.name)


@pytest.fixture
def collected() -> list[Diagnostic]:
    """A list to be used as a diagnostic sink (``collected.append``)."""
    return []
