# topmark:header:start
#
#   project      : CogMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the CogMark test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `cogmark.config.MutableConfig` (mutable), then
      `freeze()` into a `cogmark.config.Config` for engine calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.

    Generators in tests are Python scripts run by the interpreter executing the
    test suite (``sys.executable``), so no Go toolchain is needed.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from cogmark.config import MutableConfig, logging

if TYPE_CHECKING:
    from cogmark.config import Config

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_cogmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure CogMark's runtime log level is not forced via env during tests.

    Also hides any user-level config file so discovery only sees what a test creates.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("COGMARK_LOG_LEVEL", raising=False)
    monkeypatch.setattr(MutableConfig, "discover_user_config_file", classmethod(lambda cls: None))


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure logging for the test suite (TRACE, so every step is exercised).

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# Scratch files end in .py and are executed by the running interpreter.
PYTHON_GENERATOR: dict[str, Any] = {
    "command": sys.executable,
    "args": ["%s"],
    "ext": ".py",
}


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder using Python generators, with overrides applied.

    Args:
        **overrides (Any): Field overrides applied verbatim to the builder.

    Returns:
        MutableConfig: A mutable configuration object ready to be frozen or further edited.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in {**PYTHON_GENERATOR, **overrides}.items():
        setattr(m, k, v)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` using Python generators, with overrides applied.

    Args:
        **overrides (Any): Field overrides applied before freezing.

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    return make_mutable_config(**overrides).freeze()


@pytest.fixture
def py_config() -> Config:
    """Config running generator blocks as Python scripts."""
    return make_config()


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated temporary project directory.

    The directory carries a ``cogmark.toml`` with ``root = true`` so config
    discovery never escapes into the developer's tree.

    Returns:
        Path: The temporary working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    (cwd / "cogmark.toml").write_text("root = true\n", encoding="utf-8")
    monkeypatch.chdir(cwd)
    return cwd


def write_bytes(path: Path, data: str) -> Path:
    """Write ``data`` to ``path`` as UTF-8 without newline translation."""
    path.write_bytes(data.encode("utf-8"))
    return path


def read_text(path: Path) -> str:
    """Read ``path`` as UTF-8 without newline translation."""
    return path.read_bytes().decode("utf-8")
