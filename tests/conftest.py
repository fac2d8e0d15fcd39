# topmark:header:start
#
#   project      : GuardMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the GuardMark test suite.

Sets up TRACE logging for test runs, isolates every test from the developer's
user configuration and provides factories for configuration stores, documents
and deterministic random sources.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    overrides with `guardmark.config.MutableConfig` and let the `ConfigStore`
    freeze them into a `guardmark.config.Config`.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import pytest

from guardmark.config import ConfigStore, MutableConfig, logging
from guardmark.host.document import TextDocument

F = TypeVar("F", bound=Callable[..., object])

#: Workspace root used by in-memory documents (never touched on disk).
WORKSPACE_ROOT = Path("/ws")


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return cast("Callable[[F], F]", pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of test runs.

    Removes ``GUARDMARK_LOG_LEVEL`` and points the user config locations at an
    empty temporary directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory.
        monkeypatch (pytest.MonkeyPatch): Fixture used to patch the environment.
    """
    monkeypatch.delenv("GUARDMARK_LOG_LEVEL", raising=False)
    home: Path = tmp_path / "_home"
    home.mkdir(exist_ok=True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("HOME", str(home))


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so failing tests show full detail."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


class FixedRandomSource:
    """Random source returning a fixed value (or a fixed sequence of values)."""

    def __init__(self, *values: int) -> None:
        self.values: list[int] = list(values) or [0]
        self.calls = 0

    def random_bits(self) -> int:
        """Return the next configured value, repeating the last one."""
        value: int = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_random() -> Callable[..., FixedRandomSource]:
    """Factory for deterministic random sources."""
    return FixedRandomSource


@pytest.fixture
def store_factory() -> Callable[..., ConfigStore]:
    """Factory for a `ConfigStore` holding defaults plus keyword overrides.

    Config file discovery is disabled, so the store never reads the filesystem.
    """

    def _make(**overrides: Any) -> ConfigStore:
        return ConfigStore(no_config=True, overrides=MutableConfig(**overrides))

    return _make


@pytest.fixture
def make_document() -> Callable[..., TextDocument]:
    """Factory for in-memory documents located at ``/ws/<relpath>``."""

    def _make(text: str, relpath: str = "include/foo.h", **kwargs: Any) -> TextDocument:
        return TextDocument(
            text, path=WORKSPACE_ROOT / relpath, workspace_root=WORKSPACE_ROOT, **kwargs
        )

    return _make
