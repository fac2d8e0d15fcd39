# topmark:header:start
#
#   project      : GuardMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test fixtures: a Click runner bound to the GuardMark entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import click
import pytest
from click.testing import CliRunner, Result

from guardmark.cli.main import cli as _cli

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

# Type hint for the CLI command object
cli = cast("click.Command", _cli)


@pytest.fixture
def run_cli() -> Callable[[Sequence[str]], Result]:
    """Return a helper invoking the CLI with ``argv`` (no working directory change)."""

    def _run(argv: Sequence[str]) -> Result:
        return CliRunner().invoke(cli, list(argv))

    return _run
