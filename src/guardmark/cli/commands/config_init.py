# topmark:header:start
#
#   project      : GuardMark
#   file         : config_init.py
#   file_relpath : src/guardmark/cli/commands/config_init.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark `config init` command.

Prints a starter GuardMark configuration file, holding every setting at its
default value, to stdout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardmark.cli.cmd_common import emit_toml_block, get_effective_verbosity
from guardmark.cli.console import get_console_safely
from guardmark.config.io import to_toml
from guardmark.config.model import Config

if TYPE_CHECKING:
    from guardmark.cli.console_api import ConsoleLike
    from guardmark.config.types import TomlTable


@click.command(
    name="init",
    help="Display an initial GuardMark configuration file.",
)
@click.option(
    "--pyproject",
    "pyproject",
    is_flag=True,
    help="Generate config for inclusion in pyproject.toml (under [tool.guardmark]).",
)
def config_init_command(*, pyproject: bool) -> None:
    """Print a starter config file to stdout.

    Args:
        pyproject (bool): If True, nest the tables under ``[tool.guardmark]``
            (default: plain ``guardmark.toml`` layout).
    """
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console_safely()

    table: TomlTable = Config().to_toml_dict()
    if pyproject:
        table = {"tool": {"guardmark": table}}

    emit_toml_block(
        console=console,
        title="Initial GuardMark Configuration (TOML):",
        toml_text=to_toml(table),
        verbosity_level=get_effective_verbosity(ctx),
    )
