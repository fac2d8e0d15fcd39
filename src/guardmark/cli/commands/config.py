# topmark:header:start
#
#   project      : GuardMark
#   file         : config.py
#   file_relpath : src/guardmark/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark `config` command group.

Provides subcommands for inspecting and scaffolding GuardMark configuration:

  * ``guardmark config show [PATH]``: show the configuration resolved for a file.
  * ``guardmark config init``: print a starter configuration file.
"""

from __future__ import annotations

import click

from guardmark.cli.options import CONTEXT_SETTINGS

from .config_init import config_init_command
from .config_show import config_show_command


@click.group(
    name="config",
    help="Inspect and scaffold GuardMark configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands.

    This group itself performs no action; use one of its subcommands.
    """


config_command.add_command(config_show_command, name="show")
config_command.add_command(config_init_command, name="init")
