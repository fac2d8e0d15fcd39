# topmark:header:start
#
#   project      : GuardMark
#   file         : main.py
#   file_relpath : src/guardmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark command line interface.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; the subcommands read them from there:

- ``insert`` / ``remove`` / ``update``: edit include guards in header files.
- ``event``: run the automatic guard maintenance policy for file events.
- ``config``: inspect and scaffold configuration.
- ``version``: print the installed version.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardmark.cli.commands.config import config_command
from guardmark.cli.commands.event import event_command
from guardmark.cli.commands.insert import insert_command
from guardmark.cli.commands.remove import remove_command
from guardmark.cli.commands.update import update_command
from guardmark.cli.commands.version import version_command
from guardmark.cli.console import ClickConsole
from guardmark.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from guardmark.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from guardmark.cli.console_api import ConsoleLike
    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via the environment
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="GuardMark: maintain C/C++ include guards.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the GuardMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'guardmark insert [PATHS...]' to add include guards.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(insert_command)

cli.add_command(remove_command)

cli.add_command(update_command)

cli.add_command(event_command)

cli.add_command(config_command)

if __name__ == "__main__":
    cli()
