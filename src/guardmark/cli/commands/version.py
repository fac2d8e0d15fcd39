# topmark:header:start
#
#   project      : GuardMark
#   file         : version.py
#   file_relpath : src/guardmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark `version` command.

Prints the current GuardMark version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardmark.cli.cmd_common import get_effective_verbosity
from guardmark.cli.console import get_console_safely
from guardmark.constants import GUARDMARK_VERSION

if TYPE_CHECKING:
    from guardmark.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of GuardMark.",
)
def version_command() -> None:
    """Show the current version of GuardMark."""
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console_safely()

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("GuardMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(GUARDMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(GUARDMARK_VERSION, bold=True))
