# topmark:header:start
#
#   project      : GuardMark
#   file         : insert.py
#   file_relpath : src/guardmark/cli/commands/insert.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark ``insert`` command.

Inserts new include guards into header files. Performs a dry run by default and
writes changes when ``--apply`` is given.

Examples:
  Preview changes (dry run):

    $ guardmark insert include/

  Apply changes with file-name based macros:

    $ guardmark insert --apply --macro-type filename include/foo.h
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardmark.cli.cmd_common import run_guard_command
from guardmark.cli.options import (
    CONTEXT_SETTINGS,
    common_apply_options,
    common_config_options,
    common_filtering_options,
    common_macro_options,
)

if TYPE_CHECKING:
    from guardmark.config.types import CommentStyle, MacroType


@click.command(
    name="insert",
    help="Insert include guards into header files.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Preview which files would change (dry-run)
  guardmark insert include

  # Apply: insert guards in-place
  guardmark insert --apply include
""",
)
@click.argument("paths", nargs=-1)
@common_config_options
@common_filtering_options
@common_macro_options
@common_apply_options
def insert_command(
    *,
    paths: tuple[str, ...],
    workspace: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    include_patterns: tuple[str, ...],
    exclude_patterns: tuple[str, ...],
    macro_type: MacroType | None,
    comment_style: CommentStyle | None,
    prefix: str | None,
    suffix: str | None,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Insert a new include guard into every targeted header.

    Exit Status:
      SUCCESS (0): All requested changes were written.
      WOULD_CHANGE (2): Dry run detected files that would change with ``--apply``.
      FILE_NOT_FOUND (66): A path does not exist.
      IO_ERROR (74): A file could not be read or written.
      CONFIG_ERROR (78): An explicit config file is invalid.
    """
    run_guard_command(
        click.get_current_context(),
        command_name="insert",
        operation=lambda editor: editor.insert,
        paths=paths,
        workspace=workspace,
        config_paths=config_paths,
        no_config=no_config,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        macro_type=macro_type,
        comment_style=comment_style,
        prefix=prefix,
        suffix=suffix,
        apply_changes=apply_changes,
        diff=diff,
    )
