# topmark:header:start
#
#   project      : GuardMark
#   file         : remove.py
#   file_relpath : src/guardmark/cli/commands/remove.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark ``remove`` command.

Removes existing include guards (and, if configured, ``#pragma once``) from header
files. Files whose guard is missing or inconsistent are left untouched.
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
    name="remove",
    help="Remove include guards from header files.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1)
@common_config_options
@common_filtering_options
@common_macro_options
@common_apply_options
def remove_command(
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
    """Remove the include guard of every targeted header."""
    run_guard_command(
        click.get_current_context(),
        command_name="remove",
        operation=lambda editor: editor.remove,
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
