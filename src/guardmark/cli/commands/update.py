# topmark:header:start
#
#   project      : GuardMark
#   file         : update.py
#   file_relpath : src/guardmark/cli/commands/update.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark ``update`` command.

Regenerates the macro of existing include guards in place. Headers without a
guard get one inserted unless ``--no-insert`` is given.
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
    underscored_trap_option,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from guardmark.config.types import CommentStyle, MacroType
    from guardmark.guard.editor import GuardEditor, GuardOutcome
    from guardmark.host.document import TextDocument


@click.command(
    name="update",
    help="Replace include guards with freshly generated ones.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1)
@common_config_options
@common_filtering_options
@common_macro_options
@common_apply_options
@click.option(
    "--no-insert",
    "no_insert",
    is_flag=True,
    help="Leave headers without a guard untouched.",
)
@underscored_trap_option("--no_insert")
def update_command(
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
    no_insert: bool,
) -> None:
    """Update the include guard of every targeted header."""

    def operation(editor: GuardEditor) -> Callable[[TextDocument], GuardOutcome]:
        return lambda document: editor.update(document, insert_when_not_found=not no_insert)

    run_guard_command(
        click.get_current_context(),
        command_name="update",
        operation=operation,
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
