# topmark:header:start
#
#   project      : GuardMark
#   file         : config_show.py
#   file_relpath : src/guardmark/cli/commands/config_show.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark `config show` command.

Emits the configuration that applies to one file as TOML, after merging the
defaults, the user config, the project configs discovered upward from the file,
explicit ``--config`` files and CLI overrides. Without a path the configuration
is resolved for the current directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from guardmark.cli.cmd_common import (
    build_config_store,
    emit_toml_block,
    get_effective_verbosity,
)
from guardmark.cli.console import get_console_safely
from guardmark.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_macro_options,
)
from guardmark.config.io import to_toml
from guardmark.config.logging import get_logger

if TYPE_CHECKING:
    from guardmark.cli.console_api import ConsoleLike
    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.model import Config
    from guardmark.config.store import ConfigStore
    from guardmark.config.types import CommentStyle, MacroType

logger: GuardmarkLogger = get_logger(__name__)


@click.command(
    name="show",
    help="Show the effective GuardMark configuration for PATH as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("path", required=False, type=click.Path(dir_okay=True, file_okay=True))
@common_config_options
@common_macro_options
def config_show_command(
    *,
    path: str | None,
    workspace: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    macro_type: MacroType | None,
    comment_style: CommentStyle | None,
    prefix: str | None,
    suffix: str | None,
) -> None:
    """Print the merged configuration resolved for ``path``.

    With ``-v`` the list of loaded config files and BEGIN/END markers around the
    TOML are printed as well.
    """
    ctx: click.Context = click.get_current_context()
    console: ConsoleLike = get_console_safely()
    vlevel: int = get_effective_verbosity(ctx)

    store: ConfigStore = build_config_store(
        config_paths=config_paths,
        no_config=no_config,
        macro_type=macro_type,
        comment_style=comment_style,
        prefix=prefix,
        suffix=suffix,
    )
    scope: Path | None = Path(path) if path else None
    if scope is None and workspace:
        scope = Path(workspace)
    config: Config = store.resolve(scope)
    logger.debug("Showing config for %s", scope)

    if vlevel > 0:
        console.print(f"Config files processed: {len(config.config_files)}")
        for i, c in enumerate(config.config_files, start=1):
            console.print(f"Loaded config {i}: {c}")

    emit_toml_block(
        console=console,
        title="GuardMark Config (TOML):",
        toml_text=to_toml(config.to_toml_dict()),
        verbosity_level=vlevel,
    )
