# topmark:header:start
#
#   project      : GuardMark
#   file         : event.py
#   file_relpath : src/guardmark/cli/commands/event.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark ``event`` command group.

Feeds filesystem notifications through the automatic guard maintenance policy,
so editors, file watchers or VCS hooks can keep guards in sync:

  * ``guardmark event create PATHS...``: new headers get a guard (``insert_on_create``).
  * ``guardmark event rename OLD NEW``: a moved header gets its guard updated
    (``update_on_rename``; path-derived macro types only).
  * ``guardmark event open PATHS...``: existing guards are refreshed, nothing is
    inserted and ``#pragma once`` is left alone.

Like the guard commands, events are a dry run unless ``--apply`` is given.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from guardmark.cli.cmd_common import (
    FileResult,
    build_config_store,
    build_workspace,
    finish,
    get_effective_verbosity,
    render_results,
)
from guardmark.cli.exit_codes import ExitCode
from guardmark.cli.options import (
    CONTEXT_SETTINGS,
    common_apply_options,
    common_config_options,
)
from guardmark.config.logging import get_logger
from guardmark.guard.editor import GuardEditor
from guardmark.host.events import EventSource, FileEvent, GuardAutomation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.store import ConfigStore
    from guardmark.host.events import EventResult
    from guardmark.host.workspace import Workspace

logger: GuardmarkLogger = get_logger(__name__)


def _to_file_result(result: EventResult) -> FileResult:
    error_code: ExitCode | None = None
    if result.error is not None:
        error_code = ExitCode.IO_ERROR if result.event.path.exists() else ExitCode.FILE_NOT_FOUND
    return FileResult(
        path=result.event.path,
        outcome=result.outcome,
        original_text=result.original_text,
        document=result.document,
        error_code=error_code,
    )


def dispatch_events(
    events: Sequence[FileEvent],
    *,
    command_name: str,
    workspace: str | None,
    config_paths: Sequence[str],
    no_config: bool,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Emit ``events`` to a `GuardAutomation` and report like the guard commands."""
    ctx: click.Context = click.get_current_context()
    ws: Workspace = build_workspace(workspace)
    store: ConfigStore = build_config_store(config_paths=config_paths, no_config=no_config)
    automation = GuardAutomation(ws, GuardEditor(store), store, save=False)

    source = EventSource()
    unsubscribe = automation.attach(source)
    try:
        source.emit(events)
    finally:
        unsubscribe()

    results: list[FileResult] = [_to_file_result(r) for r in automation.results]
    render_results(
        results,
        workspace=ws,
        command_name=command_name,
        apply_changes=apply_changes,
        diff=diff,
        verbosity=get_effective_verbosity(ctx),
    )
    finish(ctx, results, workspace=ws, apply_changes=apply_changes)


@click.group(
    name="event",
    help="Apply the automatic guard policy to filesystem events.",
    context_settings=CONTEXT_SETTINGS,
)
def event_command() -> None:
    """Group for filesystem event subcommands."""


@event_command.command(name="create", help="Report newly created files.")
@click.argument("paths", nargs=-1, required=True)
@common_config_options
@common_apply_options
def event_create_command(
    *,
    paths: tuple[str, ...],
    workspace: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Insert guards into newly created headers."""
    dispatch_events(
        [FileEvent.created(Path(p)) for p in paths],
        command_name="event create",
        workspace=workspace,
        config_paths=config_paths,
        no_config=no_config,
        apply_changes=apply_changes,
        diff=diff,
    )


@event_command.command(name="rename", help="Report a renamed or moved file.")
@click.argument("old_path")
@click.argument("new_path")
@common_config_options
@common_apply_options
def event_rename_command(
    *,
    old_path: str,
    new_path: str,
    workspace: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Update (or insert) the guard of a header moved from OLD_PATH to NEW_PATH."""
    dispatch_events(
        [FileEvent.renamed(Path(old_path), Path(new_path))],
        command_name="event rename",
        workspace=workspace,
        config_paths=config_paths,
        no_config=no_config,
        apply_changes=apply_changes,
        diff=diff,
    )


@event_command.command(name="open", help="Report opened files.")
@click.argument("paths", nargs=-1, required=True)
@common_config_options
@common_apply_options
def event_open_command(
    *,
    paths: tuple[str, ...],
    workspace: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Refresh existing guards of opened headers."""
    dispatch_events(
        [FileEvent.opened(Path(p)) for p in paths],
        command_name="event open",
        workspace=workspace,
        config_paths=config_paths,
        no_config=no_config,
        apply_changes=apply_changes,
        diff=diff,
    )
