# topmark:header:start
#
#   project      : GuardMark
#   file         : cmd_common.py
#   file_relpath : src/guardmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds the plumbing shared by the guard commands (``insert``,
``remove``, ``update``) and the ``event`` commands: building the configuration
store from CLI options, resolving input files, running an editor operation per
file, rendering per-file guidance and diffs, writing changes and mapping the
results to exit codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from guardmark.cli.console import get_console_safely
from guardmark.cli.errors import GuardmarkConfigError, GuardmarkIOError, GuardmarkUsageError
from guardmark.cli.exit_codes import ExitCode
from guardmark.config.io import check_toml_file
from guardmark.config.logging import get_logger
from guardmark.config.model import MutableConfig
from guardmark.config.store import ConfigStore
from guardmark.constants import TOML_BLOCK_END, TOML_BLOCK_START
from guardmark.file_resolver import ResolvedFiles, resolve_file_list
from guardmark.guard.editor import GuardEditor, GuardOutcome
from guardmark.host.workspace import Workspace
from guardmark.utils.diff import render_patch, unified_diff

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from guardmark.cli.console_api import ConsoleLike
    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.types import CommentStyle, MacroType
    from guardmark.host.document import TextDocument

logger: GuardmarkLogger = get_logger(__name__)

_PAST_TENSE: dict[GuardOutcome, str] = {
    GuardOutcome.INSERTED: "Inserted",
    GuardOutcome.REMOVED: "Removed",
    GuardOutcome.UPDATED: "Updated",
}


@dataclass
class FileResult:
    """Result of running a guard operation on one file.

    Attributes:
        path (Path): The processed file.
        outcome (GuardOutcome): Editor outcome.
        original_text (str | None): Text before the operation (None if unreadable).
        document (TextDocument | None): The edited document.
        error_code (ExitCode | None): Exit code contributed by a per-file error.
    """

    path: Path
    outcome: GuardOutcome
    original_text: str | None = None
    document: TextDocument | None = None
    error_code: ExitCode | None = None

    @property
    def changed(self) -> bool:
        """True if the document text differs from the original."""
        return (
            self.document is not None
            and self.original_text is not None
            and self.document.get_text() != self.original_text
        )


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 = terse)."""
    obj: object = ctx.obj
    if isinstance(obj, dict):
        return int(obj.get("verbosity_level", 0))
    return 0


def build_workspace(workspace: str | None) -> Workspace:
    """Return the workspace rooted at ``workspace`` (CWD when None)."""
    return Workspace(Path(workspace) if workspace else None)


def build_config_store(
    *,
    config_paths: Iterable[str],
    no_config: bool,
    macro_type: MacroType | None = None,
    comment_style: CommentStyle | None = None,
    prefix: str | None = None,
    suffix: str | None = None,
) -> ConfigStore:
    """Create the per-file configuration store for a command invocation.

    Raises:
        GuardmarkConfigError: If an explicit ``--config`` file cannot be parsed.
    """
    extra: list[Path] = [Path(p) for p in config_paths]
    for path in extra:
        problem: str | None = check_toml_file(path)
        if problem is not None:
            raise GuardmarkConfigError(problem)

    overrides = MutableConfig(
        macro_type=macro_type,
        comment_style=comment_style,
        prefix=prefix,
        suffix=suffix,
    )
    logger.debug("CLI overrides: %s", overrides)
    return ConfigStore(extra_config_files=extra, no_config=no_config, overrides=overrides)


def resolve_targets(
    paths: Sequence[str],
    *,
    store: ConfigStore,
    workspace: Workspace,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str],
) -> ResolvedFiles:
    """Resolve positional paths into the header files to process.

    Raises:
        GuardmarkUsageError: If no paths were given.
    """
    if not paths:
        raise GuardmarkUsageError("No input paths given.")

    def is_header(path: Path) -> bool:
        return store.resolve(path).is_header(path)

    return resolve_file_list(
        paths,
        is_header=is_header,
        workspace_root=workspace.root,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )


def run_for_files(
    files: Iterable[Path],
    *,
    workspace: Workspace,
    operation: Callable[[TextDocument], GuardOutcome],
) -> list[FileResult]:
    """Open each file and run ``operation`` on it.

    Catches common filesystem/encoding errors so command bodies don't duplicate
    try/except. Every file is processed independently: an unexpected error from
    ``operation`` is logged and recorded as a ``FAILED`` result for that file.

    Exit code mapping:
        FILE_NOT_FOUND: FileNotFoundError / IsADirectoryError
        IO_ERROR: any other OSError, UnicodeDecodeError
    """
    console: ConsoleLike = get_console_safely()
    results: list[FileResult] = []
    for path in files:
        try:
            document: TextDocument = workspace.open_document(path)
        except (FileNotFoundError, IsADirectoryError) as e:
            logger.error("Cannot open %s: %s", path, e)
            console.error(f"❌ Cannot open {path}: {e}")
            results.append(
                FileResult(path, GuardOutcome.FAILED, error_code=ExitCode.FILE_NOT_FOUND)
            )
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read %s: %s", path, e)
            console.error(f"🧵 Cannot read {path}: {e}")
            results.append(FileResult(path, GuardOutcome.FAILED, error_code=ExitCode.IO_ERROR))
            continue

        original: str = document.get_text()
        try:
            outcome: GuardOutcome = operation(document)
        except Exception as e:  # noqa: BLE001
            logger.error("Guard operation failed for %s: %s", path, e)
            console.error(f"❌ Failed to process {path}: {e}")
            results.append(FileResult(path, GuardOutcome.FAILED, original_text=original))
            continue
        results.append(FileResult(path, outcome, original_text=original, document=document))
    return results


def _color_enabled() -> bool:
    ctx: click.Context | None = click.get_current_context(silent=True)
    return bool(ctx is not None and ctx.color)


def _display_path(path: Path, workspace: Workspace) -> str:
    return workspace.relpath(path) or str(path)


def render_results(
    results: Sequence[FileResult],
    *,
    workspace: Workspace,
    command_name: str,
    apply_changes: bool,
    diff: bool,
    verbosity: int,
) -> None:
    """Print per-file guidance and (optionally) diffs."""
    console: ConsoleLike = get_console_safely()
    for r in results:
        shown: str = _display_path(r.path, workspace)
        if r.outcome is GuardOutcome.FAILED and r.error_code is None:
            console.error(f"❌ Could not edit include guard in '{shown}'")
        elif r.changed and verbosity >= 0:
            verb: str = _PAST_TENSE.get(r.outcome, "Changed")
            if apply_changes:
                console.print(console.styled(f"✅ {verb} include guard in '{shown}'", fg="green"))
            else:
                console.print(
                    f"🛠️  '{shown}' would change; "
                    f"rerun `guardmark {command_name}` with --apply."
                )
        elif verbosity > 0:
            console.print(f"✔️  {shown}: {r.outcome.value}")

        if diff and r.changed and r.document is not None and r.original_text is not None:
            patch: str | None = unified_diff(
                r.original_text, r.document.get_text(), name=shown, newline=r.document.eol
            )
            if patch is not None:
                console.print(render_patch(patch) if _color_enabled() else patch, nl=False)


def write_results(results: Sequence[FileResult], *, workspace: Workspace) -> tuple[int, int]:
    """Write changed documents back to disk.

    Returns:
        tuple[int, int]: ``(written, failed)`` counts. Failures are logged.
    """
    written = failed = 0
    for r in results:
        if not r.changed or r.document is None:
            continue
        try:
            workspace.save_document(r.document)
            written += 1
        except OSError as e:
            logger.error("Failed to write %s: %s", r.path, e)
            failed += 1
    return written, failed


def finish(
    ctx: click.Context,
    results: Sequence[FileResult],
    *,
    workspace: Workspace,
    apply_changes: bool,
    extra_error: ExitCode | None = None,
) -> None:
    """Write changes (with ``--apply``) and exit with the matching code.

    Raises:
        GuardmarkIOError: If one or more files could not be written.
    """
    console: ConsoleLike = get_console_safely()
    if apply_changes:
        written, failed = write_results(results, workspace=workspace)
        if get_effective_verbosity(ctx) >= 0:
            msg: str = (
                f"\n✅ Updated {written} file(s)." if written else "\n✅ No changes to apply."
            )
            console.print(console.styled(msg, fg="green", bold=True))
        if failed:
            raise GuardmarkIOError(f"Failed to write {failed} file(s). See log for details.")

    error_code: ExitCode | None = extra_error
    for r in results:
        error_code = error_code or r.error_code
    if error_code is not None:
        ctx.exit(error_code)

    if any(r.outcome is GuardOutcome.FAILED for r in results):
        ctx.exit(ExitCode.FAILURE)

    if not apply_changes and any(r.changed for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)


def run_guard_command(
    ctx: click.Context,
    *,
    command_name: str,
    operation: Callable[[GuardEditor], Callable[[TextDocument], GuardOutcome]],
    paths: Sequence[str],
    workspace: str | None,
    config_paths: Iterable[str],
    no_config: bool,
    include_patterns: Iterable[str],
    exclude_patterns: Iterable[str],
    macro_type: MacroType | None,
    comment_style: CommentStyle | None,
    prefix: str | None,
    suffix: str | None,
    apply_changes: bool,
    diff: bool,
) -> None:
    """Shared body of the ``insert``, ``remove`` and ``update`` commands.

    Args:
        ctx (click.Context): Current Click context.
        command_name (str): Name used in user guidance.
        operation (Callable): Selects the editor method to run on each document.
        paths (Sequence[str]): Positional paths, directories or globs.
        workspace (str | None): Workspace root (CWD when None).
        config_paths (Iterable[str]): Extra config files.
        no_config (bool): Skip user/project config discovery.
        include_patterns (Iterable[str]): Include filters.
        exclude_patterns (Iterable[str]): Exclude filters.
        macro_type (MacroType | None): Macro type override.
        comment_style (CommentStyle | None): Comment style override.
        prefix (str | None): Prefix override.
        suffix (str | None): Suffix override.
        apply_changes (bool): Write changes instead of a dry run.
        diff (bool): Print unified diffs.
    """
    console: ConsoleLike = get_console_safely()
    ws: Workspace = build_workspace(workspace)
    store: ConfigStore = build_config_store(
        config_paths=config_paths,
        no_config=no_config,
        macro_type=macro_type,
        comment_style=comment_style,
        prefix=prefix,
        suffix=suffix,
    )
    resolved: ResolvedFiles = resolve_targets(
        paths,
        store=store,
        workspace=ws,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
    )
    missing_code: ExitCode | None = ExitCode.FILE_NOT_FOUND if resolved.missing else None

    if not resolved.files:
        console.print(console.styled("\nℹ️  No files to process.\n", fg="blue"))
        if missing_code is not None:
            ctx.exit(missing_code)
        return

    editor = GuardEditor(store)
    results: list[FileResult] = run_for_files(
        resolved.files, workspace=ws, operation=operation(editor)
    )
    render_results(
        results,
        workspace=ws,
        command_name=command_name,
        apply_changes=apply_changes,
        diff=diff,
        verbosity=get_effective_verbosity(ctx),
    )
    finish(ctx, results, workspace=ws, apply_changes=apply_changes, extra_error=missing_code)


def emit_toml_block(
    *,
    console: ConsoleLike,
    title: str,
    toml_text: str,
    verbosity_level: int,
) -> None:
    """Emit a TOML snippet with optional banner and BEGIN/END markers.

    Args:
        console (ConsoleLike): Console instance for printing styled output.
        title (str): Title line shown above the block when verbosity > 0.
        toml_text (str): The TOML content to render.
        verbosity_level (int): Effective verbosity; 0 disables banners.
    """
    if verbosity_level > 0:
        console.print(console.styled(title, bold=True, underline=True))
        console.print(console.styled(TOML_BLOCK_START, fg="cyan", dim=True))
    console.print(console.styled(toml_text.rstrip("\n"), fg="cyan"))
    if verbosity_level > 0:
        console.print(console.styled(TOML_BLOCK_END, fg="cyan", dim=True))
