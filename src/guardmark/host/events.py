# topmark:header:start
#
#   project      : GuardMark
#   file         : events.py
#   file_relpath : src/guardmark/host/events.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem events and the automatic guard maintenance reacting to them.

The module is split in three parts:

- `EventSource`: a minimal observer registry; hosts (CLI hooks, watchers, editor
  bindings) call `EventSource.emit` with batches of `FileEvent` values.
- `plan_reaction`: the pure policy deciding what, if anything, should happen to a
  file for one event given its configuration.
- `GuardAutomation`: the subscriber that opens each affected document, runs the
  planned `GuardEditor` operation and optionally saves the result. Every file is
  processed independently; a failure for one file is logged and recorded without
  aborting the rest of the batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from guardmark.config.logging import get_logger
from guardmark.guard.editor import GuardOutcome
from guardmark.utils.file import path_has_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.model import Config
    from guardmark.config.store import ConfigStore
    from guardmark.guard.editor import GuardEditor
    from guardmark.host.document import TextDocument
    from guardmark.host.workspace import Workspace

logger: GuardmarkLogger = get_logger(__name__)


class FileEventKind(Enum):
    """Kinds of filesystem notifications."""

    CREATED = "created"
    RENAMED = "renamed"
    OPENED = "opened"


@dataclass(frozen=True)
class FileEvent:
    """A filesystem notification for one file.

    Attributes:
        kind (FileEventKind): What happened.
        path (Path): The file (the new path for renames).
        old_path (Path | None): Previous path for renames.
    """

    kind: FileEventKind
    path: Path
    old_path: Path | None = None

    @classmethod
    def created(cls, path: Path) -> FileEvent:
        """A new file was created at ``path``."""
        return cls(FileEventKind.CREATED, path)

    @classmethod
    def renamed(cls, old_path: Path, new_path: Path) -> FileEvent:
        """``old_path`` was renamed (or moved) to ``new_path``."""
        return cls(FileEventKind.RENAMED, new_path, old_path)

    @classmethod
    def opened(cls, path: Path) -> FileEvent:
        """``path`` was opened."""
        return cls(FileEventKind.OPENED, path)


EventCallback = Callable[["Sequence[FileEvent]"], None]


class EventSource:
    """Observer registry for batches of filesystem events."""

    def __init__(self) -> None:
        self._subscribers: list[EventCallback] = []

    def subscribe(self, callback: EventCallback) -> Callable[[], None]:
        """Register ``callback``; return a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, events: Sequence[FileEvent]) -> None:
        """Deliver ``events`` to every subscriber, in registration order."""
        logger.debug(
            "Emitting %d event(s) to %d subscriber(s)", len(events), len(self._subscribers)
        )
        for callback in list(self._subscribers):
            callback(events)


# ------------------ Policy ------------------


class GuardAction(Enum):
    """Guard operation requested by the automation policy."""

    INSERT = "insert"
    UPDATE = "update"


@dataclass(frozen=True)
class Reaction:
    """Planned reaction to a file event."""

    action: GuardAction
    insert_when_not_found: bool = True


def passes_path_lists(relpath: str, allowlist: Sequence[str], blocklist: Sequence[str]) -> bool:
    """Return True if ``relpath`` is allowed and not blocked.

    An empty allowlist allows every path; a blocklist match always wins.
    """
    if any(path_has_prefix(relpath, blocked) for blocked in blocklist):
        return False
    return not allowlist or any(path_has_prefix(relpath, allowed) for allowed in allowlist)


def plan_reaction(event: FileEvent, config: Config, relpath: str | None) -> Reaction | None:
    """Decide how to react to ``event``.

    Args:
        event (FileEvent): The filesystem notification.
        config (Config): Configuration resolved for ``event.path``.
        relpath (str | None): Workspace-relative POSIX path of ``event.path``, or None
            when the file is outside the workspace.

    Returns:
        Reaction | None: The operation to run, or None when the event is ignored.
    """
    if not config.is_header(event.path):
        return None

    if event.kind is FileEventKind.CREATED:
        return Reaction(GuardAction.INSERT) if config.auto_insert_on_create else None

    if not config.auto_update_on_rename:
        return None
    if not config.macro_type.uses_path:
        # GUID names do not depend on the location.
        return None
    if relpath is None:
        return None
    if not passes_path_lists(
        relpath, config.auto_update_path_allowlist, config.auto_update_path_blocklist
    ):
        logger.debug("%s filtered out by the automatic update path lists", relpath)
        return None

    return Reaction(
        GuardAction.UPDATE, insert_when_not_found=event.kind is FileEventKind.RENAMED
    )


# ------------------ Dispatch ------------------


@dataclass
class EventResult:
    """Outcome of processing one event.

    Attributes:
        event (FileEvent): The processed event.
        reaction (Reaction | None): The planned reaction (None when ignored).
        outcome (GuardOutcome): Result of the guard operation.
        document (TextDocument | None): The edited document, if it was opened.
        original_text (str | None): Document text before the operation.
        error (str | None): Error message when processing failed.
    """

    event: FileEvent
    reaction: Reaction | None = None
    outcome: GuardOutcome = GuardOutcome.SKIPPED
    document: TextDocument | None = None
    original_text: str | None = None
    error: str | None = None

    @property
    def changed(self) -> bool:
        """True if the document text differs from the original."""
        return (
            self.document is not None
            and self.original_text is not None
            and self.document.get_text() != self.original_text
        )


class GuardAutomation:
    """React to filesystem events by maintaining include guards.

    Args:
        workspace (Workspace): Workspace files are opened from.
        editor (GuardEditor): Performs the guard operations.
        config_store (ConfigStore): Resolves the per-file configuration.
        save (bool): Write changed documents back to disk.
    """

    def __init__(
        self,
        workspace: Workspace,
        editor: GuardEditor,
        config_store: ConfigStore,
        *,
        save: bool = True,
    ) -> None:
        self.workspace = workspace
        self.editor = editor
        self.config_store = config_store
        self.save = save
        self.results: list[EventResult] = []

    def attach(self, source: EventSource) -> Callable[[], None]:
        """Subscribe to ``source``; return the unsubscribe function."""
        return source.subscribe(self.handle)

    def handle(self, events: Sequence[FileEvent]) -> list[EventResult]:
        """Process a batch of events, one file at a time.

        Returns:
            list[EventResult]: One result per event, in order. Results are also
                appended to `results`.
        """
        batch: list[EventResult] = [self._handle_one(event) for event in events]
        self.results.extend(batch)
        return batch

    def _handle_one(self, event: FileEvent) -> EventResult:
        result = EventResult(event=event)
        try:
            config: Config = self.config_store.resolve(event.path)
            result.reaction = plan_reaction(event, config, self.workspace.relpath(event.path))
            if result.reaction is None:
                logger.debug("Ignoring %s event for %s", event.kind.value, event.path)
                return result

            document: TextDocument = self.workspace.open_document(event.path)
            result.document = document
            result.original_text = document.get_text()
            if result.reaction.action is GuardAction.INSERT:
                result.outcome = self.editor.insert(document)
            else:
                result.outcome = self.editor.update(
                    document, insert_when_not_found=result.reaction.insert_when_not_found
                )

            if self.save and result.changed:
                self.workspace.save_document(document)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to process %s event for %s: %s", event.kind.value, event.path, exc)
            result.outcome = GuardOutcome.FAILED
            result.error = str(exc)
        return result
