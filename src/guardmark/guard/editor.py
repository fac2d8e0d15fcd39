# topmark:header:start
#
#   project      : GuardMark
#   file         : editor.py
#   file_relpath : src/guardmark/guard/editor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Insert, remove and update include guards in a document.

Each operation resolves the configuration for the document, reads its text once
and computes every position against that snapshot. The resulting edits (the
optional ``#pragma once`` deletion included) are handed to the document as a
single batch, so an operation either fully applies or leaves the document as it
was.

Insert layout::

    <leading comment block>
    <blank line>            # only below a comment block, if enabled
    #ifndef MACRO
    #define MACRO
    <original content>
    <blank line>
    <blank line>
    #endif /* MACRO */
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from guardmark.config.logging import get_logger
from guardmark.guard.directives import Directives, build_directives
from guardmark.guard.locator import GuardTriple, find_existing_guard
from guardmark.guard.macro import FileIdentity, RandomSource, UuidRandomSource, generate_macro_name
from guardmark.guard.pragma import find_pragma_once
from guardmark.guard.scanner import find_insertion_line
from guardmark.host.document import Position, Range, TextDocument, TextEdit, detect_newline

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.model import Config
    from guardmark.config.store import ConfigStore

logger: GuardmarkLogger = get_logger(__name__)


class GuardOutcome(Enum):
    """Result of a guard editing operation."""

    INSERTED = "inserted"
    REMOVED = "removed"
    UPDATED = "updated"
    NOT_FOUND = "not found"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def changed(self) -> bool:
        """True if the operation modified the document."""
        return self in (GuardOutcome.INSERTED, GuardOutcome.REMOVED, GuardOutcome.UPDATED)


@dataclass(frozen=True)
class _Snapshot:
    """Text and configuration read once at the start of an operation."""

    config: Config
    text: str
    eol: str
    pragma_line: int | None

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def text_without_pragma(self) -> str:
        """The text as it reads once the ``#pragma once`` line is gone."""
        if self.pragma_line is None:
            return self.text
        lines: list[str] = self.lines
        if self.pragma_line == len(lines) - 1:
            # Last line: only its content goes, the preceding line break stays.
            lines[-1] = ""
        else:
            del lines[self.pragma_line]
        return "\n".join(lines)


class GuardEditor:
    """Apply include guard operations to documents.

    Args:
        config_store (ConfigStore): Per-file configuration capability.
        random_source (RandomSource | None): Source of random bits for GUID macros;
            defaults to `UuidRandomSource`.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        random_source: RandomSource | None = None,
    ) -> None:
        self.config_store = config_store
        self.random_source: RandomSource = random_source or UuidRandomSource()

    # --- helpers ---

    def _snapshot(self, document: TextDocument, *, with_pragma: bool) -> _Snapshot:
        config: Config = self.config_store.resolve(document.path)
        text: str = document.get_text()
        pragma_line: int | None = None
        if with_pragma and config.remove_pragma_once:
            pragma_line = find_pragma_once(text)
        return _Snapshot(
            config=config, text=text, eol=detect_newline(text), pragma_line=pragma_line
        )

    def _directives(self, document: TextDocument, snap: _Snapshot) -> Directives:
        identity = FileIdentity(path=document.path, workspace_root=document.workspace_root)
        macro: str = generate_macro_name(snap.config, identity, self.random_source)
        return build_directives(
            macro, snap.config.comment_style, snap.config.spaces_after_endif, snap.eol
        )

    @staticmethod
    def _pragma_edits(snap: _Snapshot) -> list[TextEdit]:
        if snap.pragma_line is None:
            return []
        logger.debug("Removing #pragma once at line %d", snap.pragma_line)
        return [TextEdit.delete(Range.whole_line(snap.pragma_line))]

    @staticmethod
    def _apply(
        document: TextDocument, edits: list[TextEdit], outcome: GuardOutcome
    ) -> GuardOutcome:
        if not document.apply_edits(edits):
            logger.error("Failed to apply %s edits to %s", outcome.value, document.path)
            return GuardOutcome.FAILED
        logger.info("Include guard %s: %s", outcome.value, document.path)
        return outcome

    def _insert_edits(
        self, document: TextDocument, snap: _Snapshot
    ) -> tuple[list[TextEdit], int, int]:
        """Build the insert batch.

        Returns:
            tuple[list[TextEdit], int, int]: The edits, the insertion line and the number
                of lines added there.
        """
        config: Config = snap.config
        remaining: str = snap.text_without_pragma()
        directives: Directives = self._directives(document, snap)
        eol: str = snap.eol
        ifndef, define, endif = directives.terminated()

        # Positions are computed on the text without the pragma line and mapped back.
        insert_line: int = find_insertion_line(remaining) if config.skip_leading_comments else 0
        target_line: int = insert_line
        if snap.pragma_line is not None and insert_line > snap.pragma_line:
            target_line += 1

        edits: list[TextEdit] = self._pragma_edits(snap)
        end = Position(len(snap.lines), 0)

        if remaining == "":
            edits.append(TextEdit.insert(Position(0, 0), ifndef + define + endif))
            return edits, 0, 3

        if remaining.split("\n")[-1] != "":
            edits.append(TextEdit.insert(end, eol))

        head: str = ifndef + define
        added: int = 2
        if insert_line != 0 and config.insert_blank_line_before_guard:
            head = eol + head
            added += 1
        edits.append(TextEdit.insert(Position(target_line, 0), head))
        edits.append(TextEdit.insert(end, eol + eol + endif))
        logger.debug("Inserting guard %s at line %d", directives.ifndef, target_line)
        return edits, target_line, added

    @staticmethod
    def _restore_selection(
        document: TextDocument,
        snap: _Snapshot,
        original: Position | None,
        insert_line: int,
        added: int,
    ) -> None:
        if original is None:
            return
        delta: int = added if original.line >= insert_line else 0
        if snap.pragma_line is not None and snap.pragma_line < original.line:
            delta -= 1
        document.selection = original.translate(delta)

    # --- operations ---

    def insert(self, document: TextDocument | None) -> GuardOutcome:
        """Insert a new include guard.

        The guard goes below the leading comment block (if configured) and the
        ``#endif`` is appended at the end of the document after two blank lines. The
        caret keeps its logical position.

        Args:
            document (TextDocument | None): Target document; None is a no-op.

        Returns:
            GuardOutcome: ``INSERTED``, ``SKIPPED`` or ``FAILED``.
        """
        if document is None:
            return GuardOutcome.SKIPPED
        snap: _Snapshot = self._snapshot(document, with_pragma=True)
        return self._insert(document, snap)

    def _insert(self, document: TextDocument, snap: _Snapshot) -> GuardOutcome:
        selection: Position | None = document.selection
        edits, insert_line, added = self._insert_edits(document, snap)
        outcome: GuardOutcome = self._apply(document, edits, GuardOutcome.INSERTED)
        if outcome is GuardOutcome.INSERTED:
            self._restore_selection(document, snap, selection, insert_line, added)
        return outcome

    def remove(self, document: TextDocument | None) -> GuardOutcome:
        """Remove the existing include guard.

        The three directive lines are deleted including their line endings. A
        ``#pragma once`` line is deleted as well when configured, even if no guard
        is present.

        Args:
            document (TextDocument | None): Target document; None is a no-op.

        Returns:
            GuardOutcome: ``REMOVED``, ``NOT_FOUND``, ``SKIPPED`` or ``FAILED``.
        """
        if document is None:
            return GuardOutcome.SKIPPED
        snap: _Snapshot = self._snapshot(document, with_pragma=True)
        edits: list[TextEdit] = self._pragma_edits(snap)
        triple: GuardTriple | None = find_existing_guard(snap.text)

        if triple is None:
            if edits and self._apply(document, edits, GuardOutcome.REMOVED) is GuardOutcome.FAILED:
                return GuardOutcome.FAILED
            logger.info("No include guard to remove in %s", document.path)
            return GuardOutcome.NOT_FOUND

        edits.extend(TextEdit.delete(Range.whole_line(line)) for line in triple.lines)
        return self._apply(document, edits, GuardOutcome.REMOVED)

    def update(
        self, document: TextDocument | None, *, insert_when_not_found: bool = True
    ) -> GuardOutcome:
        """Replace the existing include guard with freshly generated directives.

        Each directive line is replaced in place, so the line count and every other
        line stay untouched.

        Args:
            document (TextDocument | None): Target document; None is a no-op.
            insert_when_not_found (bool): Insert a guard when none exists. When False,
                a ``#pragma once`` line is left alone too.

        Returns:
            GuardOutcome: ``UPDATED``, ``INSERTED``, ``NOT_FOUND``, ``SKIPPED`` or
                ``FAILED``.
        """
        if document is None:
            return GuardOutcome.SKIPPED
        snap: _Snapshot = self._snapshot(document, with_pragma=insert_when_not_found)
        triple: GuardTriple | None = find_existing_guard(snap.text)

        if triple is None:
            if insert_when_not_found:
                return self._insert(document, snap)
            logger.debug("No include guard to update in %s", document.path)
            return GuardOutcome.NOT_FOUND

        directives: Directives = self._directives(document, snap)
        lines: list[str] = snap.lines
        edits: list[TextEdit] = self._pragma_edits(snap)
        for line, new_text in zip(triple.lines, directives.as_tuple(), strict=True):
            line_end = Position(line, len(lines[line].rstrip("\r")))
            edits.append(TextEdit.replace(Range(Position(line, 0), line_end), new_text))
        return self._apply(document, edits, GuardOutcome.UPDATED)
