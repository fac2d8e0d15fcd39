# topmark:header:start
#
#   project      : GuardMark
#   file         : document.py
#   file_relpath : src/guardmark/host/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory text documents and atomic edit batches.

This module models the small editing surface the guard engine needs:

- `Position` / `Range`: zero-based line/character coordinates. Positions past the
  end of a line or of the document are clamped, like an editor buffer does, so
  ``Position(line_count, 0)`` addresses the end of the text.
- `TextEdit`: an insert, delete or replace expressed in the coordinates of the
  document *before* the batch is applied.
- `TextDocument`: the document accessor (``get_text``, ``line_count``,
  ``line_at``, ``position_at``) and the edit applier (``apply_edits``).

A batch is validated as a whole before anything changes; overlapping edits
reject the entire batch. Edits starting at the same offset are applied in batch
order, so several inserts at one position keep their relative order.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from guardmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int = 0

    def translate(self, line_delta: int = 0) -> Position:
        """Return this position moved by ``line_delta`` lines (never above line 0)."""
        return Position(max(0, self.line + line_delta), self.character)


@dataclass(frozen=True)
class Range:
    """Half-open range between two positions."""

    start: Position
    end: Position

    @classmethod
    def whole_line(cls, line: int) -> Range:
        """Range covering line ``line`` including its line ending."""
        return cls(Position(line, 0), Position(line + 1, 0))


@dataclass(frozen=True)
class TextEdit:
    """A single text replacement; inserts and deletes are special cases."""

    range: Range
    new_text: str

    @classmethod
    def insert(cls, position: Position, text: str) -> TextEdit:
        """Insert ``text`` at ``position``."""
        return cls(Range(position, position), text)

    @classmethod
    def delete(cls, range_: Range) -> TextEdit:
        """Delete the text covered by ``range_``."""
        return cls(range_, "")

    @classmethod
    def replace(cls, range_: Range, text: str) -> TextEdit:
        """Replace the text covered by ``range_`` with ``text``."""
        return cls(range_, text)


class DocumentLike(Protocol):
    """Read access to a document snapshot."""

    def get_text(self) -> str:
        """Return the full document text."""
        ...

    @property
    def line_count(self) -> int:
        """Number of lines (an empty document has one empty line)."""
        ...

    def line_at(self, line: int) -> str:
        """Return the text of ``line`` without its line ending."""
        ...

    def position_at(self, offset: int) -> Position:
        """Convert a character offset into a position."""
        ...


class EditApplier(Protocol):
    """Applies a batch of edits as one atomic unit."""

    def apply_edits(self, edits: Sequence[TextEdit]) -> bool:
        """Apply ``edits``; return False (and change nothing) on failure."""
        ...


def detect_newline(text: str) -> str:
    r"""Return the line ending of the first line of ``text``: ``\r\n`` or ``\n``.

    Lines end at ``\n`` only. A carriage return not followed by ``\n`` is line
    content, so text without any ``\n`` reports ``\n``.
    """
    index: int = text.find("\n")
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    return "\n"


class TextDocument:
    """Mutable in-memory document with editor-like coordinates.

    Args:
        text (str): Initial content.
        path (Path | None): File backing the document (None for untitled buffers).
        workspace_root (Path | None): Workspace folder containing the file, if known.
        selection (Position | None): Caret position, restored by guard insertion.

    Attributes:
        version (int): Incremented on every successfully applied batch.
    """

    def __init__(
        self,
        text: str = "",
        *,
        path: Path | None = None,
        workspace_root: Path | None = None,
        selection: Position | None = None,
    ) -> None:
        self.path = path
        self.workspace_root = workspace_root
        self.selection = selection
        self.version = 0
        self._set_text(text)

    def __repr__(self) -> str:
        return f"TextDocument(path={self.path!s}, lines={self.line_count}, version={self.version})"

    def _set_text(self, text: str) -> None:
        self._text = text
        # Offsets where each line starts; a line ends at the next "\n".
        self._line_starts: list[int] = [0]
        self._line_starts.extend(i + 1 for i, ch in enumerate(text) if ch == "\n")

    # --- Document accessor ---

    def get_text(self) -> str:
        """Return the full document text."""
        return self._text

    @property
    def line_count(self) -> int:
        """Number of lines; a trailing newline opens a final empty line."""
        return len(self._line_starts)

    @property
    def eol(self) -> str:
        """Newline sequence used by this document."""
        return detect_newline(self._text)

    def line_at(self, line: int) -> str:
        """Return the text of ``line`` without its line ending.

        Raises:
            IndexError: If ``line`` is outside ``0 .. line_count - 1``.
        """
        if not 0 <= line < self.line_count:
            raise IndexError(f"Line {line} out of range (0..{self.line_count - 1})")
        start: int = self._line_starts[line]
        end: int = (
            self._line_starts[line + 1] - 1 if line + 1 < self.line_count else len(self._text)
        )
        return self._text[start:end].rstrip("\r")

    def position_at(self, offset: int) -> Position:
        """Convert a character offset into a position (clamped to the text)."""
        offset = max(0, min(offset, len(self._text)))
        line: int = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def offset_at(self, position: Position) -> int:
        """Convert a position into a character offset (clamped to the text)."""
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return len(self._text)
        start: int = self._line_starts[position.line]
        line_len: int = len(self.line_at(position.line))
        return start + max(0, min(position.character, line_len))

    # --- Edit applier ---

    def apply_edits(self, edits: Sequence[TextEdit]) -> bool:
        """Apply a batch of edits atomically.

        All ranges refer to the text before the batch. The batch is rejected as a
        whole when two edits overlap.

        Args:
            edits (Sequence[TextEdit]): Edits to apply.

        Returns:
            bool: True if the batch was applied, False if it was rejected.
        """
        if not edits:
            return True

        resolved: list[tuple[int, int, int, str]] = []
        for index, edit in enumerate(edits):
            start: int = self.offset_at(edit.range.start)
            end: int = self.offset_at(edit.range.end)
            if end < start:
                logger.error("Rejecting edit batch: inverted range %s", edit.range)
                return False
            resolved.append((start, end, index, edit.new_text))

        resolved.sort(key=lambda item: (item[0], item[1], item[2]))

        parts: list[str] = []
        cursor: int = 0
        for start, end, _index, new_text in resolved:
            if start < cursor:
                logger.error(
                    "Rejecting edit batch for %s: overlapping edits at offset %d", self.path, start
                )
                return False
            parts.append(self._text[cursor:start])
            parts.append(new_text)
            cursor = end
        parts.append(self._text[cursor:])

        self._set_text("".join(parts))
        self.version += 1
        logger.trace("Applied %d edit(s) to %s (version %d)", len(edits), self.path, self.version)
        return True
