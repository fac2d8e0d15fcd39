# topmark:header:start
#
#   project      : GuardMark
#   file         : workspace.py
#   file_relpath : src/guardmark/host/workspace.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem workspace: the root folder documents are opened from and saved to.

Documents are read as UTF-8 with newline translation disabled, so CRLF files keep
their line endings through an edit/save cycle.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from guardmark.config.logging import get_logger
from guardmark.guard.macro import FileIdentity
from guardmark.host.document import TextDocument
from guardmark.utils.file import compute_relpath

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)


class Workspace:
    """A workspace folder.

    Args:
        root (Path | None): Workspace root; the current directory when None.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root: Path = (root or Path.cwd()).resolve()

    def __repr__(self) -> str:
        return f"Workspace(root={self.root!s})"

    def contains(self, path: Path) -> bool:
        """Return True if ``path`` lies inside the workspace root."""
        return path.resolve().is_relative_to(self.root)

    def relpath(self, path: Path) -> str | None:
        """Return the POSIX path of ``path`` relative to the root, or None if outside."""
        if not self.contains(path):
            return None
        return compute_relpath(path, self.root).as_posix()

    def identity_for(self, path: Path) -> FileIdentity:
        """Return the `FileIdentity` of ``path``; the root is unknown for outside files."""
        resolved: Path = path.resolve()
        if not self.contains(resolved):
            logger.warning("%s is outside workspace %s", resolved, self.root)
            return FileIdentity(path=resolved, workspace_root=None)
        return FileIdentity(path=resolved, workspace_root=self.root)

    def open_document(self, path: Path) -> TextDocument:
        """Read ``path`` into a `TextDocument`.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        identity: FileIdentity = self.identity_for(path)
        assert identity.path is not None
        with identity.path.open("r", encoding="utf-8", newline="") as fh:
            text: str = fh.read()
        logger.debug("Opened %s (%d chars)", identity.path, len(text))
        return TextDocument(text, path=identity.path, workspace_root=identity.workspace_root)

    def save_document(self, document: TextDocument) -> None:
        """Write ``document`` back to its file.

        Raises:
            ValueError: If the document has no backing path.
            OSError: If the file cannot be written.
        """
        if document.path is None:
            raise ValueError("Cannot save an untitled document")
        with document.path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(document.get_text())
        logger.debug("Saved %s", document.path)
