# topmark:header:start
#
#   project      : GuardMark
#   file         : types.py
#   file_relpath : src/guardmark/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and aliases.

This module hosts stable, import-friendly definitions that other config modules
can depend on without risk of circular imports.

Exports:
    - `TomlTable`: plain-Python shape of a parsed TOML table.
    - `MacroType`: how the guard macro name is synthesized.
    - `CommentStyle`: how the trailing ``#endif`` comment is rendered.
    - `SubfolderPrefix`: a (folder, prefix) pair contributing a per-folder prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

TomlTable = dict[str, Any]


class _NamedStrEnum(str, Enum):
    """String enum that can be looked up by member name or display value."""

    @classmethod
    def from_name(cls, key_name: str | None) -> Any:
        """Find a member by its case-insensitive name or its exact display value.

        Args:
            key_name (str | None): Member name (e.g. ``"filename_and_guid"``) or display
                value (e.g. ``"Filename and GUID"``), or None.

        Returns:
            The matching member, or None if the key is None or unmatched.
        """
        if key_name is None:
            return None
        member = cls.__members__.get(key_name.strip().upper())
        if member is not None:
            return member
        for candidate in cls:
            if candidate.value == key_name:
                return candidate
        return None


class MacroType(_NamedStrEnum):
    """Source of the include guard macro name."""

    GUID = "GUID"
    FILENAME = "Filename"
    FILEPATH = "Filepath"
    FILENAME_AND_GUID = "Filename and GUID"

    @property
    def uses_path(self) -> bool:
        """Whether the macro name changes when the file is renamed or moved."""
        return self in (MacroType.FILENAME, MacroType.FILEPATH)


class CommentStyle(_NamedStrEnum):
    """Trailing comment rendered after ``#endif``."""

    BLOCK = "Block"
    LINE = "Line"
    NONE = "None"


@dataclass(frozen=True)
class SubfolderPrefix:
    """Prefix applied to macros of files located below a workspace subfolder.

    Attributes:
        folder_path (str): Folder path relative to the workspace root (POSIX separators).
        prefix (str): Prefix contributed to the macro name of files in that folder.
    """

    folder_path: str
    prefix: str
