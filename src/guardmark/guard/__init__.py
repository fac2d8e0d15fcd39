# topmark:header:start
#
#   project      : GuardMark
#   file         : __init__.py
#   file_relpath : src/guardmark/guard/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Include guard engine: macro names, comment skipping, guard detection and editing."""

from __future__ import annotations

from guardmark.guard.directives import Directives, build_directives
from guardmark.guard.editor import GuardEditor, GuardOutcome
from guardmark.guard.locator import GuardTriple, find_existing_guard
from guardmark.guard.macro import (
    FileIdentity,
    RandomSource,
    UuidRandomSource,
    generate_macro_name,
)
from guardmark.guard.pragma import find_pragma_once, pragma_once_edit
from guardmark.guard.scanner import find_insertion_line

__all__ = [
    "Directives",
    "FileIdentity",
    "GuardEditor",
    "GuardOutcome",
    "GuardTriple",
    "RandomSource",
    "UuidRandomSource",
    "build_directives",
    "find_existing_guard",
    "find_insertion_line",
    "find_pragma_once",
    "generate_macro_name",
    "pragma_once_edit",
]
