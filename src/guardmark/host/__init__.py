# topmark:header:start
#
#   project      : GuardMark
#   file         : __init__.py
#   file_relpath : src/guardmark/host/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Host layer: documents, the workspace and filesystem event automation."""

from __future__ import annotations

from guardmark.host.document import Position, Range, TextDocument, TextEdit
from guardmark.host.events import (
    EventResult,
    EventSource,
    FileEvent,
    FileEventKind,
    GuardAction,
    GuardAutomation,
    Reaction,
    plan_reaction,
)
from guardmark.host.workspace import Workspace

__all__ = [
    "EventResult",
    "EventSource",
    "FileEvent",
    "FileEventKind",
    "GuardAction",
    "GuardAutomation",
    "Position",
    "Range",
    "Reaction",
    "TextDocument",
    "TextEdit",
    "Workspace",
    "plan_reaction",
]
