# topmark:header:start
#
#   project      : GuardMark
#   file         : __init__.py
#   file_relpath : src/guardmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark configuration package.

Re-exports the configuration model, its enums and the per-file `ConfigStore`.
"""

from __future__ import annotations

from guardmark.config.model import Config, MutableConfig
from guardmark.config.store import ConfigStore
from guardmark.config.types import CommentStyle, MacroType, SubfolderPrefix

__all__ = [
    "CommentStyle",
    "Config",
    "ConfigStore",
    "MacroType",
    "MutableConfig",
    "SubfolderPrefix",
]
