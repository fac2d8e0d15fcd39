# topmark:header:start
#
#   project      : GuardMark
#   file         : keys.py
#   file_relpath : src/guardmark/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for GuardMark configuration.

This module defines the authoritative string constants used when reading and
writing GuardMark configuration from TOML sources (``guardmark.toml`` and
``[tool.guardmark]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by GuardMark configuration.

    The ordering of constants mirrors the output of ``guardmark config init``.
    """

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [macro]
    SECTION_MACRO: Final[str] = "macro"

    KEY_TYPE: Final[str] = "type"
    KEY_PREFIX: Final[str] = "prefix"
    KEY_SUFFIX: Final[str] = "suffix"
    KEY_PREVENT_LEADING_DIGIT: Final[str] = "prevent_leading_digit"
    KEY_SHORTEN_UNDERSCORES: Final[str] = "shorten_repeated_underscores"
    KEY_REMOVE_EXTENSION: Final[str] = "remove_file_extension"
    KEY_PATH_DEPTH: Final[str] = "path_depth"
    KEY_PATH_SKIP: Final[str] = "path_skip"
    KEY_SNAKE_CASE: Final[str] = "convert_path_to_snake_case"
    KEY_SUBFOLDER_PREFIXES: Final[str] = "subfolder_prefixes"

    # Keys of one [[macro.subfolder_prefixes]] entry
    KEY_FOLDER_PATH: Final[str] = "folder_path"

    # [layout]
    SECTION_LAYOUT: Final[str] = "layout"

    KEY_COMMENT_STYLE: Final[str] = "comment_style"
    KEY_SPACES_AFTER_ENDIF: Final[str] = "spaces_after_endif"
    KEY_SKIP_LEADING_COMMENTS: Final[str] = "skip_leading_comments"
    KEY_INSERT_BLANK_LINE: Final[str] = "insert_blank_line_before_guard"
    KEY_REMOVE_PRAGMA_ONCE: Final[str] = "remove_pragma_once"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_HEADER_EXTENSIONS: Final[str] = "header_extensions"

    # [automation]
    SECTION_AUTOMATION: Final[str] = "automation"

    KEY_INSERT_ON_CREATE: Final[str] = "insert_on_create"
    KEY_UPDATE_ON_RENAME: Final[str] = "update_on_rename"
    KEY_PATH_ALLOWLIST: Final[str] = "path_allowlist"
    KEY_PATH_BLOCKLIST: Final[str] = "path_blocklist"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_ROOT,
            SECTION_MACRO,
            SECTION_LAYOUT,
            SECTION_FILES,
            SECTION_AUTOMATION,
        }
    )

    ALLOWED_SECTION_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_MACRO: frozenset(
            {
                KEY_TYPE,
                KEY_PREFIX,
                KEY_SUFFIX,
                KEY_PREVENT_LEADING_DIGIT,
                KEY_SHORTEN_UNDERSCORES,
                KEY_REMOVE_EXTENSION,
                KEY_PATH_DEPTH,
                KEY_PATH_SKIP,
                KEY_SNAKE_CASE,
                KEY_SUBFOLDER_PREFIXES,
            }
        ),
        SECTION_LAYOUT: frozenset(
            {
                KEY_COMMENT_STYLE,
                KEY_SPACES_AFTER_ENDIF,
                KEY_SKIP_LEADING_COMMENTS,
                KEY_INSERT_BLANK_LINE,
                KEY_REMOVE_PRAGMA_ONCE,
            }
        ),
        SECTION_FILES: frozenset({KEY_HEADER_EXTENSIONS}),
        SECTION_AUTOMATION: frozenset(
            {
                KEY_INSERT_ON_CREATE,
                KEY_UPDATE_ON_RENAME,
                KEY_PATH_ALLOWLIST,
                KEY_PATH_BLOCKLIST,
            }
        ),
    }
