# topmark:header:start
#
#   project      : GuardMark
#   file         : io.py
#   file_relpath : src/guardmark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O and typed getters for GuardMark configuration.

This module reads configuration tables from ``guardmark.toml`` and from the
``[tool.guardmark]`` section of ``pyproject.toml`` and renders tables back to
TOML text. Parsing and rendering are done with `tomlkit`.

The getters never raise: a value of the wrong type is logged and reported as
*unset* (``None``) so that one bad key does not invalidate a whole config layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from guardmark.config.logging import get_logger
from guardmark.constants import PYPROJECT_TOML_NAME

if TYPE_CHECKING:
    from pathlib import Path

    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.types import TomlTable

logger: GuardmarkLogger = get_logger(__name__)


# --- TOML file I/O ---


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (e.g., ``guardmark.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content; an empty dict when the file cannot be
            read or parsed (the error is logged).
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def check_toml_file(path: Path) -> str | None:
    """Return a description of why ``path`` is not a readable TOML file, or None if it is."""
    try:
        tomlkit.parse(path.read_text(encoding="utf-8"))
    except OSError as e:
        return f"Cannot read {path}: {e}"
    except TomlkitParseError as e:
        return f"Invalid TOML in {path}: {e}"
    return None


def extract_guardmark_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the GuardMark table of a parsed config file.

    For ``pyproject.toml`` this is the ``[tool.guardmark]`` section; any other file
    is a dedicated GuardMark config and is returned whole.

    Args:
        path (Path): Path the data was read from (only its name is used).
        data (TomlTable): Parsed TOML document.

    Returns:
        TomlTable | None: The GuardMark table, or None if a ``pyproject.toml``
            has no ``[tool.guardmark]`` section.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    tool: Any = data.get("tool", {})
    section: Any = tool.get("guardmark") if isinstance(tool, dict) else None
    if not isinstance(section, dict):
        return None
    return cast("TomlTable", section)


def to_toml(toml_dict: TomlTable) -> str:
    """Serialize a TOML mapping to a string, dropping ``None`` entries.

    Args:
        toml_dict (TomlTable): TOML mapping to render.

    Returns:
        str: The rendered TOML document.
    """
    cleaned: Any = _strip_none_for_toml(toml_dict)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings and lists."""
    if isinstance(value, Mapping):
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        return {str(k): _strip_none_for_toml(v) for k, v in m.items() if v is not None}
    if isinstance(value, (list, tuple)):
        seq: list[object] = list(cast("list[object]", value))
        return [_strip_none_for_toml(v) for v in seq if v is not None]
    return value


# --- Typed getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return a sub-table, or an empty dict if missing or not a table."""
    value: Any = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast("TomlTable", value)
    logger.warning("Expected [%s] to be a table, got %s; ignoring", key, type(value).__name__)
    return {}


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table."""
    value: Any = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    logger.warning("Expected '%s' to be a boolean, got %r; ignoring", key, value)
    return None


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table."""
    value: Any = table.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.warning("Expected '%s' to be a string, got %r; ignoring", key, value)
    return None


def get_non_negative_int_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional non-negative integer from a TOML table.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    logger.warning("Expected '%s' to be a non-negative integer, got %r; ignoring", key, value)
    return None


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings from a TOML table.

    Non-string items are dropped with a warning; a non-list value is ignored.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Expected '%s' to be a list of strings, got %r; ignoring", key, value)
        return None
    items: list[Any] = cast("list[Any]", value)
    out: list[str] = []
    for item in items:
        if isinstance(item, str):
            out.append(item)
        else:
            logger.warning("Ignoring non-string entry %r in '%s'", item, key)
    return out


def get_table_list_or_none(table: TomlTable, key: str) -> list[TomlTable] | None:
    """Extract an optional array of tables (or inline tables) from a TOML table."""
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Expected '%s' to be an array of tables, got %r; ignoring", key, value)
        return None
    items: list[Any] = cast("list[Any]", value)
    out: list[TomlTable] = []
    for item in items:
        if isinstance(item, dict):
            out.append(cast("TomlTable", item))
        else:
            logger.warning("Ignoring non-table entry %r in '%s'", item, key)
    return out


def warn_unknown_keys(table: TomlTable, allowed: frozenset[str], where: str) -> None:
    """Log a warning for each key of ``table`` that is not in ``allowed``."""
    for key in table:
        if key not in allowed:
            logger.warning("Unknown configuration key '%s' in %s", key, where)
