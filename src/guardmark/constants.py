# topmark:header:start
#
#   project      : GuardMark
#   file         : constants.py
#   file_relpath : src/guardmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

GUARDMARK_VERSION: str = get_version("guardmark")

# Config file names, in same-directory merge order (later wins).
PYPROJECT_TOML_NAME: str = "pyproject.toml"
GUARDMARK_TOML_NAME: str = "guardmark.toml"

# Section holding GuardMark settings inside pyproject.toml.
PYPROJECT_TOOL_SECTION: str = "tool.guardmark"

# Environment variable consulted for the internal log level.
LOG_LEVEL_ENV_VAR: str = "GUARDMARK_LOG_LEVEL"

DEFAULT_HEADER_EXTENSIONS: tuple[str, ...] = (".h", ".hpp", ".h++", ".hh")

TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="
