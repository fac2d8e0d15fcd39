# topmark:header:start
#
#   project      : GuardMark
#   file         : macro.py
#   file_relpath : src/guardmark/guard/macro.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Include guard macro name synthesis.

The macro name is assembled as::

    prefix + subdirectory_prefix + token + suffix

where ``token`` depends on the configured `MacroType`:

- ``GUID``: 32 uppercase hex digits drawn from an injected `RandomSource`.
- ``Filename``: the file name, uppercased, non-alphanumerics replaced by ``_``.
- ``Filepath``: the workspace-relative path, optionally trimmed with
  ``path_skip`` / ``path_depth``, normalized the same way.
- ``Filename and GUID``: the file name token, ``_``, then a GUID token.

Everything here is pure except for consuming random bits in GUID modes. When
the file or its workspace folder cannot be determined, path-derived tokens are
the empty string (logged, not raised).
"""

from __future__ import annotations

import posixpath
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from guardmark.config.logging import get_logger
from guardmark.config.types import MacroType
from guardmark.utils.file import path_has_prefix

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.model import Config

logger: GuardmarkLogger = get_logger(__name__)

_NON_MACRO_CHARS: re.Pattern[str] = re.compile(r"[^A-Z0-9]")
_UNDERSCORE_RUNS: re.Pattern[str] = re.compile(r"_{2,}")
_NON_HEX_CHARS: re.Pattern[str] = re.compile(r"[^0-9A-F]")
# Boundaries "aB" and "ABc" (before the "B") in CamelCase words.
_SNAKE_BOUNDARY: re.Pattern[str] = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class RandomSource(Protocol):
    """Provider of 128 random bits for GUID macro names."""

    def random_bits(self) -> int:
        """Return a non-negative integer below ``2**128``."""
        ...


class UuidRandomSource:
    """Random source backed by :func:`uuid.uuid4`."""

    def random_bits(self) -> int:
        """Return the 128 bits of a fresh UUID4."""
        return uuid.uuid4().int


@dataclass(frozen=True)
class FileIdentity:
    """Location of the document a macro is generated for.

    Attributes:
        path (Path | None): Absolute path of the file; None for untitled buffers.
        workspace_root (Path | None): Workspace folder containing the file, if known.
    """

    path: Path | None
    workspace_root: Path | None

    @property
    def relpath(self) -> str | None:
        """POSIX path relative to the workspace root, or None if undeterminable."""
        if self.path is None or self.workspace_root is None:
            return None
        try:
            return self.path.relative_to(self.workspace_root).as_posix()
        except ValueError:
            return None

    @property
    def name(self) -> str | None:
        """Final path segment, or None if undeterminable."""
        rel: str | None = self.relpath
        return None if rel is None else posixpath.basename(rel)


def to_snake_case(segment: str) -> str:
    """Convert a PascalCase/camelCase path segment to snake_case.

    Examples:
        ``"MyHTTPServer.h"`` becomes ``"my_http_server.h"``.
    """
    return _SNAKE_BOUNDARY.sub("_", segment).lower()


def guid_token(random_source: RandomSource, *, prevent_leading_digit: bool) -> str:
    """Return a 32-character uppercase hex token drawn from ``random_source``.

    With ``prevent_leading_digit`` a leading decimal digit ``d`` is replaced by
    the hex letter ``(d % 6) + 10`` so the token is a valid C identifier start.
    """
    text: str = str(uuid.UUID(int=random_source.random_bits())).upper().replace("-", "")
    token: str = _NON_HEX_CHARS.sub("_", text)
    if prevent_leading_digit and token[0].isdigit():
        token = format(int(token[0]) % 6 + 10, "X") + token[1:]
    return token


def _select_segments(config: Config, relpath: str) -> list[str]:
    """Split ``relpath`` and apply ``path_skip`` / ``path_depth``; the file name is always kept."""
    segments: list[str] = relpath.split("/")
    skip: int = min(config.path_skip, len(segments) - 1)
    segments = segments[skip:]
    if config.path_depth > 0:
        segments = segments[-(config.path_depth + 1) :]
    return segments


def file_token(config: Config, identity: FileIdentity, *, full_path: bool | None = None) -> str:
    """Return the path-derived part of the macro name.

    Args:
        config (Config): Effective configuration.
        identity (FileIdentity): Document location.
        full_path (bool): Use the workspace-relative path (``Filepath``) instead of the
            file name only.

    Returns:
        str: The normalized token, or ``""`` if the file or its workspace folder is unknown.
    """
    relpath: str | None = identity.relpath
    if relpath is None:
        logger.warning(
            "Cannot resolve %s relative to workspace %s; using an empty macro token",
            identity.path,
            identity.workspace_root,
        )
        return ""

    segments: list[str] = _select_segments(config, relpath) if full_path else [
        posixpath.basename(relpath)
    ]
    if config.convert_path_to_snake_case:
        segments = [to_snake_case(s) for s in segments]
    name: str = "/".join(segments)

    if config.remove_file_extension:
        name = posixpath.splitext(name)[0]

    token: str = _NON_MACRO_CHARS.sub("_", name.upper())
    if config.shorten_repeated_underscores:
        token = _UNDERSCORE_RUNS.sub("_", token)
    return token


def subdirectory_prefix(config: Config, identity: FileIdentity) -> str:
    """Return the prefix of the first configured subfolder containing the file."""
    relpath: str | None = identity.relpath
    if relpath is None:
        return ""
    for entry in config.subfolder_prefixes:
        if path_has_prefix(relpath, entry.folder_path):
            logger.debug("Subfolder prefix %r applies to %s", entry.prefix, relpath)
            return entry.prefix
    return ""


def generate_macro_name(
    config: Config,
    identity: FileIdentity,
    random_source: RandomSource,
) -> str:
    """Generate the include guard macro name for a file.

    Args:
        config (Config): Effective configuration for the file.
        identity (FileIdentity): Document location.
        random_source (RandomSource): Source of random bits for GUID modes.

    Returns:
        str: ``prefix + subdirectory_prefix + token + suffix``.
    """
    macro_type: MacroType = config.macro_type
    if macro_type is MacroType.GUID:
        token = guid_token(random_source, prevent_leading_digit=config.prevent_leading_digit)
    elif macro_type is MacroType.FILENAME:
        token = file_token(config, identity, full_path=False)
    elif macro_type is MacroType.FILEPATH:
        token = file_token(config, identity, full_path=True)
    else:
        token = (
            file_token(config, identity, full_path=False)
            + "_"
            + guid_token(random_source, prevent_leading_digit=config.prevent_leading_digit)
        )

    macro: str = config.prefix + subdirectory_prefix(config, identity) + token + config.suffix
    logger.debug("Generated macro %s for %s (%s)", macro, identity.path, macro_type.name)
    return macro
