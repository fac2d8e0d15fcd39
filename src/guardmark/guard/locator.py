# topmark:header:start
#
#   project      : GuardMark
#   file         : locator.py
#   file_relpath : src/guardmark/guard/locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Detection of an existing include guard.

The first ``#ifndef NAME`` and the first ``#define NAME`` lines are paired with a
closing ``#endif``. The closing line is, by priority:

1. the first ``#endif /* NAME */``;
2. the first ``#endif // NAME``;
3. the *last* bare ``#endif``.

A triple is only reported when the names agree and the lines are strictly
ordered. Anything else is treated as "no guard": partial or inconsistent guards
are never repaired.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from guardmark.config.logging import get_logger
from guardmark.guard.scanner import line_of_offset

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)

IFNDEF_PATTERN: re.Pattern[str] = re.compile(r"^#ifndef\s+(\S+)\s*$", re.MULTILINE)
DEFINE_PATTERN: re.Pattern[str] = re.compile(r"^#define\s+(\S+)\s*$", re.MULTILINE)
ENDIF_BLOCK_PATTERN: re.Pattern[str] = re.compile(
    r"^#endif\s+/\*\s+(\S+)\s*\*/\s*$", re.MULTILINE
)
ENDIF_LINE_PATTERN: re.Pattern[str] = re.compile(r"^#endif\s+//\s+(\S+)\s*$", re.MULTILINE)
ENDIF_BARE_PATTERN: re.Pattern[str] = re.compile(r"^#endif\s*$", re.MULTILINE)


@dataclass(frozen=True)
class GuardTriple:
    """Line positions of a consistent include guard.

    Attributes:
        ifndef_line (int): Line of ``#ifndef``.
        define_line (int): Line of ``#define``.
        endif_line (int): Line of ``#endif``.
        macro (str): The name shared by the directives.
    """

    ifndef_line: int
    define_line: int
    endif_line: int
    macro: str

    @property
    def lines(self) -> tuple[int, int, int]:
        """The three directive lines, in document order."""
        return (self.ifndef_line, self.define_line, self.endif_line)


def _find_endif(text: str) -> tuple[int, str | None] | None:
    """Return ``(offset, name)`` of the closing ``#endif``; ``name`` is None when bare."""
    for pattern in (ENDIF_BLOCK_PATTERN, ENDIF_LINE_PATTERN):
        match: re.Match[str] | None = pattern.search(text)
        if match is not None:
            return match.start(), match.group(1)

    last: re.Match[str] | None = None
    for last in ENDIF_BARE_PATTERN.finditer(text):
        pass
    if last is None:
        return None
    return last.start(), None


def find_existing_guard(text: str) -> GuardTriple | None:
    """Locate the include guard of ``text``.

    Args:
        text (str): Full document text.

    Returns:
        GuardTriple | None: The guard, or None if missing, mismatched or out of order.
    """
    ifndef: re.Match[str] | None = IFNDEF_PATTERN.search(text)
    define: re.Match[str] | None = DEFINE_PATTERN.search(text)
    endif: tuple[int, str | None] | None = _find_endif(text)
    if ifndef is None or define is None or endif is None:
        logger.debug("No complete include guard found")
        return None

    endif_offset, endif_name = endif
    macro: str = ifndef.group(1)
    if define.group(1) != macro:
        logger.debug("Guard rejected: #ifndef %s / #define %s mismatch", macro, define.group(1))
        return None
    if endif_name is not None and endif_name != macro:
        logger.debug("Guard rejected: #endif names %s, expected %s", endif_name, macro)
        return None
    if not ifndef.start() < define.start() < endif_offset:
        logger.debug("Guard rejected: directives out of order")
        return None

    triple = GuardTriple(
        ifndef_line=line_of_offset(text, ifndef.start()),
        define_line=line_of_offset(text, define.start()),
        endif_line=line_of_offset(text, endif_offset),
        macro=macro,
    )
    logger.trace("Found include guard %s", triple)
    return triple
