# topmark:header:start
#
#   project      : GuardMark
#   file         : scanner.py
#   file_relpath : src/guardmark/guard/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Leading comment block scanner.

Finds the line where include guard directives should be inserted so that
file-header comments (license banners, doc comments) stay above the guard.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from guardmark.config.logging import get_logger

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)

# A line comment, or a non-greedy block comment spanning newlines.
COMMENT_PATTERN: re.Pattern[str] = re.compile(r"//.*$|/(?!\\)\*[\s\S]*?\*(?!\\)/", re.MULTILINE)


def line_of_offset(text: str, offset: int) -> int:
    """Return the zero-based line containing character ``offset`` of ``text``."""
    return text.count("\n", 0, offset)


def find_insertion_line(text: str) -> int:
    """Return the line index just below the leading comment block of ``text``.

    Comments are consumed one after another from the top of the text as long as
    only whitespace separates them. The first non-whitespace character that is
    not part of a comment ends the leading block.

    Args:
        text (str): Full document text.

    Returns:
        int: The line following the end of the last leading comment, or 0 when the
            document does not start with a comment.
    """
    offset: int = 0
    while True:
        match: re.Match[str] | None = COMMENT_PATTERN.search(text, offset)
        if match is None or text[offset : match.start()].strip():
            break
        offset = match.end()

    if offset == 0:
        return 0
    line: int = line_of_offset(text, offset) + 1
    logger.trace("Leading comment block ends at offset %d; insertion line %d", offset, line)
    return line
