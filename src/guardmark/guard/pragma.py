# topmark:header:start
#
#   project      : GuardMark
#   file         : pragma.py
#   file_relpath : src/guardmark/guard/pragma.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""``#pragma once`` detection.

The pattern ``#pragma once*`` also accepts extra trailing ``e`` characters
(``#pragma oncee``). This quirk is kept for compatibility with existing files.
"""

from __future__ import annotations

import re

from guardmark.guard.scanner import line_of_offset
from guardmark.host.document import Range, TextEdit

PRAGMA_ONCE_PATTERN: re.Pattern[str] = re.compile(r"^#pragma once*\r?$", re.MULTILINE)


def find_pragma_once(text: str) -> int | None:
    """Return the line of the first ``#pragma once``, or None."""
    match: re.Match[str] | None = PRAGMA_ONCE_PATTERN.search(text)
    return None if match is None else line_of_offset(text, match.start())


def pragma_once_edit(text: str) -> TextEdit | None:
    """Return an edit deleting the first ``#pragma once`` line (with its line ending)."""
    line: int | None = find_pragma_once(text)
    return None if line is None else TextEdit.delete(Range.whole_line(line))
