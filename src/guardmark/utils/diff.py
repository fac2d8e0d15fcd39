# topmark:header:start
#
#   project      : GuardMark
#   file         : diff.py
#   file_relpath : src/guardmark/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering for dry runs."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from guardmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)


def unified_diff(current: str, updated: str, *, name: str, newline: str = "\n") -> str | None:
    """Return a unified diff between two document texts, or None when identical.

    Args:
        current (str): Text before the operation.
        updated (str): Text after the operation.
        name (str): Label used in the ``---`` / ``+++`` headers.
        newline (str): Line terminator of the header lines.

    Returns:
        str | None: The diff text, joined exactly as produced by difflib.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            current.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (current)",
            tofile=f"{name} (updated)",
            n=3,
            lineterm=newline,
        )
    )
    if not patch_lines:
        return None
    logger.trace("Patch for %s:\n%s", name, "".join(patch_lines))
    return "".join(patch_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as a sequence of lines or a single
            multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    lines: list[str] = patch.splitlines() if isinstance(patch, str) else list(patch)

    def process_line(line: str) -> str:
        content: str = line.replace("\r", "\\r").replace("\n", "\\n")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return chalk.gray(
            "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
        )
    return chalk.gray("".join(f"{process_line(line)}\n" for line in lines))
