# topmark:header:start
#
#   project      : GuardMark
#   file         : directives.py
#   file_relpath : src/guardmark/guard/directives.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering of the three include guard directive lines."""

from __future__ import annotations

from dataclasses import dataclass

from guardmark.config.types import CommentStyle


@dataclass(frozen=True)
class Directives:
    """The ``#ifndef`` / ``#define`` / ``#endif`` lines for one macro (without line endings)."""

    ifndef: str
    define: str
    endif: str
    eol: str = "\n"

    def as_tuple(self) -> tuple[str, str, str]:
        """Return the three lines in document order."""
        return (self.ifndef, self.define, self.endif)

    def terminated(self) -> tuple[str, str, str]:
        """Return the three lines, each followed by the line ending."""
        return (self.ifndef + self.eol, self.define + self.eol, self.endif + self.eol)


def render_endif(macro: str, comment_style: CommentStyle, spaces_after_endif: int) -> str:
    """Render the ``#endif`` line with its trailing comment."""
    if comment_style is CommentStyle.NONE:
        return "#endif"
    gap: str = " " * spaces_after_endif
    if comment_style is CommentStyle.LINE:
        return f"#endif{gap}// {macro}"
    return f"#endif{gap}/* {macro} */"


def build_directives(
    macro: str,
    comment_style: CommentStyle,
    spaces_after_endif: int,
    eol: str = "\n",
) -> Directives:
    """Build the directive lines for ``macro``.

    Args:
        macro (str): The guard macro name.
        comment_style (CommentStyle): Trailing comment style of the ``#endif`` line.
        spaces_after_endif (int): Spaces between ``#endif`` and the trailing comment.
        eol (str): Line ending used by `Directives.terminated`.

    Returns:
        Directives: The rendered lines.
    """
    return Directives(
        ifndef=f"#ifndef {macro}",
        define=f"#define {macro}",
        endif=render_endif(macro, comment_style, spaces_after_endif),
        eol=eol,
    )
