# topmark:header:start
#
#   project      : GuardMark
#   file         : test_guard_properties.py
#   file_relpath : tests/guard/test_guard_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for guard location and editing on generated headers.

This suite generates plausible header bodies (code, line comments, blank lines)
with LF or CRLF line endings and asserts:
1) any guard the locator reports has ordered lines and one shared name,
2) a guard built from generated directives is always found again,
3) insert → remove leaves every non-blank body line in place, and
4) update right after insert is a no-op.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from guardmark.config import CommentStyle, ConfigStore, MacroType, MutableConfig
from guardmark.guard.directives import build_directives
from guardmark.guard.editor import GuardEditor, GuardOutcome
from guardmark.guard.locator import find_existing_guard
from guardmark.host.document import TextDocument

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

WORKSPACE_ROOT = Path("/ws")

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=60,
)

s_macro = st.from_regex(r"[A-Z_][A-Z0-9_]{0,15}", fullmatch=True)
s_eol = st.sampled_from(["\n", "\r\n"])
s_style = st.sampled_from(list(CommentStyle))

# Body lines never start a preprocessor directive.
s_body_line = st.one_of(
    st.text(alphabet="abxyz019 ;{}()=*", max_size=16),
    st.text(alphabet="abxyz ", max_size=12).map(lambda t: "// " + t),
    st.just(""),
)
s_body = st.lists(s_body_line, max_size=8)
s_banner = st.sampled_from(["", "// License\n", "/* License */\n\n", "/**\n * Doc\n */\n"])

# Directive-ish lines whose names come from a tiny alphabet so mismatches are common.
s_name = st.sampled_from(["A", "B"])
s_directive_line = st.one_of(
    s_name.map(lambda n: f"#ifndef {n}"),
    s_name.map(lambda n: f"#define {n}"),
    s_name.map(lambda n: f"#endif /* {n} */"),
    s_name.map(lambda n: f"#endif // {n}"),
    st.just("#endif"),
    st.just("int x;"),
)


def _editor(macro_type: MacroType = MacroType.FILENAME) -> GuardEditor:
    return GuardEditor(ConfigStore(no_config=True, overrides=MutableConfig(macro_type=macro_type)))


def _document(text: str) -> TextDocument:
    return TextDocument(
        text, path=WORKSPACE_ROOT / "include" / "foo.h", workspace_root=WORKSPACE_ROOT
    )


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line.strip()]


@PROPERTY_SETTINGS
@given(lines=st.lists(s_directive_line, max_size=8))
def test_located_guard_is_ordered_and_consistent(lines: list[str]) -> None:
    """Whatever text the locator accepts, its triple is ordered and names one macro."""
    triple = find_existing_guard("\n".join(lines) + "\n")
    if triple is None:
        return

    assert triple.ifndef_line < triple.define_line < triple.endif_line
    assert lines[triple.ifndef_line] == f"#ifndef {triple.macro}"
    assert lines[triple.define_line] == f"#define {triple.macro}"
    assert lines[triple.endif_line] in (
        "#endif",
        f"#endif /* {triple.macro} */",
        f"#endif // {triple.macro}",
    )


@PROPERTY_SETTINGS
@given(
    banner=s_banner,
    body=s_body,
    macro=s_macro,
    style=s_style,
    spaces=st.integers(min_value=1, max_value=3),
    eol=s_eol,
)
def test_generated_guard_is_found(
    banner: str, body: list[str], macro: str, style: CommentStyle, spaces: int, eol: str
) -> None:
    """A guard built from directives is found at its lines under its macro name."""
    ifndef, define, endif = build_directives(macro, style, spaces, eol).terminated()
    head: list[str] = banner.splitlines(keepends=True)
    text: str = "".join(head) + ifndef + define + "".join(b + eol for b in body) + endif

    triple = find_existing_guard(text)

    assert triple is not None
    assert triple.macro == macro
    start: int = len(head)
    assert triple.lines == (start, start + 1, start + 2 + len(body))


@PROPERTY_SETTINGS
@given(banner=s_banner, body=s_body, eol=s_eol)
def test_unguarded_body_has_no_guard(banner: str, body: list[str], eol: str) -> None:
    """Text without directives never yields a guard."""
    assert find_existing_guard(banner + eol.join(body)) is None


@PROPERTY_SETTINGS
@given(banner=s_banner, body=s_body, eol=s_eol, terminated=st.booleans())
def test_insert_then_remove_keeps_the_body(
    banner: str, body: list[str], eol: str, terminated: bool
) -> None:
    """Insert → remove drops only the directives (and padding blank lines)."""
    text: str = banner.replace("\n", eol) + eol.join(body) + (eol if terminated and body else "")
    doc: TextDocument = _document(text)
    editor: GuardEditor = _editor()

    assert editor.insert(doc) is GuardOutcome.INSERTED
    triple = find_existing_guard(doc.get_text())
    assert triple is not None
    assert triple.macro == "FOO_H"

    assert editor.remove(doc) is GuardOutcome.REMOVED
    assert find_existing_guard(doc.get_text()) is None
    assert _non_blank_lines(doc.get_text()) == _non_blank_lines(text)
    if text == "":
        assert doc.get_text() == ""


@PROPERTY_SETTINGS
@given(banner=s_banner, body=s_body, eol=s_eol)
def test_update_after_insert_is_a_no_op(banner: str, body: list[str], eol: str) -> None:
    """Re-generating the same file-name guard leaves the document unchanged."""
    doc: TextDocument = _document(banner.replace("\n", eol) + eol.join(body))
    editor: GuardEditor = _editor()
    editor.insert(doc)
    inserted: str = doc.get_text()

    assert editor.update(doc) is GuardOutcome.UPDATED
    assert doc.get_text() == inserted
