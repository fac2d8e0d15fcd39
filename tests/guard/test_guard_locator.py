# topmark:header:start
#
#   project      : GuardMark
#   file         : test_guard_locator.py
#   file_relpath : tests/guard/test_guard_locator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Existing guard detection: endif priority, name agreement and ordering."""

from __future__ import annotations

from guardmark.guard.locator import GuardTriple, find_existing_guard


def test_block_comment_guard() -> None:
    text = "#ifndef FOO_H\n#define FOO_H\n\nint x;\n\n#endif /* FOO_H */\n"
    assert find_existing_guard(text) == GuardTriple(0, 1, 5, "FOO_H")


def test_line_comment_guard_below_header_comment() -> None:
    text = "// License\n\n#ifndef A\n#define A\nint x;\n#endif // A\n"
    triple = find_existing_guard(text)
    assert triple is not None
    assert triple.lines == (2, 3, 5)
    assert triple.macro == "A"


def test_bare_endif_uses_the_last_one() -> None:
    text = "#ifndef A\n#define A\n#if X\nint y;\n#endif\nint x;\n#endif\n"
    triple = find_existing_guard(text)
    assert triple is not None
    assert triple.endif_line == 6


def test_commented_endif_wins_over_bare_endif() -> None:
    text = "#ifndef A\n#define A\nint x;\n#endif /* A */\n#if B\n#endif\n"
    triple = find_existing_guard(text)
    assert triple is not None
    assert triple.endif_line == 3


def test_block_comment_endif_wins_over_line_comment_endif() -> None:
    text = "#ifndef A\n#define A\n#endif // A\n#endif /* A */\n"
    triple = find_existing_guard(text)
    assert triple is not None
    assert triple.endif_line == 3


def test_crlf_guard() -> None:
    text = "#ifndef A\r\n#define A\r\nint x;\r\n#endif // A\r\n"
    assert find_existing_guard(text) == GuardTriple(0, 1, 3, "A")


def test_mismatched_define_is_not_a_guard() -> None:
    assert find_existing_guard("#ifndef A\n#define B\n#endif\n") is None


def test_endif_comment_naming_another_macro_is_not_a_guard() -> None:
    assert find_existing_guard("#ifndef A\n#define A\n#endif /* B */\n") is None


def test_out_of_order_directives_are_not_a_guard() -> None:
    assert find_existing_guard("#define A\n#ifndef A\n#endif\n") is None
    assert find_existing_guard("#endif\n#ifndef A\n#define A\n") is None


def test_incomplete_guards() -> None:
    assert find_existing_guard("") is None
    assert find_existing_guard("#ifndef A\n#define A\nint x;\n") is None
    assert find_existing_guard("#ifndef A\nint x;\n#endif\n") is None


def test_indented_directives_are_ignored() -> None:
    assert find_existing_guard("  #ifndef A\n  #define A\n  #endif\n") is None


def test_endif_comment_without_space_is_not_recognized() -> None:
    assert find_existing_guard("#ifndef A\n#define A\n#endif/* A */\n") is None
