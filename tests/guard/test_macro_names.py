# topmark:header:start
#
#   project      : GuardMark
#   file         : test_macro_names.py
#   file_relpath : tests/guard/test_macro_names.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Macro name synthesis: tokens per macro type, path trimming, prefixes and GUIDs."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from guardmark.config import Config, MacroType, MutableConfig, SubfolderPrefix
from guardmark.guard.macro import (
    FileIdentity,
    file_token,
    generate_macro_name,
    guid_token,
    subdirectory_prefix,
    to_snake_case,
)

if TYPE_CHECKING:
    from collections.abc import Callable

ROOT = Path("/ws")


def _config(**overrides: Any) -> Config:
    return MutableConfig.from_defaults().merge_with(MutableConfig(**overrides)).freeze()


def _identity(relpath: str) -> FileIdentity:
    return FileIdentity(path=ROOT / relpath, workspace_root=ROOT)


def test_identity_relpath_and_name() -> None:
    ident: FileIdentity = _identity("src/net/Socket.hpp")
    assert ident.relpath == "src/net/Socket.hpp"
    assert ident.name == "Socket.hpp"


def test_identity_outside_root_is_unknown() -> None:
    ident = FileIdentity(path=Path("/elsewhere/a.h"), workspace_root=ROOT)
    assert ident.relpath is None
    assert ident.name is None
    assert FileIdentity(path=None, workspace_root=ROOT).relpath is None


@pytest.mark.parametrize(
    ("relpath", "overrides", "expected"),
    [
        ("src/foo.h", {"macro_type": MacroType.FILENAME}, "FOO_H"),
        ("src/foo.h", {"macro_type": MacroType.FILENAME, "remove_file_extension": True}, "FOO"),
        ("src/foo.h", {"macro_type": MacroType.FILEPATH}, "SRC_FOO_H"),
        ("a/b/c/foo.h", {"macro_type": MacroType.FILEPATH, "path_depth": 1}, "C_FOO_H"),
        ("a/b/c/foo.h", {"macro_type": MacroType.FILEPATH, "path_skip": 1}, "B_C_FOO_H"),
        ("a/b/c/foo.h", {"macro_type": MacroType.FILEPATH, "path_skip": 99}, "FOO_H"),
        (
            "a/b/c/foo.h",
            {"macro_type": MacroType.FILEPATH, "path_skip": 1, "path_depth": 1},
            "C_FOO_H",
        ),
        ("my-file.h", {"macro_type": MacroType.FILENAME}, "MY_FILE_H"),
        ("my--file.h", {"macro_type": MacroType.FILENAME}, "MY_FILE_H"),
        (
            "my--file.h",
            {"macro_type": MacroType.FILENAME, "shorten_repeated_underscores": False},
            "MY__FILE_H",
        ),
        (
            "Net/MyHTTPServer.h",
            {"macro_type": MacroType.FILEPATH, "convert_path_to_snake_case": True},
            "NET_MY_HTTP_SERVER_H",
        ),
    ],
)
def test_path_derived_macro_names(
    relpath: str, overrides: dict[str, Any], expected: str, fixed_random: Callable[..., Any]
) -> None:
    macro: str = generate_macro_name(_config(**overrides), _identity(relpath), fixed_random())
    assert macro == expected


def test_prefix_suffix_and_subfolder_prefix(fixed_random: Callable[..., Any]) -> None:
    cfg: Config = _config(
        macro_type=MacroType.FILENAME,
        prefix="ACME_",
        suffix="_INCLUDED",
        subfolder_prefixes=[
            SubfolderPrefix(folder_path="src/net", prefix="NET_"),
            SubfolderPrefix(folder_path="src", prefix="CORE_"),
        ],
    )
    assert generate_macro_name(cfg, _identity("src/net/sock.h"), fixed_random()) == (
        "ACME_NET_SOCK_H_INCLUDED"
    )
    assert generate_macro_name(cfg, _identity("src/util.h"), fixed_random()) == (
        "ACME_CORE_UTIL_H_INCLUDED"
    )
    assert generate_macro_name(cfg, _identity("test/util.h"), fixed_random()) == (
        "ACME_UTIL_H_INCLUDED"
    )


def test_subfolder_prefix_matches_whole_segments() -> None:
    cfg: Config = _config(subfolder_prefixes=[SubfolderPrefix(folder_path="sr", prefix="X_")])
    assert subdirectory_prefix(cfg, _identity("src/a.h")) == ""
    assert subdirectory_prefix(cfg, _identity("sr/a.h")) == "X_"


def test_unknown_workspace_root_yields_empty_token(fixed_random: Callable[..., Any]) -> None:
    cfg: Config = _config(macro_type=MacroType.FILENAME, prefix="P_", suffix="_S")
    ident = FileIdentity(path=Path("/tmp/a.h"), workspace_root=None)
    assert file_token(cfg, ident, full_path=False) == ""
    assert generate_macro_name(cfg, ident, fixed_random()) == "P__S"


def test_guid_token_is_32_upper_hex_digits() -> None:
    assert guid_token(_Bits(0), prevent_leading_digit=False) == "0" * 32
    assert guid_token(_Bits(0xABC), prevent_leading_digit=False) == "0" * 29 + "ABC"


@pytest.mark.parametrize(
    ("leading", "expected"),
    [(0, "A"), (5, "F"), (6, "A"), (9, "D"), (0xC, "C")],
)
def test_guid_leading_digit_is_remapped(leading: int, expected: str) -> None:
    token: str = guid_token(_Bits(leading << 124), prevent_leading_digit=True)
    assert token[0] == expected
    assert token[1:] == "0" * 31


def test_guid_macro_types(fixed_random: Callable[..., Any]) -> None:
    bits: int = 0xF << 124
    guid_cfg: Config = _config(macro_type=MacroType.GUID, prefix="G_")
    assert generate_macro_name(guid_cfg, _identity("a.h"), fixed_random(bits)) == (
        "G_F" + "0" * 31
    )

    both_cfg: Config = _config(macro_type=MacroType.FILENAME_AND_GUID)
    assert generate_macro_name(both_cfg, _identity("a.h"), fixed_random(bits)) == (
        "A_H_F" + "0" * 31
    )


def test_guid_macros_differ_between_calls(fixed_random: Callable[..., Any]) -> None:
    source = fixed_random(0xA << 124, 0xB << 124)
    cfg: Config = _config(macro_type=MacroType.GUID)
    first: str = generate_macro_name(cfg, _identity("a.h"), source)
    second: str = generate_macro_name(cfg, _identity("a.h"), source)
    assert first != second


def test_to_snake_case() -> None:
    assert to_snake_case("MyHTTPServer.h") == "my_http_server.h"
    assert to_snake_case("already_snake.h") == "already_snake.h"
    assert to_snake_case("fooBar") == "foo_bar"


class _Bits:
    def __init__(self, value: int) -> None:
        self.value = value

    def random_bits(self) -> int:
        return self.value


@given(bits=st.integers(min_value=0, max_value=2**128 - 1))
def test_guid_never_starts_with_a_digit(bits: int) -> None:
    token: str = guid_token(_Bits(bits), prevent_leading_digit=True)
    assert len(token) == 32
    assert token[0] in "ABCDEF"
    assert all(ch in "0123456789ABCDEF" for ch in token)


_segment = st.text(alphabet="abcxyz", min_size=1, max_size=6)


@given(
    folders=st.lists(_segment, max_size=5),
    skip=st.integers(min_value=0, max_value=10),
    depth=st.integers(min_value=0, max_value=10),
)
def test_filepath_token_always_keeps_the_file_name(
    folders: list[str], skip: int, depth: int
) -> None:
    cfg: Config = _config(macro_type=MacroType.FILEPATH, path_skip=skip, path_depth=depth)
    relpath: str = "/".join([*folders, "leaf.h"])
    token: str = file_token(cfg, _identity(relpath), full_path=True)
    assert token.endswith("LEAF_H")
    kept: int = token.count("_") - 1
    assert kept <= len(folders)
    if depth:
        assert kept <= depth
