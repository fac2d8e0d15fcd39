# topmark:header:start
#
#   project      : GuardMark
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model: TOML parsing, merging, freezing and export."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import tomlkit

from guardmark.config import CommentStyle, Config, MacroType, MutableConfig, SubfolderPrefix
from guardmark.config.io import check_toml_file, get_non_negative_int_or_none, to_toml

if TYPE_CHECKING:
    from guardmark.config.types import TomlTable


def test_from_toml_dict_reads_every_section() -> None:
    data: TomlTable = {
        "macro": {
            "type": "filepath",
            "prefix": "ACME_",
            "path_depth": 2,
            "subfolder_prefixes": [{"folder_path": "src/net", "prefix": "NET_"}],
        },
        "layout": {"comment_style": "Line", "spaces_after_endif": 2},
        "files": {"header_extensions": [".h", ".inl"]},
        "automation": {"update_on_rename": False, "path_blocklist": ["third_party"]},
    }
    cfg: Config = MutableConfig.from_toml_dict(data, Path("guardmark.toml")).freeze()

    assert cfg.macro_type is MacroType.FILEPATH
    assert cfg.prefix == "ACME_"
    assert cfg.path_depth == 2
    assert cfg.subfolder_prefixes == (SubfolderPrefix("src/net", "NET_"),)
    assert cfg.comment_style is CommentStyle.LINE
    assert cfg.spaces_after_endif == 2
    assert cfg.header_file_extensions == (".h", ".inl")
    assert cfg.auto_update_on_rename is False
    assert cfg.auto_update_path_blocklist == ("third_party",)
    assert cfg.config_files == (Path("guardmark.toml"),)
    # Untouched settings keep their defaults.
    assert cfg.remove_pragma_once is True


def test_macro_type_accepts_display_values() -> None:
    data: TomlTable = {"macro": {"type": "Filename and GUID"}}
    assert MutableConfig.from_toml_dict(data).macro_type is MacroType.FILENAME_AND_GUID


def test_invalid_values_are_left_unset() -> None:
    data: TomlTable = {
        "macro": {"type": "sha1", "path_depth": -1, "prefix": 3},
        "layout": {"spaces_after_endif": True},
        "bogus": {},
    }
    draft: MutableConfig = MutableConfig.from_toml_dict(data)
    assert draft.macro_type is None
    assert draft.path_depth is None
    assert draft.prefix is None
    assert draft.spaces_after_endif is None
    assert draft.freeze() == Config()


def test_merge_last_layer_wins() -> None:
    base = MutableConfig(prefix="A_", suffix="_X", config_files=[Path("a.toml")])
    top = MutableConfig(prefix="B_", config_files=[Path("b.toml")])
    merged: MutableConfig = base.merge_with(top)
    assert merged.prefix == "B_"
    assert merged.suffix == "_X"
    assert merged.config_files == [Path("a.toml"), Path("b.toml")]


def test_thaw_freeze_round_trip() -> None:
    cfg: Config = MutableConfig(
        macro_type=MacroType.FILENAME, header_file_extensions=[".hh"]
    ).freeze()
    assert cfg.thaw().freeze() == cfg


def test_toml_export_parses_back_to_the_same_config() -> None:
    cfg: Config = MutableConfig(
        macro_type=MacroType.FILEPATH,
        comment_style=CommentStyle.NONE,
        subfolder_prefixes=[SubfolderPrefix("lib", "LIB_")],
        auto_update_path_allowlist=["src"],
    ).freeze()
    text: str = to_toml(cfg.to_toml_dict())
    parsed: TomlTable = tomlkit.parse(text).unwrap()
    assert MutableConfig.from_toml_dict(parsed).freeze() == cfg


def test_is_header() -> None:
    cfg = Config()
    assert cfg.is_header("a/b.hpp")
    assert cfg.is_header(Path("x.h++"))
    assert not cfg.is_header("a/b.c")


def test_typed_getter_rejects_bools() -> None:
    assert get_non_negative_int_or_none({"n": True}, "n") is None
    assert get_non_negative_int_or_none({"n": 0}, "n") == 0


def test_check_toml_file(tmp_path: Path) -> None:
    good: Path = tmp_path / "good.toml"
    good.write_text("[macro]\nprefix = 'A_'\n", encoding="utf-8")
    bad: Path = tmp_path / "bad.toml"
    bad.write_text("[macro\n", encoding="utf-8")

    assert check_toml_file(good) is None
    assert "Invalid TOML" in (check_toml_file(bad) or "")
    assert "Cannot read" in (check_toml_file(tmp_path / "missing.toml") or "")
