# topmark:header:start
#
#   project      : GuardMark
#   file         : test_guard_commands.py
#   file_relpath : tests/cli/test_guard_commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI guard commands: dry-run vs apply, diffs, filters and exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from guardmark.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from click.testing import Result

pytestmark = pytest.mark.cli

FILENAME_MACROS: list[str] = ["--no-config", "--macro-type", "filename"]
GUARDED = "#ifndef FOO_H\n#define FOO_H\nint x;\n\n\n#endif /* FOO_H */\n"


def _header(tmp_path: Path, text: str = "int x;\n", name: str = "foo.h") -> Path:
    f: Path = tmp_path / name
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(text, encoding="utf-8")
    return f


def test_insert_dry_run_reports_would_change(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(["insert", *FILENAME_MACROS, str(f)])

    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
    assert "would change" in result.output
    assert f.read_text(encoding="utf-8") == "int x;\n"


def test_insert_apply_writes_guard(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(["insert", "--apply", *FILENAME_MACROS, str(f)])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f.read_text(encoding="utf-8") == GUARDED


def test_insert_diff_shows_added_directives(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(["insert", "--diff", *FILENAME_MACROS, str(f)])

    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output
    assert "+#ifndef FOO_H" in result.output
    assert "+#endif /* FOO_H */" in result.output


def test_update_of_current_guard_is_a_no_op(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path, GUARDED)
    result: Result = run_cli(["update", *FILENAME_MACROS, str(f)])

    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_update_apply_renames_macro(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path, GUARDED)
    result: Result = run_cli(["update", "--apply", "--prefix", "ACME_", *FILENAME_MACROS, str(f)])

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f.read_text(encoding="utf-8") == GUARDED.replace("FOO_H", "ACME_FOO_H")


def test_update_inserts_unless_no_insert(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)

    result: Result = run_cli(["update", "--no-insert", *FILENAME_MACROS, str(f)])
    assert result.exit_code == ExitCode.SUCCESS, result.output

    result = run_cli(["update", *FILENAME_MACROS, str(f)])
    assert result.exit_code == ExitCode.WOULD_CHANGE, result.output


def test_remove_apply_and_idempotence(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path, GUARDED)

    result: Result = run_cli(["remove", "--apply", "--no-config", str(f)])
    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f.read_text(encoding="utf-8") == "int x;\n\n\n"

    result = run_cli(["remove", "--no-config", str(f)])
    assert result.exit_code == ExitCode.SUCCESS, result.output


def test_filepath_macros_use_the_workspace(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path, name="include/foo.h")
    result: Result = run_cli(
        [
            "insert",
            "--apply",
            "--no-config",
            "--macro-type",
            "filepath",
            "--workspace",
            str(tmp_path),
            str(f),
        ]
    )

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert f.read_text(encoding="utf-8").startswith("#ifndef INCLUDE_FOO_H\n")


def test_directory_input_only_touches_headers(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    h: Path = _header(tmp_path, name="src/a.h")
    c: Path = _header(tmp_path, name="src/a.c")
    skipped: Path = _header(tmp_path, name="src/gen/b.h")

    result: Result = run_cli(
        [
            "insert",
            "--apply",
            *FILENAME_MACROS,
            "--workspace",
            str(tmp_path),
            "--exclude",
            "gen/",
            str(tmp_path / "src"),
        ]
    )

    assert result.exit_code == ExitCode.SUCCESS, result.output
    assert h.read_text(encoding="utf-8").startswith("#ifndef A_H\n")
    assert c.read_text(encoding="utf-8") == "int x;\n"
    assert skipped.read_text(encoding="utf-8") == "int x;\n"


def test_missing_path_exits_file_not_found(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    result: Result = run_cli(["insert", "--no-config", str(tmp_path / "missing.h")])
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def test_missing_path_does_not_stop_other_files(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(
        ["insert", "--apply", *FILENAME_MACROS, str(tmp_path / "missing.h"), str(f)]
    )

    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output
    assert f.read_text(encoding="utf-8") == GUARDED


def test_no_paths_is_a_usage_error(run_cli: Callable[[Sequence[str]], Result]) -> None:
    result: Result = run_cli(["insert", "--no-config"])
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def test_verbose_and_quiet_are_mutually_exclusive(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(["-v", "-q", "insert", str(f)])
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def test_invalid_config_file_exits_config_error(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    bad: Path = tmp_path / "bad.toml"
    bad.write_text("[macro\n", encoding="utf-8")

    result: Result = run_cli(["insert", "--config", str(bad), str(f)])
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output


def test_underscored_option_is_rejected(
    tmp_path: Path, run_cli: Callable[[Sequence[str]], Result]
) -> None:
    f: Path = _header(tmp_path)
    result: Result = run_cli(["insert", "--macro_type", "filename", str(f)])
    assert result.exit_code != ExitCode.SUCCESS
    assert "--macro-type" in result.output
