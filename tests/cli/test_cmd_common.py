# topmark:header:start
#
#   project      : GuardMark
#   file         : test_cmd_common.py
#   file_relpath : tests/cli/test_cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-file isolation in the shared command runner."""

from __future__ import annotations

from typing import TYPE_CHECKING

from guardmark.cli.cmd_common import run_for_files
from guardmark.cli.exit_codes import ExitCode
from guardmark.guard.editor import GuardOutcome
from guardmark.host.workspace import Workspace

if TYPE_CHECKING:
    from pathlib import Path

    from guardmark.cli.cmd_common import FileResult
    from guardmark.host.document import TextDocument


def test_failing_operation_does_not_abort_the_batch(tmp_path: Path) -> None:
    bad: Path = tmp_path / "bad.h"
    good: Path = tmp_path / "good.h"
    bad.write_text("int bad;\n", encoding="utf-8")
    good.write_text("int good;\n", encoding="utf-8")

    def operation(document: TextDocument) -> GuardOutcome:
        if document.path is not None and document.path.name == "bad.h":
            raise RuntimeError("boom")
        return GuardOutcome.NOT_FOUND

    results: list[FileResult] = run_for_files(
        [bad, good], workspace=Workspace(tmp_path), operation=operation
    )

    assert [r.outcome for r in results] == [GuardOutcome.FAILED, GuardOutcome.NOT_FOUND]
    assert results[0].document is None
    assert results[0].error_code is None
    assert not results[0].changed
    assert results[1].original_text == "int good;\n"


def test_missing_file_maps_to_file_not_found(tmp_path: Path) -> None:
    results: list[FileResult] = run_for_files(
        [tmp_path / "gone.h"],
        workspace=Workspace(tmp_path),
        operation=lambda _doc: GuardOutcome.SKIPPED,
    )

    assert results[0].outcome is GuardOutcome.FAILED
    assert results[0].error_code == ExitCode.FILE_NOT_FOUND
