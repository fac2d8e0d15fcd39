# topmark:header:start
#
#   project      : GuardMark
#   file         : test_header_resolution.py
#   file_relpath : tests/resolver/test_header_resolution.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File resolution: candidate expansion, header filtering and include/exclude patterns."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from guardmark.config import Config
from guardmark.file_resolver import ResolvedFiles, resolve_file_list

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root: Path = tmp_path / "proj"
    for rel in ("src/a.h", "src/a.c", "src/sub/b.hpp", "vendor/c.h", "README.md"):
        p: Path = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("", encoding="utf-8")
    return root


def _resolve(paths: list[str], root: Path, **kwargs: list[str]) -> ResolvedFiles:
    return resolve_file_list(
        paths, is_header=Config().is_header, workspace_root=root, **kwargs
    )


def _names(resolved: ResolvedFiles, root: Path) -> list[str]:
    return [p.relative_to(root.resolve()).as_posix() for p in resolved.files]


def test_directories_yield_headers_only(project: Path) -> None:
    resolved: ResolvedFiles = _resolve([str(project)], project)
    assert _names(resolved, project) == ["src/a.h", "src/sub/b.hpp", "vendor/c.h"]


def test_explicit_files_are_kept(project: Path) -> None:
    resolved: ResolvedFiles = _resolve([str(project / "src" / "a.c")], project)
    assert _names(resolved, project) == ["src/a.c"]


def test_include_and_exclude_patterns(project: Path) -> None:
    resolved: ResolvedFiles = _resolve(
        [str(project)], project, include_patterns=["src/"], exclude_patterns=["sub/"]
    )
    assert _names(resolved, project) == ["src/a.h"]


def test_missing_paths_and_unmatched_globs(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project)
    resolved: ResolvedFiles = _resolve(["nope.h", "src/*.hh", "src/*.h"], project)
    assert [str(p) for p in resolved.missing] == ["nope.h"]
    assert resolved.unmatched_globs == ["src/*.hh"]
    assert _names(resolved, project) == ["src/a.h"]
