# topmark:header:start
#
#   project      : GuardMark
#   file         : file_resolver.py
#   file_relpath : src/guardmark/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for GuardMark based on paths and filters.

This module expands positional arguments (files, directories and globs), keeps
header files, and applies gitignore-style include/exclude patterns relative to
the workspace root. The result is a deterministic, sorted list of files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from guardmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)


@dataclass
class ResolvedFiles:
    """Outcome of file resolution.

    Attributes:
        files (list[Path]): Sorted files selected for processing.
        missing (list[Path]): Literal paths that do not exist.
        unmatched_globs (list[str]): Glob patterns that matched nothing.
    """

    files: list[Path] = field(default_factory=lambda: [])
    missing: list[Path] = field(default_factory=lambda: [])
    unmatched_globs: list[str] = field(default_factory=lambda: [])


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _expand_path(p: Path, is_header: Callable[[Path], bool]) -> list[Path]:
    """Expand a base path into candidate files.

    Globs are expanded relative to the current working directory and directories
    recursively; both only contribute header files. A literal file is kept as is.
    """
    if "*" in str(p):
        return [c for c in Path(".").glob(str(p)) if c.is_file() and is_header(c)]
    if p.is_dir():
        return [c for c in p.rglob("*") if c.is_file() and is_header(c)]
    if p.is_file():
        return [p]
    return []


def resolve_file_list(
    paths: Iterable[str | Path],
    *,
    is_header: Callable[[Path], bool],
    workspace_root: Path,
    include_patterns: Iterable[str] = (),
    exclude_patterns: Iterable[str] = (),
) -> ResolvedFiles:
    """Return the files to process, applying candidate expansion and filters.

    The resolver implements these semantics:
      1. **Candidate set**: expand positional paths (files, directories recursively,
         and globs). Directories and globs only yield header files.
      2. **Include intersection**: with include patterns, keep only files matching
         any of them.
      3. **Exclude subtraction**: remove files matching any exclude pattern.
      4. Return a **sorted** list for deterministic output.

    Patterns use gitignore semantics and are matched against paths relative to
    ``workspace_root``.

    Args:
        paths (Iterable[str | Path]): Positional paths or globs.
        is_header (Callable[[Path], bool]): Predicate selecting header files.
        workspace_root (Path): Base for pattern matching.
        include_patterns (Iterable[str]): Include patterns.
        exclude_patterns (Iterable[str]): Exclude patterns.

    Returns:
        ResolvedFiles: Selected files plus the paths that could not be resolved.
    """
    resolved = ResolvedFiles()
    candidate_set: set[Path] = set()

    for raw in paths:
        p = Path(raw)
        expanded: list[Path] = _expand_path(p, is_header)
        candidate_set.update(c.resolve() for c in expanded)
        if "*" in str(p):
            if not expanded:
                resolved.unmatched_globs.append(str(p))
        elif not p.exists():
            resolved.missing.append(p)

    for pattern in resolved.unmatched_globs:
        logger.warning("No matches for glob pattern: %s", pattern)
    for missing in resolved.missing:
        logger.warning("No such file or directory: %s", missing)

    includes: list[str] = list(include_patterns)
    if includes:
        spec_in: PathSpec = PathSpec.from_lines(GitWildMatchPattern, includes)
        candidate_set = {
            p for p in candidate_set if spec_in.match_file(_rel_for_match(p, workspace_root))
        }

    excludes: list[str] = list(exclude_patterns)
    if excludes:
        spec_out: PathSpec = PathSpec.from_lines(GitWildMatchPattern, excludes)
        candidate_set = {
            p for p in candidate_set if not spec_out.match_file(_rel_for_match(p, workspace_root))
        }

    resolved.files = sorted(candidate_set)
    logger.trace("Files to process: %d -- %s", len(resolved.files), resolved.files)
    return resolved
