# topmark:header:start
#
#   project      : GuardMark
#   file         : file.py
#   file_relpath : src/guardmark/utils/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path helpers shared by the guard engine and the host layer."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath


def compute_relpath(file_path: Path, root_path: Path | None) -> Path:
    """Compute the relative path from root_path to file_path.

    Args:
        file_path (Path): The file path to compute the relative path for.
        root_path (Path | None): The root path to compute the relative path from
            (the current directory when None).

    Returns:
        Path: The relative path from root_path to file_path.
    """
    resolved_path: Path = file_path.resolve()
    resolved_root: Path = (root_path or Path.cwd()).resolve()

    try:
        return resolved_path.relative_to(resolved_root)
    except ValueError:
        # Outside the root: fall back to a "../"-style path
        return Path(os.path.relpath(resolved_path, start=resolved_root))


def path_has_prefix(relpath: str, prefix: str) -> bool:
    """Return True if ``prefix`` is a leading sequence of the segments of ``relpath``.

    Both arguments are workspace-relative POSIX paths. Empty segments and ``.``
    are ignored, so ``"src/"`` and ``"./src"`` both match ``"src/a.h"`` while
    ``"sr"`` does not.

    Args:
        relpath (str): The path being tested.
        prefix (str): The candidate leading folder path.

    Returns:
        bool: True on a segment-wise prefix match.
    """
    path_parts: tuple[str, ...] = PurePosixPath(relpath.replace("\\", "/")).parts
    prefix_parts: tuple[str, ...] = PurePosixPath(prefix.replace("\\", "/")).parts
    if not prefix_parts:
        return False
    return path_parts[: len(prefix_parts)] == prefix_parts
