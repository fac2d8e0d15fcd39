# topmark:header:start
#
#   project      : GuardMark
#   file         : __main__.py
#   file_relpath : src/guardmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running GuardMark via ``python -m guardmark``.

Delegates to :func:`guardmark.cli.main.cli`, the single authoritative CLI entry
point.

Examples:
    Preview include guard insertion for a header::

        python -m guardmark insert include/foo.h
"""

from __future__ import annotations

from guardmark.cli.main import cli

if __name__ == "__main__":
    cli()
