# topmark:header:start
#
#   project      : GuardMark
#   file         : __init__.py
#   file_relpath : src/guardmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark package.

GuardMark maintains C/C++ include guards (``#ifndef``/``#define``/``#endif``) in
header files. It synthesizes macro names from configurable policy, inserts guards
below leading license/doc comments, and locates existing guards so they can be
removed or replaced. It exposes a Click CLI and a small typed API.
"""

from __future__ import annotations
