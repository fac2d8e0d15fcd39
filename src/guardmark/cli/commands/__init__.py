# topmark:header:start
#
#   project      : GuardMark
#   file         : __init__.py
#   file_relpath : src/guardmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GuardMark CLI subcommands."""
