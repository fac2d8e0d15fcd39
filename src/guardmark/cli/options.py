# topmark:header:start
#
#   project      : GuardMark
#   file         : options.py
#   file_relpath : src/guardmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based GuardMark CLI.

This module centralizes reusable options (verbosity, color, configuration, file
filtering, macro overrides, dry-run/apply) and their resolution logic, so
commands and groups can stay thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click
from click.core import ParameterSource

from guardmark.cli.cli_types import EnumChoiceParam
from guardmark.cli.errors import GuardmarkUsageError
from guardmark.config.logging import get_logger
from guardmark.config.types import CommentStyle, MacroType

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

#: Click context settings shared by all commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` / ``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Returns:
        int: ``verbose_count`` when positive, ``-quiet_count`` otherwise (0 is terse).

    Raises:
        GuardmarkUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise GuardmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    return verbose_count if verbose_count > 0 else -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from CLI options.
        stdout_isatty (bool | None): Whether stdout is a TTY; if None, auto-detected.

    Returns:
        bool: True if color output should be enabled.

    Behavior:
        Honors --color and --no-color CLI flags, then the FORCE_COLOR and NO_COLOR
        environment variables. Defaults to enabling color if stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color {auto,always,never}`` and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def trap_underscored_option(ctx: click.Context, param: click.Option, _value: object) -> None:
    """Raise a helpful error for underscored long options (e.g., ``--no_config``).

    Runs during option parsing (is_eager=True) so we can show a friendly hint
    instead of the generic "No such option" error.
    """
    name: str | None = param.name
    if name is None or ctx.get_parameter_source(name) is not ParameterSource.COMMANDLINE:
        return
    bad: str = param.opts[0] if param.opts else "--?"
    raise click.UsageError(f"Unknown option: {bad}. Did you mean {bad.replace('_', '-')}?")


def underscored_trap_option(*names: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Register hidden underscored spellings that raise a helpful error.

    The hidden option gets a unique destination name so Click's parameter source
    tracking does not overlap with the real option's destination.

    Args:
        *names (str): Underscored long option names to trap, e.g. ``"--no_config"``.

    Returns:
        Callable: A decorator compatible with Click's option stacking.
    """
    if not names:
        raise ValueError("underscored_trap_option requires at least one option name")
    dest: str = f"_trap_{names[0].lstrip('-').replace('-', '_')}"
    return click.option(
        *names,
        dest,
        hidden=True,
        expose_value=False,
        is_eager=True,
        multiple=True,
        callback=trap_underscored_option,
    )


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--workspace``, ``--config`` and ``--no-config`` options to a command."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore user and project config files (only use defaults and --config).",
    )(f)
    f = underscored_trap_option("--no_config")(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    f = click.option(
        "--workspace",
        "workspace",
        metavar="DIR",
        type=click.Path(exists=True, file_okay=False, dir_okay=True),
        default=None,
        help="Workspace root for relative paths and Filepath macros (default: CWD).",
    )(f)
    return f


def common_macro_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add options overriding the macro naming and ``#endif`` comment settings."""
    f = click.option(
        "--macro-type",
        "macro_type",
        type=EnumChoiceParam(MacroType),
        default=None,
        help="Macro name source: guid, filename, filepath or filename_and_guid.",
    )(f)
    f = underscored_trap_option("--macro_type")(f)
    f = click.option(
        "--comment-style",
        "comment_style",
        type=EnumChoiceParam(CommentStyle),
        default=None,
        help="Trailing #endif comment: block, line or none.",
    )(f)
    f = underscored_trap_option("--comment_style")(f)
    f = click.option("--prefix", "prefix", default=None, help="Prefix for macro names.")(f)
    f = click.option("--suffix", "suffix", default=None, help="Suffix for macro names.")(f)
    return f


def common_filtering_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--include`` / ``--exclude`` gitignore-style filters to a command."""
    f = click.option(
        "--include",
        "-i",
        "include_patterns",
        multiple=True,
        help="Filter: keep only files matching these patterns (intersection).",
    )(f)
    f = click.option(
        "--exclude",
        "-e",
        "exclude_patterns",
        multiple=True,
        help="Filter: remove files matching these patterns (subtraction).",
    )(f)
    return f


def common_apply_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--apply`` and ``--diff`` options to a command."""
    f = click.option(
        "--apply",
        "apply_changes",
        is_flag=True,
        help="Write changes to files (off by default).",
    )(f)
    f = click.option("--diff", is_flag=True, help="Show unified diffs of the changes.")(f)
    return f
