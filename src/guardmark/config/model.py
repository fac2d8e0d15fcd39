# topmark:header:start
#
#   project      : GuardMark
#   file         : model.py
#   file_relpath : src/guardmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot used by the guard engine.
    - `MutableConfig`: a tri-state builder used during discovery/merge; it
      can be frozen into `Config` and thawed back for edits.

Layering:
    Configuration is resolved per *scope* (the file being edited). Layers are
    merged last-wins from built-in defaults, the user config, project configs
    discovered upward from the scope, explicit ``--config`` files and finally
    CLI overrides. A ``None`` field in `MutableConfig` means *inherit*.

Immutability:
    - `Config` stores tuples and is ``frozen=True``. Use `Config.thaw` → edit →
      `MutableConfig.freeze` for safe updates.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from guardmark.config.io import (
    extract_guardmark_table,
    get_bool_value_or_none,
    get_non_negative_int_or_none,
    get_string_list_or_none,
    get_string_value_or_none,
    get_table_list_or_none,
    get_table_value,
    load_toml_dict,
    warn_unknown_keys,
)
from guardmark.config.keys import Toml
from guardmark.config.logging import get_logger
from guardmark.config.types import CommentStyle, MacroType, SubfolderPrefix
from guardmark.constants import (
    DEFAULT_HEADER_EXTENSIONS,
    GUARDMARK_TOML_NAME,
    PYPROJECT_TOML_NAME,
)

if TYPE_CHECKING:
    from guardmark.config.logging import GuardmarkLogger
    from guardmark.config.types import TomlTable

logger: GuardmarkLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for one file.

    Attributes:
        macro_type (MacroType): How the guard macro name is synthesized.
        prefix (str): Prepended to every macro name.
        suffix (str): Appended to every macro name.
        subfolder_prefixes (tuple[SubfolderPrefix, ...]): Ordered per-folder prefixes;
            the first entry containing the file wins.
        prevent_leading_digit (bool): Remap a leading GUID digit to a letter A-F.
        shorten_repeated_underscores (bool): Collapse ``__`` runs in path-derived names.
        remove_file_extension (bool): Drop the file extension from path-derived names.
        comment_style (CommentStyle): Trailing comment rendered after ``#endif``.
        path_depth (int): Number of trailing folders kept for ``Filepath`` (0 = all).
        path_skip (int): Number of leading folders dropped for ``Filepath``.
        spaces_after_endif (int): Spaces between ``#endif`` and its trailing comment.
        convert_path_to_snake_case (bool): Convert CamelCase path segments to snake_case.
        skip_leading_comments (bool): Insert guards below leading comment blocks.
        insert_blank_line_before_guard (bool): Separate a skipped comment block from
            the ``#ifndef`` line with one blank line.
        remove_pragma_once (bool): Delete a ``#pragma once`` line when editing guards.
        header_file_extensions (tuple[str, ...]): Suffixes identifying header files.
        auto_update_on_rename (bool): Update guards when a header is renamed or opened.
        auto_insert_on_create (bool): Insert guards into newly created headers.
        auto_update_path_allowlist (tuple[str, ...]): Workspace-relative path prefixes
            eligible for automatic updates (empty = all).
        auto_update_path_blocklist (tuple[str, ...]): Workspace-relative path prefixes
            excluded from automatic updates (wins over the allowlist).
        config_files (tuple[Path, ...]): Provenance of the merged layers.
    """

    macro_type: MacroType = MacroType.GUID
    prefix: str = ""
    suffix: str = ""
    subfolder_prefixes: tuple[SubfolderPrefix, ...] = ()
    prevent_leading_digit: bool = True
    shorten_repeated_underscores: bool = True
    remove_file_extension: bool = False
    comment_style: CommentStyle = CommentStyle.BLOCK
    path_depth: int = 0
    path_skip: int = 0
    spaces_after_endif: int = 1
    convert_path_to_snake_case: bool = False
    skip_leading_comments: bool = True
    insert_blank_line_before_guard: bool = True
    remove_pragma_once: bool = True
    header_file_extensions: tuple[str, ...] = DEFAULT_HEADER_EXTENSIONS
    auto_update_on_rename: bool = True
    auto_insert_on_create: bool = True
    auto_update_path_allowlist: tuple[str, ...] = ()
    auto_update_path_blocklist: tuple[str, ...] = ()
    config_files: tuple[Path, ...] = ()

    def is_header(self, path: Path | str) -> bool:
        """Return True if ``path`` ends with one of the configured header extensions."""
        name: str = str(path)
        return any(name.endswith(ext) for ext in self.header_file_extensions)

    def thaw(self) -> MutableConfig:
        """Return a mutable builder initialized from this frozen config."""
        return MutableConfig(**{f.name: getattr(self, f.name) for f in fields(self)}).normalized()

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (``guardmark.toml`` layout)."""
        return {
            Toml.SECTION_MACRO: {
                Toml.KEY_TYPE: self.macro_type.name.lower(),
                Toml.KEY_PREFIX: self.prefix,
                Toml.KEY_SUFFIX: self.suffix,
                Toml.KEY_PREVENT_LEADING_DIGIT: self.prevent_leading_digit,
                Toml.KEY_SHORTEN_UNDERSCORES: self.shorten_repeated_underscores,
                Toml.KEY_REMOVE_EXTENSION: self.remove_file_extension,
                Toml.KEY_PATH_DEPTH: self.path_depth,
                Toml.KEY_PATH_SKIP: self.path_skip,
                Toml.KEY_SNAKE_CASE: self.convert_path_to_snake_case,
                Toml.KEY_SUBFOLDER_PREFIXES: [
                    {Toml.KEY_FOLDER_PATH: sp.folder_path, Toml.KEY_PREFIX: sp.prefix}
                    for sp in self.subfolder_prefixes
                ],
            },
            Toml.SECTION_LAYOUT: {
                Toml.KEY_COMMENT_STYLE: self.comment_style.name.lower(),
                Toml.KEY_SPACES_AFTER_ENDIF: self.spaces_after_endif,
                Toml.KEY_SKIP_LEADING_COMMENTS: self.skip_leading_comments,
                Toml.KEY_INSERT_BLANK_LINE: self.insert_blank_line_before_guard,
                Toml.KEY_REMOVE_PRAGMA_ONCE: self.remove_pragma_once,
            },
            Toml.SECTION_FILES: {
                Toml.KEY_HEADER_EXTENSIONS: list(self.header_file_extensions),
            },
            Toml.SECTION_AUTOMATION: {
                Toml.KEY_INSERT_ON_CREATE: self.auto_insert_on_create,
                Toml.KEY_UPDATE_ON_RENAME: self.auto_update_on_rename,
                Toml.KEY_PATH_ALLOWLIST: list(self.auto_update_path_allowlist),
                Toml.KEY_PATH_BLOCKLIST: list(self.auto_update_path_blocklist),
            },
        }


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable, tri-state builder for `Config`, suitable for loading and merging.

    Every setting defaults to ``None`` (*inherit*). Layers are combined with
    `merge_with` (last wins) and frozen with `freeze`, which fills the remaining
    unset fields from the `Config` defaults.
    """

    macro_type: MacroType | None = None
    prefix: str | None = None
    suffix: str | None = None
    subfolder_prefixes: list[SubfolderPrefix] | None = None
    prevent_leading_digit: bool | None = None
    shorten_repeated_underscores: bool | None = None
    remove_file_extension: bool | None = None
    comment_style: CommentStyle | None = None
    path_depth: int | None = None
    path_skip: int | None = None
    spaces_after_endif: int | None = None
    convert_path_to_snake_case: bool | None = None
    skip_leading_comments: bool | None = None
    insert_blank_line_before_guard: bool | None = None
    remove_pragma_once: bool | None = None
    header_file_extensions: list[str] | None = None
    auto_update_on_rename: bool | None = None
    auto_insert_on_create: bool | None = None
    auto_update_path_allowlist: list[str] | None = None
    auto_update_path_blocklist: list[str] | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    # Set when a discovered file declares `root = true`; never merged.
    is_root: bool = field(default=False, compare=False)

    def normalized(self) -> MutableConfig:
        """Convert tuple-valued fields (from a thawed `Config`) into lists."""
        for f in fields(self):
            value: Any = getattr(self, f.name)
            if isinstance(value, tuple):
                setattr(self, f.name, list(value))
        return self

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling unset fields from defaults."""
        defaults = Config()
        values: dict[str, Any] = {}
        for f in fields(Config):
            value: Any = getattr(self, f.name)
            if value is None:
                values[f.name] = getattr(defaults, f.name)
            elif isinstance(value, list):
                values[f.name] = tuple(value)
            else:
                values[f.name] = value
        return Config(**values)

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where explicitly set values of ``other`` win.

        Args:
            other (MutableConfig): The layer whose values override those of this one.

        Returns:
            MutableConfig: The merged builder. Provenance lists are concatenated.
        """
        merged = MutableConfig()
        for f in fields(self):
            if f.name in ("config_files", "is_root"):
                continue
            override: Any = getattr(other, f.name)
            current: Any = getattr(self, f.name)
            setattr(merged, f.name, override if override is not None else current)
        merged.config_files = self.config_files + other.config_files
        return merged

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults as explicit values."""
        return Config().thaw()

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a builder from a parsed GuardMark TOML table.

        Invalid values are logged and left unset; unknown keys are reported.

        Args:
            data (TomlTable): The GuardMark table (``guardmark.toml`` content or
                ``[tool.guardmark]``).
            config_file (Path | None): Source file, recorded as provenance.

        Returns:
            MutableConfig: The resulting builder.
        """
        where: str = str(config_file) if config_file else "<dict>"
        warn_unknown_keys(data, Toml.ALLOWED_TOP_LEVEL_KEYS, where)
        for section, allowed in Toml.ALLOWED_SECTION_KEYS.items():
            warn_unknown_keys(get_table_value(data, section), allowed, f"[{section}] of {where}")

        draft = cls()
        draft.is_root = bool(get_bool_value_or_none(data, Toml.KEY_ROOT))

        macro_tbl: TomlTable = get_table_value(data, Toml.SECTION_MACRO)
        raw_type: str | None = get_string_value_or_none(macro_tbl, Toml.KEY_TYPE)
        draft.macro_type = MacroType.from_name(raw_type)
        if raw_type is not None and draft.macro_type is None:
            logger.warning("Unknown macro type %r in %s; ignoring", raw_type, where)
        draft.prefix = get_string_value_or_none(macro_tbl, Toml.KEY_PREFIX)
        draft.suffix = get_string_value_or_none(macro_tbl, Toml.KEY_SUFFIX)
        draft.prevent_leading_digit = get_bool_value_or_none(
            macro_tbl, Toml.KEY_PREVENT_LEADING_DIGIT
        )
        draft.shorten_repeated_underscores = get_bool_value_or_none(
            macro_tbl, Toml.KEY_SHORTEN_UNDERSCORES
        )
        draft.remove_file_extension = get_bool_value_or_none(macro_tbl, Toml.KEY_REMOVE_EXTENSION)
        draft.path_depth = get_non_negative_int_or_none(macro_tbl, Toml.KEY_PATH_DEPTH)
        draft.path_skip = get_non_negative_int_or_none(macro_tbl, Toml.KEY_PATH_SKIP)
        draft.convert_path_to_snake_case = get_bool_value_or_none(macro_tbl, Toml.KEY_SNAKE_CASE)

        prefix_tables: list[TomlTable] | None = get_table_list_or_none(
            macro_tbl, Toml.KEY_SUBFOLDER_PREFIXES
        )
        if prefix_tables is not None:
            draft.subfolder_prefixes = []
            for tbl in prefix_tables:
                folder: str | None = get_string_value_or_none(tbl, Toml.KEY_FOLDER_PATH)
                prefix: str | None = get_string_value_or_none(tbl, Toml.KEY_PREFIX)
                if folder is None or prefix is None:
                    logger.warning("Incomplete subfolder prefix entry %r in %s", tbl, where)
                    continue
                draft.subfolder_prefixes.append(SubfolderPrefix(folder_path=folder, prefix=prefix))

        layout_tbl: TomlTable = get_table_value(data, Toml.SECTION_LAYOUT)
        raw_style: str | None = get_string_value_or_none(layout_tbl, Toml.KEY_COMMENT_STYLE)
        draft.comment_style = CommentStyle.from_name(raw_style)
        if raw_style is not None and draft.comment_style is None:
            logger.warning("Unknown comment style %r in %s; ignoring", raw_style, where)
        draft.spaces_after_endif = get_non_negative_int_or_none(
            layout_tbl, Toml.KEY_SPACES_AFTER_ENDIF
        )
        draft.skip_leading_comments = get_bool_value_or_none(
            layout_tbl, Toml.KEY_SKIP_LEADING_COMMENTS
        )
        draft.insert_blank_line_before_guard = get_bool_value_or_none(
            layout_tbl, Toml.KEY_INSERT_BLANK_LINE
        )
        draft.remove_pragma_once = get_bool_value_or_none(layout_tbl, Toml.KEY_REMOVE_PRAGMA_ONCE)

        files_tbl: TomlTable = get_table_value(data, Toml.SECTION_FILES)
        draft.header_file_extensions = get_string_list_or_none(
            files_tbl, Toml.KEY_HEADER_EXTENSIONS
        )

        auto_tbl: TomlTable = get_table_value(data, Toml.SECTION_AUTOMATION)
        draft.auto_insert_on_create = get_bool_value_or_none(auto_tbl, Toml.KEY_INSERT_ON_CREATE)
        draft.auto_update_on_rename = get_bool_value_or_none(auto_tbl, Toml.KEY_UPDATE_ON_RENAME)
        draft.auto_update_path_allowlist = get_string_list_or_none(
            auto_tbl, Toml.KEY_PATH_ALLOWLIST
        )
        draft.auto_update_path_blocklist = get_string_list_or_none(
            auto_tbl, Toml.KEY_PATH_BLOCKLIST
        )

        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``guardmark.toml`` and ``pyproject.toml`` files, extracting the
        ``[tool.guardmark]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The builder, or None if a ``pyproject.toml`` carries
                no ``[tool.guardmark]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        table: TomlTable | None = extract_guardmark_table(path, load_toml_dict(path))
        if table is None:
            logger.debug("No [tool.guardmark] section in %s", path)
            return None
        return cls.from_toml_dict(table, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most → nearest**. Within a directory,
        ``pyproject.toml`` precedes ``guardmark.toml`` so the dedicated file wins
        on merge. A config declaring ``root = true`` stops the upward walk after
        its directory has been collected.

        Args:
            start (Path): A file or directory where discovery starts.

        Returns:
            list[Path]: Discovered config file paths ordered for merging.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if not cur.is_dir():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_TOML_NAME, GUARDMARK_TOML_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                table: TomlTable | None = extract_guardmark_table(p, load_toml_dict(p))
                if table is None:
                    continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if table.get(Toml.KEY_ROOT) is True:
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return a user-scoped config path if it exists.

        Looks under XDG config (``$XDG_CONFIG_HOME/guardmark/guardmark.toml``) and a
        fallback (``~/.guardmark.toml``). The first existing path is returned.
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        for p in (base / "guardmark" / GUARDMARK_TOML_NAME, Path.home() / ".guardmark.toml"):
            if p.is_file():
                return p
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        scope: Path | None = None,
        extra_config_files: Iterable[Path] = (),
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers for one scope.

        Merge order (lowest → highest precedence):
            1) Built-in defaults
            2) User config (XDG / home)
            3) Project configs discovered upward from ``scope``, root-most first
            4) Extra config files passed explicitly (in the order provided)

        Args:
            scope (Path | None): The file (or directory) configuration is resolved for.
                Discovery starts from CWD when None.
            extra_config_files (Iterable[Path]): Explicit config files merged last.
            no_config (bool): If True, skip user and project discovery.

        Returns:
            MutableConfig: The merged builder.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            for cfg_path in cls.discover_local_config_files(scope or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files:
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft
