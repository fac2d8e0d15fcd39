# topmark:header:start
#
#   project      : GuardMark
#   file         : store.py
#   file_relpath : src/guardmark/config/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-file configuration store.

`ConfigStore` is the read-only configuration capability handed to the guard
engine. Every call resolves the layered configuration afresh for the requested
scope (a file path), so settings edited between two operations are always
honored and no value is cached across invocations.
"""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, Any

from guardmark.config.logging import get_logger
from guardmark.config.model import Config, MutableConfig

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from guardmark.config.logging import GuardmarkLogger

logger: GuardmarkLogger = get_logger(__name__)

_CONFIG_KEYS: frozenset[str] = frozenset(f.name for f in fields(Config))


class ConfigStore:
    """Resolve GuardMark configuration per file.

    Args:
        extra_config_files (Iterable[Path]): Explicit config files merged after discovery.
        no_config (bool): Skip user and project config discovery.
        overrides (MutableConfig | None): Highest-precedence layer (e.g. CLI options).
    """

    def __init__(
        self,
        *,
        extra_config_files: Iterable[Path] = (),
        no_config: bool = False,
        overrides: MutableConfig | None = None,
    ) -> None:
        self.extra_config_files: tuple[Path, ...] = tuple(extra_config_files)
        self.no_config = no_config
        self.overrides = overrides

    def resolve(self, scope: Path | None = None) -> Config:
        """Return the effective configuration for ``scope``.

        Args:
            scope (Path | None): File the configuration applies to; None resolves the
                workspace/global layers from the current directory.

        Returns:
            Config: A fresh immutable snapshot.
        """
        draft: MutableConfig = MutableConfig.load_merged(
            scope=scope,
            extra_config_files=self.extra_config_files,
            no_config=self.no_config,
        )
        if self.overrides is not None:
            draft = draft.merge_with(self.overrides)
        config: Config = draft.freeze()
        logger.trace("Resolved config for %s: %s", scope, config)
        return config

    def get(self, key: str, scope: Path | None = None) -> Any:
        """Return a single setting for ``scope``.

        Args:
            key (str): A `Config` field name (e.g. ``"macro_type"``).
            scope (Path | None): File the setting applies to.

        Returns:
            Any: The resolved value (defaults apply when no layer sets it).

        Raises:
            KeyError: If ``key`` is not a configuration setting.
        """
        if key not in _CONFIG_KEYS:
            raise KeyError(f"Unknown configuration key: {key}")
        return getattr(self.resolve(scope), key)
