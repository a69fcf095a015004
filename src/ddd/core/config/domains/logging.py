"""Domain-specific configuration for ddd logging.

Controls the stdlib logging level and an optional log file. The legacy
``DDD_LOG_LEVEL`` / ``DDD_LOG_FILE`` environment variables map onto this
section (see ConfigManager.ENV_ALIASES).
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig

_LEVEL_ALIASES = {"WARN": "WARNING"}


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        raw = str(self.section.get("level", "INFO") or "INFO").strip().upper()
        return _LEVEL_ALIASES.get(raw, raw)

    @cached_property
    def file_template(self) -> str:
        return str(self.section.get("file", "") or "").strip()

    def resolve_log_path(self) -> Path | None:
        if not self.file_template:
            return None
        expanded = Path(self.file_template).expanduser()
        if not expanded.is_absolute():
            expanded = self.repo_root / expanded
        return expanded.resolve()


__all__ = ["LoggingConfig"]
