"""Domain-specific configuration for decision search."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class SearchConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "search"

    @cached_property
    def max_workers(self) -> int:
        return max(1, int(self.section.get("max_workers", 4) or 4))

    @cached_property
    def context_lines(self) -> int:
        return max(0, int(self.section.get("context_lines", 2) or 0))

    @cached_property
    def max_lines_per_file(self) -> int:
        return max(1, int(self.section.get("max_lines_per_file", 10) or 10))


__all__ = ["SearchConfig"]
