"""Domain-specific configuration for decision-document creation."""
from __future__ import annotations

import os
from functools import cached_property
from typing import List

from ..base import BaseDomainConfig


class DecisionConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "decision"

    @cached_property
    def editor(self) -> str:
        configured = str(self.section.get("editor") or "").strip()
        return configured or os.environ.get("EDITOR", "").strip() or "vim"

    @cached_property
    def template(self) -> str:
        return str(self.section.get("template") or "decision.md.j2")

    @cached_property
    def readme_template(self) -> str:
        return str(self.section.get("readme_template") or "readme.md.j2")

    @cached_property
    def draft_status(self) -> str:
        return str(self.section.get("draft_status") or "DRAFT")

    @cached_property
    def statuses(self) -> List[str]:
        return [str(s) for s in (self.section.get("statuses") or [])]


__all__ = ["DecisionConfig"]
