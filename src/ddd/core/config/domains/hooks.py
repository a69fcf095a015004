"""Domain-specific configuration for git hooks."""
from __future__ import annotations

from functools import cached_property
from typing import List

from ..base import BaseDomainConfig

SUPPORTED_HOOKS = ("pre-commit", "pre-push", "pre-receive")


class HooksConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "hooks"

    @cached_property
    def names(self) -> List[str]:
        raw = self.section.get("names") or list(SUPPORTED_HOOKS)
        return [str(n) for n in raw if str(n) in SUPPORTED_HOOKS]

    @cached_property
    def push_base_ref(self) -> str:
        return str(self.section.get("push_base_ref") or "origin/main")

    @cached_property
    def receive_base_ref(self) -> str:
        return str(self.section.get("receive_base_ref") or "main")


__all__ = ["HooksConfig", "SUPPORTED_HOOKS"]
