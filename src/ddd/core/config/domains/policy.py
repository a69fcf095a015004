"""Domain-specific configuration for the decision policy.

Provides cached access to:
- Decision layout (directory name, document extension, ignore file, VCS dir)
- Accepted read-only permission modes and the normalization target mode
- Policy toggles (permission normalization, .gitignore check)
"""
from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any, FrozenSet

from ..base import BaseDomainConfig

if TYPE_CHECKING:
    from ddd.core.policy.paths import DecisionLayout


def parse_mode(raw: Any) -> int:
    """Parse an octal permission string (``"444"``) into an int (``0o444``)."""
    text = str(raw).strip()
    try:
        return int(text, 8)
    except ValueError as exc:
        raise ValueError(f"Invalid permission mode: {raw!r}") from exc


class PolicyConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "policy"

    @cached_property
    def decision_dir(self) -> str:
        return str(self.section.get("decision_dir") or ".decision")

    @cached_property
    def document_extension(self) -> str:
        return str(self.section.get("document_extension") or ".md")

    @cached_property
    def ignore_file(self) -> str:
        return str(self.section.get("ignore_file") or "ignore")

    @cached_property
    def vcs_dir(self) -> str:
        return str(self.section.get("vcs_dir") or ".git")

    @cached_property
    def readonly_modes(self) -> FrozenSet[int]:
        raw = self.section.get("readonly_modes") or ["444", "555"]
        return frozenset(parse_mode(m) for m in raw)

    @cached_property
    def normalized_mode(self) -> int:
        return parse_mode(self.section.get("normalized_mode") or "444")

    @cached_property
    def normalize_permissions(self) -> bool:
        return bool(self.section.get("normalize_permissions", True))

    @cached_property
    def check_gitignore(self) -> bool:
        return bool(self.section.get("check_gitignore", True))

    @cached_property
    def layout(self) -> "DecisionLayout":
        from ddd.core.policy.paths import DecisionLayout

        return DecisionLayout(
            decision_dir=self.decision_dir,
            extension=self.document_extension,
            ignore_file=self.ignore_file,
            vcs_dir=self.vcs_dir,
        )


__all__ = ["PolicyConfig", "parse_mode"]
