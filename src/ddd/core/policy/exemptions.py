"""Exemptions granted by newly created decision directories."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from .models import Change
from .paths import DEFAULT_LAYOUT, DecisionLayout, containing_decision_dir, decision_dir_parent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExemptionSet:
    directories: FrozenSet[str] = field(default_factory=frozenset)
    everything: bool = False

    def covers(self, path: str) -> bool:
        if self.everything:
            return True
        return any(path.startswith(f"{d}/") for d in self.directories)

    def __bool__(self) -> bool:
        return self.everything or bool(self.directories)


class ExemptionResolver:
    """Compute the exemption set for the decision documents added in a change set.

    A decision directory that did not exist in ``baseline`` exempts every path
    below its parent. A document added directly under the repository-root
    decision directory exempts everything.
    """

    def __init__(
        self,
        baseline,
        layout: DecisionLayout = DEFAULT_LAYOUT,
        *,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.baseline = baseline
        self.layout = layout
        self.log = log or logger

    def resolve(self, decisions: Iterable[Change]) -> ExemptionSet:
        exempt = set()
        root = self.layout.root_decision_dir
        for change in decisions:
            if not change.kind.is_addition:
                continue
            decision_dir = containing_decision_dir(change.path, self.layout)
            if decision_dir == root:
                self.log.debug("Root decision %s exempts the whole change set", change.path)
                return ExemptionSet(everything=True)
            if self.baseline.is_directory(decision_dir):
                continue
            parent = decision_dir_parent(decision_dir)
            if parent:
                self.log.debug("New decision directory %s exempts %s/", decision_dir, parent)
                exempt.add(parent)
        return ExemptionSet(directories=frozenset(exempt))


__all__ = ["ExemptionResolver", "ExemptionSet"]
