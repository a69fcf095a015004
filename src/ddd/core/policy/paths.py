"""Path classification for the decision policy.

All paths are repository-relative POSIX strings. Every function here is pure;
ignore rules reach :class:`PathClassifier` through an injected loader.
"""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, List

if TYPE_CHECKING:
    from .ignore import IgnoreRuleSet


@dataclass(frozen=True)
class DecisionLayout:
    """Names that define where decision documents live."""

    decision_dir: str = ".decision"
    extension: str = ".md"
    ignore_file: str = "ignore"
    vcs_dir: str = ".git"

    @property
    def root_decision_dir(self) -> str:
        return self.decision_dir


DEFAULT_LAYOUT = DecisionLayout()


class PathKind(str, Enum):
    DECISION = "decision"
    SUBJECT = "subject"
    EXCLUDED = "excluded"


def segments(path: str) -> List[str]:
    return [s for s in path.split("/") if s and s != "."]


def is_decision_path(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> bool:
    """A decision document sits below a decision directory and has the document extension."""
    segs = segments(path)
    if len(segs) < 2 or not segs[-1].endswith(layout.extension):
        return False
    return layout.decision_dir in segs[:-1]


def is_inside_decision_dir(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> bool:
    return layout.decision_dir in segments(path)[:-1]


def nearest_decision_dir(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> str:
    """Return ``dirname(path)/.decision`` (``.decision`` for root-level files)."""
    parent = posixpath.dirname(path.strip("/"))
    return posixpath.join(parent, layout.decision_dir) if parent else layout.decision_dir


def containing_decision_dir(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> str:
    """Return the innermost decision directory enclosing a decision path."""
    segs = segments(path)
    for idx in range(len(segs) - 2, -1, -1):
        if segs[idx] == layout.decision_dir:
            return "/".join(segs[: idx + 1])
    raise ValueError(f"Not inside a decision directory: {path}")


def decision_dir_parent(decision_dir: str) -> str:
    """Return the directory a decision directory documents ('' for the repository root)."""
    return posixpath.dirname(decision_dir.strip("/"))


def ignore_file_path(decision_dir: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> str:
    return posixpath.join(decision_dir, layout.ignore_file)


class PathClassifier:
    """Classify changed paths as decision documents, subjects or excluded.

    ``rules_for`` maps a decision directory to its :class:`IgnoreRuleSet`.
    """

    def __init__(
        self,
        rules_for: Callable[[str], "IgnoreRuleSet"],
        layout: DecisionLayout = DEFAULT_LAYOUT,
    ) -> None:
        self.layout = layout
        self._rules_for = rules_for

    def is_ignored(self, path: str) -> bool:
        nearest = nearest_decision_dir(path, self.layout)
        if self._rules_for(nearest).matches(path):
            return True
        root = self.layout.root_decision_dir
        return nearest != root and self._rules_for(root).matches(path)

    def classify(self, path: str) -> PathKind:
        segs = segments(path)
        if self.layout.vcs_dir in segs:
            return PathKind.EXCLUDED
        if is_decision_path(path, self.layout):
            return PathKind.DECISION
        if is_inside_decision_dir(path, self.layout):
            return PathKind.EXCLUDED
        if self.is_ignored(path):
            return PathKind.EXCLUDED
        return PathKind.SUBJECT


__all__ = [
    "DEFAULT_LAYOUT",
    "DecisionLayout",
    "PathClassifier",
    "PathKind",
    "containing_decision_dir",
    "decision_dir_parent",
    "ignore_file_path",
    "is_decision_path",
    "is_inside_decision_dir",
    "nearest_decision_dir",
    "segments",
]
