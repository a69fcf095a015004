"""Ignore rules read from ``<decision-dir>/ignore``.

Each non-blank, non-comment line is one rule:

- ``pattern``     a direct rule, matched against ``<parent>/<pattern>`` where
  ``<parent>`` is the directory owning the decision directory
- ``**/pattern``  a recursive rule, matched against every trailing run of the
  path's segments (including the whole path)

Matching is segment by segment with shell-style globs, so ``*`` never
crosses a ``/``. A ``**`` segment inside a pattern matches any number of
segments.
"""
from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .paths import DEFAULT_LAYOUT, DecisionLayout, decision_dir_parent, ignore_file_path, segments

logger = logging.getLogger(__name__)

RECURSIVE_PREFIX = "**/"


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, path[i:]) for i in range(len(path) + 1))
    if not path:
        return False
    return fnmatchcase(path[0], head) and _match_segments(rest, path[1:])


@dataclass(frozen=True)
class DirectRule:
    pattern: str
    parent: str = ""

    @property
    def candidate(self) -> str:
        return posixpath.join(self.parent, self.pattern) if self.parent else self.pattern

    def matches(self, path: str) -> bool:
        return _match_segments(segments(self.candidate), segments(path))


@dataclass(frozen=True)
class RecursiveRule:
    suffix: str

    def matches(self, path: str) -> bool:
        pattern = segments(self.suffix)
        segs = segments(path)
        return any(_match_segments(pattern, segs[i:]) for i in range(len(segs)))


IgnoreRule = Union[DirectRule, RecursiveRule]


def parse_rule(line: str, parent: str = "") -> Optional[IgnoreRule]:
    """Compile one ignore-file line; returns None for blanks and comments."""
    text = line.strip()
    if not text or text.startswith("#"):
        return None
    if text.startswith(RECURSIVE_PREFIX):
        suffix = text[len(RECURSIVE_PREFIX):].strip()
        return RecursiveRule(suffix) if suffix else None
    return DirectRule(pattern=text, parent=parent)


@dataclass(frozen=True)
class IgnoreRuleSet:
    rules: Tuple[IgnoreRule, ...] = field(default_factory=tuple)

    @classmethod
    def parse(cls, text: str, parent: str = "") -> "IgnoreRuleSet":
        compiled: List[IgnoreRule] = []
        for line in text.splitlines():
            rule = parse_rule(line, parent)
            if rule is not None:
                compiled.append(rule)
        return cls(tuple(compiled))

    def match(self, path: str) -> Optional[IgnoreRule]:
        """Return the first rule matching ``path``."""
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return None

    def matches(self, path: str) -> bool:
        return self.match(path) is not None

    def __len__(self) -> int:
        return len(self.rules)


EMPTY_RULES = IgnoreRuleSet()


class IgnoreRuleLoader:
    """Load and memoise rule sets per decision directory from a tree snapshot."""

    def __init__(self, snapshot, layout: DecisionLayout = DEFAULT_LAYOUT) -> None:
        self.snapshot = snapshot
        self.layout = layout
        self._cache: Dict[str, IgnoreRuleSet] = {}

    def __call__(self, decision_dir: str) -> IgnoreRuleSet:
        if decision_dir not in self._cache:
            self._cache[decision_dir] = self._load(decision_dir)
        return self._cache[decision_dir]

    def _load(self, decision_dir: str) -> IgnoreRuleSet:
        path = ignore_file_path(decision_dir, self.layout)
        text = self.snapshot.read_text(path)
        if text is None:
            return EMPTY_RULES
        rules = IgnoreRuleSet.parse(text, parent=decision_dir_parent(decision_dir))
        logger.debug("Loaded %d ignore rule(s) from %s", len(rules), path)
        return rules


def compile_rules(lines: Iterable[str], parent: str = "") -> IgnoreRuleSet:
    return IgnoreRuleSet.parse("\n".join(lines), parent=parent)


__all__ = [
    "DirectRule",
    "EMPTY_RULES",
    "IgnoreRule",
    "IgnoreRuleLoader",
    "IgnoreRuleSet",
    "RecursiveRule",
    "compile_rules",
    "parse_rule",
]
