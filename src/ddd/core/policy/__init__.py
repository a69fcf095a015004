"""Decision policy engine.

The staged/range entry points live in :mod:`ddd.core.policy.engine`; the
components here are pure and operate on tree snapshots.
"""
from __future__ import annotations

from .ignore import DirectRule, IgnoreRuleLoader, IgnoreRuleSet, RecursiveRule
from .mentions import mentions
from .models import Change, ChangeKind, ChangeSet, ValidationReport, Violation, ViolationKind
from .paths import DecisionLayout, PathClassifier, PathKind, is_decision_path, nearest_decision_dir
from .validator import ChangeSetValidator

__all__ = [
    "Change",
    "ChangeKind",
    "ChangeSet",
    "ChangeSetValidator",
    "DecisionLayout",
    "DirectRule",
    "IgnoreRuleLoader",
    "IgnoreRuleSet",
    "PathClassifier",
    "PathKind",
    "RecursiveRule",
    "ValidationReport",
    "Violation",
    "ViolationKind",
    "is_decision_path",
    "mentions",
    "nearest_decision_dir",
]
