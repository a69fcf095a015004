"""Per-file decision requirement for a change set.

The same algorithm serves staged and range validation. The only inputs that
differ between modes are the two tree snapshots:

- ``target``: the state being validated (working tree, or the range's end)
- ``baseline``: the state before the change (HEAD, or the range's start)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exemptions import ExemptionResolver
from .ignore import IgnoreRuleLoader
from .mentions import first_mentioning
from .models import Change, ChangeKind, ChangeSet, ValidationReport, Violation, ViolationKind
from .paths import (
    DEFAULT_LAYOUT,
    DecisionLayout,
    PathClassifier,
    PathKind,
    containing_decision_dir,
    is_decision_path,
    nearest_decision_dir,
)

logger = logging.getLogger(__name__)


@dataclass
class Partition:
    decisions: List[Change] = field(default_factory=list)
    subjects: List[Change] = field(default_factory=list)
    excluded: List[Change] = field(default_factory=list)
    # Renames whose source was a decision document, wherever they landed.
    moved_decisions: List[Change] = field(default_factory=list)


class ChangeSetValidator:
    def __init__(
        self,
        target,
        baseline,
        layout: DecisionLayout = DEFAULT_LAYOUT,
        *,
        classifier: Optional[PathClassifier] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.target = target
        self.baseline = baseline
        self.layout = layout
        self.log = log or logger
        self.classifier = classifier or PathClassifier(IgnoreRuleLoader(target, layout), layout)

    def partition(self, change_set: ChangeSet) -> Partition:
        part = Partition()
        for change in change_set:
            if (
                change.kind is ChangeKind.RENAMED
                and change.source
                and is_decision_path(change.source, self.layout)
            ):
                part.moved_decisions.append(change)
            kind = self.classifier.classify(change.path)
            if kind is PathKind.DECISION:
                part.decisions.append(change)
            elif kind is PathKind.SUBJECT:
                part.subjects.append(change)
            else:
                self.log.debug("Excluded from decision requirement: %s", change.path)
                part.excluded.append(change)
        return part

    def is_new_document(self, change: Change) -> bool:
        """True when ``change`` introduces decision content absent from the baseline.

        Renaming or copying a committed document only moves old content, so it
        can neither satisfy a mention nor create a decision directory.
        """
        if not change.kind.is_addition:
            return False
        source = change.source
        return not (source and is_decision_path(source, self.layout) and self.baseline.exists(source))

    def _added_documents_by_dir(self, decisions: List[Change]) -> Dict[str, List[Change]]:
        by_dir: Dict[str, List[Change]] = {}
        for change in decisions:
            by_dir.setdefault(containing_decision_dir(change.path, self.layout), []).append(change)
        return by_dir

    def validate(self, change_set: ChangeSet) -> ValidationReport:
        report = ValidationReport()
        part = self.partition(change_set)

        if part.decisions and not part.subjects:
            for change in part.decisions:
                report.add(
                    Violation(
                        path=change.path,
                        kind=ViolationKind.DECISION_ONLY,
                        message="decision-only change sets are not allowed; "
                        "commit decisions together with the changes they describe",
                    )
                )
            return report

        new_documents = [c for c in part.decisions if self.is_new_document(c)]
        exemptions = ExemptionResolver(self.baseline, self.layout, log=self.log).resolve(new_documents)
        added = self._added_documents_by_dir(new_documents)
        content_cache: Dict[str, Optional[str]] = {}

        def documents(paths: List[Change]):
            for change in paths:
                if change.path not in content_cache:
                    content_cache[change.path] = self.target.read_text(change.path)
                yield change.path, content_cache[change.path]

        for subject in part.subjects:
            if exemptions.covers(subject.path):
                self.log.debug("Exempt by new decision directory: %s", subject.path)
                continue

            decision_dir = nearest_decision_dir(subject.path, self.layout)
            if not self.target.is_directory(decision_dir):
                report.add(
                    Violation(
                        path=subject.path,
                        kind=ViolationKind.MISSING_DECISION_DIRECTORY,
                        message=f"missing nearest decision dir: {decision_dir}",
                        decision_dir=decision_dir,
                    )
                )
                continue

            candidates = added.get(decision_dir, [])
            if not candidates:
                message = f"no new decision added under {decision_dir}"
            else:
                hit = first_mentioning(subject.path, documents(candidates))
                if hit is not None:
                    self.log.debug("%s mentioned by %s", subject.path, hit)
                    continue
                message = f"no new decision in {decision_dir} mentions this file"
            report.add(
                Violation(
                    path=subject.path,
                    kind=ViolationKind.NO_MATCHING_MENTION,
                    message=message,
                    decision_dir=decision_dir,
                )
            )
        return report


__all__ = ["ChangeSetValidator", "Partition"]
