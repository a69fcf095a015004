"""Immutability of committed decision documents."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from .models import Change, ChangeKind, ValidationReport, Violation, ViolationKind
from .permissions import PermissionGuard

logger = logging.getLogger(__name__)


class ImmutabilityGuard:
    """Reject changes to decision documents that already exist in the baseline.

    Any decision path present in ``baseline`` is immutable, whatever the change
    kind and whatever the new content. New documents are optionally normalised
    to read-only through ``normalizer`` and then checked by ``permission_guard``
    against ``target``.
    """

    def __init__(
        self,
        baseline,
        target,
        *,
        permission_guard: Optional[PermissionGuard] = None,
        normalizer: Optional[Callable[[str], bool]] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.baseline = baseline
        self.target = target
        self.permission_guard = permission_guard or PermissionGuard()
        self.normalizer = normalizer
        self.log = log or logger

    def _immutable(self, path: str, action: str) -> Violation:
        return Violation(
            path=path,
            kind=ViolationKind.IMMUTABLE,
            message=f"attempting to {action} immutable decision file; add a NEW decision instead",
        )

    def check(self, decisions: Iterable[Change], moved: Iterable[Change] = ()) -> ValidationReport:
        """Check changed decision paths, plus renames whose source was a decision document."""
        report = ValidationReport()
        for change in moved:
            if change.source and self.baseline.exists(change.source):
                self.log.debug("Committed decision %s renamed to %s", change.source, change.path)
                report.add(self._immutable(change.source, "rename"))
        for change in decisions:
            if self.baseline.exists(change.path):
                action = "delete" if change.kind is ChangeKind.DELETED else "modify"
                report.add(self._immutable(change.path, action))
                continue
            if change.kind is ChangeKind.DELETED or not self.target.exists(change.path):
                continue
            if self.normalizer is not None and not self.target.is_symlink(change.path):
                self.normalizer(change.path)
            violation = self.permission_guard.check(self.target, change.path)
            if violation is not None:
                report.add(violation)
        return report


__all__ = ["ImmutabilityGuard"]
