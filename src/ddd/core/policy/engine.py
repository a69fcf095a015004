"""Entry points for staged and range validation.

Both modes build a change set plus a target and baseline snapshot, then run
the same checks in the same order:

1. ``.gitignore`` policy
2. immutability and permissions of decision documents
3. the per-file decision requirement

Violations from every stage accumulate into one report. Precondition
failures (not a repository, git errors) raise :class:`ddd.core.exceptions.DddError`
subclasses before or instead of a report.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from ddd.core.config.domains.policy import PolicyConfig
from ddd.core.git.changes import range_changes, staged_changes
from ddd.core.git.repository import has_head, is_zero_sha, require_repository
from ddd.core.git.snapshot import EMPTY_SNAPSHOT, RevisionSnapshot, WorkingTreeSnapshot

from .gitignore import check_gitignore_policy, iter_worktree_gitignores
from .immutability import ImmutabilityGuard
from .models import ChangeKind, ChangeSet, ValidationReport
from .paths import DecisionLayout
from .permissions import PermissionGuard, check_repository_permissions, normalize_mode
from .validator import ChangeSetValidator


def evaluate_change_set(
    change_set: ChangeSet,
    *,
    target,
    baseline,
    layout: DecisionLayout,
    permission_guard: PermissionGuard,
    normalizer: Optional[Callable[[str], bool]] = None,
    gitignore_paths: Iterable[str] = (),
    logger: Optional[logging.Logger] = None,
) -> ValidationReport:
    """Run every policy check for ``change_set`` against the given snapshots."""
    log = logger or logging.getLogger(__name__)
    report = ValidationReport()

    report.extend(check_gitignore_policy(target, gitignore_paths, layout.decision_dir))

    validator = ChangeSetValidator(target, baseline, layout, log=log)
    part = validator.partition(change_set)
    guard = ImmutabilityGuard(
        baseline,
        target,
        permission_guard=permission_guard,
        normalizer=normalizer,
        log=log,
    )
    report.merge(guard.check(part.decisions, part.moved_decisions))
    report.merge(validator.validate(change_set))

    if report.passed:
        log.info("Decision policy passed (%d changed path(s))", len(change_set))
    else:
        log.info("Decision policy failed with %d violation(s)", len(report.violations))
    return report


def _working_tree_normalizer(
    root: Path, policy: PolicyConfig, log: logging.Logger
) -> Callable[[str], bool]:
    def normalize(path: str) -> bool:
        return normalize_mode(
            root / path,
            accepted_modes=policy.readonly_modes,
            target_mode=policy.normalized_mode,
            log=log,
        )

    return normalize


def validate_staged(
    repo_root: Optional[Path] = None,
    *,
    logger: Optional[logging.Logger] = None,
    policy: Optional[PolicyConfig] = None,
) -> ValidationReport:
    """Validate the staged change set against HEAD (or an empty tree before the first commit)."""
    log = logger or logging.getLogger(__name__)
    root = require_repository(repo_root)
    policy = policy or PolicyConfig(repo_root=root)
    layout = policy.layout

    change_set = staged_changes(root)
    log.debug("Validating %d staged path(s) in %s", len(change_set), root)

    target = WorkingTreeSnapshot(root)
    baseline = RevisionSnapshot(root, "HEAD") if has_head(root) else EMPTY_SNAPSHOT

    normalizer = _working_tree_normalizer(root, policy, log) if policy.normalize_permissions else None
    gitignores = list(iter_worktree_gitignores(root, layout.vcs_dir)) if policy.check_gitignore else []

    return evaluate_change_set(
        change_set,
        target=target,
        baseline=baseline,
        layout=layout,
        permission_guard=PermissionGuard(policy.readonly_modes),
        normalizer=normalizer,
        gitignore_paths=gitignores,
        logger=log,
    )


def validate_range(
    repo_root: Optional[Path],
    from_ref: str,
    to_ref: str,
    *,
    logger: Optional[logging.Logger] = None,
    policy: Optional[PolicyConfig] = None,
) -> ValidationReport:
    """Validate every change between ``from_ref`` and ``to_ref``.

    A zero ``from_ref`` validates against the empty tree; a zero ``to_ref``
    (deleted ref) has nothing to validate.
    """
    log = logger or logging.getLogger(__name__)
    root = require_repository(repo_root)
    policy = policy or PolicyConfig(repo_root=root)
    layout = policy.layout

    if is_zero_sha(to_ref):
        log.info("Target %s is a deleted ref; nothing to validate", to_ref)
        return ValidationReport()

    change_set = range_changes(root, from_ref, to_ref)
    log.debug("Validating %d path(s) in range %s..%s", len(change_set), from_ref, to_ref)

    target = RevisionSnapshot(root, to_ref)
    baseline = EMPTY_SNAPSHOT if is_zero_sha(from_ref) else RevisionSnapshot(root, from_ref)

    gitignores = (
        [c.path for c in change_set if c.kind is not ChangeKind.DELETED]
        if policy.check_gitignore
        else []
    )

    return evaluate_change_set(
        change_set,
        target=target,
        baseline=baseline,
        layout=layout,
        permission_guard=PermissionGuard(accepted_modes=None),
        gitignore_paths=gitignores,
        logger=log,
    )


def validate_permissions(
    repo_root: Optional[Path] = None,
    *,
    logger: Optional[logging.Logger] = None,
    policy: Optional[PolicyConfig] = None,
) -> ValidationReport:
    """Check the mode of every decision document in the working tree."""
    log = logger or logging.getLogger(__name__)
    root = require_repository(repo_root)
    policy = policy or PolicyConfig(repo_root=root)
    report = check_repository_permissions(
        WorkingTreeSnapshot(root, prefer_index=False),
        root,
        policy.layout,
        accepted_modes=policy.readonly_modes,
    )
    log.debug("Permission scan found %d violation(s)", len(report.violations))
    return report


__all__ = [
    "evaluate_change_set",
    "validate_permissions",
    "validate_range",
    "validate_staged",
]
