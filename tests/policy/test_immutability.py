from __future__ import annotations

import os
from pathlib import Path

from ddd.core.git.snapshot import EMPTY_SNAPSHOT, MappingSnapshot, WorkingTreeSnapshot
from ddd.core.policy.immutability import ImmutabilityGuard
from ddd.core.policy.models import Change, ChangeKind, ViolationKind
from ddd.core.policy.permissions import PermissionGuard, normalize_mode

DOC = "src/.decision/20240101-1200-cache.md"


def test_modifying_committed_decision_is_rejected() -> None:
    baseline = MappingSnapshot({DOC: "v1"})
    target = MappingSnapshot({DOC: "v2"}, modes={DOC: 0o444})
    report = ImmutabilityGuard(baseline, target).check([Change(DOC, ChangeKind.MODIFIED)])
    assert report.kinds() == [ViolationKind.IMMUTABLE]
    assert report.format_lines() == [
        f"{DOC} ➜ attempting to modify immutable decision file; add a NEW decision instead"
    ]


def test_deleting_committed_decision_is_rejected() -> None:
    baseline = MappingSnapshot({DOC: "v1"})
    report = ImmutabilityGuard(baseline, EMPTY_SNAPSHOT).check([Change(DOC, ChangeKind.DELETED)])
    assert report.violations[0].message.startswith("attempting to delete immutable decision file")


def test_identical_content_is_still_immutable() -> None:
    baseline = MappingSnapshot({DOC: "same"})
    target = MappingSnapshot({DOC: "same"}, modes={DOC: 0o444})
    report = ImmutabilityGuard(baseline, target).check([Change(DOC, ChangeKind.MODIFIED)])
    assert report.kinds() == [ViolationKind.IMMUTABLE]


def test_renaming_committed_decision_is_rejected() -> None:
    moved = "src/.decision/20240202-1200-cache.md"
    baseline = MappingSnapshot({DOC: "v1"})
    target = MappingSnapshot({moved: "v1"}, modes={moved: 0o444})
    rename = Change(moved, ChangeKind.RENAMED, source=DOC)

    report = ImmutabilityGuard(baseline, target).check([rename], moved=[rename])
    assert report.format_lines() == [
        f"{DOC} ➜ attempting to rename immutable decision file; add a NEW decision instead"
    ]


def test_rename_of_uncommitted_source_is_allowed() -> None:
    moved = "src/.decision/20240202-1200-cache.md"
    target = MappingSnapshot({moved: "v1"}, modes={moved: 0o444})
    rename = Change(moved, ChangeKind.RENAMED, source=DOC)
    assert ImmutabilityGuard(EMPTY_SNAPSHOT, target).check([rename], moved=[rename]).passed


def test_new_decision_with_writable_mode_is_reported() -> None:
    target = MappingSnapshot({DOC: "new"}, modes={DOC: 0o644})
    report = ImmutabilityGuard(EMPTY_SNAPSHOT, target).check([Change(DOC, ChangeKind.ADDED)])
    assert report.format_lines() == [f"{DOC} ➜ wrong permissions 644 (expected 444 or 555)"]


def test_normalizer_runs_before_permission_check() -> None:
    target = MappingSnapshot({DOC: "new"}, modes={DOC: 0o644})
    calls: list[str] = []

    def normalizer(path: str) -> bool:
        calls.append(path)
        target.modes[path] = 0o444
        return True

    report = ImmutabilityGuard(EMPTY_SNAPSHOT, target, normalizer=normalizer).check(
        [Change(DOC, ChangeKind.ADDED)]
    )
    assert report.passed
    assert calls == [DOC]


def test_symlinked_decision_is_rejected_and_not_normalised() -> None:
    target = MappingSnapshot(symlinks=[DOC])
    calls: list[str] = []
    guard = ImmutabilityGuard(EMPTY_SNAPSHOT, target, normalizer=lambda p: calls.append(p) or True)
    report = guard.check([Change(DOC, ChangeKind.ADDED)])
    assert report.kinds() == [ViolationKind.SYMLINK_REJECTED]
    assert calls == []


def test_committed_trees_only_reject_symlinks() -> None:
    target = MappingSnapshot({DOC: "new"}, modes={DOC: 0o644})
    guard = ImmutabilityGuard(EMPTY_SNAPSHOT, target, permission_guard=PermissionGuard(None))
    assert guard.check([Change(DOC, ChangeKind.ADDED)]).passed


def test_new_document_missing_from_target_is_skipped() -> None:
    report = ImmutabilityGuard(EMPTY_SNAPSHOT, EMPTY_SNAPSHOT).check([Change(DOC, ChangeKind.ADDED)])
    assert report.passed


def test_normalize_mode_is_idempotent(tmp_path: Path) -> None:
    doc = tmp_path / "doc.md"
    doc.write_text("x", encoding="utf-8")
    os.chmod(doc, 0o644)

    assert normalize_mode(doc) is True
    assert doc.stat().st_mode & 0o777 == 0o444
    assert normalize_mode(doc) is False
    assert doc.stat().st_mode & 0o777 == 0o444


def test_normalize_mode_keeps_accepted_modes(tmp_path: Path) -> None:
    doc = tmp_path / "doc.md"
    doc.write_text("x", encoding="utf-8")
    os.chmod(doc, 0o555)
    assert normalize_mode(doc) is False
    assert doc.stat().st_mode & 0o777 == 0o555


def test_guard_is_idempotent_on_disk(tmp_path: Path) -> None:
    doc = tmp_path / DOC
    doc.parent.mkdir(parents=True)
    doc.write_text("# Cache\n", encoding="utf-8")
    os.chmod(doc, 0o664)

    guard = ImmutabilityGuard(
        EMPTY_SNAPSHOT,
        WorkingTreeSnapshot(tmp_path, prefer_index=False),
        normalizer=lambda path: normalize_mode(tmp_path / path),
    )
    changes = [Change(DOC, ChangeKind.ADDED)]

    first = guard.check(changes)
    first_mode = doc.stat().st_mode & 0o777
    second = guard.check(changes)

    assert first.passed and second.passed
    assert first_mode == doc.stat().st_mode & 0o777 == 0o444
