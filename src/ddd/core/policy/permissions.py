"""Read-only permission checks and normalisation for decision documents."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Collection, Iterator, Optional

from .models import ValidationReport, Violation, ViolationKind
from .paths import DEFAULT_LAYOUT, DecisionLayout, is_decision_path

logger = logging.getLogger(__name__)

DEFAULT_READONLY_MODES = frozenset({0o444, 0o555})
DEFAULT_NORMALIZED_MODE = 0o444


class PermissionGuard:
    """A decision document passes iff it is a regular file with an accepted read-only mode.

    With ``accepted_modes=None`` only symlinks are rejected; committed trees do
    not record read-only bits.
    """

    def __init__(self, accepted_modes: Optional[Collection[int]] = DEFAULT_READONLY_MODES) -> None:
        self.accepted_modes = frozenset(accepted_modes) if accepted_modes is not None else None

    def check(self, snapshot, path: str) -> Optional[Violation]:
        if snapshot.is_symlink(path):
            return Violation(
                path=path,
                kind=ViolationKind.SYMLINK_REJECTED,
                message="decision documents must be regular files, not symbolic links",
            )
        if self.accepted_modes is None:
            return None
        mode = snapshot.file_mode(path)
        if mode is None or mode in self.accepted_modes:
            return None
        allowed = " or ".join(f"{m:o}" for m in sorted(self.accepted_modes))
        return Violation(
            path=path,
            kind=ViolationKind.WRONG_PERMISSION_MODE,
            message=f"wrong permissions {mode:o} (expected {allowed})",
        )


def normalize_mode(
    file_path: Path,
    *,
    accepted_modes: Collection[int] = DEFAULT_READONLY_MODES,
    target_mode: int = DEFAULT_NORMALIZED_MODE,
    log: Optional[logging.Logger] = None,
) -> bool:
    """chmod ``file_path`` to ``target_mode`` unless its mode is already accepted.

    Symlinks and missing files are left alone. Returns True when the mode changed.
    """
    log = log or logger
    path = Path(file_path)
    if path.is_symlink() or not path.is_file():
        return False
    current = path.stat().st_mode & 0o7777
    if current in accepted_modes:
        return False
    log.debug("Setting read-only permissions %o on %s (was %o)", target_mode, path, current)
    os.chmod(path, target_mode)
    return True


def iter_decision_documents(repo_root: Path, layout: DecisionLayout = DEFAULT_LAYOUT) -> Iterator[str]:
    """Yield repository-relative paths of decision documents in the working tree."""
    root = Path(repo_root)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != layout.vcs_dir)
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        if layout.decision_dir not in rel_dir.split("/"):
            continue
        for name in sorted(filenames):
            rel = name if rel_dir == "." else f"{rel_dir}/{name}"
            if is_decision_path(rel, layout):
                yield rel


def check_repository_permissions(
    snapshot,
    repo_root: Path,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    *,
    accepted_modes: Collection[int] = DEFAULT_READONLY_MODES,
) -> ValidationReport:
    """Scan every decision document in the working tree."""
    guard = PermissionGuard(accepted_modes)
    report = ValidationReport()
    for rel in iter_decision_documents(repo_root, layout):
        violation = guard.check(snapshot, rel)
        if violation is not None:
            report.add(violation)
    return report


__all__ = [
    "DEFAULT_NORMALIZED_MODE",
    "DEFAULT_READONLY_MODES",
    "PermissionGuard",
    "check_repository_permissions",
    "iter_decision_documents",
    "normalize_mode",
]
