"""``.gitignore`` policy: decision directories must never be ignored by git."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from .models import Violation, ViolationKind

logger = logging.getLogger(__name__)

GITIGNORE = ".gitignore"


def offending_lines(content: str, decision_dir: str = ".decision") -> List[str]:
    """Return uncommented lines of a ``.gitignore`` naming the decision directory."""
    found: List[str] = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if decision_dir in line:
            found.append(line)
    return found


def check_gitignore_files(
    files: Iterable[Tuple[str, Optional[str]]],
    decision_dir: str = ".decision",
) -> List[Violation]:
    """Check ``(path, content)`` pairs; ``None`` content is skipped."""
    violations: List[Violation] = []
    for path, content in files:
        if content is None:
            continue
        for line in offending_lines(content, decision_dir):
            violations.append(
                Violation(
                    path=path,
                    kind=ViolationKind.GITIGNORE_POLICY,
                    message=f".gitignore contains forbidden '{decision_dir}' pattern: {line.strip()}",
                )
            )
    return violations


def iter_worktree_gitignores(repo_root: Path, vcs_dir: str = ".git") -> Iterator[str]:
    root = Path(repo_root)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != vcs_dir)
        if GITIGNORE in filenames:
            rel = (Path(dirpath) / GITIGNORE).relative_to(root).as_posix()
            yield rel


def check_gitignore_policy(
    snapshot,
    paths: Iterable[str],
    decision_dir: str = ".decision",
) -> List[Violation]:
    """Read each ``.gitignore`` in ``paths`` from ``snapshot`` and check it."""
    selected = [p for p in paths if p.rsplit("/", 1)[-1] == GITIGNORE]
    logger.debug("Checking %d .gitignore file(s)", len(selected))
    return check_gitignore_files(((p, snapshot.read_text(p)) for p in selected), decision_dir)


__all__ = [
    "check_gitignore_files",
    "check_gitignore_policy",
    "iter_worktree_gitignores",
    "offending_lines",
]
