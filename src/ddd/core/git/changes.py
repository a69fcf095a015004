"""Change-set listing from ``git diff --name-status -z -M``."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from ddd.core.policy.models import Change, ChangeKind, ChangeSet

from .repository import EMPTY_TREE, git_output, is_zero_sha

logger = logging.getLogger(__name__)


def parse_name_status(output: str) -> ChangeSet:
    """Parse NUL-separated ``--name-status`` output.

    Records are ``STATUS\\0PATH\\0`` or, for renames and copies,
    ``STATUS\\0SRC\\0DST\\0``.
    """
    tokens = output.split("\0")
    changes: List[Change] = []
    idx = 0
    while idx < len(tokens):
        status = tokens[idx].strip()
        idx += 1
        if not status:
            continue
        kind = ChangeKind.from_status(status)
        if kind in (ChangeKind.RENAMED, ChangeKind.COPIED):
            if idx + 1 >= len(tokens):
                break
            source, dest = tokens[idx], tokens[idx + 1]
            idx += 2
            changes.append(Change(path=dest, kind=kind, source=source))
        else:
            if idx >= len(tokens):
                break
            changes.append(Change(path=tokens[idx], kind=kind))
            idx += 1
    return ChangeSet(tuple(changes))


def staged_changes(repo_root: Path) -> ChangeSet:
    """Return the staged change set (index against HEAD, or the empty tree)."""
    out = git_output(repo_root, ["diff", "--cached", "--name-status", "-z", "-M"], strip=False)
    change_set = parse_name_status(out)
    logger.debug("Staged change set: %d path(s)", len(change_set))
    return change_set


def range_changes(repo_root: Path, from_rev: str, to_rev: str) -> ChangeSet:
    """Return the change set between two revisions; a zero ``from_rev`` means the empty tree."""
    base = EMPTY_TREE if is_zero_sha(from_rev) else from_rev
    out = git_output(
        repo_root,
        ["diff", "--name-status", "-z", "-M", base, to_rev],
        strip=False,
    )
    change_set = parse_name_status(out)
    logger.debug("Range %s..%s: %d path(s)", base, to_rev, len(change_set))
    return change_set


__all__ = ["parse_name_status", "range_changes", "staged_changes"]
