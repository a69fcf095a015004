"""Ref update lines as fed to ``pre-push`` and ``pre-receive`` hooks on stdin.

- pre-push:    ``<local ref> <local sha> <remote ref> <remote sha>``
- pre-receive: ``<old sha> <new sha> <ref name>``
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ddd.core.git.repository import EMPTY_TREE, is_zero_sha, merge_base

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefUpdate:
    ref: str
    old: str
    new: str

    @property
    def is_deletion(self) -> bool:
        return is_zero_sha(self.new)

    @property
    def is_creation(self) -> bool:
        return is_zero_sha(self.old)


def parse_ref_updates(lines: Iterable[str], hook: str) -> List[RefUpdate]:
    updates: List[RefUpdate] = []
    for raw in lines:
        parts = raw.split()
        if not parts:
            continue
        if hook == "pre-push" and len(parts) >= 4:
            updates.append(RefUpdate(ref=parts[2], old=parts[3], new=parts[1]))
        elif hook == "pre-receive" and len(parts) >= 3:
            updates.append(RefUpdate(ref=parts[2], old=parts[0], new=parts[1]))
        else:
            logger.warning("Ignoring malformed %s input line: %r", hook, raw)
    return updates


def range_for_update(repo_root: Path, update: RefUpdate, base_ref: str) -> Optional[Tuple[str, str]]:
    """Return ``(from, to)`` to validate for ``update``; None for deletions.

    New refs are validated from their merge base with ``base_ref``, or from
    the empty tree when there is none.
    """
    if update.is_deletion:
        return None
    if not update.is_creation:
        return update.old, update.new
    base = merge_base(repo_root, base_ref, update.new)
    if base is None:
        logger.info("No merge base with %s for %s; validating full history", base_ref, update.ref)
        return EMPTY_TREE, update.new
    return base, update.new


__all__ = ["RefUpdate", "parse_ref_updates", "range_for_update"]
