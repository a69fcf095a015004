"""Version-control backend for the decision policy engine.

- repository: repository detection, refs and plumbing helpers
- changes: change-set listing (staged index, commit range)
- snapshot: read-only views of a tree (working tree, revision, in-memory)
"""
from __future__ import annotations

from .changes import parse_name_status, range_changes, staged_changes
from .repository import (
    EMPTY_TREE,
    ZERO_SHA,
    get_git_root,
    git_output,
    has_head,
    is_git_repository,
    is_zero_sha,
    merge_base,
    require_repository,
    resolve_revision,
)
from .snapshot import (
    EMPTY_SNAPSHOT,
    MappingSnapshot,
    RevisionSnapshot,
    TreeSnapshot,
    WorkingTreeSnapshot,
)

__all__ = [
    "EMPTY_SNAPSHOT",
    "EMPTY_TREE",
    "ZERO_SHA",
    "MappingSnapshot",
    "RevisionSnapshot",
    "TreeSnapshot",
    "WorkingTreeSnapshot",
    "get_git_root",
    "git_output",
    "has_head",
    "is_git_repository",
    "is_zero_sha",
    "merge_base",
    "parse_name_status",
    "range_changes",
    "require_repository",
    "resolve_revision",
    "staged_changes",
]
