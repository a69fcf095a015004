"""Discovery and light parsing of decision documents in the working tree.

Only the header fields written by the decision template are read
(``**STATUS**:``, ``**MODULE**:`` and the first heading); the rest of the
document is free text.
"""
from __future__ import annotations

import logging
import os
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from ddd.core.policy.paths import DEFAULT_LAYOUT, DecisionLayout, containing_decision_dir, decision_dir_parent
from ddd.core.policy.permissions import iter_decision_documents

logger = logging.getLogger(__name__)

TIMESTAMPED_NAME = re.compile(r"^(?P<date>\d{8})-(?P<time>\d{4})-(?P<slug>.+)$")
_FIELD = re.compile(r"^\*\*(?P<key>[A-Z_]+)\*\*:\s*(?P<value>.*)$")


@dataclass(frozen=True)
class DecisionDocument:
    path: str
    module: str
    title: str
    status: str
    timestamp: Optional[str]
    slug: Optional[str]
    content: str

    @property
    def is_timestamped(self) -> bool:
        return self.timestamp is not None


def module_of(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> str:
    """Directory a decision document belongs to (``.`` for the repository root)."""
    return decision_dir_parent(containing_decision_dir(path, layout)) or "."


def header_field(content: str, key: str) -> Optional[str]:
    for line in content.splitlines():
        m = _FIELD.match(line.strip())
        if m and m.group("key") == key:
            return m.group("value").strip()
    return None


def parse_document(path: str, content: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> DecisionDocument:
    name = posixpath.basename(path)
    stem = name[: -len(layout.extension)] if name.endswith(layout.extension) else name
    m = TIMESTAMPED_NAME.match(stem)
    first = content.splitlines()[0] if content else ""
    title = first[2:].strip() if first.startswith("# ") else (first.strip() or "Untitled")
    return DecisionDocument(
        path=path,
        module=module_of(path, layout),
        title=title,
        status=header_field(content, "STATUS") or "UNKNOWN",
        timestamp=f"{m.group('date')}-{m.group('time')}" if m else None,
        slug=m.group("slug") if m else None,
        content=content,
    )


def iter_documents(repo_root: Path, layout: DecisionLayout = DEFAULT_LAYOUT) -> Iterator[DecisionDocument]:
    root = Path(repo_root)
    for rel in iter_decision_documents(root, layout):
        try:
            content = (root / rel).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("Cannot read decision %s: %s", rel, exc)
            continue
        yield parse_document(rel, content, layout)


def list_decision_dirs(repo_root: Path, layout: DecisionLayout = DEFAULT_LAYOUT) -> List[str]:
    """Return repository-relative decision directories, sorted."""
    root = Path(repo_root)
    found: List[str] = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d != layout.vcs_dir)
        if layout.decision_dir in dirnames:
            found.append((Path(dirpath) / layout.decision_dir).relative_to(root).as_posix())
    return sorted(found)


__all__ = [
    "DecisionDocument",
    "TIMESTAMPED_NAME",
    "header_field",
    "iter_documents",
    "list_decision_dirs",
    "module_of",
    "parse_document",
]
