"""Reports over decision documents: timeline, module progress, commit messages."""
from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ddd.core.git.changes import staged_changes
from ddd.core.git.snapshot import WorkingTreeSnapshot
from ddd.core.policy.models import ChangeKind
from ddd.core.policy.paths import DEFAULT_LAYOUT, DecisionLayout, is_decision_path

from .documents import DecisionDocument, TIMESTAMPED_NAME, iter_documents, module_of
from .operations import README_NAME


@dataclass(frozen=True)
class TimelineEntry:
    timestamp: str
    status: str
    module: str
    title: str

    def format(self) -> str:
        return f"{self.timestamp} [{self.status}] [{self.module}] {self.title}"


def timeline(
    repo_root: Path,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    documents: Optional[List[DecisionDocument]] = None,
) -> List[TimelineEntry]:
    docs = documents if documents is not None else list(iter_documents(repo_root, layout))
    entries = [
        TimelineEntry(timestamp=d.timestamp, status=d.status, module=d.module, title=d.title)
        for d in docs
        if d.timestamp is not None
    ]
    return sorted(entries, key=lambda e: e.format())


@dataclass(frozen=True)
class ModuleProgress:
    module: str
    total: int
    done: int
    in_progress: int

    @property
    def percent(self) -> int:
        return self.done * 100 // self.total if self.total else 0

    def format(self) -> str:
        return (
            f"{self.module}: {self.done}/{self.total} done ({self.percent}%), "
            f"{self.in_progress} in progress"
        )


def module_progress(
    repo_root: Path,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    documents: Optional[List[DecisionDocument]] = None,
) -> List[ModuleProgress]:
    """Per-module counts of decision documents by status (README excluded)."""
    docs = documents if documents is not None else list(iter_documents(repo_root, layout))
    grouped: Dict[str, List[DecisionDocument]] = {}
    for doc in docs:
        if posixpath.basename(doc.path) == README_NAME:
            continue
        grouped.setdefault(doc.module, []).append(doc)
    return [
        ModuleProgress(
            module=module,
            total=len(items),
            done=sum(1 for d in items if d.status == "DONE"),
            in_progress=sum(1 for d in items if d.status == "IN_PROGRESS"),
        )
        for module, items in sorted(grouped.items())
    ]


_TYPE_KEYWORDS = (
    ("fix", re.compile(r"bug|error|fix|crash|leak", re.IGNORECASE)),
    ("perf", re.compile(r"performance|memory|speed|optimization", re.IGNORECASE)),
    ("refactor", re.compile(r"refactor|cleanup|restructure", re.IGNORECASE)),
)
_HOTFIX = re.compile(r"EMERGENCY|HOTFIX")


def context_section(content: str) -> str:
    """Text between ``## Context`` and the next ``##`` heading."""
    lines = content.splitlines()
    out: List[str] = []
    inside = False
    for line in lines:
        if line.startswith("##"):
            if inside:
                break
            inside = line.strip().lower() == "## context"
            continue
        if inside:
            out.append(line)
    return "\n".join(out)


def infer_commit_type(content: str) -> str:
    context = context_section(content)
    for commit_type, pattern in _TYPE_KEYWORDS:
        if pattern.search(context):
            return commit_type
    if _HOTFIX.search(content):
        return "hotfix"
    return "feat"


def commit_title(path: str, layout: DecisionLayout = DEFAULT_LAYOUT) -> str:
    stem = posixpath.basename(path)
    if stem.endswith(layout.extension):
        stem = stem[: -len(layout.extension)]
    m = TIMESTAMPED_NAME.match(stem)
    return (m.group("slug") if m else stem).replace("-", " ")


def generate_commit_messages(repo_root: Path, layout: DecisionLayout = DEFAULT_LAYOUT) -> List[str]:
    """Conventional-commit lines for each decision document newly staged."""
    snapshot = WorkingTreeSnapshot(repo_root)
    messages: List[str] = []
    for change in staged_changes(repo_root):
        if change.kind is not ChangeKind.ADDED or not is_decision_path(change.path, layout):
            continue
        content = snapshot.read_text(change.path) or ""
        module = module_of(change.path, layout)
        messages.append(f"{infer_commit_type(content)}({module}): {commit_title(change.path, layout)}")
    return messages


__all__ = [
    "ModuleProgress",
    "TimelineEntry",
    "commit_title",
    "context_section",
    "generate_commit_messages",
    "infer_commit_type",
    "module_progress",
    "timeline",
]
