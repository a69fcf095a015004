"""Case-insensitive full-text search across decision documents.

Each document is searched by an independent task on a bounded pool; results
come back in document order and formatting is left to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ddd.core.policy.paths import DEFAULT_LAYOUT, DecisionLayout
from ddd.core.policy.permissions import iter_decision_documents
from ddd.core.utils.pool import run_bounded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchHit:
    path: str
    # (line number, text, is_match) in grep -n -C order; None marks a gap.
    lines: Tuple[Optional[Tuple[int, str, bool]], ...] = field(default_factory=tuple)

    def format_lines(self) -> List[str]:
        out: List[str] = []
        for entry in self.lines:
            if entry is None:
                out.append("--")
                continue
            number, text, is_match = entry
            out.append(f"{number}{':' if is_match else '-'}{text}")
        return out


def search_text(
    path: str,
    content: str,
    term: str,
    *,
    context_lines: int = 2,
    max_lines: int = 10,
) -> Optional[SearchHit]:
    """Return the matching lines (with context) of ``content``, or None."""
    needle = term.lower()
    lines = content.splitlines()
    matches = [i for i, line in enumerate(lines) if needle in line.lower()]
    if not matches:
        return None

    selected: List[int] = []
    for idx in matches:
        lo = max(0, idx - context_lines)
        hi = min(len(lines) - 1, idx + context_lines)
        for j in range(lo, hi + 1):
            if not selected or j > selected[-1]:
                selected.append(j)

    matched = set(matches)
    rendered: List[Optional[Tuple[int, str, bool]]] = []
    previous: Optional[int] = None
    for j in selected:
        if previous is not None and j != previous + 1:
            rendered.append(None)
        rendered.append((j + 1, lines[j], j in matched))
        previous = j
    return SearchHit(path=path, lines=tuple(rendered[:max_lines]))


def search_decisions(
    repo_root: Path,
    term: str,
    *,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    max_workers: int = 4,
    context_lines: int = 2,
    max_lines: int = 10,
) -> List[SearchHit]:
    """Search every decision document under ``repo_root`` for ``term``."""
    if not term:
        raise ValueError("search term must not be empty")
    root = Path(repo_root)
    documents = list(iter_decision_documents(root, layout))
    logger.debug("Searching %d decision document(s) for %r", len(documents), term)

    def task(rel: str) -> Optional[SearchHit]:
        content = (root / rel).read_text(encoding="utf-8", errors="replace")
        return search_text(rel, content, term, context_lines=context_lines, max_lines=max_lines)

    hits: List[SearchHit] = []
    for result in run_bounded(task, documents, max_workers=max_workers):
        if result.ok and result.value is not None:
            hits.append(result.value)
    return hits


__all__ = ["SearchHit", "search_decisions", "search_text"]
