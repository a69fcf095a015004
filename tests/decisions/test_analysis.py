from __future__ import annotations

from pathlib import Path

import pytest

from ddd.core.decisions.analysis import (
    commit_title,
    context_section,
    infer_commit_type,
    module_progress,
    timeline,
)
from ddd.core.decisions.documents import header_field, module_of, parse_document


def _doc(context: str, extra: str = "") -> str:
    return f"# T\n\n**STATUS**: DONE\n\n## Context\n{context}\n\n## Decision\nShip it.\n{extra}"


@pytest.mark.parametrize(
    "context, expected",
    [
        ("Login crashes on empty password", "fix"),
        ("Memory usage is too high", "perf"),
        ("Cleanup of the storage layer", "refactor"),
        ("Support dark mode", "feat"),
    ],
)
def test_infer_commit_type_from_context(context: str, expected: str) -> None:
    assert infer_commit_type(_doc(context)) == expected


def test_hotfix_marker_anywhere_in_document() -> None:
    assert infer_commit_type(_doc("Support SSO", extra="**PRIORITY**: EMERGENCY\n")) == "hotfix"


def test_keywords_outside_context_are_ignored() -> None:
    content = "# T\n## Context\nNew export\n## Consequences\nFewer bug reports\n"
    assert context_section(content) == "New export"
    assert infer_commit_type(content) == "feat"


def test_commit_title() -> None:
    assert commit_title("src/.decision/20240101-1200-use-postgres.md") == "use postgres"
    assert commit_title("src/.decision/notes.md") == "notes"


def test_parse_document_fields() -> None:
    doc = parse_document(
        "src/api/.decision/20240102-0930-rate-limits.md",
        "# Rate Limits\n\n**STATUS**: IN_PROGRESS\n**MODULE**: src/api\n",
    )
    assert doc.module == "src/api"
    assert doc.title == "Rate Limits"
    assert doc.status == "IN_PROGRESS"
    assert doc.timestamp == "20240102-0930"
    assert doc.slug == "rate-limits"
    assert doc.is_timestamped


def test_parse_document_defaults() -> None:
    doc = parse_document(".decision/README.md", "")
    assert doc.module == "."
    assert doc.title == "Untitled"
    assert doc.status == "UNKNOWN"
    assert not doc.is_timestamped


def test_header_field_and_module_of() -> None:
    assert header_field("**STATUS**:   DONE  \n", "STATUS") == "DONE"
    assert header_field("STATUS: DONE", "STATUS") is None
    assert module_of("a/b/.decision/x.md") == "a/b"


def test_timeline_is_sorted_and_skips_untimestamped() -> None:
    docs = [
        parse_document("b/.decision/20240301-0000-later.md", "# Later\n**STATUS**: TODO\n"),
        parse_document("a/.decision/README.md", "# Decision Records for a\n"),
        parse_document("a/.decision/20240101-0800-first.md", "# First\n**STATUS**: DONE\n"),
    ]
    entries = timeline(Path("."), documents=docs)
    assert [e.format() for e in entries] == [
        "20240101-0800 [DONE] [a] First",
        "20240301-0000 [TODO] [b] Later",
    ]


def test_module_progress_excludes_readme() -> None:
    docs = [
        parse_document("src/.decision/README.md", "# Decision Records for src\n"),
        parse_document("src/.decision/20240101-0000-a.md", "# A\n**STATUS**: DONE\n"),
        parse_document("src/.decision/20240102-0000-b.md", "# B\n**STATUS**: IN_PROGRESS\n"),
        parse_document(".decision/20240103-0000-c.md", "# C\n**STATUS**: TODO\n"),
    ]
    rows = module_progress(Path("."), documents=docs)
    assert [r.format() for r in rows] == [
        ".: 0/1 done (0%), 0 in progress",
        "src: 1/2 done (50%), 1 in progress",
    ]
