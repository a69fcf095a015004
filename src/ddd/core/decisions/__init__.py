"""Decision documents: creation, discovery and reporting."""
from __future__ import annotations

from .analysis import (
    ModuleProgress,
    TimelineEntry,
    generate_commit_messages,
    infer_commit_type,
    module_progress,
    timeline,
)
from .documents import DecisionDocument, iter_documents, list_decision_dirs, parse_document
from .operations import (
    create_decision,
    decision_filename,
    finalize_decision,
    init_decision_dir,
    is_draft,
    open_in_editor,
    slugify,
    title_case,
)
from .search import SearchHit, search_decisions

__all__ = [
    "DecisionDocument",
    "ModuleProgress",
    "SearchHit",
    "TimelineEntry",
    "create_decision",
    "decision_filename",
    "finalize_decision",
    "generate_commit_messages",
    "infer_commit_type",
    "init_decision_dir",
    "is_draft",
    "iter_documents",
    "list_decision_dirs",
    "module_progress",
    "open_in_editor",
    "parse_document",
    "search_decisions",
    "slugify",
    "timeline",
    "title_case",
]
