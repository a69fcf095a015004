"""ddd search command.

SUMMARY: Search decision documents (case-insensitive)
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Search decision documents (case-insensitive)"

RULE = "━" * 40
SEPARATOR = "─" * 36


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("term", help="Text to search for")
    parser.add_argument(
        "--workers",
        type=int,
        help="Concurrent search tasks (default: search.max_workers)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.config.domains.search import SearchConfig
    from ddd.core.decisions.search import search_decisions

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)

    if not args.term.strip():
        formatter.error("search term must not be empty", error_code="invalid_term")
        return EXIT_PRECONDITION

    try:
        cfg = SearchConfig(repo_root=repo_root)
        hits = search_decisions(
            repo_root,
            args.term,
            layout=PolicyConfig(repo_root=repo_root).layout,
            max_workers=args.workers or cfg.max_workers,
            context_lines=cfg.context_lines,
            max_lines=cfg.max_lines_per_file,
        )
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if formatter.json_mode:
        formatter.json_output(
            {"term": args.term, "matches": [{"path": h.path, "lines": h.format_lines()} for h in hits]}
        )
        return EXIT_OK

    formatter.text(f"🔍 Searching decisions for: '{args.term}'")
    formatter.text(RULE)
    if not hits:
        formatter.text("No matching decisions found")
    for hit in hits:
        formatter.text(f"📄 {hit.path}")
        for line in hit.format_lines():
            formatter.text(line)
        formatter.text(SEPARATOR)
    return EXIT_OK
