"""ddd progress command.

SUMMARY: Per-module decision progress
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, OutputFormatter, add_standard_flags, get_repo_root

SUMMARY = "Show per-module decision progress (DONE / total)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.analysis import module_progress

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    rows = module_progress(repo_root, PolicyConfig(repo_root=repo_root).layout)

    if formatter.json_mode:
        formatter.json_output(
            {
                "modules": [
                    {
                        "module": r.module,
                        "total": r.total,
                        "done": r.done,
                        "inProgress": r.in_progress,
                        "percent": r.percent,
                    }
                    for r in rows
                ]
            }
        )
        return EXIT_OK

    formatter.text("📊 Module Progress Report")
    formatter.text("━" * 40)
    for row in rows:
        formatter.text(row.format())
    return EXIT_OK
