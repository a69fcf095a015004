"""ddd timeline command.

SUMMARY: List timestamped decisions in chronological order
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, OutputFormatter, add_standard_flags, get_repo_root

SUMMARY = "List timestamped decisions in chronological order"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.analysis import timeline

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    entries = timeline(repo_root, PolicyConfig(repo_root=repo_root).layout)

    if formatter.json_mode:
        formatter.json_output(
            {
                "timeline": [
                    {"timestamp": e.timestamp, "status": e.status, "module": e.module, "title": e.title}
                    for e in entries
                ]
            }
        )
        return EXIT_OK

    formatter.text("⏰ Decision Timeline")
    formatter.text("━" * 40)
    for entry in entries:
        formatter.text(entry.format())
    return EXIT_OK
