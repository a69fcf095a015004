"""ddd commit-msg command.

SUMMARY: Suggest conventional-commit lines from newly staged decisions
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Suggest commit message lines from newly staged decisions"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.analysis import generate_commit_messages
    from ddd.core.git.repository import require_repository

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = require_repository(get_repo_root(args))
        messages = generate_commit_messages(repo_root, PolicyConfig(repo_root=repo_root).layout)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if formatter.json_mode:
        formatter.json_output({"messages": messages})
    elif not messages:
        formatter.text("No new decision files found in staging area")
    else:
        formatter.text("# Auto-generated commit message based on decisions:")
        formatter.text("")
        for line in messages:
            formatter.text(line)
    return EXIT_OK
