"""ddd validate command.

SUMMARY: Validate the decision policy for staged changes, a commit range, or
decision-document permissions. Intended for CI and manual checks.
"""

from __future__ import annotations

import argparse
import logging

from ddd.cli import EXIT_PRECONDITION, OutputFormatter, add_standard_flags, emit_report, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Validate staged changes, a commit range, or decision permissions"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--staged",
        action="store_true",
        help="Validate the staged change set (default)",
    )
    mode.add_argument(
        "--range",
        nargs=2,
        metavar=("FROM", "TO"),
        help="Validate every change between two revisions",
    )
    mode.add_argument(
        "--permissions",
        action="store_true",
        help="Check that every decision document is read-only",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.policy.engine import validate_permissions, validate_range, validate_staged

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)

    try:
        if getattr(args, "range", None):
            from_ref, to_ref = args.range
            report = validate_range(repo_root, from_ref, to_ref, logger=logger)
            return emit_report(
                formatter,
                report,
                success_message=f"Decision policy passed for {from_ref}..{to_ref}",
                mode="range",
            )
        if getattr(args, "permissions", False):
            report = validate_permissions(repo_root, logger=logger)
            return emit_report(
                formatter,
                report,
                success_message="All decision documents are read-only",
                mode="permissions",
            )
        report = validate_staged(repo_root, logger=logger)
        return emit_report(formatter, report, mode="staged")
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION
