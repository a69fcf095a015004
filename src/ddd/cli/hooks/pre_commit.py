"""
ddd git pre-commit hook.

SUMMARY: Validate the staged change set
"""

from __future__ import annotations

import argparse
import logging

from ddd.cli import EXIT_PRECONDITION, OutputFormatter, add_standard_flags, emit_report, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Validate the staged change set (pre-commit hook)"

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.policy.engine import validate_staged

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        report = validate_staged(get_repo_root(args), logger=logger)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    code = emit_report(formatter, report, success_message="Decision policy passed", hook="pre-commit")
    if code and not formatter.json_mode:
        formatter.text("Add a NEW decision in the listed decision directory that mentions each file.")
    return code
