"""
ddd hooks uninstall command.

SUMMARY: Remove the ddd git hooks (foreign hooks are left in place)
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Remove hooks installed by ddd"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import SUPPORTED_HOOKS
    from ddd.core.git.repository import require_repository
    from ddd.core.hooks.installer import uninstall_hooks

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = require_repository(get_repo_root(args))
        results = uninstall_hooks(repo_root, SUPPORTED_HOOKS)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if formatter.json_mode:
        formatter.json_output({"hooks": [{"name": n, "action": a} for n, a in results]})
    else:
        for name, action in results:
            formatter.text(f"{name}: {action}")
    return EXIT_OK
