"""
ddd hooks install command.

SUMMARY: Install the ddd git hooks
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_force_flag, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Install pre-commit, pre-push and pre-receive hooks"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "hooks",
        nargs="*",
        help="Hook names to install (default: hooks.names)",
    )
    add_force_flag(parser, "Replace hooks not managed by ddd")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import SUPPORTED_HOOKS, HooksConfig
    from ddd.core.git.repository import require_repository
    from ddd.core.hooks.installer import install_hooks

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    unknown = [h for h in args.hooks if h not in SUPPORTED_HOOKS]
    if unknown:
        formatter.error(f"Unsupported hook(s): {', '.join(unknown)}", error_code="unknown_hook")
        return EXIT_PRECONDITION

    try:
        repo_root = require_repository(get_repo_root(args))
        names = args.hooks or HooksConfig(repo_root=repo_root).names
        results = install_hooks(repo_root, names, force=args.force)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if formatter.json_mode:
        formatter.json_output({"hooks": [{"name": n, "action": a} for n, a in results]})
    else:
        for name, action in results:
            icon = "⚠️ " if action == "skipped" else "✅"
            formatter.text(f"{icon} {name}: {action}")
    return EXIT_OK
