"""
ddd git pre-push hook.

SUMMARY: Validate every pushed ref range

git passes ``<remote> <url>`` as arguments and one line per ref on stdin:
``<local ref> <local sha> <remote ref> <remote sha>``.
"""

from __future__ import annotations

import argparse

from ddd.cli import OutputFormatter, add_standard_flags, get_repo_root

from ._common import validate_ref_updates

SUMMARY = "Validate pushed commit ranges (pre-push hook)"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("remote", nargs="?", help="Remote name (passed by git)")
    parser.add_argument("url", nargs="?", help="Remote URL (passed by git)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import HooksConfig

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    base_ref = HooksConfig(repo_root=repo_root).push_base_ref
    return validate_ref_updates(formatter, repo_root, "pre-push", base_ref)
