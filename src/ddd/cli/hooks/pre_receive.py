"""
ddd git pre-receive hook.

SUMMARY: Validate every received ref update

git passes one line per ref on stdin: ``<old sha> <new sha> <ref name>``.
"""

from __future__ import annotations

import argparse

from ddd.cli import OutputFormatter, add_standard_flags, get_repo_root

from ._common import validate_ref_updates

SUMMARY = "Validate received commit ranges (pre-receive hook)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import HooksConfig

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    base_ref = HooksConfig(repo_root=repo_root).receive_base_ref
    return validate_ref_updates(formatter, repo_root, "pre-receive", base_ref)
