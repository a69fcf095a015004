"""ddd decision init command.

SUMMARY: Initialize a .decision directory for a module
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Initialize <directory>/.decision with a README"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", help="Module directory (created when missing)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.decision import DecisionConfig
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.operations import README_NAME, init_decision_dir

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)

    try:
        decision_dir, created = init_decision_dir(
            repo_root,
            args.directory,
            layout=PolicyConfig(repo_root=repo_root).layout,
            readme_template=DecisionConfig(repo_root=repo_root).readme_template,
        )
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if not created:
        formatter.success(
            {"decisionDir": str(decision_dir), "created": False},
            f"✅ {decision_dir} already exists",
        )
        return EXIT_OK

    formatter.success(
        {"decisionDir": str(decision_dir), "created": True},
        f"✅ Initialized {decision_dir} with {README_NAME}",
    )
    formatter.text("💡 Next steps:")
    formatter.text(f"   git add {decision_dir / README_NAME}")
    formatter.text(f'   ddd decision new {args.directory} "initial-setup"')
    return EXIT_OK
