"""ddd setup command.

SUMMARY: Bootstrap a decision-driven repository
"""

from __future__ import annotations

import argparse

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_force_flag, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError

SUMMARY = "Bootstrap the repository: install hooks, optionally add a CI workflow"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--github",
        action="store_true",
        help="Also write .github/workflows/decision-policy.yml",
    )
    add_force_flag(parser, "Replace hooks and workflow files not managed by ddd")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import HooksConfig
    from ddd.core.git.repository import require_repository
    from ddd.core.hooks.installer import install_hooks, write_github_workflow

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = require_repository(get_repo_root(args))
        hooks = install_hooks(repo_root, HooksConfig(repo_root=repo_root).names, force=args.force)
        workflow = None
        if args.github:
            path, written = write_github_workflow(repo_root, force=args.force)
            workflow = {"path": str(path), "written": written}
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    if formatter.json_mode:
        formatter.json_output(
            {
                "repoRoot": str(repo_root),
                "hooks": [{"name": n, "action": a} for n, a in hooks],
                "workflow": workflow,
            }
        )
        return EXIT_OK

    formatter.text("🚀 Bootstrapping decision-driven project...")
    for name, action in hooks:
        formatter.text_kv(name, action)
    if workflow is not None:
        state = "written" if workflow["written"] else "already present"
        formatter.text_kv("workflow", f"{workflow['path']} ({state})")
    formatter.text("✅ Decision-driven project initialized!")
    formatter.text("")
    formatter.text("💡 When you create directories with code:")
    formatter.text("   ddd decision init <directory>          # Initialize .decision")
    formatter.text("   ddd decision new <directory> <title>   # Create decision")
    return EXIT_OK
