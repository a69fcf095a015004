"""ddd decision new command.

SUMMARY: Create a new decision document and open it in an editor

The document is rendered from the bundled template with status DRAFT. After
the editor exits a still-DRAFT document is kept only with ``--allow-draft``
or after confirmation; otherwise it is removed. Kept documents are made
read-only.
"""

from __future__ import annotations

import argparse

from ddd.cli import (
    EXIT_OK,
    EXIT_PRECONDITION,
    EXIT_VIOLATIONS,
    OutputFormatter,
    add_standard_flags,
    confirm,
    get_repo_root,
)
from ddd.core.exceptions import DddError

SUMMARY = "Create a decision document in <directory>/.decision"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", help="Module directory the decision belongs to")
    parser.add_argument("title", help="Decision title (also used for the file slug)")
    parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize the .decision directory without asking when it is missing",
    )
    parser.add_argument(
        "--allow-draft",
        action="store_true",
        help="Keep the document even if its status is still DRAFT",
    )
    parser.add_argument(
        "--no-edit",
        action="store_true",
        help="Do not open an editor",
    )
    parser.add_argument(
        "--editor",
        help="Editor command (default: decision.editor, $EDITOR, then vim)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.decision import DecisionConfig
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.operations import (
        create_decision,
        finalize_decision,
        init_decision_dir,
        is_draft,
        open_in_editor,
    )

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    repo_root = get_repo_root(args)
    layout = PolicyConfig(repo_root=repo_root).layout
    cfg = DecisionConfig(repo_root=repo_root)

    decision_dir = repo_root / args.directory / layout.decision_dir
    try:
        if not decision_dir.is_dir():
            formatter.text(f"Directory {args.directory} has no {layout.decision_dir} subdirectory")
            if not (args.init or confirm(f"🤔 Initialize {layout.decision_dir} directory for {args.directory}?")):
                formatter.error(
                    f"Initialize manually with: ddd decision init {args.directory}",
                    error_code="missing_decision_dir",
                )
                return EXIT_VIOLATIONS
            init_decision_dir(repo_root, args.directory, layout=layout, readme_template=cfg.readme_template)

        path = create_decision(
            repo_root,
            args.directory,
            args.title,
            layout=layout,
            template=cfg.template,
            status=cfg.draft_status,
        )

        if not args.no_edit:
            formatter.text("📝 Opening decision file for editing...")
            try:
                open_in_editor(path, args.editor or cfg.editor, repo_root=repo_root)
            except DddError:
                path.unlink(missing_ok=True)
                raise

        if is_draft(path, cfg.draft_status) and not args.allow_draft:
            formatter.text(f"⚠️  Decision status is still {cfg.draft_status}")
            others = [s for s in cfg.statuses if s != cfg.draft_status]
            if others:
                formatter.text(f"Change STATUS to: {', '.join(others)}")
            if not confirm("Continue anyway?"):
                path.unlink()
                formatter.error("Decision file deleted", error_code="draft_rejected")
                return EXIT_VIOLATIONS

        finalize_decision(path)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    formatter.success({"path": str(path)}, f"✅ Created immutable decision: {path}")
    formatter.text("💡 Next steps:")
    formatter.text(f"   git add {path}")
    formatter.text("   # implement code changes, then git add them")
    formatter.text("   git commit")
    return EXIT_OK
