"""ddd status command.

SUMMARY: Show repository, hook and decision status
"""

from __future__ import annotations

import argparse
import datetime as _dt
from pathlib import Path
from typing import Any, Dict, List

from ddd.cli import EXIT_OK, EXIT_PRECONDITION, OutputFormatter, add_standard_flags, get_repo_root
from ddd.core.exceptions import DddError, NotAGitRepositoryError

SUMMARY = "Show repository, hook and decision status"

RECENT_LIMIT = 5


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def _recent(repo_root: Path, documents: List[Any]) -> List[Dict[str, str]]:
    stamped = [d for d in documents if d.is_timestamped]
    stamped.sort(key=lambda d: (repo_root / d.path).stat().st_mtime, reverse=True)
    recent = []
    for doc in stamped[:RECENT_LIMIT]:
        mtime = _dt.datetime.fromtimestamp((repo_root / doc.path).stat().st_mtime)
        recent.append({"path": doc.path, "modified": mtime.strftime("%Y-%m-%d %H:%M")})
    return recent


def main(args: argparse.Namespace) -> int:
    from ddd.core.config.domains.hooks import HooksConfig
    from ddd.core.config.domains.policy import PolicyConfig
    from ddd.core.decisions.documents import iter_documents, list_decision_dirs
    from ddd.core.git.repository import require_repository
    from ddd.core.hooks.installer import hook_status
    from ddd.core.policy.engine import validate_permissions

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = require_repository(get_repo_root(args))
        policy = PolicyConfig(repo_root=repo_root)
        hooks = hook_status(repo_root, HooksConfig(repo_root=repo_root).names)
        permissions = validate_permissions(repo_root, policy=policy)
    except DddError as e:
        if isinstance(e, NotAGitRepositoryError):
            formatter.text("❌ Not in a git repository")
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    layout = policy.layout
    decision_dirs = list_decision_dirs(repo_root, layout)
    documents = list(iter_documents(repo_root, layout))
    recent = _recent(repo_root, documents)

    if formatter.json_mode:
        formatter.json_output(
            {
                "repoRoot": str(repo_root),
                "hooks": {name: state.value for name, state in hooks.items()},
                "decisionDirectories": len(decision_dirs),
                "decisionDocuments": len(documents),
                "recent": recent,
                "permissionViolations": [v.to_dict() for v in permissions.violations],
            }
        )
        return EXIT_OK

    formatter.text("🔍 DDD System Status")
    formatter.text("✅ Git repository detected")
    for name, state in hooks.items():
        icon = "✅" if state.value == "installed" else "⚠️ "
        formatter.text(f"{icon} {name} hook {state.value}")
    formatter.text(f"📊 Decision directories: {len(decision_dirs)}")
    formatter.text(f"📄 Decision files: {len(documents)}")
    formatter.text("")
    formatter.text(f"📅 Recent Decisions (last {RECENT_LIMIT})")
    for item in recent:
        formatter.text(f"   {item['modified']} - {Path(item['path']).name}")
    if permissions.passed:
        formatter.text("🔒 All decision documents are read-only")
    else:
        formatter.text(f"⚠️  {len(permissions.violations)} decision document(s) with wrong permissions:")
        for line in permissions.format_lines():
            formatter.text(f" - {line}")
    return EXIT_OK
