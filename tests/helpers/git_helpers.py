"""Git operation helpers for integration tests."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ddd.core.utils.subprocess import run_with_timeout


def git(repo_path: Path, *args: str) -> str:
    """Run ``git <args>`` in ``repo_path`` and return stripped stdout."""
    result = run_with_timeout(
        ["git", *args],
        cwd=repo_path,
        check=True,
        capture_output=True,
        text=True,
    )
    return (result.stdout or "").strip()


def git_add(repo_path: Path, *paths: str) -> None:
    """Stage paths (everything when none are given)."""
    git(repo_path, "add", *(paths or ("-A",)))


def git_commit(repo_path: Path, message: str, allow_empty: bool = False) -> str:
    """Commit the index without running hooks; returns the new HEAD sha.

    Args:
        repo_path: Path to repository
        message: Commit message
        allow_empty: Allow empty commits
    """
    cmd = ["commit", "--no-verify", "-m", message]
    if allow_empty:
        cmd.append("--allow-empty")
    git(repo_path, *cmd)
    return git_rev_parse(repo_path, "HEAD")


def git_rev_parse(repo_path: Path, rev: str) -> str:
    return git(repo_path, "rev-parse", rev)


def write_file(repo_path: Path, rel: str, content: str, mode: Optional[int] = None) -> Path:
    """Write ``content`` to ``repo_path/rel`` (parents created), optionally chmod."""
    target = repo_path / rel
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.exists() and not os.access(target, os.W_OK):
        os.chmod(target, 0o644)
    target.write_text(content, encoding="utf-8")
    if mode is not None:
        os.chmod(target, mode)
    return target


def decision_text(title: str, *mentions: str) -> str:
    """Minimal decision document mentioning the given files."""
    files = "\n".join(f"- {m}" for m in mentions)
    return f"# {title}\n\n**STATUS**: DONE\n\n## Context\nNeeded.\n\n## Implementation\n**FILES**:\n{files}\n"
