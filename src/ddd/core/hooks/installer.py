"""Install and remove the ddd git hooks.

Every generated script carries :data:`HOOK_MARKER`; scripts without it belong
to someone else and are only replaced with ``force=True`` and never removed.
"""
from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ddd.core.git.repository import get_hooks_dir
from ddd.core.utils.io import ensure_directory, write_text
from ddd.core.utils.templates import render_template
from ddd.data import read_text

logger = logging.getLogger(__name__)

HOOK_MARKER = "ddd-system"
HOOK_TEMPLATE = "hooks/hook.sh.j2"
WORKFLOW_PATH = Path(".github") / "workflows" / "decision-policy.yml"
EXECUTABLE_MODE = 0o755


class HookState(str, Enum):
    INSTALLED = "installed"
    FOREIGN = "foreign"
    MISSING = "missing"


def render_hook(hook_name: str, python: Optional[str] = None) -> str:
    return render_template(
        HOOK_TEMPLATE,
        marker=HOOK_MARKER,
        hook_name=hook_name,
        python=python or sys.executable,
    )


def _state(path: Path) -> HookState:
    if not path.exists():
        return HookState.MISSING
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return HookState.FOREIGN
    return HookState.INSTALLED if HOOK_MARKER in text else HookState.FOREIGN


def hook_status(repo_root: Path, names: Iterable[str]) -> Dict[str, HookState]:
    hooks_dir = get_hooks_dir(repo_root)
    return {name: _state(hooks_dir / name) for name in names}


def install_hooks(
    repo_root: Path,
    names: Iterable[str],
    *,
    force: bool = False,
    python: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """Write hook scripts; returns ``(name, action)`` pairs.

    Actions: ``installed``, ``updated``, ``replaced`` (foreign, forced) and
    ``skipped`` (foreign, not forced).
    """
    hooks_dir = ensure_directory(get_hooks_dir(repo_root))
    results: List[Tuple[str, str]] = []
    for name in names:
        target = hooks_dir / name
        state = _state(target)
        if state is HookState.FOREIGN and not force:
            logger.warning("Existing %s hook is not managed by ddd; use --force to replace it", name)
            results.append((name, "skipped"))
            continue
        write_text(target, render_hook(name, python), mode=EXECUTABLE_MODE)
        action = {
            HookState.MISSING: "installed",
            HookState.INSTALLED: "updated",
            HookState.FOREIGN: "replaced",
        }[state]
        logger.info("%s hook %s", name, action)
        results.append((name, action))
    return results


def uninstall_hooks(repo_root: Path, names: Iterable[str]) -> List[Tuple[str, str]]:
    """Remove ddd-managed hook scripts; returns ``(name, action)`` pairs."""
    hooks_dir = get_hooks_dir(repo_root)
    results: List[Tuple[str, str]] = []
    for name in names:
        target = hooks_dir / name
        state = _state(target)
        if state is HookState.INSTALLED:
            target.unlink()
            results.append((name, "removed"))
        elif state is HookState.FOREIGN:
            logger.info("Leaving foreign %s hook in place", name)
            results.append((name, "skipped"))
        else:
            results.append((name, "absent"))
    return results


def write_github_workflow(repo_root: Path, *, force: bool = False) -> Tuple[Path, bool]:
    """Write the CI workflow; returns ``(path, written)``."""
    target = Path(repo_root) / WORKFLOW_PATH
    if target.exists() and not force:
        logger.info("Workflow already exists: %s", target)
        return target, False
    write_text(target, read_text("workflows", "decision-policy.yml"))
    logger.info("Wrote %s", target)
    return target, True


__all__ = [
    "HOOK_MARKER",
    "HookState",
    "WORKFLOW_PATH",
    "hook_status",
    "install_hooks",
    "render_hook",
    "uninstall_hooks",
    "write_github_workflow",
]
