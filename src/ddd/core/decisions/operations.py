"""Decision directory initialisation and decision creation."""
from __future__ import annotations

import logging
import os
import re
import shlex
import stat
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from ddd.core.exceptions import DecisionError
from ddd.core.git.repository import get_config_value
from ddd.core.policy.paths import DEFAULT_LAYOUT, DecisionLayout
from ddd.core.utils.io import ensure_directory, write_text
from ddd.core.utils.templates import render_template

logger = logging.getLogger(__name__)

READONLY_MODE = 0o444
DRAFT_STATUS = "DRAFT"
README_NAME = "README.md"


def slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.strip().lower()).strip("-")
    return slug or "untitled"


def title_case(slug: str) -> str:
    """``user-auth-method`` -> ``User Auth Method``."""
    text = slug.replace("-", " ").strip()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)


def decision_filename(title: str, now: datetime, extension: str = ".md") -> str:
    return f"{now:%Y%m%d-%H%M}-{slugify(title)}{extension}"


def _module_label(repo_root: Path, module_dir: Path) -> str:
    try:
        rel = module_dir.resolve().relative_to(Path(repo_root).resolve()).as_posix()
    except ValueError:
        return str(module_dir)
    return rel or "."


def init_decision_dir(
    repo_root: Path,
    target_dir: Path | str,
    *,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    readme_template: str = "readme.md.j2",
    now: Optional[datetime] = None,
) -> Tuple[Path, bool]:
    """Create ``<target_dir>/.decision/README.md`` (read-only).

    Returns ``(decision_dir, created)``; an existing decision directory is
    left untouched.
    """
    root = Path(repo_root)
    module_dir = Path(target_dir)
    if not module_dir.is_absolute():
        module_dir = root / module_dir
    decision_dir = module_dir / layout.decision_dir

    if decision_dir.is_dir():
        logger.info("%s already exists", decision_dir)
        return decision_dir, False
    if decision_dir.exists():
        raise DecisionError(
            f"{decision_dir} exists and is not a directory",
            context={"path": str(decision_dir)},
        )

    ensure_directory(decision_dir)
    module = _module_label(root, module_dir)
    content = render_template(
        readme_template,
        module_name=module_dir.resolve().name,
        module=module,
        extension=layout.extension,
        created=(now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
    )
    write_text(decision_dir / README_NAME, content, mode=READONLY_MODE)
    logger.info("Initialized %s with %s", decision_dir, README_NAME)
    return decision_dir, True


def create_decision(
    repo_root: Path,
    module_dir: Path | str,
    title: str,
    *,
    layout: DecisionLayout = DEFAULT_LAYOUT,
    template: str = "decision.md.j2",
    status: str = DRAFT_STATUS,
    now: Optional[datetime] = None,
) -> Path:
    """Render a new decision document and return its path.

    The file stays writable so it can be edited; call :func:`finalize_decision`
    afterwards.

    Raises:
        DecisionError: When the decision directory is missing or the target
            file already exists.
    """
    root = Path(repo_root)
    module_path = Path(module_dir)
    if not module_path.is_absolute():
        module_path = root / module_path
    decision_dir = module_path / layout.decision_dir
    if not decision_dir.is_dir():
        raise DecisionError(
            f"Directory {module_dir} has no {layout.decision_dir} subdirectory",
            context={"module": str(module_dir)},
        )

    when = now or datetime.now()
    target = decision_dir / decision_filename(title, when, layout.extension)
    if target.exists():
        raise DecisionError(f"Decision already exists: {target}", context={"path": str(target)})

    content = render_template(
        template,
        title=title_case(slugify(title)),
        timestamp=when.strftime("%Y-%m-%d %H:%M"),
        status=status,
        module=_module_label(root, module_path),
        author_name=get_config_value(root, "user.name") or "Unknown User",
        author_email=get_config_value(root, "user.email") or "unknown@example.com",
    )
    write_text(target, content)
    logger.info("Created decision %s", target)
    return target


def open_in_editor(path: Path, editor: str, *, repo_root: Optional[Path] = None) -> int:
    """Open ``path`` in ``editor`` (a shell-style command string) and wait for it."""
    from ddd.core.utils.subprocess import EDITOR_BUCKET, run_with_timeout

    argv = [*shlex.split(editor), str(path)]
    logger.debug("Opening editor: %s", argv)
    try:
        result = run_with_timeout(argv, EDITOR_BUCKET, cwd=str(repo_root or Path(path).parent))
    except FileNotFoundError as exc:
        raise DecisionError(f"Editor not found: {editor}", context={"editor": editor}) from exc
    except subprocess.TimeoutExpired as exc:
        raise DecisionError(
            f"Editor did not exit within {exc.timeout}s", context={"editor": editor, "path": str(path)}
        ) from exc
    return int(result.returncode)


def is_draft(path: Path, draft_status: str = DRAFT_STATUS) -> bool:
    content = Path(path).read_text(encoding="utf-8", errors="replace")
    return f"**STATUS**: {draft_status}" in content


def finalize_decision(path: Path, mode: int = READONLY_MODE) -> None:
    """Make a freshly written decision document read-only."""
    p = Path(path)
    if stat.S_IMODE(p.stat().st_mode) != mode:
        os.chmod(p, mode)
    logger.info("Created immutable decision: %s", p)


__all__ = [
    "DRAFT_STATUS",
    "READONLY_MODE",
    "create_decision",
    "decision_filename",
    "finalize_decision",
    "init_decision_dir",
    "is_draft",
    "open_in_editor",
    "slugify",
    "title_case",
]
