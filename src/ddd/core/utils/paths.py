"""Project path resolution helpers."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIRNAME = ".ddd"
PROJECT_ROOT_ENV = "DDD_PROJECT_ROOT"


def get_project_config_dir(repo_root: Path) -> Path:
    """Return the project configuration directory (``<repo>/.ddd``)."""
    return Path(repo_root) / PROJECT_CONFIG_DIRNAME


def resolve_project_root(start_path: Optional[Path | str] = None) -> Path:
    """Resolve the project root for ``start_path`` (default: cwd).

    Resolution order:
    1. ``DDD_PROJECT_ROOT`` environment variable
    2. First ancestor containing a ``.git`` entry
    3. The start directory itself (config can load outside a repository)
    """
    override = os.environ.get(PROJECT_ROOT_ENV)
    if override:
        return Path(override).expanduser().resolve()

    from ddd.core.git.repository import get_git_root

    start = Path(start_path) if start_path is not None else Path.cwd()
    root = get_git_root(start)
    if root is not None:
        return root
    return start.resolve()


__all__ = ["PROJECT_CONFIG_DIRNAME", "get_project_config_dir", "resolve_project_root"]
