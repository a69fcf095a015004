"""Git repository detection, root resolution and ref helpers."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ddd.core.exceptions import GitCommandError, NotAGitRepositoryError

logger = logging.getLogger(__name__)

# All-zero object id used by git for "no revision" (created/deleted refs).
ZERO_SHA = "0" * 40
# Well-known id of the empty tree; every git installation resolves it.
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


def is_zero_sha(rev: Optional[str]) -> bool:
    """Return True for the all-zero object id (any length)."""
    value = (rev or "").strip()
    return bool(value) and set(value) == {"0"}


def is_git_repository(path: Path) -> bool:
    """Return True if ``path`` is inside a git repository.

    Walks up parent directories looking for a ``.git`` entry (file or
    directory). This is a structural check and does not run git.
    """
    return get_git_root(path) is not None


def get_git_root(path: Path) -> Optional[Path]:
    """Return the first ancestor of ``path`` holding a ``.git`` entry, or None."""
    p = Path(path).resolve()
    if p.is_file():
        p = p.parent
    for candidate in [p, *p.parents]:
        if (candidate / ".git").exists():
            return candidate
    return None


def git_output(
    repo_root: Path | str,
    args: Sequence[str],
    *,
    check: bool = True,
    strip: bool = True,
) -> str:
    """Run ``git <args>`` in ``repo_root`` and return stdout.

    Raises:
        GitCommandError: When git exits non-zero (``check=True``), cannot be
            executed, or exceeds the configured timeout.
    """
    from ddd.core.utils.subprocess import GIT_BUCKET, run_with_timeout

    argv = ["git", *args]
    try:
        result = run_with_timeout(argv, GIT_BUCKET, cwd=repo_root, capture_output=True)
    except FileNotFoundError as exc:
        raise GitCommandError("git executable not found", argv=argv) from exc
    except subprocess.TimeoutExpired as exc:
        raise GitCommandError(f"git command timed out after {exc.timeout}s", argv=argv) from exc

    if check and result.returncode != 0:
        raise GitCommandError(
            f"git {' '.join(args)} failed",
            argv=argv,
            returncode=result.returncode,
            stderr=result.stderr or "",
        )
    out = result.stdout or ""
    return out.strip() if strip else out


def require_repository(start_path: Optional[Path | str] = None) -> Path:
    """Return the repository root containing ``start_path`` (default: cwd).

    For bare repositories (pre-receive hooks run there) the git directory
    itself is returned.

    Raises:
        NotAGitRepositoryError: When ``start_path`` is not inside a repository.
    """
    start = Path(start_path) if start_path is not None else Path.cwd()
    if not start.is_dir():
        raise NotAGitRepositoryError(
            f"Not a git repository: {start}", context={"path": str(start)}
        )
    try:
        top = git_output(start, ["rev-parse", "--show-toplevel"], check=False)
        if top:
            return Path(top).resolve()
        if git_output(start, ["rev-parse", "--is-bare-repository"], check=False) == "true":
            return Path(git_output(start, ["rev-parse", "--absolute-git-dir"])).resolve()
    except GitCommandError as exc:
        raise NotAGitRepositoryError(str(exc), context=exc.context) from exc
    raise NotAGitRepositoryError(
        f"Not a git repository: {start}", context={"path": str(start)}
    )


def resolve_revision(repo_root: Path, rev: str) -> Optional[str]:
    """Resolve ``rev`` to a commit id, or None when it does not exist."""
    out = git_output(
        repo_root, ["rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}"], check=False
    )
    return out or None


def has_head(repo_root: Path) -> bool:
    """Return True when HEAD points at a commit (False on an unborn branch)."""
    return resolve_revision(repo_root, "HEAD") is not None


def merge_base(repo_root: Path, a: str, b: str) -> Optional[str]:
    """Return the merge base of ``a`` and ``b``, or None when there is none."""
    out = git_output(repo_root, ["merge-base", a, b], check=False)
    if not out:
        logger.debug("No merge base between %s and %s", a, b)
        return None
    return out


def get_config_value(repo_root: Path, key: str) -> str:
    """Return ``git config --get <key>`` or an empty string when unset."""
    return git_output(repo_root, ["config", "--get", key], check=False)


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the hooks directory git will use for ``repo_root``."""
    raw = git_output(repo_root, ["rev-parse", "--git-path", "hooks"])
    path = Path(raw)
    if not path.is_absolute():
        path = Path(repo_root) / path
    return path.resolve()


__all__ = [
    "EMPTY_TREE",
    "ZERO_SHA",
    "get_config_value",
    "get_git_root",
    "get_hooks_dir",
    "git_output",
    "has_head",
    "is_git_repository",
    "is_zero_sha",
    "merge_base",
    "require_repository",
    "resolve_revision",
]
