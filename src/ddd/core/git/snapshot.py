"""Read-only views of a repository tree.

The policy engine never touches git or the filesystem directly; it asks a
:class:`TreeSnapshot` whether a path exists, whether it is a directory, what
its content is, and what its mode is. Three implementations exist:

- :class:`WorkingTreeSnapshot` for the working tree and index (staged mode)
- :class:`RevisionSnapshot` for a committed tree (range mode, HEAD baseline)
- :class:`MappingSnapshot` for in-memory trees (tests, empty baselines)
"""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Protocol, Set, Tuple

from ddd.core.exceptions import GitCommandError

from .repository import EMPTY_TREE, git_output, is_zero_sha

logger = logging.getLogger(__name__)

GIT_SYMLINK_MODE = "120000"


class TreeSnapshot(Protocol):
    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def is_symlink(self, path: str) -> bool: ...

    def read_text(self, path: str) -> Optional[str]: ...

    def file_mode(self, path: str) -> Optional[int]: ...


def _norm(path: str) -> str:
    return path.strip().strip("/")


class WorkingTreeSnapshot:
    """The working tree, with staged content preferred when reading files."""

    def __init__(self, repo_root: Path, *, prefer_index: bool = True) -> None:
        self.repo_root = Path(repo_root)
        self.prefer_index = prefer_index

    def _abs(self, path: str) -> Path:
        return self.repo_root / _norm(path)

    def exists(self, path: str) -> bool:
        return os.path.lexists(self._abs(path))

    def is_directory(self, path: str) -> bool:
        return self._abs(path).is_dir()

    def is_symlink(self, path: str) -> bool:
        return self._abs(path).is_symlink()

    def read_text(self, path: str) -> Optional[str]:
        if self.prefer_index:
            try:
                return git_output(self.repo_root, ["show", f":{_norm(path)}"], strip=False)
            except GitCommandError:
                pass
        target = self._abs(path)
        if not target.is_file():
            return None
        try:
            return target.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.debug("Cannot read %s: %s", target, exc)
            return None

    def file_mode(self, path: str) -> Optional[int]:
        try:
            return stat.S_IMODE(os.lstat(self._abs(path)).st_mode)
        except FileNotFoundError:
            return None


class RevisionSnapshot:
    """A committed tree, listed once with ``git ls-tree -r -t -z --full-tree``."""

    def __init__(self, repo_root: Path, revision: str) -> None:
        self.repo_root = Path(repo_root)
        self.revision = EMPTY_TREE if is_zero_sha(revision) else revision
        self._entries: Optional[Dict[str, Tuple[str, str]]] = None
        self._content: Dict[str, Optional[str]] = {}

    @property
    def entries(self) -> Dict[str, Tuple[str, str]]:
        """Map of path to ``(mode, type)`` for every blob and tree."""
        if self._entries is None:
            self._entries = self._list_tree()
        return self._entries

    def _list_tree(self) -> Dict[str, Tuple[str, str]]:
        if self.revision == EMPTY_TREE:
            return {}
        out = git_output(
            self.repo_root,
            ["ls-tree", "-r", "-t", "-z", "--full-tree", self.revision],
            strip=False,
        )
        entries: Dict[str, Tuple[str, str]] = {}
        for record in out.split("\0"):
            if not record:
                continue
            meta, _, path = record.partition("\t")
            parts = meta.split()
            if len(parts) < 2 or not path:
                continue
            entries[path] = (parts[0], parts[1])
        logger.debug("Listed %d entries at %s", len(entries), self.revision)
        return entries

    def exists(self, path: str) -> bool:
        return _norm(path) in self.entries

    def is_directory(self, path: str) -> bool:
        key = _norm(path)
        if not key:
            return True
        entry = self.entries.get(key)
        return entry is not None and entry[1] == "tree"

    def is_symlink(self, path: str) -> bool:
        entry = self.entries.get(_norm(path))
        return entry is not None and entry[0] == GIT_SYMLINK_MODE

    def read_text(self, path: str) -> Optional[str]:
        key = _norm(path)
        if key in self._content:
            return self._content[key]
        entry = self.entries.get(key)
        content: Optional[str] = None
        if entry is not None and entry[1] == "blob":
            content = git_output(self.repo_root, ["show", f"{self.revision}:{key}"], strip=False)
        self._content[key] = content
        return content

    def file_mode(self, path: str) -> Optional[int]:
        entry = self.entries.get(_norm(path))
        if entry is None:
            return None
        return int(entry[0], 8) & 0o7777


class MappingSnapshot:
    """In-memory tree built from ``{path: content}``.

    Directories are implied by file paths; extra empty directories, modes and
    symlinks can be supplied explicitly.
    """

    def __init__(
        self,
        files: Optional[Mapping[str, str]] = None,
        *,
        directories: Iterable[str] = (),
        modes: Optional[Mapping[str, int]] = None,
        symlinks: Iterable[str] = (),
    ) -> None:
        self.files: Dict[str, str] = {_norm(k): v for k, v in (files or {}).items()}
        self.modes: Dict[str, int] = {_norm(k): v for k, v in (modes or {}).items()}
        self.symlinks: Set[str] = {_norm(s) for s in symlinks}
        self.directories: Set[str] = {_norm(d) for d in directories}
        for path in list(self.files) + list(self.symlinks):
            parts = path.split("/")[:-1]
            for idx in range(1, len(parts) + 1):
                self.directories.add("/".join(parts[:idx]))

    def exists(self, path: str) -> bool:
        key = _norm(path)
        return key in self.files or key in self.directories or key in self.symlinks

    def is_directory(self, path: str) -> bool:
        key = _norm(path)
        return not key or key in self.directories

    def is_symlink(self, path: str) -> bool:
        return _norm(path) in self.symlinks

    def read_text(self, path: str) -> Optional[str]:
        return self.files.get(_norm(path))

    def file_mode(self, path: str) -> Optional[int]:
        key = _norm(path)
        if key in self.modes:
            return self.modes[key]
        if key in self.symlinks:
            return 0o777
        return 0o644 if key in self.files else None


EMPTY_SNAPSHOT = MappingSnapshot()


__all__ = [
    "EMPTY_SNAPSHOT",
    "GIT_SYMLINK_MODE",
    "MappingSnapshot",
    "RevisionSnapshot",
    "TreeSnapshot",
    "WorkingTreeSnapshot",
]
