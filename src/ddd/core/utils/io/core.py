"""Core I/O utilities for ddd.

Atomic writes (temp file + fsync + rename) and directory management used when
writing decision documents, hook scripts and workflow files.
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure directory exists.

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def _default_mode(target: Path) -> int:
    # Temp files are created 0600; keep an existing file's mode, else honour the umask.
    if target.exists():
        return target.stat().st_mode & 0o7777
    current = os.umask(0)
    os.umask(current)
    return 0o666 & ~current


def write_text(path: PathLike, content: str, *, mode: int | None = None) -> None:
    """Atomically write UTF-8 text to ``path``.

    Args:
        path: Target file path
        content: Text content to write
        mode: Permission bits applied after the rename (default: existing
            file mode, or 0666 minus the umask for new files)
    """
    target = Path(path)
    final_mode = mode if mode is not None else _default_mode(target)

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(target, _writer)
    os.chmod(target, final_mode)


__all__ = [
    "PathLike",
    "ensure_directory",
    "atomic_write",
    "write_text",
]
