"""I/O utilities for ddd.

- Core: atomic writes, directory management
- YAML: read with error handling, directory iteration
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    write_text,
)
from .yaml import (
    iter_yaml_files,
    read_yaml,
)

__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "write_text",
    "iter_yaml_files",
    "read_yaml",
]
