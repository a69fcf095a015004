"""Process-wide stdlib logging setup for the ddd CLI.

Library code never configures logging; it only calls ``logging.getLogger``.
The CLI calls :func:`configure_logging` once per process.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from ddd.core.utils.io import ensure_directory

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_DDD_STREAM_HANDLER: logging.Handler | None = None
_DDD_FILE_HANDLER: logging.Handler | None = None
_CONFIGURED_LOG_PATH: str | None = None


def level_from_name(name: str) -> int:
    """Map ``"DEBUG"``/``"warn"``/... to a logging level (INFO when unknown)."""
    value = logging.getLevelName(str(name).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: str = "INFO",
    *,
    log_path: Path | None = None,
    json_mode: bool = False,
) -> None:
    """Install the ddd stderr handler and optional file handler on the root logger.

    Idempotent: calling again replaces the handlers installed by a previous
    call and leaves foreign handlers alone. In ``json_mode`` no stderr handler
    is installed so machine-readable output stays clean.
    """
    global _DDD_STREAM_HANDLER, _DDD_FILE_HANDLER, _CONFIGURED_LOG_PATH

    lvl = level_from_name(level)
    root = logging.getLogger()
    root.setLevel(lvl)
    fmt = logging.Formatter(LOG_FORMAT)

    if _DDD_STREAM_HANDLER is not None:
        root.removeHandler(_DDD_STREAM_HANDLER)
        _DDD_STREAM_HANDLER = None

    if json_mode:
        if not root.handlers:
            # Keeps logging's lastResort handler from writing to stderr.
            _DDD_STREAM_HANDLER = logging.NullHandler()
            root.addHandler(_DDD_STREAM_HANDLER)
    else:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(lvl)
        sh.setFormatter(fmt)
        root.addHandler(sh)
        _DDD_STREAM_HANDLER = sh

    resolved = str(Path(log_path).resolve()) if log_path is not None else None
    if _DDD_FILE_HANDLER is not None and resolved != _CONFIGURED_LOG_PATH:
        root.removeHandler(_DDD_FILE_HANDLER)
        _DDD_FILE_HANDLER.close()
        _DDD_FILE_HANDLER = None
        _CONFIGURED_LOG_PATH = None

    if resolved is not None and _DDD_FILE_HANDLER is None:
        ensure_directory(Path(resolved).parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)
        _DDD_FILE_HANDLER = fh
        _CONFIGURED_LOG_PATH = resolved
    if _DDD_FILE_HANDLER is not None:
        _DDD_FILE_HANDLER.setLevel(lvl)


def reset_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by :func:`configure_logging`."""
    global _DDD_STREAM_HANDLER, _DDD_FILE_HANDLER, _CONFIGURED_LOG_PATH
    root = logging.getLogger()
    for handler in (_DDD_STREAM_HANDLER, _DDD_FILE_HANDLER):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()
    _DDD_STREAM_HANDLER = None
    _DDD_FILE_HANDLER = None
    _CONFIGURED_LOG_PATH = None


__all__ = ["LOG_FORMAT", "configure_logging", "level_from_name", "reset_logging_for_tests"]
