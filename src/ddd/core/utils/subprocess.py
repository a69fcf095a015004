"""Subprocess execution for git and the decision editor.

Commands are argv lists and never go through a shell. Timeouts come from the
``timeouts`` config section: ``git`` uses ``git_operations_seconds``, the
editor uses ``editor_seconds``, anything else ``default_seconds``.
"""
from __future__ import annotations

import os
import signal
import subprocess
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ddd.core.config.domains.timeouts import TimeoutsConfig

GIT_BUCKET = "git_operations"
EDITOR_BUCKET = "editor"


def timeout_for(argv: Sequence[str], bucket: Optional[str] = None, cwd: Path | str | None = None) -> float:
    """Return the configured timeout in seconds for ``argv``."""
    config = TimeoutsConfig(repo_root=Path(cwd).resolve() if cwd is not None else None)
    if bucket is None and argv and Path(argv[0]).name == "git":
        bucket = GIT_BUCKET
    if bucket == GIT_BUCKET:
        return config.git_operations_seconds
    if bucket == EDITOR_BUCKET:
        return config.editor_seconds
    return config.default_seconds


def _kill_session(proc: subprocess.Popen) -> None:
    # The child leads its own session, so killing the group also reaps
    # grandchildren that still hold the output pipes.
    if proc.poll() is not None:
        return
    try:
        if os.name == "posix":
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        return
    try:
        proc.wait(timeout=0.2)
    except subprocess.TimeoutExpired:
        pass


def _capture(argv: List[str], *, cwd, timeout: float, check: bool, text: bool) -> subprocess.CompletedProcess:
    # Output is decoded leniently: file content shown by git is not guaranteed to be UTF-8.
    proc = subprocess.Popen(
        argv,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        encoding="utf-8" if text else None,
        errors="replace" if text else None,
        start_new_session=True,
    )
    try:
        stdout, stderr = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        _kill_session(proc)
        raise subprocess.TimeoutExpired(argv, timeout) from None

    if check and proc.returncode != 0:
        raise subprocess.CalledProcessError(proc.returncode, argv, output=stdout, stderr=stderr)
    return subprocess.CompletedProcess(argv, proc.returncode, stdout=stdout, stderr=stderr)


def run_with_timeout(
    argv: Sequence[Any],
    timeout_type: Optional[str] = None,
    *,
    cwd: Path | str | None = None,
    timeout: Optional[float] = None,
    capture_output: bool = False,
    text: bool = True,
    check: bool = False,
    **kwargs: Any,
) -> subprocess.CompletedProcess:
    """Run ``argv`` under the timeout of its bucket.

    Captured commands run in a new session and are killed as a group on
    timeout. Uncaptured commands (the editor) keep the controlling terminal.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds its timeout.
    """
    cmd = [str(part) for part in argv]
    limit = timeout if timeout is not None else timeout_for(cmd, timeout_type, cwd)
    if capture_output:
        return _capture(cmd, cwd=cwd, timeout=limit, check=check, text=text)
    return subprocess.run(cmd, cwd=cwd, timeout=limit, check=check, text=text, **kwargs)


__all__ = ["EDITOR_BUCKET", "GIT_BUCKET", "run_with_timeout", "timeout_for"]
