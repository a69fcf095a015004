"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Optional

from ddd.core.policy.models import ValidationReport
from ddd.core.utils.paths import resolve_project_root

from ._output import OutputFormatter

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_PRECONDITION = 2


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(getattr(args, "repo_root")).resolve()
    return resolve_project_root()


def emit_report(
    formatter: OutputFormatter,
    report: ValidationReport,
    *,
    success_message: str = "Decision policy passed",
    **extra: object,
) -> int:
    """Print a validation report and return the matching exit code."""
    if formatter.json_mode:
        formatter.json_output({**extra, **report.to_dict()})
    elif report.passed:
        formatter.text(f"✅ {success_message}")
    else:
        formatter.text(f"❌ Decision policy violations ({len(report.violations)}):")
        for line in report.format_lines():
            formatter.text(f" - {line}")
    return EXIT_OK if report.passed else EXIT_VIOLATIONS


def confirm(prompt: str, *, input_fn: Optional[Callable[[str], str]] = None) -> bool:
    """Ask a yes/no question; anything but ``y``/``yes`` (or EOF) means no."""
    ask = input_fn or input
    try:
        answer = ask(f"{prompt} (y/n): ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


__all__ = [
    "EXIT_OK",
    "EXIT_PRECONDITION",
    "EXIT_VIOLATIONS",
    "confirm",
    "emit_report",
    "get_repo_root",
]
