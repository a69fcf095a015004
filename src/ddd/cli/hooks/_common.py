"""Shared handling for the ref-update hooks (pre-push, pre-receive)."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from ddd.cli import EXIT_PRECONDITION, OutputFormatter, emit_report
from ddd.core.exceptions import DddError
from ddd.core.policy.models import ValidationReport

logger = logging.getLogger(__name__)


def validate_ref_updates(
    formatter: OutputFormatter,
    repo_root: Path,
    hook: str,
    base_ref: str,
    lines: Optional[Iterable[str]] = None,
) -> int:
    from ddd.core.git.repository import require_repository
    from ddd.core.hooks.refs import parse_ref_updates, range_for_update
    from ddd.core.policy.engine import validate_range

    try:
        root = require_repository(repo_root)
        updates = parse_ref_updates(lines if lines is not None else sys.stdin, hook)
        report = ValidationReport()
        checked: List[str] = []
        for update in updates:
            bounds = range_for_update(root, update, base_ref)
            if bounds is None:
                logger.info("Skipping deleted ref %s", update.ref)
                continue
            logger.info("Validating %s (%s..%s)", update.ref, bounds[0], bounds[1])
            report.merge(validate_range(root, bounds[0], bounds[1], logger=logger))
            checked.append(update.ref)
    except DddError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_PRECONDITION

    return emit_report(
        formatter,
        report,
        success_message=f"Decision policy passed for {len(checked)} ref(s)",
        hook=hook,
        refs=checked,
    )


__all__ = ["validate_ref_updates"]
