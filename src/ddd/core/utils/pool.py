"""Bounded worker pool with per-task result collection.

Tasks run on a ``ThreadPoolExecutor`` capped at ``max_workers``. Each task's
outcome (value or exception) is captured in a :class:`TaskResult`, and results
are returned in submission order regardless of completion order.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class TaskResult(Generic[T, R]):
    """Outcome of one pooled task."""

    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_bounded(
    fn: Callable[[T], R],
    items: Iterable[T],
    *,
    max_workers: int = 4,
) -> List[TaskResult[T, R]]:
    """Apply ``fn`` to every item using at most ``max_workers`` threads."""
    work = list(items)
    if not work:
        return []

    results: List[Optional[TaskResult[T, R]]] = [None] * len(work)
    with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, int(max_workers))) as executor:
        futures = {executor.submit(fn, item): idx for idx, item in enumerate(work)}

        for future in concurrent.futures.as_completed(futures):
            idx = futures[future]
            try:
                results[idx] = TaskResult(item=work[idx], value=future.result())
            except Exception as e:
                logger.warning("Pooled task for %r failed: %s", work[idx], e)
                results[idx] = TaskResult(item=work[idx], error=e)

    return [r for r in results if r is not None]


__all__ = ["TaskResult", "run_bounded"]
