from __future__ import annotations

import threading
import time

import jinja2
import pytest

from ddd.core.utils.pool import TaskResult, run_bounded
from ddd.core.utils.templates import render_template


def test_results_keep_submission_order() -> None:
    def slow_double(n: int) -> int:
        time.sleep(0.01 * (5 - n))
        return n * 2

    results = run_bounded(slow_double, [1, 2, 3, 4], max_workers=4)
    assert [r.item for r in results] == [1, 2, 3, 4]
    assert [r.value for r in results] == [2, 4, 6, 8]
    assert all(r.ok for r in results)


def test_failures_are_captured_per_task() -> None:
    def fn(n: int) -> int:
        if n == 2:
            raise ValueError("boom")
        return n

    results = run_bounded(fn, [1, 2, 3])
    assert [r.ok for r in results] == [True, False, True]
    assert isinstance(results[1].error, ValueError)
    assert results[1].value is None


def test_concurrency_is_bounded() -> None:
    lock = threading.Lock()
    active = 0
    peak = 0

    def fn(_: int) -> None:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.02)
        with lock:
            active -= 1

    run_bounded(fn, range(8), max_workers=2)
    assert peak <= 2


def test_empty_input() -> None:
    assert run_bounded(lambda x: x, []) == []
    assert TaskResult(item=1).ok


def test_render_template_is_strict() -> None:
    with pytest.raises(jinja2.UndefinedError):
        render_template("hooks/hook.sh.j2", marker="ddd-system")


def test_render_template_keeps_trailing_newline() -> None:
    out = render_template(
        "readme.md.j2",
        module_name="api",
        module="src/api",
        extension=".md",
        created="2024-01-01 00:00:00",
    )
    assert out.startswith("# Decision Records for api")
    assert "ddd decision new src/api" in out
    assert out.endswith("\n")
