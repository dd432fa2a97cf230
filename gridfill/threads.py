"""
Worker-thread helpers shared by the fill algorithms.

Every parallel pass runs on a fresh ThreadPoolExecutor sized to the resolved
thread count. Each worker reports into its own outcome slot; faults are
collected after all workers have joined and surfaced as a WorkerFaultError.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence

from gridfill.errors import InvalidArgumentError, WorkerFaultError

logger = logging.getLogger(__name__)


def hardware_concurrency() -> int:
    """Number of CPUs usable by this process (at least 1)."""
    try:
        return max(1, len(os.sched_getaffinity(0)))
    except AttributeError:
        return max(1, os.cpu_count() or 1)


def resolve_num_threads(
    num_threads: int,
    *,
    _cpu_count: Callable[[], int] | None = None,
) -> int:
    """Translate a user thread count (0 = all CPUs) into a worker count."""
    if num_threads < 0:
        raise InvalidArgumentError(f"num_threads must be >= 0, got {num_threads}")
    if num_threads == 0:
        num_threads = (_cpu_count or hardware_concurrency)()
    return max(1, int(num_threads))


def split_range(size: int, num_workers: int) -> list[tuple[int, int]]:
    """Split [0, size) into contiguous bands, the last one taking the remainder.

    The number of bands never exceeds ``size`` so that no band is empty.
    """
    if size <= 0:
        return []
    num_workers = max(1, min(num_workers, size))
    shift = size // num_workers
    bands = [(index * shift, (index + 1) * shift) for index in range(num_workers - 1)]
    bands.append(((num_workers - 1) * shift, size))
    return bands


def run_workers(tasks: Sequence[Callable[[], Any]]) -> list[Any]:
    """Run each task on its own thread and return their results in order.

    A single task runs inline on the calling thread. All tasks are joined
    before any fault is reported; every fault is logged, and the last one
    (in task order) is chained to the raised WorkerFaultError.
    """
    if not tasks:
        return []
    outcomes: list[tuple[bool, Any]] = []
    if len(tasks) == 1:
        outcomes.append(_capture(tasks[0]))
    else:
        with ThreadPoolExecutor(max_workers=len(tasks),
                                thread_name_prefix="gridfill") as executor:
            futures = [executor.submit(_capture, task) for task in tasks]
            outcomes = [future.result() for future in futures]

    faults = [value for ok, value in outcomes if not ok]
    if faults:
        for index, fault in enumerate(faults):
            logger.error("Worker fault %d/%d", index + 1, len(faults),
                         exc_info=(type(fault), fault, fault.__traceback__))
        raise WorkerFaultError(
            f"{len(faults)} of {len(tasks)} worker(s) failed: {faults[-1]!r}",
            faults,
        ) from faults[-1]
    return [value for _, value in outcomes]


def dispatch(
    worker: Callable[[int, int], Any],
    size: int,
    num_threads: int,
) -> list[Any]:
    """Call ``worker(start, end)`` on contiguous bands of [0, size) in parallel."""
    bands = split_range(size, num_threads)
    logger.debug("Dispatching %d item(s) over %d band(s)", size, len(bands))
    return run_workers([
        (lambda start=start, end=end: worker(start, end)) for start, end in bands
    ])


def _capture(task: Callable[[], Any]) -> tuple[bool, Any]:
    """Outcome slot of one worker: (True, result) or (False, exception)."""
    try:
        return True, task()
    except Exception as exc:
        return False, exc
