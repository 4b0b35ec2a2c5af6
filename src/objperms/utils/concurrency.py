"""Best-effort fan-out over a thread pool."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettledResults[T, R]:
    """Outcomes of a settled gather, partitioned by success."""

    fulfilled: list[R] = field(default_factory=list)
    rejected: list[tuple[T, Exception]] = field(default_factory=list)


def gather_settled[T, R](
    func: Callable[[T], R],
    items: Iterable[T],
    *,
    max_workers: int,
    label: str = "task",
) -> SettledResults[T, R]:
    """Run ``func`` over ``items`` concurrently and wait for every outcome.

    A failing item never aborts the batch: its exception is logged and kept in
    ``rejected`` while the remaining results are collected. ``fulfilled``
    follows input order.
    """
    work = list(items)
    results: SettledResults[T, R] = SettledResults()
    if not work:
        return results

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(work)))) as executor:
        futures = [(item, executor.submit(func, item)) for item in work]
        for item, future in futures:
            try:
                results.fulfilled.append(future.result())
            except Exception as exc:
                logger.error("%s failed for %r: %s", label, item, exc)
                results.rejected.append((item, exc))

    return results
