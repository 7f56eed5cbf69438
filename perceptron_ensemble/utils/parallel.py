"""
Parallel Execution
==================

Thread-pool helper for data-parallel work (ensemble members, CV folds).

Results are always returned in input order, so a parallel run produces the
same output as a sequential one as long as each task owns its own state
(including its own random generator).

Example Usage:
    ```python
    from perceptron_ensemble.utils.parallel import run_parallel

    models = run_parallel(train_member, member_specs, n_jobs=4)
    ```
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional

logger = logging.getLogger(__name__)


def resolve_workers(n_items: int, n_jobs: Optional[int]) -> int:
    """
    Number of worker threads to use.

    ``n_jobs`` of None or -1 means one worker per CPU; the result is never
    larger than the number of items and never below 1.
    """
    if n_jobs is None or n_jobs == -1:
        n_jobs = os.cpu_count() or 1
    return max(1, min(int(n_jobs), n_items))


def run_parallel(fn: Callable[[Any], Any],
                 items: Iterable[Any],
                 n_jobs: Optional[int] = 1) -> List[Any]:
    """
    Apply ``fn`` to every item, optionally on a thread pool.

    Args:
        fn: Task function
        items: Task inputs
        n_jobs: Worker count (1 runs sequentially, -1/None uses all CPUs)

    Returns:
        List of results in the same order as ``items``

    Raises:
        Whatever ``fn`` raises; the first failure in input order propagates.
    """
    items = list(items)
    if not items:
        return []

    workers = resolve_workers(len(items), n_jobs)

    if workers == 1:
        return [fn(item) for item in items]

    logger.debug(f"Running {len(items)} tasks on {workers} threads")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map() yields in submission order
        return list(pool.map(fn, items))
