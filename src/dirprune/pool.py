from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Any, TypeVar

from dirprune.models import Outcome

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WORKERS = 4


def run_pool(
    items: Sequence[T],
    func: Callable[[T], Any],
    workers: int = DEFAULT_WORKERS,
    on_result: Callable[[Outcome], None] | None = None,
) -> list[Outcome]:
    """Apply ``func`` to every item using at most ``workers`` threads.

    Returns one ``Outcome`` per item, ordered by item index. An exception
    raised for one item becomes a failed outcome for that item and does not
    affect the others. ``on_result`` is called from the calling thread as
    each item finishes, in completion order.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if not items:
        return []

    outcomes: list[Outcome | None] = [None] * len(items)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dirprune") as executor:
        future_to_index: dict[Future[Any], int] = {
            executor.submit(_call, func, item, index): index
            for index, item in enumerate(items)
        }
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                outcome = Outcome.success(index, future.result())
            except Exception as exc:
                outcome = Outcome.failure(index, str(exc) or type(exc).__name__)
            outcomes[index] = outcome
            if on_result is not None:
                on_result(outcome)

    return [outcome for outcome in outcomes if outcome is not None]


def _call(func: Callable[[T], Any], item: T, index: int) -> Any:
    LOGGER.debug("Worker %s: item %d", threading.current_thread().name, index)
    return func(item)
