"""
Parallel execution utilities.

Runs a worker over a list of items on a thread pool with progress tracking.
Results come back in input order, whatever order the workers finish in.
"""

import logging
import sys
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from tqdm import tqdm

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Input type
R = TypeVar("R")  # Result type


def execute_parallel(
    items: Iterable[T],
    worker_func: Callable[[int, T], R],
    max_workers: int = 8,
    desc: str = "Processing",
    unit: str = "item",
    show_progress: bool = True,
    error_handler: Callable[[int, T, Exception], R] | None = None,
) -> list[R | None]:
    """
    Execute a function in parallel across items, joining results by index.

    Args:
        items: Iterable of items to process
        worker_func: Called as worker_func(index, item)
        max_workers: Maximum number of parallel workers
        desc: Progress bar description
        unit: Progress bar unit name
        show_progress: Whether to show progress bar
        error_handler: Called as error_handler(index, item, exc) when a worker
            raises; its return value fills that slot. Without one the slot is None.

    Returns:
        List with one result per item, at the item's position

    Example:
        results = execute_parallel(
            stock_ids,
            lambda i, stock_id: resolve(stock_id, i),
            max_workers=8,
            desc="Resolving",
            unit="stock",
        )
    """
    items_list = list(items)
    total = len(items_list)

    if total == 0:
        return []

    results: list[R | None] = [None] * total

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, total))) as executor:
        future_to_index = {
            executor.submit(worker_func, index, item): index
            for index, item in enumerate(items_list)
        }

        progress_bar = None
        if show_progress:
            progress_bar = tqdm(
                total=total,
                desc=desc,
                unit=unit,
                file=sys.stderr,  # Use stderr to avoid conflicts
                ncols=100,
                dynamic_ncols=True,
            )

        try:
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    item = items_list[index]
                    if error_handler:
                        results[index] = error_handler(index, item, e)
                    else:
                        logger.debug(f"Error processing {item}: {e}")
                finally:
                    if progress_bar:
                        progress_bar.update(1)
        finally:
            if progress_bar:
                progress_bar.close()

    return results
