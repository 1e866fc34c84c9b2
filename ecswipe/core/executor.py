"""Bounded-concurrency batch executor.

Every remote teardown in a region goes through :func:`run_batch`, which caps
the number of in-flight operations so the ECS API is never hit by more than
``MAX_CONCURRENCY`` calls from us at once.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Iterable, List, Optional, Tuple

from ecswipe.core.outcome import OperationOutcome

MAX_CONCURRENCY = 5

Operation = Tuple[str, Callable[[], Any]]


def run_batch(operations: Iterable[Operation], description: str,
              region: Optional[str] = None,
              max_concurrency: int = MAX_CONCURRENCY) -> List[OperationOutcome]:
    """Run ``(resource_id, callable)`` pairs with at most ``max_concurrency`` in flight.

    Returns one outcome per operation, in completion order, once all of them
    have finished. A failing operation is logged and recorded; it never
    raises out of here or affects its siblings. Errors raised while iterating
    ``operations`` itself do propagate.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    operations = list(operations)
    if not operations:
        return []

    prefix = f"[{region}] " if region else ''
    outcomes = []
    with ThreadPoolExecutor(max_workers=max_concurrency,
                            thread_name_prefix='ecswipe') as executor:
        future_map = {executor.submit(fn): resource_id for resource_id, fn in operations}
        for fut in as_completed(future_map):
            resource_id = future_map[fut]
            try:
                fut.result()
            except Exception as ex:
                outcome = OperationOutcome.failed(resource_id, ex)
                logging.error(
                    f"{prefix}{description} failed for {resource_id}: {ex}",
                    extra={'region': region, 'resource_id': resource_id,
                           'action': description},
                )
            else:
                outcome = OperationOutcome.succeeded(resource_id)
            outcomes.append(outcome)
    return outcomes
