"""
Helpers for distributing simulated events over worker processes.

- :func:`optimal_worker_count`: number of worker processes for a given workload.
- :func:`split_into_batches`: contiguous, order-preserving batches of events.

Each worker scores its batch with a private
:class:`~pycdd.scoring.scorer.EventDamageScorer`; nothing is shared between workers.
"""

import os
import warnings
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def optimal_worker_count(workload, user_requested: int = None) -> int:
    """
    Number of worker processes to use for ``workload`` tasks.

    One core is left free. The result never exceeds the number of tasks and is
    at least 1.

    :param workload: Tasks to run, or their number.
    :type workload: Sized or int
    :param user_requested: Optional number of workers asked for by the caller.
    :type user_requested: int or None

    :returns: Worker count.
    :rtype: int
    """
    available = max(1, (os.cpu_count() or 1) - 1)
    size = len(workload) if hasattr(workload, "__len__") else int(workload)
    if size <= 0:
        return 1

    if user_requested is None:
        return min(size, available)

    if user_requested > available:
        warnings.warn(
            f"Requested {user_requested} workers, but only {available} cores are free. "
            f"Using {min(size, available)} workers instead."
        )
    return max(1, min(user_requested, available, size))


def split_into_batches(items: Sequence[T], n_batches: int) -> List[List[T]]:
    """
    Split ``items`` into at most ``n_batches`` contiguous batches of near-equal size.

    Concatenating the batches gives back ``items`` in order; empty batches are omitted.

    >>> split_into_batches([1, 2, 3, 4, 5], 2)
    [[1, 2, 3], [4, 5]]
    """
    if n_batches < 1:
        raise ValueError(f"n_batches must be >= 1, got {n_batches}.")
    items = list(items)
    size, extra = divmod(len(items), n_batches)
    batches, start = [], 0
    for i in range(n_batches):
        stop = start + size + (1 if i < extra else 0)
        if stop > start:
            batches.append(items[start:stop])
        start = stop
    return batches
