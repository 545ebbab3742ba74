from collections import defaultdict
from typing import Iterable

from .types import QuantityEvent


def group_events_by_product(events: Iterable[QuantityEvent],
                            product_ids: Iterable[str]) -> dict[str, tuple[QuantityEvent, ...]]:
    """
    Bucket events by product_id, oldest first.

    Every id in product_ids gets an entry (possibly empty). Events pointing at
    an id that isn't in product_ids are dropped.
    """
    buckets: dict[str, list[QuantityEvent]] = defaultdict(list)
    ids = list(product_ids)
    wanted = set(ids)
    for e in events:
        if e.product_id in wanted:
            buckets[e.product_id].append(e)
    return {
        pid: tuple(sorted(buckets.get(pid, ()), key=lambda x: x.timestamp))
        for pid in ids
    }


def hours_between(start, end) -> float:
    """Signed hours from `start` to `end`."""
    return (end - start).total_seconds() / 3600.0
