# src/concengine/projector.py
import logging
from datetime import datetime
from typing import Sequence

import numpy as np

from .types import Product, QuantityEvent, TimeWindow, ChartSample
from .models.exponential import concentration
from .helpers import group_events_by_product, hours_between
from .windows import sample_times

logger = logging.getLogger(__name__)


def _superpose(product: Product, events: Sequence[QuantityEvent],
               t_h: np.ndarray, origin: datetime) -> np.ndarray:
    """
    Sum the decay curves of every intake of one product on the grid t_h
    (hours since `origin`). Intakes after a sample contribute nothing to it.
    """
    if not events:
        return np.zeros_like(t_h)

    amounts = np.array([e.amount_mg for e in events], dtype=float)
    dose_h = np.array([hours_between(origin, e.timestamp) for e in events], dtype=float)

    # rows: sample times, cols: intakes
    elapsed = t_h[:, None] - dose_h[None, :]
    C = concentration(amounts[None, :], product.half_life_h, elapsed).sum(axis=1)
    return np.maximum(C, 0.0)


def project_series(products: Sequence[Product], events: Sequence[QuantityEvent],
                   window: TimeWindow) -> tuple[list[datetime], dict[str, np.ndarray]]:
    """
    Project every product over a window, column-wise.

    Each product is computed independently from its own intakes; intakes whose
    product_id matches none of `products` are ignored.

    Returns
    -------
    times : list[datetime]
        Sample instants, see windows.sample_times.
    series : dict[str, np.ndarray]
        product id -> concentration (mg) at each of `times`.
        Empty (and times empty) when there are no products or no events.
    """
    if not products or not events:
        return [], {}

    times = sample_times(window)
    t_h = np.array([hours_between(window.start, t) for t in times], dtype=float)

    per_product = group_events_by_product(events, (p.id for p in products))

    series: dict[str, np.ndarray] = {}
    for p in products:
        series[p.id] = _superpose(p, per_product[p.id], t_h, window.start)

    logger.debug("projected %d products x %d samples", len(series), len(times))
    return times, series


def project(products: Sequence[Product], events: Sequence[QuantityEvent],
            window: TimeWindow) -> list[ChartSample]:
    """
    Concentration curve of every product over `window`, one ChartSample per
    sample instant, ordered by time. Empty when products or events are empty.
    """
    times, series = project_series(products, events, window)
    return [
        ChartSample(time=t, values={pid: float(C[i]) for pid, C in series.items()})
        for i, t in enumerate(times)
    ]


def concentration_at(product: Product, events: Sequence[QuantityEvent], at: datetime) -> float:
    """Total concentration (mg) of one product at a single instant."""
    own = [e for e in events if e.product_id == product.id]
    return float(_superpose(product, own, np.zeros(1), at)[0])
