# src/concengine/metrics.py
from datetime import datetime
from typing import Sequence, Tuple

import numpy as np

from .types import Product, QuantityEvent


def hours_since_start(times: Sequence[datetime]) -> np.ndarray:
    """Sample instants as hours since the first one."""
    if not times:
        return np.zeros(0)
    t0 = times[0]
    return np.array([(t - t0).total_seconds() / 3600.0 for t in times], dtype=float)

def cmax(C: np.ndarray) -> float:
    """Highest concentration on the curve (mg)."""
    return float(np.max(C))

def tmax(times: Sequence[datetime], C: np.ndarray) -> datetime:
    """Instant of the highest concentration."""
    return times[int(np.argmax(C))]

def cavg(C: np.ndarray) -> float:
    """Mean concentration over the window."""
    return float(np.mean(C))

def auc_trapz(times: Sequence[datetime], C: np.ndarray) -> float:
    """Area Under the Curve via the trapezoidal rule (mg*h)."""
    return float(np.trapezoid(C, hours_since_start(times)))

def product_summary(product: Product, events: Sequence[QuantityEvent]) -> Tuple[int, float]:
    """
    How many quantities were recorded for a product and how much in total (mg).
    """
    own = [e.amount_mg for e in events if e.product_id == product.id]
    return len(own), float(sum(own))
