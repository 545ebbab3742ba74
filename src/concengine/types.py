# src/concengine/types.py
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

# Half-lives and sample intervals are in HOURS, amounts in MG.
# Instants are absolute datetimes; the projector converts them to hours itself.

@dataclass(frozen=True)
class Product:
    """
    Something that is consumed and then eliminated from the body.

    id          : opaque unique identifier
    name        : display label (e.g., "Escitalopram")
    half_life_h : elimination half-life in hours, must be > 0
    color       : display colour, passed through untouched (e.g., "#4f46e5")
    """
    id: str
    name: str
    half_life_h: float
    color: str


@dataclass(frozen=True)
class QuantityEvent:
    """
    A single intake of a product.

    product_id : id of the Product it belongs to. If no such product is known
                 the projector simply ignores the event.
    amount_mg  : amount taken, in milligrams, must be > 0
    timestamp  : when it was taken
    """
    id: str
    product_id: str
    amount_mg: float
    timestamp: datetime


@dataclass(frozen=True)
class TimeWindow:
    """
    The span to project over and how densely to sample it.
    Build these with windows.make_window() so the resolution policy applies.
    """
    start: datetime
    end: datetime
    sample_interval_h: float

    @property
    def span_h(self) -> float:
        return (self.end - self.start).total_seconds() / 3600.0


@dataclass(frozen=True)
class ChartSample:
    """
    One point of the projected curve: the concentration (mg) of every
    product at `time`, zero included.
    """
    time: datetime
    values: Mapping[str, float]
