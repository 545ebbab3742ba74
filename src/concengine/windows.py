# src/concengine/windows.py
from __future__ import annotations

from datetime import datetime, timedelta

from .types import TimeWindow

# Named ranges the dashboard offers. "recent" is the fixed view the dashboard
# started with: one day back, two days ahead.
PRESETS: dict[str, tuple[float, float]] = {
    "day":    (24.0, 0.0),
    "week":   (7 * 24.0, 0.0),
    "month":  (30 * 24.0, 0.0),
    "recent": (24.0, 48.0),
}
CUSTOM = "custom"


def sample_interval_for_span(span_h: float) -> float:
    """
    Pick the sampling step for a window so the curve stays around 24-30 points.

      span <= 24 h   -> 1 h
      span <= 168 h  -> 2 h
      otherwise      -> 6 h
    """
    if span_h <= 24.0:
        return 1.0
    if span_h <= 168.0:
        return 2.0
    return 6.0


def make_window(start: datetime, end: datetime, sample_interval_h: float | None = None) -> TimeWindow:
    """
    Build a TimeWindow from absolute bounds.
    If sample_interval_h is omitted the resolution policy picks it from the span.
    """
    if start > end:
        raise ValueError(f"start must be <= end (got {start} > {end}).")
    if sample_interval_h is None:
        span_h = (end - start).total_seconds() / 3600.0
        sample_interval_h = sample_interval_for_span(span_h)
    elif not (sample_interval_h > 0):
        raise ValueError(f"sample_interval_h must be > 0 (got {sample_interval_h}).")
    return TimeWindow(start=start, end=end, sample_interval_h=float(sample_interval_h))


def sample_times(window: TimeWindow) -> list[datetime]:
    """
    Sample instants start, start+dt, start+2dt, ... while t <= end.

    The last one lands on `end` only when the interval divides the span;
    otherwise it stops short of `end`.
    """
    step = timedelta(hours=window.sample_interval_h)
    times: list[datetime] = []
    t = window.start
    while t <= window.end:
        times.append(t)
        t = t + step
    return times


def resolve_preset(name: str, now: datetime,
                   start: datetime | None = None, end: datetime | None = None) -> TimeWindow:
    """
    Turn a named range into a TimeWindow anchored at `now`.

    name : "day", "week", "month", "recent" or "custom".
           "custom" takes the caller's start/end as-is and needs both.
    """
    if name == CUSTOM:
        if start is None or end is None:
            raise ValueError("custom window needs both start and end.")
        return make_window(start, end)

    try:
        back_h, ahead_h = PRESETS[name]
    except KeyError:
        raise ValueError(f"unknown window preset '{name}'.") from None
    return make_window(now - timedelta(hours=back_h), now + timedelta(hours=ahead_h))
