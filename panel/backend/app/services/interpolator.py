"""Trailing-window gap filling and smoothing for a single traffic series."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from app.schemas.traffic import ProxyStats, TimeSeriesPoint
from app.utils.timestamps import MalformedSampleError, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(minutes=10)
DEFAULT_INTERVAL = timedelta(seconds=60)
DEFAULT_SMOOTHING = 3


def interpolate_stats(prev: ProxyStats, next_: ProxyStats, fraction: float) -> ProxyStats:
    """Linear interpolation of both channels between two samples."""
    return ProxyStats(
        sent=prev.sent + (next_.sent - prev.sent) * fraction,
        received=prev.received + (next_.received - prev.received) * fraction,
    )


def normalize_points(points: Iterable[TimeSeriesPoint]) -> list[TimeSeriesPoint]:
    """Copy points with parsed, timezone-aware timestamps, dropping unreadable ones."""
    normalized: list[TimeSeriesPoint] = []
    for point in points:
        try:
            ts = parse_timestamp(point.timestamp)
        except MalformedSampleError:
            logger.warning("Dropping traffic sample with malformed timestamp %r", point.timestamp)
            continue
        normalized.append(TimeSeriesPoint(timestamp=ts, value=point.value))
    return normalized


def fill_gaps(
    points: Sequence[TimeSeriesPoint],
    interval: timedelta = DEFAULT_INTERVAL,
) -> list[TimeSeriesPoint]:
    """Insert evenly stepped synthetic samples wherever consecutive points are
    more than one interval apart.

    The interpolation fraction is ``j / missing`` (step index), not the share of
    the real gap, so synthetic values only line up with elapsed time when the gap
    is an exact multiple of the interval. A synthetic step landing exactly on the
    next real sample is not emitted; the real sample takes its place.
    """
    if not points:
        return []
    filled = [points[0]]
    for prev, curr in zip(points, points[1:]):
        gap = curr.timestamp - prev.timestamp
        if gap > interval:
            missing = gap // interval
            for j in range(1, missing + 1):
                at = prev.timestamp + j * interval
                if at >= curr.timestamp:
                    break
                filled.append(
                    TimeSeriesPoint(
                        timestamp=at,
                        value=interpolate_stats(prev.value, curr.value, j / missing),
                    )
                )
        filled.append(curr)
    return filled


def moving_average(points: Sequence[TimeSeriesPoint], window_size: int) -> list[TimeSeriesPoint]:
    """Trailing (causal) mean over at most ``window_size`` samples."""
    smoothed: list[TimeSeriesPoint] = []
    for i, point in enumerate(points):
        window = points[max(0, i - window_size + 1): i + 1]
        smoothed.append(
            TimeSeriesPoint(
                timestamp=point.timestamp,
                value=ProxyStats(
                    sent=sum(p.value.sent for p in window) / len(window),
                    received=sum(p.value.received for p in window) / len(window),
                ),
            )
        )
    return smoothed


def last_window_data(
    points: Iterable[TimeSeriesPoint],
    now: Optional[datetime] = None,
    *,
    window: timedelta = DEFAULT_WINDOW,
    interval: timedelta = DEFAULT_INTERVAL,
    smoothing: int = DEFAULT_SMOOTHING,
) -> list[TimeSeriesPoint]:
    """Chart-ready points for the trailing ``window`` ending at ``now``.

    Samples older than the window are discarded, the survivors are ordered by
    time, gaps wider than ``interval`` are filled by interpolation and the
    result is smoothed with a trailing moving average. An empty list means the
    route had no traffic in the window.
    """
    now = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    window_start = now - window
    recent = [p for p in normalize_points(points) if p.timestamp >= window_start]
    if not recent:
        return []
    recent.sort(key=lambda p: p.timestamp)
    logger.debug("%d samples in window starting %s", len(recent), window_start.isoformat())
    return moving_average(fill_gaps(recent, interval), smoothing)
