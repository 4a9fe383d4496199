"""Combine the traffic series of several routes into one summary series."""
import logging
from datetime import datetime
from typing import Iterable, Optional, Sequence

from app.schemas.traffic import ProxyStats, Route, TimeSeries, TimeSeriesPoint
from app.utils.timestamps import MalformedSampleError, iso_key, parse_timestamp

logger = logging.getLogger(__name__)


def add_stats(a: ProxyStats, b: ProxyStats) -> ProxyStats:
    return ProxyStats(sent=a.sent + b.sent, received=a.received + b.received)


def sum_totals(totals: Iterable[ProxyStats]) -> ProxyStats:
    result = ProxyStats()
    for total in totals:
        result = add_stats(result, total)
    return result


def combine_routes(routes: Sequence[Route]) -> TimeSeries:
    """Summary series over every route that has samples.

    Points are merged only when their timestamps are the same instant at
    millisecond precision; routes sampled at different instants contribute
    separate entries rather than one summed curve. ``total`` is the sum of the
    routes' reported totals, not of their points.

    Duplicate instants within a single route are summed as well, so one route
    comes back unchanged only when its timestamps are distinct.
    """
    series = [r.stats for r in routes if r.stats is not None and r.stats.points]
    if not series:
        return TimeSeries()

    merged: dict[str, TimeSeriesPoint] = {}
    instants: dict[str, datetime] = {}
    for stats in series:
        for point in stats.points:
            try:
                key = iso_key(point.timestamp)
            except MalformedSampleError:
                logger.warning("Skipping traffic sample with malformed timestamp %r", point.timestamp)
                continue
            existing = merged.get(key)
            if existing is None:
                merged[key] = point
                instants[key] = parse_timestamp(point.timestamp)
            else:
                merged[key] = TimeSeriesPoint(
                    timestamp=existing.timestamp,
                    value=add_stats(existing.value, point.value),
                )

    ordered = sorted(merged, key=instants.__getitem__)
    return TimeSeries(
        points=[merged[key] for key in ordered],
        total=sum_totals(s.total for s in series),
    )


def average_latency(routes: Sequence[Route]) -> Optional[int]:
    """Mean latency in ns over routes that report one."""
    latencies = [r.latency for r in routes if r.latency is not None]
    if not latencies:
        return None
    return sum(latencies) // len(latencies)
