"""Per-route traffic counters bucketed into a bounded time series."""
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.config import Settings, settings as default_settings
from app.schemas.traffic import ProxyStats, TimeSeries, TimeSeriesPoint
from app.services.aggregator import add_stats, sum_totals
from app.utils.timestamps import parse_timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def truncate(at: datetime, bucket: timedelta) -> datetime:
    """Round ``at`` down to a multiple of ``bucket`` since the Unix epoch."""
    return at - (at - _EPOCH) % bucket


class TrafficRecorder:
    """Accumulates bytes sent and received by a route.

    Samples falling in the same bucket as the newest point are added to it.
    A sample older than the newest point is counted in the newest point, so
    the series stays in time order.
    Only the newest ``max_size`` points are retained and the reported total
    covers exactly those points.
    """

    def __init__(self, bucket: timedelta = timedelta(seconds=1), max_size: int = 1000):
        if bucket <= timedelta(0):
            raise ValueError("bucket must be positive")
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.bucket = bucket
        self.max_size = max_size
        self._points: list[TimeSeriesPoint] = []
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "TrafficRecorder":
        config = config or default_settings
        return cls(bucket=config.recorder_bucket, max_size=config.recorder_max_size)

    def add(self, stats: ProxyStats, at: Optional[datetime] = None) -> None:
        at = parse_timestamp(at) if at is not None else datetime.now(timezone.utc)
        slot = truncate(at, self.bucket)
        with self._lock:
            if self._points and slot <= self._points[-1].timestamp:
                last = self._points[-1]
                self._points[-1] = TimeSeriesPoint(timestamp=last.timestamp, value=add_stats(last.value, stats))
            else:
                self._points.append(TimeSeriesPoint(timestamp=slot, value=stats))
            if len(self._points) > self.max_size:
                del self._points[0]

    def log_sent(self, value: float, at: Optional[datetime] = None) -> None:
        self.add(ProxyStats(sent=value), at)

    def log_received(self, value: float, at: Optional[datetime] = None) -> None:
        self.add(ProxyStats(received=value), at)

    def snapshot(self) -> TimeSeries:
        with self._lock:
            points = list(self._points)
        return TimeSeries(points=points, total=sum_totals(p.value for p in points))
