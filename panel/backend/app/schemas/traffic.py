from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ProxyStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    sent: float = Field(0, ge=0)
    received: float = Field(0, ge=0)


class TimeSeriesPoint(BaseModel):
    """One traffic sample. Timestamps may arrive as ISO-8601 strings and are
    normalized by the engine, which drops the ones it cannot parse."""

    model_config = ConfigDict(frozen=True)

    timestamp: Union[datetime, str]
    value: ProxyStats = Field(default_factory=ProxyStats)


class TimeSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: list[TimeSeriesPoint] = []
    # Cumulative figure reported upstream, independent of points
    total: ProxyStats = Field(default_factory=ProxyStats)


class Route(BaseModel):
    key: Optional[int] = None
    type: str = "tcp"  # http, tcp, udp
    domain: Optional[str] = None
    port: Optional[int] = None
    status: Optional[str] = None  # Starting, Running, Stopped
    latency: Optional[int] = None  # ns
    stats: Optional[TimeSeries] = None


class Service(BaseModel):
    id: str = ""
    name: str = ""
    enabled: bool = True
    routes: list[Route] = []
    latency: Optional[int] = None  # ns
    stats: Optional[TimeSeries] = None


class SelectedSeries(BaseModel):
    series: TimeSeries = Field(default_factory=TimeSeries)
    label: str
    latency: Optional[int] = None  # ns


class ChartResponse(BaseModel):
    label: str
    points: list[TimeSeriesPoint] = []
    total: ProxyStats = Field(default_factory=ProxyStats)
    total_sent: str = "0 B"
    total_received: str = "0 B"
    latency: str = "-"


class FormattedResponse(BaseModel):
    formatted: str
