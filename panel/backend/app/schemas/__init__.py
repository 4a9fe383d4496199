from app.schemas.system import HealthResponse
from app.schemas.traffic import (
    ChartResponse, FormattedResponse, ProxyStats, Route, SelectedSeries, Service, TimeSeries, TimeSeriesPoint,
)

__all__ = [
    "HealthResponse",
    "ProxyStats", "TimeSeriesPoint", "TimeSeries", "Route", "Service",
    "SelectedSeries", "ChartResponse", "FormattedResponse",
]
