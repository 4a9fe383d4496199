"""Pick the series to chart for a route selection and build the chart payload."""
from datetime import datetime
from typing import Optional, Sequence, Union

from app.config import Settings, settings as default_settings
from app.schemas.traffic import ChartResponse, Route, SelectedSeries, Service
from app.services.aggregator import average_latency, combine_routes
from app.services.interpolator import last_window_data
from app.utils.formatting import format_bytes, format_duration

ALL_ROUTES = "all"
SUMMARY_LABEL = "All Routes (Summary)"
NO_DATA_LABEL = "No Data"


def route_label(route: Route, index: int) -> str:
    if route.domain:
        return route.domain
    if route.port is not None:
        return f"{(route.type or 'tcp').upper()}:{route.port}"
    return f"Route {index + 1}"


def _find_route(routes: Sequence[Route], key: int) -> Optional[tuple[int, Route]]:
    for index, route in enumerate(routes):
        if route.key == key:
            return index, route
    # Routes without keys are addressed by position
    if all(route.key is None for route in routes) and 0 <= key < len(routes):
        return key, routes[key]
    return None


def select_series(routes: Sequence[Route], selection: Union[str, int] = ALL_ROUTES) -> SelectedSeries:
    if selection == ALL_ROUTES:
        return SelectedSeries(
            series=combine_routes(routes),
            label=SUMMARY_LABEL,
            latency=average_latency(routes),
        )
    try:
        key = int(selection)
    except (TypeError, ValueError):
        return SelectedSeries(label=NO_DATA_LABEL)
    found = _find_route(routes, key)
    if found is None or found[1].stats is None:
        return SelectedSeries(label=NO_DATA_LABEL)
    index, route = found
    return SelectedSeries(series=route.stats, label=route_label(route, index), latency=route.latency)


def build_chart(
    service: Service,
    selection: Union[str, int] = ALL_ROUTES,
    now: Optional[datetime] = None,
    config: Optional[Settings] = None,
) -> ChartResponse:
    config = config or default_settings
    selected = select_series(service.routes, selection)
    latency = selected.latency
    if selection == ALL_ROUTES and service.latency is not None:
        latency = service.latency
    total = selected.series.total
    return ChartResponse(
        label=selected.label,
        points=last_window_data(
            selected.series.points,
            now,
            window=config.window,
            interval=config.interval,
            smoothing=config.smoothing_window,
        ),
        total=total,
        total_sent=format_bytes(total.sent),
        total_received=format_bytes(total.received),
        latency=format_duration(latency),
    )
