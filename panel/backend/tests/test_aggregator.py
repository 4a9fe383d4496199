from datetime import datetime, timedelta, timezone

from app.schemas.traffic import ProxyStats, Route, TimeSeries, TimeSeriesPoint
from app.services.aggregator import add_stats, average_latency, combine_routes, sum_totals
from app.utils.timestamps import iso_key
from factories import NOW, point, route_with


def test_no_qualifying_routes_gives_empty_series():
    routes = [Route(), route_with([], total=(10, 10))]
    combined = combine_routes(routes)
    assert combined.points == []
    assert combined.total == ProxyStats(sent=0, received=0)
    assert combine_routes([]) == TimeSeries()


def test_single_route_is_reproduced_unchanged():
    route = route_with([point(-120, 1, 2), point(-60, 3, 4)], total=(50, 60))
    combined = combine_routes([route])
    assert combined.points == route.stats.points
    assert combined.total == route.stats.total


def test_duplicate_instants_within_one_route_are_summed():
    route = route_with([point(-60, 1, 2), point(-60, 2, 3), point(-30, 5)])
    combined = combine_routes([route])
    assert [p.timestamp for p in combined.points] == [NOW - timedelta(seconds=60), NOW - timedelta(seconds=30)]
    assert combined.points[0].value == ProxyStats(sent=3, received=5)


def test_shared_timestamps_are_summed():
    a = route_with([point(-120, 1, 2), point(-60, 3, 4)], total=(10, 20))
    b = route_with([point(-120, 10, 20), point(-60, 30, 40)], total=(1, 2))
    combined = combine_routes([a, b])

    assert [p.timestamp for p in combined.points] == [NOW - timedelta(seconds=120), NOW - timedelta(seconds=60)]
    assert [p.value for p in combined.points] == [
        ProxyStats(sent=11, received=22),
        ProxyStats(sent=33, received=44),
    ]
    assert combined.total == ProxyStats(sent=11, received=22)


def test_disjoint_timestamps_form_a_sorted_union():
    a = route_with([point(-100, 1), point(-40, 2)])
    b = route_with([point(-130, 5), point(-70, 6)])
    combined = combine_routes([a, b])
    assert [p.value.sent for p in combined.points] == [5, 1, 6, 2]


def test_nearly_aligned_samples_are_not_merged():
    a = route_with([point(-60, 1)])
    b = route_with([point(-59.5, 1)])
    assert len(combine_routes([a, b]).points) == 2


def test_same_instant_in_different_notations_is_merged():
    a = route_with([TimeSeriesPoint(timestamp="2025-04-11T11:59:00Z", value=ProxyStats(sent=1))])
    b = route_with([TimeSeriesPoint(timestamp="2025-04-11T13:59:00.000+02:00", value=ProxyStats(sent=2))])
    c = route_with([point(-60, 4)])
    combined = combine_routes([a, b, c])
    assert len(combined.points) == 1
    assert combined.points[0].value.sent == 7


def test_totals_skip_routes_without_points():
    a = route_with([point(-60, 1)], total=(100, 200))
    idle = route_with([], total=(5, 5))
    assert combine_routes([a, idle, Route()]).total == ProxyStats(sent=100, received=200)


def test_malformed_points_are_skipped():
    a = route_with([TimeSeriesPoint(timestamp="yesterday-ish", value=ProxyStats(sent=9)), point(-60, 1)])
    combined = combine_routes([a])
    assert [p.value.sent for p in combined.points] == [1]


def test_inputs_are_left_intact():
    a = route_with([point(-60, 1, 1)])
    b = route_with([point(-60, 2, 2)])
    combine_routes([a, b])
    assert a.stats.points[0].value == ProxyStats(sent=1, received=1)
    assert b.stats.points[0].value == ProxyStats(sent=2, received=2)


def test_iso_key_matches_javascript_iso_strings():
    ts = datetime(2025, 4, 11, 12, 0, 1, 234567, tzinfo=timezone.utc)
    assert iso_key(ts) == "2025-04-11T12:00:01.234Z"
    assert iso_key("2025-04-11T14:00:01.234+02:00") == "2025-04-11T12:00:01.234Z"


def test_add_and_sum_stats():
    assert add_stats(ProxyStats(sent=1, received=2), ProxyStats(sent=3, received=4)) == ProxyStats(sent=4, received=6)
    assert sum_totals([]) == ProxyStats()


def test_average_latency():
    assert average_latency([Route(latency=100), Route(latency=300), Route()]) == 200
    assert average_latency([Route()]) is None
    assert average_latency([]) is None
