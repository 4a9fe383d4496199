from datetime import datetime, timezone

import pytest

from app.utils.timestamps import MalformedSampleError, parse_timestamp


def test_parses_go_rfc3339_with_nanoseconds():
    ts = parse_timestamp("2025-04-11T20:49:40.123456789+01:00")
    assert ts == datetime(2025, 4, 11, 19, 49, 40, 123456, tzinfo=timezone.utc)


def test_naive_values_are_utc():
    assert parse_timestamp(datetime(2025, 1, 1)).tzinfo is timezone.utc
    assert parse_timestamp("2025-01-01T00:00:00") == datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["", "2025-13-45", "not a date", None])
def test_malformed_values_raise(value):
    with pytest.raises(MalformedSampleError):
        parse_timestamp(value)


def test_malformed_sample_error_is_a_value_error():
    assert issubclass(MalformedSampleError, ValueError)
