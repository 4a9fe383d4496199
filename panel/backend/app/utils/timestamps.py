"""Timestamp normalization shared by the traffic engine."""
from datetime import datetime, timezone
from typing import Any


class MalformedSampleError(ValueError):
    """A sample's timestamp cannot be read as an instant."""


def parse_timestamp(value: Any) -> datetime:
    """Return an aware datetime for an ISO-8601 string or datetime. Naive values are UTC.

    Fractional seconds beyond microseconds (as emitted by the proxy) are truncated.
    """
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        try:
            ts = datetime.fromisoformat(value)
        except ValueError as exc:
            raise MalformedSampleError(f"invalid timestamp: {value!r}") from exc
    else:
        raise MalformedSampleError(f"invalid timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def iso_key(value: Any) -> str:
    """UTC ISO-8601 string with millisecond precision and a Z suffix."""
    ts = parse_timestamp(value).astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S") + f".{ts.microsecond // 1000:03d}Z"
