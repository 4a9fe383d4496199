"""Display formatting for byte counts, latencies and chart ticks."""
import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from app.utils.timestamps import parse_timestamp

BYTE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]

# Largest first
DURATION_UNITS = [
    ("s", 1_000_000_000),
    ("ms", 1_000_000),
    ("µs", 1_000),
    ("ns", 1),
]


def _to_fixed(value: float, digits: int) -> str:
    """Fixed-point rendering that rounds half away from zero on the exact binary value."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    quantum = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # Enough digits for the whole integer part
        ctx.prec = max(28, len(str(int(abs(value)))) + digits + 1)
        return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_bytes(size: float) -> str:
    if size < 1024:
        return f"{_to_fixed(size, 0)} B"
    if math.isfinite(size):
        i = min(math.floor(math.log(size) / math.log(1024)), len(BYTE_UNITS) - 1)
    else:
        i = len(BYTE_UNITS) - 1
    return f"{_to_fixed(size / math.pow(1024, i), 0)} {BYTE_UNITS[i]}"


def format_duration(nanoseconds: Optional[float] = None) -> str:
    if nanoseconds is None or nanoseconds < 0:
        return "-"
    if nanoseconds == 0:
        return "0 ns"
    for label, scale in DURATION_UNITS:
        if nanoseconds >= scale:
            value = nanoseconds / scale
            digits = 2 if value < 10 else 1 if value < 100 else 0
            return f"{_to_fixed(value, digits)} {label}"
    # Below one nanosecond
    return f"{nanoseconds} ns"


def format_x_axis(tick: Union[str, datetime]) -> str:
    """HH:MM:SS of the tick in local time."""
    return parse_timestamp(tick).astimezone().strftime("%H:%M:%S")
