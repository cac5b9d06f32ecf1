"""Half-open minute intervals within one day, [0, 1440]."""

from __future__ import annotations
from typing import Iterable

from . import canon
from .exceptions import FormatError
from .types import Segment


def time_to_minutes(tstr: str) -> int:
    """'HH:MM' -> minutes since midnight in [0, 1440).

    Raises FormatError unless the string is two colon-separated integers with
    hour in 0..23 and minute in 0..59.
    """
    if not isinstance(tstr, str):
        raise FormatError(f"Time must be an 'HH:MM' string, got {tstr!r}")
    parts = tstr.strip().split(":")
    if len(parts) != 2 or not all(p.isascii() and p.isdecimal() for p in parts):
        raise FormatError(f"Time must be 'HH:MM', got {tstr!r}")
    hour, minute = int(parts[0]), int(parts[1])
    if not (0 <= hour < canon.HOURS_PER_DAY):
        raise FormatError(f"Hour out of range in {tstr!r}")
    if not (0 <= minute < canon.MINUTES_PER_HOUR):
        raise FormatError(f"Minute out of range in {tstr!r}")
    return hour * canon.MINUTES_PER_HOUR + minute


def minutes_to_time(minutes: int) -> str:
    """Minutes in [0, 1440] -> 'HH:MM'. End of day (1440) renders as '00:00'."""
    if not (0 <= minutes <= canon.MINUTES_PER_DAY):
        raise FormatError(f"Minutes out of range: {minutes}")
    minutes %= canon.MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _end_minutes(end: str) -> int:
    # '24:00' is only meaningful as an end bound
    if isinstance(end, str) and end.strip() == canon.END_OF_DAY:
        return canon.MINUTES_PER_DAY
    return time_to_minutes(end)


def segments_of(start: str, end: str) -> list[Segment]:
    """
    Split a [start, end) window into segments inside [0, 1440].

    End '00:00' after a non-zero start means end of day. A window whose end
    is before its start wraps midnight and yields two segments, e.g.
    ('22:00', '02:00') -> [(1320, 1440), (0, 120)]. ('00:00', '00:00') yields
    the single zero-length segment (0, 0).
    """
    s = time_to_minutes(start)
    e = _end_minutes(end)
    if e == 0 and s != 0:
        e = canon.MINUTES_PER_DAY
    if e < s:
        return [(s, canon.MINUTES_PER_DAY), (0, e)]
    return [(s, e)]


def overlap_minutes(a_lo: int, a_hi: int, b_lo: int, b_hi: int) -> int:
    return max(0, min(a_hi, b_hi) - max(a_lo, b_lo))


def segments_overlap(a: Iterable[Segment], b: Iterable[Segment]) -> int:
    """Total overlap in minutes between two segment lists."""
    b = list(b)
    return sum(
        overlap_minutes(a_lo, a_hi, b_lo, b_hi) for a_lo, a_hi in a for b_lo, b_hi in b
    )


def window_minutes(start: str, end: str) -> int:
    return sum(hi - lo for lo, hi in segments_of(start, end))
