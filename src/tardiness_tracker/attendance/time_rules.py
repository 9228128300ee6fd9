"""Clock arithmetic for lateness.

All values are local civil time; there is no timezone handling here.
"""
from __future__ import annotations


def _clock_part(text: str) -> int | None:
    part = text.strip()
    if not part:
        return 0
    if not part.isdigit():
        return None
    return int(part)


def time_to_minutes(value: str | None) -> int:
    """Minutes since midnight for an "HH:MM" (or "HH:MM:SS") string.

    Hours are read from characters 0-1 and minutes from 3-4, without range
    checks, so "99:99" gives 6039. Blank or non-numeric input gives 0
    (midnight), which callers must not read as "on time".
    """
    raw = (value or "").strip()
    if not raw:
        return 0
    hours = _clock_part(raw[0:2])
    minutes = _clock_part(raw[3:5])
    if hours is None or minutes is None:
        return 0
    return hours * 60 + minutes


def late_minutes(arrival: str | None, cutoff: str | None) -> int:
    return max(0, time_to_minutes(arrival) - time_to_minutes(cutoff))


def _unit(count: int, singular: str) -> str:
    return f"{count} {singular}" if count == 1 else f"{count} {singular}s"


def format_duration(minutes) -> str:
    """Human duration: "45 minutes", "1 hour", "2 hours 5 minutes".

    Negative or non-numeric input is treated as 0.
    """
    try:
        m = max(0, int(float(minutes)))
    except (TypeError, ValueError):
        m = 0

    if m < 60:
        return _unit(m, "minute")
    hours, rest = divmod(m, 60)
    if rest == 0:
        return _unit(hours, "hour")
    return f"{_unit(hours, 'hour')} {_unit(rest, 'minute')}"
