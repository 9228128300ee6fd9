from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Tuple

from ..core.exceptions import ValidationError

# Short month names as printed by the id-ID locale.
MONTHS_ID_SHORT = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: str) -> str:
    """Parse H:MM, HH:MM or HH:MM:SS into canonical HH:MM."""
    text = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).strftime("%H:%M")
        except ValueError:
            continue
    raise ValidationError(f"Invalid arrival time (HH:MM): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_clock(value: datetime) -> str:
    return value.strftime("%H:%M")


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar day of a month."""
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def format_date_id(value: date) -> str:
    """Indonesian display date, e.g. 05 Jan 2026."""
    return f"{value.day:02d} {MONTHS_ID_SHORT[value.month - 1]} {value.year}"
