from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_key(value: date) -> str:
    """Month key used across summaries, e.g. ``2026-02``."""
    return value.strftime("%Y-%m")


def parse_year_month(value: str) -> tuple[int, int]:
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return parsed.year, parsed.month


def month_bounds(year_month: str) -> tuple[date, date]:
    """First and last calendar date of a ``YYYY-MM`` month (both inclusive)."""
    year, month = parse_year_month(year_month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_month_dates(year_month: str) -> Iterator[date]:
    start, end = month_bounds(year_month)
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end``; negative when ``end`` is earlier."""
    seconds = (end - start).total_seconds()
    return int(seconds // 60) if seconds >= 0 else -int(-seconds // 60)


def combine_span(work_date: date, start: time, end: time) -> tuple[datetime, datetime]:
    """Anchor a planned start/end to a date; an end at or before start belongs to the next day."""
    start_dt = datetime.combine(work_date, start)
    end_dt = datetime.combine(work_date, end)
    if end_dt <= start_dt:
        end_dt += timedelta(days=1)
    return start_dt, end_dt
