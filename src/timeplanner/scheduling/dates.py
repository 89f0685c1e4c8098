"""
Calendar-date helpers shared by the scheduling core.

Every date the engine handles is a plain ``datetime.date`` (local midnight
semantics). Loops produce a fresh value per step; nothing is mutated in place.
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterator, Optional

ONE_DAY = timedelta(days=1)

# Index 0 is Monday, matching ``date.weekday()``
WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def to_date(value: Any) -> date:
    """
    Normalize a date-like value to a calendar date.

    Accepts ``date``, ``datetime`` (time part dropped) and ISO-8601 strings,
    with or without a time component.

    Raises:
        TypeError: value is not date-like
        ValueError: string is not ISO-8601
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise TypeError(f"Cannot interpret {value!r} as a calendar date")


def coerce_date(value: Any) -> Optional[date]:
    """Like ``to_date`` but returns None for anything unparseable."""
    if value is None:
        return None
    try:
        return to_date(value)
    except (TypeError, ValueError):
        return None


def date_key(day: date) -> str:
    """Grouping key in 'YYYY-MM-DD' form."""
    return day.isoformat()


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def sunday_based_weekday(day: date) -> int:
    """Day of week with 0 = Sunday ... 6 = Saturday (web client convention)."""
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each date in the inclusive range [start, end]."""
    current = start
    while current <= end:
        yield current
        current = current + ONE_DAY


def duration_days(start: date, end: date) -> int:
    """Signed number of day boundaries between two dates (end - start)."""
    return (end - start).days


def last_day_of_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - ONE_DAY).day


def shift_months(day: date, months: int, target_day: Optional[int] = None) -> date:
    """
    Move ``day`` by a number of months.

    The day-of-month is ``target_day`` (or the original day) clamped to the
    last valid day of the resulting month.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    wanted = target_day if target_day is not None else day.day
    return date(year, month, min(wanted, last_day_of_month(year, month)))


def nth_weekday_of_month(year: int, month: int, week_of_month: int, day_of_week: int) -> date:
    """
    The ``week_of_month``-th occurrence of ``day_of_week`` (0 = Sunday).

    A fifth occurrence that does not exist falls back to the last one in
    that month.
    """
    first = date(year, month, 1)
    offset = (day_of_week - sunday_based_weekday(first)) % 7
    target = 1 + offset + (week_of_month - 1) * 7
    last = last_day_of_month(year, month)
    while target > last:
        target -= 7
    return date(year, month, target)
