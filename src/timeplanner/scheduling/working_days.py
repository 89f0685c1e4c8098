"""
Working-day eligibility.

A date is eligible for allocation when it is not inside any holiday and its
weekday is enabled, either by the project's own auto-estimate days or, when
the project has none, by the user's weekly work hours.
"""

from datetime import date
from typing import Any, List, Optional, Sequence

from .dates import coerce_date, iter_days, weekday_name
from .models import Holiday, Project, WorkSettings


def is_holiday(day: date, holidays: Sequence[Holiday]) -> bool:
    return any(holiday.contains(day) for holiday in holidays)


def is_working_day(
    day: Any,
    settings: Optional[WorkSettings],
    holidays: Sequence[Holiday],
    project: Optional[Project] = None,
) -> bool:
    """
    Check if a date is eligible for estimated time.

    Args:
        day: Calendar date (anything unparseable is ineligible)
        settings: Weekly work hours used when the project has no
            auto-estimate days
        holidays: Inclusive holiday ranges that block allocation
        project: Optional project whose auto-estimate days take precedence

    Returns:
        True if hours may be allocated on this date
    """
    normalized = coerce_date(day)
    if normalized is None:
        return False

    if is_holiday(normalized, holidays):
        return False

    name = weekday_name(normalized)
    if project is not None and project.auto_estimate_days is not None:
        return project.auto_estimate_days.get(name, False) is True

    if settings is None:
        return False
    return len(settings.weekly_work_hours.get(name, [])) > 0


def get_working_days_between(
    start: date,
    end: date,
    settings: Optional[WorkSettings],
    holidays: Sequence[Holiday],
    project: Optional[Project] = None,
    today: Optional[date] = None,
) -> List[date]:
    """
    List the working days in the inclusive range [start, end].

    When ``today`` is given, days before it are skipped: estimated time is
    never placed in the past.
    """
    if today is not None and start < today:
        start = today
    return [
        day
        for day in iter_days(start, end)
        if is_working_day(day, settings, holidays, project)
    ]
