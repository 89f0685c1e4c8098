"""
Recurrence expansion for recurring milestones.

Produces the ordered anchor dates that bound allocation segments: one anchor
immediately before the first occurrence on/after the project start (so the
first real segment has a start boundary), then every occurrence up to the
first one on/after the project end. Continuous projects expand over a fixed
horizon instead.
"""

from datetime import date, timedelta
from typing import List, Optional

from timeplanner.platform.config import settings
from timeplanner.platform.logging import get_logger

from .dates import nth_weekday_of_month, shift_months, sunday_based_weekday
from .models import MonthlyPattern, RecurrenceType, RecurringConfig

logger = get_logger(__name__)


def _uses_monthly_date(config: RecurringConfig) -> bool:
    return config.monthly_pattern == MonthlyPattern.DATE and config.monthly_date is not None


def _uses_monthly_weekday(config: RecurringConfig) -> bool:
    return (
        config.monthly_pattern == MonthlyPattern.DAY_OF_WEEK
        and config.monthly_week_of_month is not None
        and config.monthly_day_of_week is not None
    )


def _step(config: RecurringConfig, day: date, direction: int, fallback_day: int) -> date:
    """Move one pattern interval forward (direction=1) or backward (-1)."""
    if config.type == RecurrenceType.DAILY:
        return day + timedelta(days=direction * config.interval)

    if config.type == RecurrenceType.WEEKLY:
        return day + timedelta(weeks=direction * config.interval)

    if _uses_monthly_date(config):
        return shift_months(day, direction * config.interval, config.monthly_date)

    if _uses_monthly_weekday(config):
        month = shift_months(day.replace(day=1), direction * config.interval)
        return nth_weekday_of_month(
            month.year,
            month.month,
            config.monthly_week_of_month,
            config.monthly_day_of_week,
        )

    # Monthly without a usable pattern keeps the start's day-of-month
    return shift_months(day, direction * config.interval, fallback_day)


def _first_on_or_after(config: RecurringConfig, start: date) -> date:
    if config.type == RecurrenceType.WEEKLY and config.weekly_day_of_week is not None:
        offset = (config.weekly_day_of_week - sunday_based_weekday(start)) % 7
        return start + timedelta(days=offset)

    if config.type == RecurrenceType.MONTHLY:
        if _uses_monthly_date(config):
            candidate = shift_months(start, 0, config.monthly_date)
            if candidate < start:
                candidate = shift_months(start, 1, config.monthly_date)
            return candidate

        if _uses_monthly_weekday(config):
            candidate = nth_weekday_of_month(
                start.year, start.month,
                config.monthly_week_of_month, config.monthly_day_of_week,
            )
            if candidate < start:
                following = shift_months(start.replace(day=1), 1)
                candidate = nth_weekday_of_month(
                    following.year, following.month,
                    config.monthly_week_of_month, config.monthly_day_of_week,
                )
            return candidate

    return start


def generate_occurrences(
    config: RecurringConfig,
    project_start: date,
    project_end: Optional[date],
    continuous: bool,
    max_occurrences: Optional[int] = None,
    horizon_days: Optional[int] = None,
) -> List[date]:
    """
    Expand a recurrence pattern into ascending anchor dates.

    Args:
        config: Recurrence pattern
        project_start: First date of the project window
        project_end: Last date of the project window (ignored when continuous)
        continuous: Expand over ``horizon_days`` from the start instead
        max_occurrences: Hard cap on anchors, guards misconfigured patterns
        horizon_days: Expansion horizon for continuous projects

    Returns:
        Sorted anchors: the pre-first anchor, the first occurrence on/after
        ``project_start``, and every following occurrence until the window
        is covered or the cap is reached.
    """
    if max_occurrences is None:
        max_occurrences = settings.RECURRENCE_MAX_OCCURRENCES
    if horizon_days is None:
        horizon_days = settings.CONTINUOUS_HORIZON_DAYS

    first = _first_on_or_after(config, project_start)
    fallback_day = first.day

    occurrences = [_step(config, first, -1, fallback_day), first]

    open_ended = continuous or project_end is None
    horizon = project_start + timedelta(days=horizon_days)

    current = first
    while len(occurrences) < max_occurrences:
        if open_ended:
            following = _step(config, current, 1, fallback_day)
            if following > horizon:
                break
        else:
            # Keep going until one anchor lands on/after the project end
            if current >= project_end:
                break
            following = _step(config, current, 1, fallback_day)
        occurrences.append(following)
        current = following
    else:
        logger.warning(
            "Recurrence occurrence cap reached",
            pattern=config.type.value,
            interval=config.interval,
            cap=max_occurrences,
        )

    return sorted(occurrences)
