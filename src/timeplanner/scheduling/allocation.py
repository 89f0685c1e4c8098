"""
Even allocation of an hour budget over one date segment.
"""

import math
from datetime import date
from typing import Callable, List, Optional, Sequence

from .dates import iter_days
from .models import DayEstimate, EstimateSource

EligibilityPredicate = Callable[[date], bool]


def remaining_hours(total_allocation: float, consumed_hours: float) -> float:
    """max(0, allocation - consumed); non-finite budgets leave nothing."""
    if total_allocation is None or not math.isfinite(total_allocation):
        return 0.0
    return max(0.0, total_allocation - consumed_hours)


def spread_evenly(
    days: Sequence[date],
    hours: float,
    project_id: str,
    source: EstimateSource,
    milestone_id: Optional[str] = None,
) -> List[DayEstimate]:
    """One estimate per day, each carrying hours / len(days)."""
    if not days or hours <= 0:
        return []
    hours_per_day = hours / len(days)
    return [
        DayEstimate(
            date=day,
            project_id=project_id,
            hours=hours_per_day,
            source=source,
            milestone_id=milestone_id,
            is_working_day=True,
        )
        for day in days
    ]


def allocate_segment(
    segment_start: date,
    segment_end: date,
    total_allocation: float,
    consumed_hours: float,
    is_eligible: EligibilityPredicate,
    project_id: str,
    source: EstimateSource = EstimateSource.MILESTONE_ALLOCATION,
    milestone_id: Optional[str] = None,
) -> List[DayEstimate]:
    """
    Divide the remaining budget of a segment evenly over its eligible days.

    Args:
        segment_start: First date of the segment (inclusive)
        segment_end: Last date of the segment (inclusive)
        total_allocation: Hours budgeted for the segment
        consumed_hours: Event hours already logged inside the segment
        is_eligible: Predicate selecting the days that may receive hours
        project_id: Project the estimates belong to
        source: Estimate source tag
        milestone_id: Milestone the estimates belong to, if any

    Returns:
        Estimates with identical hours per eligible day, or an empty list
        when nothing remains or no day is eligible.
    """
    remaining = remaining_hours(total_allocation, consumed_hours)
    if remaining <= 0:
        return []

    eligible = [day for day in iter_days(segment_start, segment_end) if is_eligible(day)]
    return spread_evenly(eligible, remaining, project_id, source, milestone_id)
