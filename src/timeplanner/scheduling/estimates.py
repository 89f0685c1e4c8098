"""
Day Estimate Engine

Decides, for one project and every day, how many hours of work are estimated
for that day. Three sources are layered in strict priority order:

1. Events: logged calendar time. A date with any event hours is blocked for
   every other source of the same project.
2. Milestones: each milestone (or phase) budget is spread over its segment;
   recurring milestones are split into independent sub-intervals.
3. Auto-estimate: the project budget spread over the project window, used
   only when the project has no milestones.

Usage:
    estimates = compute_project_estimates(
        project, milestones, events, holidays, work_settings, today=date.today()
    )
"""

from collections import defaultdict
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from timeplanner.platform.logging import get_logger

from .allocation import allocate_segment, remaining_hours, spread_evenly
from .dates import ONE_DAY
from .events import classify_events, filter_events_for_project, sum_event_hours_in_range
from .models import (
    CalendarEvent,
    DayEstimate,
    DayEventSummary,
    EstimateSource,
    Holiday,
    Milestone,
    Project,
    WorkSettings,
)
from .recurrence import generate_occurrences
from .working_days import get_working_days_between, is_working_day

logger = get_logger(__name__)

DatePredicate = Callable[[date], bool]


def _event_estimates(
    project: Project,
    classified: Dict[date, DayEventSummary],
) -> Tuple[List[DayEstimate], Set[date]]:
    """One event-sourced estimate per date with event hours, plus the blocked dates."""
    estimates = []
    blocked: Set[date] = set()

    for day, summary in classified.items():
        if summary.total_hours <= 0:
            continue
        blocked.add(day)
        estimates.append(DayEstimate(
            date=day,
            project_id=project.id,
            hours=summary.total_hours,
            source=EstimateSource.EVENT,
            is_working_day=True,
            is_planned_event=summary.planned_hours > 0,
            is_completed_event=summary.completed_hours > 0,
        ))

    return estimates, blocked


def _redistribute(
    candidates: List[DayEstimate],
    keep: DatePredicate,
    remaining: float,
) -> List[DayEstimate]:
    """
    Drop candidates on disallowed dates and re-spread ``remaining`` evenly
    over the survivors so the total is preserved.
    """
    survivors = [estimate for estimate in candidates if keep(estimate.date)]
    if not survivors or len(survivors) == len(candidates):
        return survivors

    hours_per_day = remaining / len(survivors)
    return [estimate.model_copy(update={"hours": hours_per_day}) for estimate in survivors]


def _recurring_estimates(
    project: Project,
    milestone: Milestone,
    classified: Dict[date, DayEventSummary],
    eligible: DatePredicate,
    keep: DatePredicate,
) -> List[DayEstimate]:
    """Allocate each inter-anchor sub-interval of a recurring milestone on its own."""
    anchors = generate_occurrences(
        milestone.recurring_config,
        project.start_date,
        project.end_date,
        project.continuous,
    )
    allocation = milestone.allocation_hours
    estimates: List[DayEstimate] = []

    for previous_anchor, anchor in zip(anchors, anchors[1:]):
        # Sub-interval is (previous_anchor, anchor], clamped to the project
        start = max(previous_anchor + ONE_DAY, project.start_date)
        end = min(anchor, project.end_date) if project.has_fixed_end else anchor
        if start > end:
            continue

        consumed = sum_event_hours_in_range(classified, start, end)
        remaining = remaining_hours(allocation, consumed)
        if remaining <= 0:
            continue

        candidates = allocate_segment(
            start, end, allocation, consumed, eligible,
            project_id=project.id,
            milestone_id=milestone.id,
        )
        estimates.extend(_redistribute(candidates, keep, remaining))

    return estimates


def _milestone_estimates(
    project: Project,
    milestones: Sequence[Milestone],
    classified: Dict[date, DayEventSummary],
    eligible: DatePredicate,
    keep: DatePredicate,
) -> List[DayEstimate]:
    estimates: List[DayEstimate] = []
    previous_end: Optional[date] = None

    for milestone in sorted(milestones, key=lambda m: m.effective_end):
        # A phase's own start date always wins over sequential chaining
        if milestone.start_date is not None:
            segment_start = milestone.start_date
        elif previous_end is not None:
            segment_start = previous_end + ONE_DAY
        else:
            segment_start = project.start_date
        segment_end = milestone.effective_end
        previous_end = segment_end

        consumed = sum_event_hours_in_range(classified, segment_start, segment_end)
        remaining = remaining_hours(milestone.allocation_hours, consumed)
        if remaining <= 0:
            logger.debug(
                "Milestone budget fully consumed",
                project_id=project.id,
                milestone_id=milestone.id,
                consumed=consumed,
            )
            continue

        if milestone.is_recurring and milestone.recurring_config is not None:
            estimates.extend(
                _recurring_estimates(project, milestone, classified, eligible, keep)
            )
            continue

        candidates = allocate_segment(
            segment_start, segment_end, milestone.allocation_hours, consumed, eligible,
            project_id=project.id,
            milestone_id=milestone.id,
        )
        estimates.extend(_redistribute(candidates, keep, remaining))

    return estimates


def _auto_estimates(
    project: Project,
    classified: Dict[date, DayEventSummary],
    blocked: Set[date],
    settings: Optional[WorkSettings],
    holidays: Sequence[Holiday],
    today: Optional[date],
) -> List[DayEstimate]:
    if project.continuous or project.end_date is None:
        return []

    consumed = sum_event_hours_in_range(classified, project.start_date, project.end_date)
    remaining = remaining_hours(project.estimated_hours, consumed)
    if remaining <= 0:
        return []

    working_days = get_working_days_between(
        project.start_date, project.end_date, settings, holidays, project, today
    )
    days = [day for day in working_days if day not in blocked]
    return spread_evenly(days, remaining, project.id, EstimateSource.PROJECT_AUTO_ESTIMATE)


def compute_project_estimates(
    project: Project,
    milestones: Sequence[Milestone],
    events: Sequence[CalendarEvent],
    holidays: Sequence[Holiday],
    settings: Optional[WorkSettings],
    today: Optional[date] = None,
) -> List[DayEstimate]:
    """
    Compute every day estimate for one project.

    Args:
        project: The project to estimate
        milestones: Milestones and phases (other projects' entries are ignored)
        events: Calendar events (other projects' events are ignored)
        holidays: Holiday ranges that block allocation
        settings: Weekly work hours used as the weekday fallback
        today: Read once by the caller; estimated time is never placed
            before it. None disables the past-date cutoff.

    Returns:
        Event estimates, then milestone estimates, then auto-estimates.
        Each date carries at most one source.
    """
    project_events = filter_events_for_project(events, project.id)
    project_milestones = [m for m in milestones if m.project_id == project.id]
    classified = classify_events(project_events)

    event_estimates, blocked = _event_estimates(project, classified)

    def eligible(day: date) -> bool:
        if today is not None and day < today:
            return False
        return is_working_day(day, settings, holidays, project)

    def keep(day: date) -> bool:
        if day in blocked:
            return False
        if project.has_fixed_end and day > project.end_date:
            return False
        return True

    milestone_estimates = _milestone_estimates(
        project, project_milestones, classified, eligible, keep
    )

    auto_estimates: List[DayEstimate] = []
    if not project_milestones:
        auto_estimates = _auto_estimates(project, classified, blocked, settings, holidays, today)

    logger.debug(
        "Computed day estimates",
        project_id=project.id,
        event_days=len(event_estimates),
        milestone_days=len(milestone_estimates),
        auto_days=len(auto_estimates),
    )
    return event_estimates + milestone_estimates + auto_estimates


def aggregate_estimates_by_date(estimates: Sequence[DayEstimate]) -> Dict[date, List[DayEstimate]]:
    """Group estimates (possibly from several projects) by date."""
    by_date: Dict[date, List[DayEstimate]] = defaultdict(list)
    for estimate in estimates:
        by_date[estimate.date].append(estimate)
    return dict(by_date)


def total_estimated_hours(estimates: Sequence[DayEstimate]) -> float:
    return sum(estimate.hours for estimate in estimates)
