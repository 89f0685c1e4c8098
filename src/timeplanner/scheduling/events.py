"""
Event classification.

Groups a project's calendar events by the date they start on and splits each
day's hours into planned and completed time.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Mapping, Sequence

from .models import CalendarEvent, DayEventSummary, EventCategory


def is_event_for_project(event: CalendarEvent, project_id: str) -> bool:
    """Habits and tasks never belong to a project, even with a project_id."""
    if event.category in (EventCategory.HABIT, EventCategory.TASK):
        return False
    return event.project_id == project_id


def filter_events_for_project(
    events: Sequence[CalendarEvent],
    project_id: str,
) -> List[CalendarEvent]:
    return [event for event in events if is_event_for_project(event, project_id)]


def group_events_by_date(events: Sequence[CalendarEvent]) -> Dict[date, List[CalendarEvent]]:
    """Group valid events by the local date of their start time."""
    grouped: Dict[date, List[CalendarEvent]] = defaultdict(list)
    for event in events:
        if not event.is_valid:
            continue
        grouped[event.local_date].append(event)
    return dict(grouped)


def summarize_day(events_on_day: Sequence[CalendarEvent]) -> DayEventSummary:
    planned = 0.0
    completed = 0.0
    for event in events_on_day:
        if event.is_completed_time:
            completed += event.duration_hours
        else:
            planned += event.duration_hours
    return DayEventSummary(
        planned_hours=planned,
        completed_hours=completed,
        event_count=len(events_on_day),
    )


def classify_events(events: Sequence[CalendarEvent]) -> Dict[date, DayEventSummary]:
    """
    Classify one project's events per calendar date.

    Events that end at or before their start are ignored.

    Returns:
        Mapping of date -> DayEventSummary, ordered by date
    """
    grouped = group_events_by_date(events)
    return {day: summarize_day(grouped[day]) for day in sorted(grouped)}


def sum_event_hours_in_range(
    classified: Mapping[date, DayEventSummary],
    start: date,
    end: date,
) -> float:
    """Planned + completed event hours on dates within [start, end]."""
    return sum(
        summary.total_hours
        for day, summary in classified.items()
        if start <= day <= end
    )
