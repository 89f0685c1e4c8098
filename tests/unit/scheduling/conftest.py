"""
Shared fixtures and builders for scheduling core tests.

Calendar reference: 2025-01-01 is a Wednesday, 2025-01-06 a Monday.
"""

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from timeplanner.scheduling import (
    CalendarEvent,
    Holiday,
    Milestone,
    Project,
    WorkSettings,
    WorkSlot,
)

WEEKDAYS_ONLY = {
    "monday": True,
    "tuesday": True,
    "wednesday": True,
    "thursday": True,
    "friday": True,
    "saturday": False,
    "sunday": False,
}


def make_project(
    project_id: str = "p1",
    start: date = date(2025, 1, 1),
    end: Optional[date] = date(2025, 1, 10),
    estimated_hours: float = 20.0,
    row_id: str = "R1",
    continuous: bool = False,
    auto_estimate_days: Optional[dict] = WEEKDAYS_ONLY,
) -> Project:
    """Helper to create projects."""
    return Project(
        id=project_id,
        start_date=start,
        end_date=end,
        estimated_hours=estimated_hours,
        row_id=row_id,
        continuous=continuous,
        auto_estimate_days=auto_estimate_days,
    )


def make_event(
    day: date,
    start_hour: int,
    hours: float,
    project_id: str = "p1",
    completed: bool = False,
    event_id: Optional[str] = None,
    **extra,
) -> CalendarEvent:
    """Helper to create an event starting on ``day`` at ``start_hour``."""
    start = datetime(day.year, day.month, day.day, start_hour)
    end = start + timedelta(hours=hours)
    return CalendarEvent(
        id=event_id or f"ev_{day.isoformat()}_{start_hour}",
        project_id=project_id,
        start_time=start,
        end_time=end,
        completed=completed,
        **extra,
    )


def make_milestone(
    milestone_id: str,
    end: date,
    hours: float,
    start: Optional[date] = None,
    project_id: str = "p1",
    **extra,
) -> Milestone:
    """Helper to create milestones and phases."""
    return Milestone(
        id=milestone_id,
        project_id=project_id,
        start_date=start,
        end_date=end,
        time_allocation_hours=hours,
        **extra,
    )


@pytest.fixture
def weekday_settings() -> WorkSettings:
    """Work settings with one slot Monday to Friday."""
    slot = WorkSlot(id="slot", start_time="09:00", end_time="17:00", duration=8)
    return WorkSettings(
        weekly_work_hours={
            "monday": [slot],
            "tuesday": [slot],
            "wednesday": [slot],
            "thursday": [slot],
            "friday": [slot],
            "saturday": [],
            "sunday": [],
        }
    )


@pytest.fixture
def no_holidays() -> list:
    return []


@pytest.fixture
def new_year_holiday() -> Holiday:
    return Holiday(id="h1", title="Break", start_date=date(2025, 1, 2), end_date=date(2025, 1, 3))


@pytest.fixture
def project_factory():
    """Fixture to create projects."""
    return make_project


@pytest.fixture
def event_factory():
    """Fixture to create calendar events."""
    return make_event


@pytest.fixture
def milestone_factory():
    """Fixture to create milestones."""
    return make_milestone
