"""
Unit tests for scheduling record validation and serialization.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from timeplanner.scheduling import (
    CalendarEvent,
    DateRange,
    DayEstimate,
    EstimateSource,
    EventCategory,
    Holiday,
    Milestone,
    Project,
    RecurrenceType,
    RecurringConfig,
)


class TestProject:

    def test_parses_camel_case_payload(self):
        project = Project.model_validate({
            "id": "p1",
            "name": "Website",
            "startDate": "2025-01-01",
            "endDate": "2025-01-10T00:00:00Z",
            "estimatedHours": 20,
            "rowId": "R1",
            "autoEstimateDays": {"monday": True, "saturday": False},
        })

        assert project.start_date == date(2025, 1, 1)
        assert project.end_date == date(2025, 1, 10)
        assert project.estimated_hours == 20.0
        assert project.row_id == "R1"
        assert project.auto_estimate_days["monday"] is True
        assert project.has_fixed_end is True

    def test_continuous_has_no_fixed_end(self):
        project = Project(id="p1", start_date=date(2025, 1, 1), end_date=date(2025, 2, 1), continuous=True)

        assert project.has_fixed_end is False

    def test_invalid_start_date_rejected(self):
        with pytest.raises(ValidationError):
            Project(id="p1", start_date="not-a-date")
        with pytest.raises(ValidationError):
            Project(id="p1", start_date=12)

    def test_records_are_immutable(self):
        project = Project(id="p1", start_date=date(2025, 1, 1))

        with pytest.raises(ValidationError):
            project.estimated_hours = 5.0


class TestMilestone:

    def test_requires_an_end(self):
        with pytest.raises(ValidationError):
            Milestone(id="m1", project_id="p1", time_allocation_hours=4.0)

    def test_legacy_fields(self):
        milestone = Milestone.model_validate({
            "id": "m1",
            "projectId": "p1",
            "dueDate": "2025-01-05",
            "timeAllocation": 6,
        })

        assert milestone.effective_end == date(2025, 1, 5)
        assert milestone.allocation_hours == 6.0
        assert milestone.is_phase is False

    def test_new_fields_win_over_legacy(self):
        milestone = Milestone(
            id="m1", project_id="p1",
            start_date=date(2025, 1, 2),
            end_date=date(2025, 1, 8), due_date=date(2025, 1, 5),
            time_allocation_hours=3.0, time_allocation=6.0,
        )

        assert milestone.effective_end == date(2025, 1, 8)
        assert milestone.allocation_hours == 3.0
        assert milestone.is_phase is True

    def test_missing_allocation_is_zero(self):
        milestone = Milestone(id="m1", project_id="p1", end_date=date(2025, 1, 8))

        assert milestone.allocation_hours == 0.0

    def test_recurring_config_from_camel_case(self):
        milestone = Milestone.model_validate({
            "id": "m1",
            "projectId": "p1",
            "endDate": "2025-03-31",
            "isRecurring": True,
            "recurringConfig": {
                "type": "monthly",
                "interval": 1,
                "monthlyPattern": "dayOfWeek",
                "monthlyWeekOfMonth": 2,
                "monthlyDayOfWeek": 2,
            },
        })

        assert milestone.recurring_config.type == RecurrenceType.MONTHLY
        assert milestone.recurring_config.monthly_week_of_month == 2


class TestRecurringConfig:

    @pytest.mark.parametrize("fields", [
        {"interval": 0},
        {"weekly_day_of_week": 7},
        {"monthly_date": 32},
        {"monthly_week_of_month": 6},
        {"monthly_day_of_week": -1},
    ])
    def test_out_of_range_values(self, fields):
        with pytest.raises(ValidationError):
            RecurringConfig(type=RecurrenceType.WEEKLY, **fields)

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            RecurringConfig(type="yearly")


class TestCalendarEvent:

    def test_parses_type_alias(self):
        event = CalendarEvent.model_validate({
            "id": "e1",
            "projectId": "p1",
            "startTime": "2025-01-03T09:00:00",
            "endTime": "2025-01-03T11:30:00",
            "type": "tracked",
        })

        assert event.is_completed_time is True
        assert event.duration_hours == pytest.approx(2.5)
        assert event.local_date == date(2025, 1, 3)
        assert event.category == EventCategory.EVENT

    def test_end_before_start_is_invalid(self, event_factory):
        event = event_factory(date(2025, 1, 3), 9, -1.0)

        assert event.is_valid is False
        assert event.duration_hours == 0.0

    def test_planned_by_default(self, event_factory):
        event = event_factory(date(2025, 1, 3), 9, 1.0)

        assert event.is_completed_time is False

    def test_completed_flag(self, event_factory):
        event = event_factory(date(2025, 1, 3), 9, 1.0, completed=True)

        assert event.is_completed_time is True


def test_day_estimate_serializes_with_camel_case():
    estimate = DayEstimate(
        date=date(2025, 1, 6),
        project_id="p1",
        hours=2.5,
        source=EstimateSource.MILESTONE_ALLOCATION,
        milestone_id="m1",
    )

    payload = estimate.model_dump(by_alias=True, mode="json")

    assert payload["date"] == "2025-01-06"
    assert payload["projectId"] == "p1"
    assert payload["milestoneId"] == "m1"
    assert payload["source"] == "milestone-allocation"
    assert payload["isWorkingDay"] is True


class TestRangeOrder:
    """Records whose end falls before their start are rejected."""

    def test_inverted_date_range(self):
        with pytest.raises(ValidationError):
            DateRange(start_date=date(2025, 1, 10), end_date=date(2025, 1, 5))

    def test_single_day_range_is_valid(self):
        day_range = DateRange(start_date=date(2025, 1, 5), end_date=date(2025, 1, 5))

        assert day_range.start_date == day_range.end_date

    def test_inverted_holiday(self):
        with pytest.raises(ValidationError):
            Holiday(start_date=date(2025, 1, 3), end_date=date(2025, 1, 2))

    def test_inverted_project(self):
        with pytest.raises(ValidationError):
            Project.model_validate({"id": "p1", "startDate": "2025-01-10", "endDate": "2025-01-05"})

    def test_continuous_project_ignores_end(self):
        project = Project(
            id="p1", start_date=date(2025, 1, 10), end_date=date(2025, 1, 5), continuous=True
        )

        assert project.has_fixed_end is False
