"""
Unit tests for working-day eligibility.
"""

from datetime import date

from timeplanner.scheduling import get_working_days_between, is_working_day


class TestIsWorkingDay:
    """Tests for is_working_day."""

    def test_weekday_from_settings(self, weekday_settings, no_holidays):
        assert is_working_day(date(2025, 1, 6), weekday_settings, no_holidays) is True

    def test_weekend_from_settings(self, weekday_settings, no_holidays):
        assert is_working_day(date(2025, 1, 4), weekday_settings, no_holidays) is False

    def test_holiday_blocks_inclusive_range(self, weekday_settings, new_year_holiday):
        holidays = [new_year_holiday]
        assert is_working_day(date(2025, 1, 2), weekday_settings, holidays) is False
        assert is_working_day(date(2025, 1, 3), weekday_settings, holidays) is False
        assert is_working_day(date(2025, 1, 1), weekday_settings, holidays) is True

    def test_project_days_take_precedence(self, weekday_settings, no_holidays, project_factory):
        """Project auto-estimate days override the work-hour settings."""
        project = project_factory(auto_estimate_days={"saturday": True})

        assert is_working_day(date(2025, 1, 4), weekday_settings, no_holidays, project) is True
        # Keys missing from the map are disabled
        assert is_working_day(date(2025, 1, 6), weekday_settings, no_holidays, project) is False

    def test_holiday_beats_project_days(self, weekday_settings, new_year_holiday, project_factory):
        project = project_factory()
        assert is_working_day(date(2025, 1, 2), weekday_settings, [new_year_holiday], project) is False

    def test_falls_back_to_settings_without_project_days(self, weekday_settings, no_holidays, project_factory):
        project = project_factory(auto_estimate_days=None)
        assert is_working_day(date(2025, 1, 4), weekday_settings, no_holidays, project) is False
        assert is_working_day(date(2025, 1, 3), weekday_settings, no_holidays, project) is True

    def test_invalid_dates_are_ineligible(self, weekday_settings, no_holidays):
        assert is_working_day("not-a-date", weekday_settings, no_holidays) is False
        assert is_working_day(None, weekday_settings, no_holidays) is False
        assert is_working_day(42, weekday_settings, no_holidays) is False

    def test_iso_string_is_accepted(self, weekday_settings, no_holidays):
        assert is_working_day("2025-01-06", weekday_settings, no_holidays) is True

    def test_no_settings_and_no_project(self, no_holidays):
        assert is_working_day(date(2025, 1, 6), None, no_holidays) is False


class TestWorkingDaysBetween:
    """Tests for get_working_days_between."""

    def test_weekdays_in_range(self, weekday_settings, no_holidays):
        days = get_working_days_between(
            date(2025, 1, 1), date(2025, 1, 10), weekday_settings, no_holidays
        )
        assert len(days) == 8
        assert days[0] == date(2025, 1, 1)
        assert days[-1] == date(2025, 1, 10)
        assert date(2025, 1, 4) not in days

    def test_today_cuts_off_past_days(self, weekday_settings, no_holidays):
        days = get_working_days_between(
            date(2025, 1, 1), date(2025, 1, 10), weekday_settings, no_holidays,
            today=date(2025, 1, 6),
        )
        assert days == [date(2025, 1, d) for d in range(6, 11)]

    def test_empty_when_start_after_end(self, weekday_settings, no_holidays):
        assert get_working_days_between(
            date(2025, 1, 10), date(2025, 1, 1), weekday_settings, no_holidays
        ) == []
