"""Tests for the weekly AM/PM focus rotation."""

from datetime import date

from campusplanner.domain.models import ClassStatus, SessionFocus
from campusplanner.scheduling.stay import days_between
from campusplanner.scheduling.weekly_focus import (
    assign_weekly_focus,
    focus_for_day,
    iso_week,
)


class TestAssignWeeklyFocus:
    """Tests for assign_weekly_focus."""

    def test_first_week_is_morning(self):
        focus = assign_weekly_focus(days_between(date(2024, 7, 2), date(2024, 7, 4)))
        assert focus == {27: SessionFocus.AM}

    def test_focus_alternates_per_week(self):
        """Three ISO weeks rotate AM, PM, AM."""
        days = days_between(date(2024, 7, 3), date(2024, 7, 17))
        focus = assign_weekly_focus(days)

        assert focus == {
            27: SessionFocus.AM,
            28: SessionFocus.PM,
            29: SessionFocus.AM,
        }

    def test_weekend_days_count_towards_their_week(self):
        """A schedulable Sunday alone starts a week of its own."""
        focus = assign_weekly_focus([date(2024, 7, 7), date(2024, 7, 8)])
        assert focus == {27: SessionFocus.AM, 28: SessionFocus.PM}

    def test_no_days_gives_empty_focus(self):
        assert assign_weekly_focus([]) == {}

    def test_year_boundary_uses_iso_weeks(self):
        """2024-12-30 belongs to ISO week 1 of 2025."""
        focus = assign_weekly_focus([date(2024, 12, 27), date(2024, 12, 30)])
        assert focus == {52: SessionFocus.AM, 1: SessionFocus.PM}


class TestFocusForDay:
    """Tests for focus lookup."""

    def test_lookup_by_iso_week(self):
        focus = {27: SessionFocus.AM, 28: SessionFocus.PM}
        assert focus_for_day(focus, date(2024, 7, 9)) is SessionFocus.PM

    def test_unknown_week_defaults_to_morning(self):
        assert focus_for_day({}, date(2024, 7, 9)) is SessionFocus.AM

    def test_iso_week(self):
        assert iso_week(date(2024, 7, 1)) == 27
        assert iso_week(date(2024, 7, 7)) == 27

    def test_focus_maps_to_class_status(self):
        assert SessionFocus.AM.class_status is ClassStatus.MORNING
        assert SessionFocus.PM.class_status is ClassStatus.AFTERNOON
