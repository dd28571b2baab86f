"""Tests for scheduling policies."""

from datetime import date

import pytest

from campusplanner.config import PlannerConfig
from campusplanner.domain.models import Activity, ActivityType, ClassStatus
from campusplanner.domain.policies import (
    DefaultSchedulePolicy,
    check_activity_write,
    find_activity,
    validate_activity_write,
)

TUESDAY = date(2024, 7, 2)
SATURDAY = date(2024, 7, 6)
SUNDAY = date(2024, 7, 7)


class TestDefaultSchedulePolicy:
    """Tests for DefaultSchedulePolicy."""

    def test_session_capacity_is_sixty_percent_floored(self):
        policy = DefaultSchedulePolicy()
        assert policy.session_capacity(100) == 60
        assert policy.session_capacity(70) == 42
        assert policy.session_capacity(11) == 6
        assert policy.session_capacity(0) == 0

    def test_credited_hours(self):
        policy = DefaultSchedulePolicy()
        assert policy.credited_hours(ClassStatus.MORNING) == 3
        assert policy.credited_hours(ClassStatus.AFTERNOON) == 3
        assert policy.credited_hours(ClassStatus.DOUBLE) == 6
        assert policy.credited_hours(ClassStatus.NONE) == 0
        assert policy.credited_hours(ClassStatus.ERROR) == 0

    def test_from_config(self):
        config = PlannerConfig(capacity_ratio=0.5, session_hours=2, double_session_hours=5)
        policy = DefaultSchedulePolicy.from_config(config)

        assert policy.session_capacity(100) == 50
        assert policy.credited_hours(ClassStatus.MORNING) == 2
        assert policy.credited_hours(ClassStatus.DOUBLE) == 5


class TestValidateActivityWrite:
    """Tests for the activity-write predicate."""

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_weekend_rejects_half_day(self, day):
        assert validate_activity_write(day, ClassStatus.NONE, ActivityType.HALF_DAY) is False

    @pytest.mark.parametrize("day", [SATURDAY, SUNDAY])
    def test_weekend_accepts_full_day(self, day):
        assert validate_activity_write(day, ClassStatus.NONE, ActivityType.FULL_DAY) is True

    def test_weekend_accepts_clearing(self):
        assert validate_activity_write(SATURDAY, ClassStatus.NONE, None, clearing=True) is True

    def test_weekend_rejects_unknown_activity(self):
        assert validate_activity_write(SATURDAY, ClassStatus.NONE, None) is False

    @pytest.mark.parametrize("status", [ClassStatus.MORNING, ClassStatus.AFTERNOON])
    def test_full_day_conflicts_with_half_day_class(self, status):
        assert validate_activity_write(TUESDAY, status, ActivityType.FULL_DAY) is False

    @pytest.mark.parametrize(
        "status", [ClassStatus.DOUBLE, ClassStatus.NONE, ClassStatus.ERROR]
    )
    def test_full_day_allowed_without_half_day_class(self, status):
        assert validate_activity_write(TUESDAY, status, ActivityType.FULL_DAY) is True

    @pytest.mark.parametrize(
        "status",
        [ClassStatus.MORNING, ClassStatus.AFTERNOON, ClassStatus.DOUBLE, ClassStatus.NONE],
    )
    def test_half_day_always_allowed_on_weekdays(self, status):
        assert validate_activity_write(TUESDAY, status, ActivityType.HALF_DAY) is True


class TestCheckActivityWrite:
    """Tests for name-based activity checks."""

    @pytest.fixture
    def catalogue(self):
        return [
            Activity(id="a1", name="City Tour", type=ActivityType.HALF_DAY),
            Activity(id="a2", name="Glendalough", type=ActivityType.FULL_DAY),
        ]

    def test_find_activity(self, catalogue):
        assert find_activity(catalogue, "Glendalough").id == "a2"
        assert find_activity(catalogue, "Kayaking") is None

    def test_full_day_by_name(self, catalogue):
        assert check_activity_write(TUESDAY, ClassStatus.MORNING, "Glendalough", catalogue) is False
        assert check_activity_write(SATURDAY, ClassStatus.NONE, "Glendalough", catalogue) is True

    def test_empty_name_clears(self, catalogue):
        assert check_activity_write(SATURDAY, ClassStatus.NONE, "", catalogue) is True

    def test_unknown_name(self, catalogue):
        """Unknown activities act as half-day: fine on weekdays, refused on weekends."""
        assert check_activity_write(TUESDAY, ClassStatus.MORNING, "Kayaking", catalogue) is True
        assert check_activity_write(SATURDAY, ClassStatus.NONE, "Kayaking", catalogue) is False
