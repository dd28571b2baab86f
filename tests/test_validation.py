"""Tests for schedule validation."""

from datetime import date

import pytest

from campusplanner.domain.models import (
    CellKey,
    ClassStatus,
    PendingUpdate,
    ScheduleEntry,
)
from campusplanner.validation.validator import (
    ScheduleValidator,
    ValidationErrorType,
)

SUNDAY_BEFORE = date(2024, 6, 30)
TUESDAY = date(2024, 7, 2)
SATURDAY = date(2024, 7, 6)


class TestCheckUpdate:
    """Tests for single-cell write checks."""

    @pytest.fixture
    def validator(self):
        return ScheduleValidator()

    def test_class_updates_always_allowed(self, validator, activities):
        key = CellKey(SATURDAY, "G1")
        schedule = {key: ScheduleEntry(activity="Glendalough")}

        update = PendingUpdate.class_status(ClassStatus.MORNING)
        assert validator.check_update(key, update, schedule, activities) is True

    def test_activity_checked_against_cell_status(self, validator, activities):
        key = CellKey(TUESDAY, "G1")
        update = PendingUpdate.activity("Glendalough")

        assert validator.check_update(key, update, {}, activities) is True
        morning = {key: ScheduleEntry(class_status=ClassStatus.MORNING)}
        assert validator.check_update(key, update, morning, activities) is False

    def test_half_day_on_weekend_rejected(self, validator, activities):
        key = CellKey(SATURDAY, "G1")
        update = PendingUpdate.activity("City Tour")
        assert validator.check_update(key, update, {}, activities) is False


class TestScheduleValidator:
    """Tests for whole-schedule audits."""

    @pytest.fixture
    def validator(self):
        return ScheduleValidator()

    @pytest.fixture
    def groups(self, make_group):
        return [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("G2", SUNDAY_BEFORE, SATURDAY, students=30),
        ]

    def test_valid_schedule(self, validator, groups, activities):
        schedule = {
            CellKey(TUESDAY, "G1"): ScheduleEntry(class_status=ClassStatus.MORNING),
            CellKey(TUESDAY, "G2"): ScheduleEntry(
                class_status=ClassStatus.AFTERNOON, activity="City Tour"
            ),
        }
        result = validator.validate(schedule, groups, activities)

        assert result.is_valid
        assert result.errors == []

    def test_session_over_capacity(self, validator, groups, activities):
        schedule = {
            CellKey(TUESDAY, "G1"): ScheduleEntry(class_status=ClassStatus.MORNING),
            CellKey(TUESDAY, "G2"): ScheduleEntry(class_status=ClassStatus.MORNING),
        }
        result = validator.validate(schedule, groups, activities)

        assert not result.is_valid
        error = result.errors[0]
        assert error.error_type is ValidationErrorType.SESSION_CAPACITY_EXCEEDED
        assert error.details == {"session": "Morning", "count": 70, "cap": 42}

    def test_double_counts_against_both_sessions(self, validator, groups, activities):
        schedule = {
            CellKey(TUESDAY, "G1"): ScheduleEntry(class_status=ClassStatus.DOUBLE),
            CellKey(TUESDAY, "G2"): ScheduleEntry(class_status=ClassStatus.AFTERNOON),
        }
        result = validator.validate(schedule, groups, activities)

        sessions = [e.details["session"] for e in result.errors]
        assert sessions == ["Afternoon"]

    def test_full_day_activity_with_half_day_class(self, validator, groups, activities):
        schedule = {
            CellKey(TUESDAY, "G1"): ScheduleEntry(
                class_status=ClassStatus.MORNING, activity="Glendalough"
            ),
        }
        result = validator.validate(schedule, groups, activities)

        assert [e.error_type for e in result.errors] == [
            ValidationErrorType.FULL_DAY_ACTIVITY_CONFLICT
        ]

    def test_weekend_entries(self, validator, make_group, activities):
        groups = [make_group("G1", SUNDAY_BEFORE, date(2024, 7, 13))]
        schedule = {
            CellKey(SATURDAY, "G1"): ScheduleEntry(
                class_status=ClassStatus.MORNING, activity="City Tour"
            ),
            CellKey(date(2024, 7, 7), "G1"): ScheduleEntry(activity="Glendalough"),
        }
        result = validator.validate(schedule, groups, activities)

        assert [e.error_type for e in result.errors] == [
            ValidationErrorType.CLASS_ON_WEEKEND,
            ValidationErrorType.WEEKEND_ACTIVITY_NOT_FULL_DAY,
        ]

    def test_class_outside_stay_is_a_warning(self, validator, groups, activities):
        schedule = {
            CellKey(SUNDAY_BEFORE, "G1"): ScheduleEntry(activity="Glendalough"),
            CellKey(date(2024, 7, 5), "G1"): ScheduleEntry(class_status=ClassStatus.MORNING),
            CellKey(date(2024, 7, 18), "G2"): ScheduleEntry(class_status=ClassStatus.AFTERNOON),
        }
        result = validator.validate(schedule, groups, activities)

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "2024-07-18" in result.warnings[0]

    def test_unknown_group(self, validator, groups, activities):
        schedule = {CellKey(TUESDAY, "GX"): ScheduleEntry(class_status=ClassStatus.MORNING)}
        result = validator.validate(schedule, groups, activities)

        assert result.errors[0].error_type is ValidationErrorType.UNKNOWN_GROUP
        assert result.errors[0].group_id == "GX"
