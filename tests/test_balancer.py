"""Tests for the daily capacity balancer and the auto-scheduler."""

from datetime import date

import pytest

from campusplanner.domain.models import (
    CellKey,
    ClassStatus,
    DiagnosticKind,
    ScheduleEntry,
    SessionFocus,
    is_weekend,
)
from campusplanner.domain.policies import DefaultSchedulePolicy
from campusplanner.scheduling.auto_scheduler import AutoScheduler, compute_auto_schedule
from campusplanner.scheduling.balancer import CapacityBalancer, SessionLoad
from campusplanner.scheduling.stay import compute_stays, days_between
from campusplanner.scheduling.weekly_focus import assign_all_weekly_focus

MONDAY = date(2024, 7, 1)
SUNDAY_BEFORE = date(2024, 6, 30)
SATURDAY = date(2024, 7, 6)


class TestSessionLoad:
    """Tests for SessionLoad bookkeeping."""

    def test_room_is_inclusive_of_cap(self):
        load = SessionLoad(total_students=70, capacity=42)
        assert load.has_room(SessionFocus.AM, 42)

    def test_sessions_fill_independently(self):
        load = SessionLoad(total_students=70, capacity=42)
        load.add(SessionFocus.AM, 40)

        assert load.am_students == 40
        assert not load.has_room(SessionFocus.AM, 3)
        assert load.has_room(SessionFocus.PM, 30)


class TestCapacityBalancer:
    """Tests for CapacityBalancer.balance_day."""

    @pytest.fixture
    def balancer(self):
        return CapacityBalancer(DefaultSchedulePolicy())

    def _balance(self, balancer, groups, day=MONDAY):
        stays = compute_stays(groups)
        return balancer.balance_day(day, groups, stays, assign_all_weekly_focus(stays))

    def test_second_group_left_without_class_when_session_full(self, balancer, make_group):
        """40 + 30 students, cap 42: the second AM group gets no class."""
        groups = [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("G2", SUNDAY_BEFORE, SATURDAY, students=30),
        ]
        allocation = self._balance(balancer, groups)

        assert allocation.load.total_students == 70
        assert allocation.load.capacity == 42
        assert allocation.statuses == {
            "G1": ClassStatus.MORNING,
            "G2": ClassStatus.NONE,
        }
        assert allocation.unassigned == ["G2"]

    def test_other_session_is_not_tried(self, balancer, make_group):
        """Afternoon stays empty even though G2 would fit there."""
        groups = [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("G2", SUNDAY_BEFORE, SATURDAY, students=30),
        ]
        allocation = self._balance(balancer, groups)

        assert allocation.load.pm_students == 0

    def test_groups_with_opposite_focus_share_the_day(self, balancer, make_group):
        """A group in its second week prefers the afternoon."""
        groups = [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("G2", date(2024, 6, 24), SATURDAY, students=30),
        ]
        allocation = self._balance(balancer, groups)

        assert allocation.statuses == {
            "G1": ClassStatus.MORNING,
            "G2": ClassStatus.AFTERNOON,
        }
        assert allocation.load.am_students == 40
        assert allocation.load.pm_students == 30

    def test_input_order_decides_who_gets_the_session(self, balancer, make_group):
        groups = [
            make_group("G2", SUNDAY_BEFORE, SATURDAY, students=30),
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
        ]
        allocation = self._balance(balancer, groups)

        assert allocation.statuses["G2"] is ClassStatus.MORNING
        assert allocation.statuses["G1"] is ClassStatus.NONE

    def test_travel_days_are_not_present(self, balancer, make_group):
        """Arrival and departure days never count towards the day's total."""
        groups = [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("G2", MONDAY, date(2024, 7, 5), students=100),
        ]
        allocation = self._balance(balancer, groups)

        assert "G2" not in allocation.statuses
        assert allocation.load.total_students == 40

    def test_single_group_below_cap_gets_nothing(self, balancer, make_group):
        """One group alone exceeds 60% of itself."""
        groups = [make_group("G1", SUNDAY_BEFORE, SATURDAY, students=10)]
        allocation = self._balance(balancer, groups)

        assert allocation.load.capacity == 6
        assert allocation.statuses == {"G1": ClassStatus.NONE}

    def test_custom_ratio(self, make_group):
        balancer = CapacityBalancer(DefaultSchedulePolicy(capacity_ratio=1.0))
        groups = [make_group("G1", SUNDAY_BEFORE, SATURDAY, students=10)]
        allocation = self._balance(balancer, groups)

        assert allocation.statuses == {"G1": ClassStatus.MORNING}


class TestAutoScheduler:
    """Tests for AutoScheduler and compute_auto_schedule."""

    @pytest.fixture
    def groups(self, make_group):
        return [
            make_group("G1", SUNDAY_BEFORE, date(2024, 7, 13), students=40),
            make_group("G2", date(2024, 6, 24), SATURDAY, students=30),
            make_group("G3", date(2024, 7, 2), date(2024, 7, 20), students=25),
            make_group("G4", MONDAY, date(2024, 7, 12), students=18),
        ]

    @pytest.fixture
    def date_range(self):
        return days_between(date(2024, 6, 17), date(2024, 7, 27))

    def test_no_session_exceeds_cap(self, groups, date_range):
        result = AutoScheduler().run(groups, date_range)

        assert result.allocations
        for allocation in result.allocations.values():
            load = allocation.load
            assert load.am_students <= load.capacity
            assert load.pm_students <= load.capacity

    def test_only_schedulable_weekdays_are_assigned(self, groups, date_range):
        result = AutoScheduler().run(groups, date_range)
        stays = compute_stays(groups)

        for key in result.assigned_keys:
            assert not is_weekend(key.day)
            assert stays[key.group_id].is_schedulable(key.day)

    def test_never_produces_double(self, groups, date_range):
        schedule = compute_auto_schedule(groups, date_range)
        assert all(e.class_status is not ClassStatus.DOUBLE for e in schedule.values())

    def test_recomputation_is_idempotent(self, groups, date_range):
        first = compute_auto_schedule(groups, date_range)
        second = compute_auto_schedule(groups, date_range, existing_schedule=first)
        assert second == first

    def test_activities_are_preserved(self, groups, date_range):
        key = CellKey(date(2024, 7, 2), "G1")
        existing = {key: ScheduleEntry(activity="City Tour", secondary_info="Bus 3")}

        schedule = compute_auto_schedule(groups, date_range, existing_schedule=existing)

        assert schedule[key].activity == "City Tour"
        assert schedule[key].secondary_info == "Bus 3"
        assert schedule[key].class_status is ClassStatus.MORNING

    def test_existing_schedule_is_not_modified(self, groups, date_range):
        key = CellKey(date(2024, 7, 2), "G1")
        existing = {key: ScheduleEntry(activity="City Tour")}

        compute_auto_schedule(groups, date_range, existing_schedule=existing)

        assert existing == {key: ScheduleEntry(activity="City Tour")}

    def test_weekend_entries_untouched(self, groups, date_range):
        key = CellKey(SATURDAY, "G1")
        existing = {key: ScheduleEntry(activity="Glendalough")}

        result = AutoScheduler().run(groups, date_range, existing)

        assert key not in result.assigned_keys
        assert result.schedule[key] == ScheduleEntry(activity="Glendalough")

    def test_class_status_updates_carry_status_only(self, groups, date_range):
        result = AutoScheduler().run(groups, date_range)
        updates = result.class_status_updates()

        assert set(updates) == set(result.assigned_keys)
        assert all(set(partial) == {"class_status"} for partial in updates.values())

    def test_empty_result_is_reported(self, make_group):
        groups = [make_group("G1", MONDAY, date(2024, 7, 2))]
        result = AutoScheduler().run(groups, days_between(MONDAY, date(2024, 7, 7)))

        assert result.is_empty
        assert result.diagnostics[-1].kind is DiagnosticKind.EMPTY_SCHEDULE

    def test_bad_dates_become_diagnostics(self, make_group, date_range):
        groups = [
            make_group("G1", SUNDAY_BEFORE, SATURDAY, students=40),
            make_group("BAD", SATURDAY, MONDAY),
        ]
        result = AutoScheduler().run(groups, date_range)

        kinds = [d.kind for d in result.diagnostics]
        assert DiagnosticKind.INVERTED_STAY in kinds
        assert all(key.group_id == "G1" for key in result.assigned_keys)

    def test_stats(self, groups, date_range):
        _, stats = AutoScheduler().run_with_stats(groups, date_range)

        assert stats["days_scheduled"] > 0
        assert stats["cells_assigned"] > 0
        assert 0.0 <= stats["avg_am_share"] <= 1.0
