"""Daily capacity balancing between Morning and Afternoon sessions.

For one weekday the balancer walks the groups present, in their given order,
and grants each its preferred session while that session's running student
total stays within the day's cap. A group whose preferred session is full is
left without a class that day: the greedy pass never tries the other session
and never revisits earlier decisions.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from campusplanner.domain.models import (
    ClassStatus,
    Group,
    SessionFocus,
    StayWindow,
)
from campusplanner.domain.policies import DefaultSchedulePolicy, SchedulePolicy
from campusplanner.scheduling.weekly_focus import WeeklyFocus, focus_for_day


@dataclass
class SessionLoad:
    """Students placed in each session on one day."""

    total_students: int = 0
    capacity: int = 0
    am_students: int = 0
    pm_students: int = 0

    def students_in(self, focus: SessionFocus) -> int:
        return self.am_students if focus is SessionFocus.AM else self.pm_students

    def add(self, focus: SessionFocus, students: int) -> None:
        if focus is SessionFocus.AM:
            self.am_students += students
        else:
            self.pm_students += students

    def has_room(self, focus: SessionFocus, students: int) -> bool:
        return self.students_in(focus) + students <= self.capacity


@dataclass
class DayAllocation:
    """Outcome of balancing one day.

    Attributes:
        day: The balanced day.
        statuses: Class status per present group id, in balancing order.
        load: Session totals after allocation.
    """

    day: date
    statuses: dict[str, ClassStatus] = field(default_factory=dict)
    load: SessionLoad = field(default_factory=SessionLoad)

    @property
    def unassigned(self) -> list[str]:
        """Groups present but left without a class."""
        return [gid for gid, status in self.statuses.items() if status is ClassStatus.NONE]


class CapacityBalancer:
    """Greedy per-day AM/PM allocator.

    Example:
        >>> balancer = CapacityBalancer()
        >>> allocation = balancer.balance_day(day, groups, stays, weekly_focus)
        >>> allocation.statuses["G1"]
        <ClassStatus.MORNING: 'Morning'>
    """

    def __init__(self, policy: Optional[SchedulePolicy] = None):
        self.policy = policy or DefaultSchedulePolicy()

    def present_groups(
        self,
        day: date,
        groups: list[Group],
        stays: dict[str, StayWindow],
    ) -> list[Group]:
        """Groups on a full intermediate day of their stay, input order kept."""
        present = []
        for group in groups:
            stay = stays.get(group.id)
            if stay is not None and stay.is_schedulable(day):
                present.append(group)
        return present

    def balance_day(
        self,
        day: date,
        groups: list[Group],
        stays: dict[str, StayWindow],
        weekly_focus: dict[str, WeeklyFocus],
    ) -> DayAllocation:
        """Allocate class sessions for one weekday.

        Args:
            day: Weekday to balance. Callers skip weekends.
            groups: All groups, in the order they should be considered.
            stays: Stay windows keyed by group id.
            weekly_focus: Weekly focus keyed by group id.

        Returns:
            DayAllocation with a status for every present group.
        """
        present = self.present_groups(day, groups, stays)
        total = sum(group.student_count for group in present)
        load = SessionLoad(
            total_students=total,
            capacity=self.policy.session_capacity(total),
        )
        allocation = DayAllocation(day=day, load=load)

        for group in present:
            focus = focus_for_day(weekly_focus.get(group.id, {}), day)
            students = group.student_count

            if load.has_room(focus, students):
                allocation.statuses[group.id] = focus.class_status
                load.add(focus, students)
            else:
                # Preferred session full; the other session is not tried
                allocation.statuses[group.id] = ClassStatus.NONE

        return allocation
