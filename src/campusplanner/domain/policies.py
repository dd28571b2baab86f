"""Policy definitions for scheduling rules.

This module contains the configurable rules shared by the auto-scheduler,
the orientation assigner and the paint session: how much of a day's
student body one session may hold, how many hours a class status is worth,
and whether an activity may be written onto a cell. Policies are kept
separate from the engines so they can be tested and swapped independently.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from campusplanner.config import PlannerConfig
from campusplanner.domain.models import (
    Activity,
    ActivityType,
    ClassStatus,
    is_weekend,
)


class SchedulePolicy(ABC):
    """Abstract base class for class-session and activity rules."""

    @abstractmethod
    def session_capacity(self, total_students: int) -> int:
        """Maximum students a single session may hold on a day.

        Args:
            total_students: Students of all groups schedulable that day.

        Returns:
            Student cap applied to the Morning and the Afternoon session alike.
        """
        pass

    @abstractmethod
    def credited_hours(self, status: ClassStatus) -> int:
        """Class hours credited for a status on a schedulable weekday."""
        pass

    @abstractmethod
    def is_activity_write_allowed(
        self,
        day: date,
        current_status: ClassStatus,
        activity_type: Optional[ActivityType],
        clearing: bool = False,
    ) -> bool:
        """Check whether an activity may be written onto a cell.

        Args:
            day: Target date of the cell.
            current_status: Class status the cell holds.
            activity_type: Duration type of the candidate activity, None if
                the name is empty or unknown.
            clearing: True when the write empties the activity field.

        Returns:
            True if the write is legal.
        """
        pass


@dataclass
class DefaultSchedulePolicy(SchedulePolicy):
    """Default rules.

    Capacity:
    - Each session may hold at most floor(total * 0.6) students, which keeps
      the split between Morning and Afternoon at 60/40 or better.

    Hours:
    - Morning or Afternoon: 3 hours
    - Double: 6 hours
    - None/Error: 0 hours

    Activity writes:
    - Weekends take full-day activities only (clearing is always allowed).
    - On weekdays a full-day activity cannot join a Morning or Afternoon class.
    """

    capacity_ratio: float = 0.6
    session_hours: int = 3
    double_session_hours: int = 6

    @classmethod
    def from_config(cls, config: PlannerConfig) -> "DefaultSchedulePolicy":
        return cls(
            capacity_ratio=config.capacity_ratio,
            session_hours=config.session_hours,
            double_session_hours=config.double_session_hours,
        )

    def session_capacity(self, total_students: int) -> int:
        return math.floor(total_students * self.capacity_ratio)

    def credited_hours(self, status: ClassStatus) -> int:
        if status.is_half_day:
            return self.session_hours
        elif status is ClassStatus.DOUBLE:
            return self.double_session_hours
        else:
            return 0

    def is_activity_write_allowed(
        self,
        day: date,
        current_status: ClassStatus,
        activity_type: Optional[ActivityType],
        clearing: bool = False,
    ) -> bool:
        if is_weekend(day):
            return clearing or activity_type is ActivityType.FULL_DAY

        if activity_type is ActivityType.FULL_DAY and current_status.is_half_day:
            return False
        return True


_default_policy = DefaultSchedulePolicy()


def validate_activity_write(
    day: date,
    current_status: ClassStatus,
    candidate_activity_type: Optional[ActivityType],
    clearing: bool = False,
    policy: Optional[SchedulePolicy] = None,
) -> bool:
    """Pure predicate guarding every write to a cell's activity field.

    Example:
        >>> validate_activity_write(date(2024, 7, 6), ClassStatus.NONE, ActivityType.HALF_DAY)
        False
    """
    policy = policy or _default_policy
    return policy.is_activity_write_allowed(
        day, current_status, candidate_activity_type, clearing
    )


def find_activity(activities: Iterable[Activity], name: str) -> Optional[Activity]:
    """First activity with the given name, or None."""
    for activity in activities:
        if activity.name == name:
            return activity
    return None


def check_activity_write(
    day: date,
    current_status: ClassStatus,
    activity_name: str,
    activities: Iterable[Activity],
    policy: Optional[SchedulePolicy] = None,
) -> bool:
    """Resolve the activity type by name and apply validate_activity_write."""
    activity = find_activity(activities, activity_name) if activity_name else None
    return validate_activity_write(
        day,
        current_status,
        activity.type if activity else None,
        clearing=not activity_name,
        policy=policy,
    )
