"""Domain models for the campus planner.

This module contains the core data structures shared by the scheduling
engine, the paint session and the storage adapters: groups, activities,
per-day schedule entries and the structured cell key that addresses them.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional, Union


class ClassStatus(Enum):
    """Class session assigned to a group on a given day."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    DOUBLE = "Double"
    NONE = "None"
    ERROR = "Error"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ClassStatus":
        """Parse a stored status string. Empty or unknown values become NONE."""
        if not value:
            return cls.NONE
        try:
            return cls(value)
        except ValueError:
            return cls.NONE

    @property
    def is_half_day(self) -> bool:
        """True for statuses that occupy only one half of the day."""
        return self in (ClassStatus.MORNING, ClassStatus.AFTERNOON)


class ActivityType(Enum):
    """Duration type of an activity."""

    HALF_DAY = "half-day"
    FULL_DAY = "full-day"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ActivityType":
        """Anything other than an explicit full-day marker is half-day."""
        if value == cls.FULL_DAY.value:
            return cls.FULL_DAY
        return cls.HALF_DAY


class SessionFocus(Enum):
    """Weekly session preference of a group."""

    AM = "AM"
    PM = "PM"

    @property
    def class_status(self) -> ClassStatus:
        """Class status granted when the preferred session has room."""
        return ClassStatus.MORNING if self is SessionFocus.AM else ClassStatus.AFTERNOON


class UpdateKind(Enum):
    """What a paint update writes."""

    CLASS = "class"
    ACTIVITY = "activity"


class CellKey(NamedTuple):
    """Address of one grid cell: a calendar day for one group."""

    day: date
    group_id: str


@dataclass
class Group:
    """A student group staying on a campus.

    Attributes:
        id: Unique identifier (document id).
        name: Display name.
        client: Client or agency that booked the group.
        student_count: Number of students, used for session capacity.
        leader_count: Number of accompanying leaders.
        arrival: Arrival instant. None when the source document lacks it.
        departure: Departure instant. None when the source document lacks it.
        campus_id: Campus the group is affiliated with.
    """

    id: str
    name: str
    client: str = "Unknown"
    student_count: int = 0
    leader_count: int = 0
    arrival: Optional[datetime] = None
    departure: Optional[datetime] = None
    campus_id: Optional[str] = None
    arrival_airport: str = ""
    departure_airport: str = ""
    arrival_flight_number: str = ""
    departure_flight_number: str = ""
    needs_arrival_transfer: bool = False
    notes: str = ""

    @property
    def has_dates(self) -> bool:
        """True when both arrival and departure are known."""
        return self.arrival is not None and self.departure is not None


@dataclass(frozen=True)
class Activity:
    """An activity that can be painted onto the schedule."""

    id: str
    name: str
    type: ActivityType = ActivityType.HALF_DAY
    location: Optional[str] = None

    @property
    def is_full_day(self) -> bool:
        return self.type is ActivityType.FULL_DAY


@dataclass
class ScheduleEntry:
    """Class status and activity of one group on one day.

    An absent entry is equivalent to ``ScheduleEntry()``.
    """

    class_status: ClassStatus = ClassStatus.NONE
    activity: str = ""
    secondary_info: str = ""

    def with_class_status(self, status: ClassStatus) -> "ScheduleEntry":
        """Copy of this entry with a new class status, activity preserved."""
        return replace(self, class_status=status)

    def with_activity(self, activity: str) -> "ScheduleEntry":
        """Copy of this entry with a new activity, class status preserved."""
        return replace(self, activity=activity)


ScheduleMap = dict[CellKey, ScheduleEntry]


def get_entry(schedule: ScheduleMap, key: CellKey) -> ScheduleEntry:
    """Entry stored for a cell, or the default entry when absent."""
    return schedule.get(key) or ScheduleEntry()


@dataclass(frozen=True)
class PendingUpdate:
    """A single staged paint write: a class status or an activity name."""

    kind: UpdateKind
    value: Union[ClassStatus, str]

    @classmethod
    def class_status(cls, status: ClassStatus) -> "PendingUpdate":
        return cls(UpdateKind.CLASS, status)

    @classmethod
    def activity(cls, name: str) -> "PendingUpdate":
        return cls(UpdateKind.ACTIVITY, name)

    def apply_to(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Entry with this update applied, no validation."""
        if self.kind is UpdateKind.CLASS:
            return entry.with_class_status(self.value)
        return entry.with_activity(self.value)

    def to_partial(self) -> dict:
        """Partial document for a merge write."""
        if self.kind is UpdateKind.CLASS:
            return {"class_status": self.value}
        return {"activity": self.value}


@dataclass
class StayWindow:
    """Days a group is on campus.

    Attributes:
        group_id: Group the window belongs to.
        arrival_day: Calendar day of arrival (None if unknown).
        departure_day: Calendar day of departure (None if unknown).
        stay_days: Every day from arrival to departure, inclusive.
        schedulable_days: stay_days without the arrival and departure days.
        is_valid: False for missing or inverted dates; both day lists are empty then.
    """

    group_id: str
    arrival_day: Optional[date] = None
    departure_day: Optional[date] = None
    stay_days: list[date] = field(default_factory=list)
    schedulable_days: list[date] = field(default_factory=list)
    is_valid: bool = True

    def contains(self, day: date) -> bool:
        """True if the day falls within [arrival, departure]."""
        if not self.is_valid:
            return False
        return self.arrival_day <= day <= self.departure_day

    def is_schedulable(self, day: date) -> bool:
        """True if the day is a full intermediate day of the stay."""
        if not self.is_valid:
            return False
        return self.arrival_day < day < self.departure_day


class DiagnosticKind(Enum):
    """Kinds of recoverable conditions reported by the core."""

    MISSING_DATES = "missing_dates"
    INVERTED_STAY = "inverted_stay"
    MALFORMED_KEY = "malformed_key"
    WRITE_REJECTED = "write_rejected"
    NO_ORIENTATION_SLOT = "no_orientation_slot"
    EMPTY_SCHEDULE = "empty_schedule"


@dataclass
class Diagnostic:
    """A recoverable condition recorded instead of raised."""

    kind: DiagnosticKind
    message: str
    group_id: Optional[str] = None
    day: Optional[date] = None
    key: Optional[str] = None

    def __str__(self) -> str:
        parts = [f"[{self.kind.value}]"]
        if self.group_id:
            parts.append(f"Group {self.group_id}:")
        parts.append(self.message)
        if self.day is not None:
            parts.append(f"({self.day.isoformat()})")
        return " ".join(parts)


def is_weekend(day: date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5
