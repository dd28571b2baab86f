"""Validation module for schedule writes and whole schedules.

This module is the single source of truth for class/activity conflicts.
``check_update`` guards individual cell writes (paint session, orientation)
and ``validate`` audits a complete schedule map, e.g. after an auto-schedule
run or before exporting.
"""

from dataclasses import dataclass, field
from datetime import date, tzinfo
from enum import Enum
from typing import Iterable, Optional

from campusplanner.domain.models import (
    Activity,
    CellKey,
    ClassStatus,
    Group,
    PendingUpdate,
    ScheduleMap,
    StayWindow,
    UpdateKind,
    get_entry,
    is_weekend,
)
from campusplanner.domain.policies import (
    DefaultSchedulePolicy,
    SchedulePolicy,
    check_activity_write,
    find_activity,
)
from campusplanner.scheduling.stay import compute_stays


class ValidationErrorType(Enum):
    """Types of validation errors."""

    SESSION_CAPACITY_EXCEEDED = "session_capacity_exceeded"
    FULL_DAY_ACTIVITY_CONFLICT = "full_day_activity_conflict"
    WEEKEND_ACTIVITY_NOT_FULL_DAY = "weekend_activity_not_full_day"
    CLASS_ON_WEEKEND = "class_on_weekend"
    UNKNOWN_GROUP = "unknown_group"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    group_id: Optional[str] = None
    day: Optional[date] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.group_id:
            parts.append(f"Group {self.group_id}:")
        parts.append(self.message)
        if self.day is not None:
            parts.append(f"({self.day.isoformat()})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)


class ScheduleValidator:
    """Validates cell writes and schedules against the schedule policy.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(schedule, groups, activities)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(
        self,
        policy: Optional[SchedulePolicy] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.policy = policy or DefaultSchedulePolicy()
        self.tz = tz

    def check_update(
        self,
        key: CellKey,
        update: PendingUpdate,
        schedule: ScheduleMap,
        activities: Iterable[Activity],
    ) -> bool:
        """Check whether a staged update may be written onto a cell.

        Class-status writes are always allowed. Activity writes are judged
        against the class status the cell holds in ``schedule``.
        """
        if update.kind is UpdateKind.CLASS:
            return True
        entry = get_entry(schedule, key)
        return check_activity_write(
            key.day, entry.class_status, update.value, activities, self.policy
        )

    def validate(
        self,
        schedule: ScheduleMap,
        groups: list[Group],
        activities: Iterable[Activity],
    ) -> ValidationResult:
        """Audit a complete schedule.

        Args:
            schedule: Schedule map to audit.
            groups: Groups the schedule belongs to.
            activities: Known activities, used to resolve activity types.

        Returns:
            ValidationResult with is_valid flag, errors and warnings.
        """
        result = ValidationResult(is_valid=True)
        activities = list(activities)
        groups_map = {g.id: g for g in groups}
        stays = compute_stays(groups, self.tz)

        for key, entry in sorted(schedule.items()):
            if key.group_id not in groups_map:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_GROUP,
                        message=f"Entry for unknown group {key.group_id}",
                        group_id=key.group_id,
                        day=key.day,
                    )
                )
                continue

            self._validate_entry(key, entry.class_status, entry.activity, stays, activities, result)

        self._validate_capacity(schedule, groups, stays, result)

        return result

    def _validate_entry(
        self,
        key: CellKey,
        status: ClassStatus,
        activity_name: str,
        stays: dict[str, StayWindow],
        activities: list[Activity],
        result: ValidationResult,
    ) -> None:
        """Validate one cell."""
        day = key.day
        has_class = status in (ClassStatus.MORNING, ClassStatus.AFTERNOON, ClassStatus.DOUBLE)

        if has_class and is_weekend(day):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.CLASS_ON_WEEKEND,
                    message=f"{status.value} class on a weekend",
                    group_id=key.group_id,
                    day=day,
                )
            )

        stay = stays.get(key.group_id)
        if has_class and stay is not None and not stay.is_schedulable(day):
            result.add_warning(
                f"Group {key.group_id}: {status.value} class outside schedulable "
                f"days ({day.isoformat()})"
            )

        if not activity_name:
            return

        activity = find_activity(activities, activity_name)
        if is_weekend(day):
            if activity is None or not activity.is_full_day:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.WEEKEND_ACTIVITY_NOT_FULL_DAY,
                        message=f"Activity '{activity_name}' is not a full-day activity",
                        group_id=key.group_id,
                        day=day,
                        details={"activity": activity_name},
                    )
                )
        elif activity is not None and activity.is_full_day and status.is_half_day:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.FULL_DAY_ACTIVITY_CONFLICT,
                    message=(
                        f"Full-day activity '{activity_name}' conflicts with "
                        f"{status.value} class"
                    ),
                    group_id=key.group_id,
                    day=day,
                    details={"activity": activity_name, "class_status": status.value},
                )
            )

    def _validate_capacity(
        self,
        schedule: ScheduleMap,
        groups: list[Group],
        stays: dict[str, StayWindow],
        result: ValidationResult,
    ) -> None:
        """Validate that neither session exceeds the daily cap.

        A Double class counts against both sessions.
        """
        days = sorted({key.day for key in schedule if not is_weekend(key.day)})

        for day in days:
            present = [g for g in groups if stays[g.id].is_schedulable(day)]
            if not present:
                continue

            total = sum(g.student_count for g in present)
            cap = self.policy.session_capacity(total)
            am = pm = 0
            for group in present:
                status = get_entry(schedule, CellKey(day, group.id)).class_status
                if status in (ClassStatus.MORNING, ClassStatus.DOUBLE):
                    am += group.student_count
                if status in (ClassStatus.AFTERNOON, ClassStatus.DOUBLE):
                    pm += group.student_count

            for session, count in (("Morning", am), ("Afternoon", pm)):
                if count > cap:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.SESSION_CAPACITY_EXCEEDED,
                            message=(
                                f"{session} session has {count} students "
                                f"but cap is {cap}"
                            ),
                            day=day,
                            details={"session": session, "count": count, "cap": cap},
                        )
                    )
