"""Domain models and business rules for campus scheduling."""

from campusplanner.domain.models import (
    Activity,
    ActivityType,
    CellKey,
    ClassStatus,
    Diagnostic,
    DiagnosticKind,
    Group,
    PendingUpdate,
    ScheduleEntry,
    ScheduleMap,
    SessionFocus,
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
    validate_activity_write,
)

__all__ = [
    # Models
    "Activity",
    "ActivityType",
    "CellKey",
    "ClassStatus",
    "Diagnostic",
    "DiagnosticKind",
    "Group",
    "PendingUpdate",
    "ScheduleEntry",
    "ScheduleMap",
    "SessionFocus",
    "StayWindow",
    "UpdateKind",
    "get_entry",
    "is_weekend",
    # Policies
    "DefaultSchedulePolicy",
    "SchedulePolicy",
    "check_activity_write",
    "find_activity",
    "validate_activity_write",
]
