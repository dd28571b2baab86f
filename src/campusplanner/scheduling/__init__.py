"""Scheduling engine: stays, weekly focus, capacity balancing and derived views."""

from campusplanner.scheduling.auto_scheduler import (
    AutoScheduler,
    AutoScheduleResult,
    compute_auto_schedule,
)
from campusplanner.scheduling.balancer import CapacityBalancer, DayAllocation, SessionLoad
from campusplanner.scheduling.hours import group_hours, total_hours
from campusplanner.scheduling.orientation import (
    ORIENTATION_ACTIVITY,
    apply_orientation_slots,
    find_orientation_slots,
)
from campusplanner.scheduling.stay import (
    compute_stay,
    compute_stays,
    is_outside_stay,
    schedule_date_range,
    to_day,
)
from campusplanner.scheduling.weekly_focus import (
    assign_all_weekly_focus,
    assign_weekly_focus,
    focus_for_day,
    iso_week,
)

__all__ = [
    # Auto-scheduling
    "AutoScheduler",
    "AutoScheduleResult",
    "compute_auto_schedule",
    "CapacityBalancer",
    "DayAllocation",
    "SessionLoad",
    # Weekly focus
    "assign_weekly_focus",
    "assign_all_weekly_focus",
    "focus_for_day",
    "iso_week",
    # Stays
    "compute_stay",
    "compute_stays",
    "is_outside_stay",
    "schedule_date_range",
    "to_day",
    # Orientation
    "ORIENTATION_ACTIVITY",
    "find_orientation_slots",
    "apply_orientation_slots",
    # Hours
    "group_hours",
    "total_hours",
]
