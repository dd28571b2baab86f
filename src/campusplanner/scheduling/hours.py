"""Total class hours per group."""

from datetime import tzinfo
from typing import Iterable, Optional

from campusplanner.domain.models import CellKey, Group, ScheduleMap, get_entry, is_weekend
from campusplanner.domain.policies import DefaultSchedulePolicy, SchedulePolicy
from campusplanner.scheduling.stay import compute_stay


def group_hours(
    group: Group,
    schedule: ScheduleMap,
    policy: Optional[SchedulePolicy] = None,
    tz: Optional[tzinfo] = None,
) -> int:
    """Credited class hours of one group over its schedulable weekdays."""
    policy = policy or DefaultSchedulePolicy()
    stay = compute_stay(group, tz)

    hours = 0
    for day in stay.schedulable_days:
        if is_weekend(day):
            continue
        entry = get_entry(schedule, CellKey(day, group.id))
        hours += policy.credited_hours(entry.class_status)
    return hours


def total_hours(
    groups: Iterable[Group],
    schedule: ScheduleMap,
    policy: Optional[SchedulePolicy] = None,
    tz: Optional[tzinfo] = None,
) -> dict[str, int]:
    """Credited class hours keyed by group id. Groups without usable dates get 0."""
    policy = policy or DefaultSchedulePolicy()
    return {group.id: group_hours(group, schedule, policy, tz) for group in groups}
