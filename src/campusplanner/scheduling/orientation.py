"""Orientation slot assignment.

Every group gets an orientation on its first weekday after arrival. The
search runs up to and including the departure day; groups whose stay holds
no such weekday are reported and skipped.
"""

from datetime import timedelta, tzinfo
from typing import Iterable, Optional

from campusplanner.domain.models import (
    Activity,
    CellKey,
    Diagnostic,
    DiagnosticKind,
    Group,
    ScheduleMap,
    get_entry,
    is_weekend,
)
from campusplanner.domain.policies import SchedulePolicy, check_activity_write
from campusplanner.logging import get_logger
from campusplanner.scheduling.stay import compute_stay

log = get_logger(__name__)

ORIENTATION_ACTIVITY = "Orientation"


def find_orientation_slots(
    groups: Iterable[Group],
    activity_name: str = ORIENTATION_ACTIVITY,
    tz: Optional[tzinfo] = None,
    diagnostics: Optional[list[Diagnostic]] = None,
) -> dict[CellKey, dict]:
    """Locate each group's orientation day.

    Args:
        groups: Groups to place.
        activity_name: Activity written on the slot.
        tz: Zone used to cut aware instants into days.
        diagnostics: List that receives unusable-date and no-slot diagnostics.

    Returns:
        Partial documents ``{"activity": activity_name}`` keyed by cell.
    """
    updates: dict[CellKey, dict] = {}

    for group in groups:
        stay = compute_stay(group, tz, diagnostics)
        if not stay.is_valid:
            continue

        day = stay.arrival_day + timedelta(days=1)
        while day <= stay.departure_day:
            if not is_weekend(day):
                updates[CellKey(day, group.id)] = {"activity": activity_name}
                log.debug(
                    "orientation_slot_found",
                    group_id=group.id,
                    group_name=group.name,
                    day=day.isoformat(),
                )
                break
            day += timedelta(days=1)
        else:
            log.info("orientation_slot_not_found", group_id=group.id)
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.NO_ORIENTATION_SLOT,
                        message="No weekday after arrival for orientation",
                        group_id=group.id,
                    )
                )

    return updates


def apply_orientation_slots(
    slots: dict[CellKey, dict],
    schedule: ScheduleMap,
    activities: Iterable[Activity],
    policy: Optional[SchedulePolicy] = None,
    diagnostics: Optional[list[Diagnostic]] = None,
) -> dict[CellKey, dict]:
    """Write orientation slots into a schedule, keeping each class status.

    Every slot passes the activity-write check first. Rejected slots are
    dropped and reported.

    Returns:
        The slots that were applied, ready to be committed.
    """
    activities = list(activities)
    applied: dict[CellKey, dict] = {}

    for key, partial in slots.items():
        entry = get_entry(schedule, key)
        name = partial["activity"]
        if not check_activity_write(key.day, entry.class_status, name, activities, policy):
            log.warning(
                "orientation_write_rejected",
                group_id=key.group_id,
                day=key.day.isoformat(),
                class_status=entry.class_status.value,
            )
            if diagnostics is not None:
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.WRITE_REJECTED,
                        message=f"Orientation conflicts with {entry.class_status.value} class",
                        group_id=key.group_id,
                        day=key.day,
                    )
                )
            continue

        schedule[key] = entry.with_activity(name)
        applied[key] = partial

    return applied
