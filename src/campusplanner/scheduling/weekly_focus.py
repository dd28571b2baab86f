"""Weekly AM/PM focus rotation.

Each group starts its stay with a Morning focus and flips to Afternoon and
back every time its schedulable days cross into a new ISO week, so the
session a group mostly attends rotates week over week.
"""

from datetime import date
from typing import Iterable

from campusplanner.domain.models import SessionFocus, StayWindow

WeeklyFocus = dict[int, SessionFocus]


def iso_week(day: date) -> int:
    """ISO-8601 week number (Monday start, week 1 holds the first Thursday)."""
    return day.isocalendar()[1]


def assign_weekly_focus(schedulable_days: Iterable[date]) -> WeeklyFocus:
    """Alternate AM/PM per distinct ISO week of a group's schedulable days.

    Args:
        schedulable_days: The group's schedulable days in chronological order.

    Returns:
        Mapping of ISO week number to focus. Empty if there are no days.
    """
    focus: WeeklyFocus = {}
    parity = 0

    for day in schedulable_days:
        week = iso_week(day)
        if week in focus:
            continue
        if focus:
            parity += 1
        focus[week] = SessionFocus.AM if parity % 2 == 0 else SessionFocus.PM

    return focus


def assign_all_weekly_focus(stays: dict[str, StayWindow]) -> dict[str, WeeklyFocus]:
    """Weekly focus for every valid stay, keyed by group id."""
    return {
        group_id: assign_weekly_focus(stay.schedulable_days)
        for group_id, stay in stays.items()
        if stay.is_valid
    }


def focus_for_day(
    weekly_focus: WeeklyFocus,
    day: date,
    default: SessionFocus = SessionFocus.AM,
) -> SessionFocus:
    """Focus of the ISO week containing ``day``."""
    return weekly_focus.get(iso_week(day), default)
