"""Stay calculation for groups.

Turns a group's arrival and departure instants into calendar days: the full
stay (arrival to departure inclusive) and the schedulable days in between.
Groups with missing or inverted dates get an invalid, empty window and a
diagnostic instead of an exception.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Union

from campusplanner.domain.models import (
    Diagnostic,
    DiagnosticKind,
    Group,
    StayWindow,
)
from campusplanner.logging import get_logger

log = get_logger(__name__)


def to_day(instant: Union[datetime, date], tz: Optional[tzinfo] = None) -> date:
    """Normalise an instant to its calendar day.

    Aware datetimes are converted to ``tz`` first so that every group is cut
    at the same local midnight. Naive datetimes are taken as local already.
    """
    if isinstance(instant, datetime):
        if tz is not None and instant.tzinfo is not None:
            instant = instant.astimezone(tz)
        return instant.date()
    return instant


def days_between(start: date, end: date) -> list[date]:
    """Every day from start to end, inclusive. Empty if end < start."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def compute_stay(
    group: Group,
    tz: Optional[tzinfo] = None,
    diagnostics: Optional[list[Diagnostic]] = None,
) -> StayWindow:
    """Compute the stay window of a group.

    Args:
        group: Group to inspect.
        tz: Zone used to cut aware instants into days.
        diagnostics: List that receives a diagnostic when the dates are unusable.

    Returns:
        StayWindow. ``is_valid`` is False when a date is missing or the
        departure falls before the arrival.
    """
    if not group.has_dates:
        _report(
            diagnostics,
            Diagnostic(
                kind=DiagnosticKind.MISSING_DATES,
                message="Missing arrival or departure date",
                group_id=group.id,
            ),
        )
        return StayWindow(group_id=group.id, is_valid=False)

    arrival_day = to_day(group.arrival, tz)
    departure_day = to_day(group.departure, tz)

    if departure_day < arrival_day:
        _report(
            diagnostics,
            Diagnostic(
                kind=DiagnosticKind.INVERTED_STAY,
                message=(
                    f"Departure {departure_day.isoformat()} is before "
                    f"arrival {arrival_day.isoformat()}"
                ),
                group_id=group.id,
                day=arrival_day,
            ),
        )
        return StayWindow(
            group_id=group.id,
            arrival_day=arrival_day,
            departure_day=departure_day,
            is_valid=False,
        )

    stay_days = days_between(arrival_day, departure_day)
    return StayWindow(
        group_id=group.id,
        arrival_day=arrival_day,
        departure_day=departure_day,
        stay_days=stay_days,
        schedulable_days=stay_days[1:-1],
    )


def compute_stays(
    groups: Iterable[Group],
    tz: Optional[tzinfo] = None,
    diagnostics: Optional[list[Diagnostic]] = None,
) -> dict[str, StayWindow]:
    """Stay windows for several groups, keyed by group id."""
    return {group.id: compute_stay(group, tz, diagnostics) for group in groups}


def is_outside_stay(window: StayWindow, day: date) -> bool:
    """True if the day is not within [arrival, departure] of the window."""
    return not window.contains(day)


def schedule_date_range(
    groups: Iterable[Group],
    padding_days: int = 7,
    tz: Optional[tzinfo] = None,
) -> list[date]:
    """Days shown on the grid for a set of groups.

    Spans the earliest arrival minus ``padding_days`` to the latest departure
    plus ``padding_days``. Groups without dates are ignored. Returns an empty
    list if no group has usable dates.
    """
    arrivals = []
    departures = []
    for group in groups:
        if not group.has_dates:
            continue
        arrivals.append(to_day(group.arrival, tz))
        departures.append(to_day(group.departure, tz))

    if not arrivals:
        return []

    start = min(arrivals) - timedelta(days=padding_days)
    end = max(departures) + timedelta(days=padding_days)
    return days_between(start, end)


def _report(diagnostics: Optional[list[Diagnostic]], diagnostic: Diagnostic) -> None:
    log.warning(
        "group_dates_unusable",
        kind=diagnostic.kind.value,
        group_id=diagnostic.group_id,
        detail=diagnostic.message,
    )
    if diagnostics is not None:
        diagnostics.append(diagnostic)
