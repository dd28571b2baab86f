"""Automatic class scheduling.

This module provides the AutoScheduler that chains the stay calculation,
weekly focus rotation and daily capacity balancing into one proposed
schedule, plus the pure ``compute_auto_schedule`` function used by callers
that only need the resulting map.
"""

from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Iterable, Optional

from campusplanner.domain.models import (
    CellKey,
    Diagnostic,
    DiagnosticKind,
    Group,
    ScheduleMap,
    get_entry,
    is_weekend,
)
from campusplanner.domain.policies import DefaultSchedulePolicy, SchedulePolicy
from campusplanner.logging import get_logger
from campusplanner.scheduling.balancer import CapacityBalancer, DayAllocation
from campusplanner.scheduling.stay import compute_stays
from campusplanner.scheduling.weekly_focus import WeeklyFocus, assign_all_weekly_focus

log = get_logger(__name__)


@dataclass
class AutoScheduleResult:
    """Proposed schedule with the information needed to commit and report it.

    Attributes:
        schedule: Existing schedule with balanced class statuses merged in.
        assigned_keys: Cells whose class status was (re)computed, in order.
        allocations: Per-day balancing outcome for every day with groups present.
        weekly_focus: Weekly focus used, keyed by group id.
        diagnostics: Data-quality conditions met during the run.
    """

    schedule: ScheduleMap
    assigned_keys: list[CellKey] = field(default_factory=list)
    allocations: dict[date, DayAllocation] = field(default_factory=dict)
    weekly_focus: dict[str, WeeklyFocus] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.assigned_keys

    def class_status_updates(self) -> dict[CellKey, dict]:
        """Partial documents writing only the class status of assigned cells."""
        return {
            key: {"class_status": self.schedule[key].class_status}
            for key in self.assigned_keys
        }


class AutoScheduler:
    """Builds a proposed class schedule for every weekday of a date range.

    Example:
        >>> scheduler = AutoScheduler()
        >>> result = scheduler.run(groups, date_range, existing_schedule)
        >>> store.commit_batch(result.class_status_updates())
    """

    def __init__(
        self,
        policy: Optional[SchedulePolicy] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.policy = policy or DefaultSchedulePolicy()
        self.tz = tz
        self.balancer = CapacityBalancer(policy=self.policy)

    def run(
        self,
        groups: list[Group],
        date_range: Iterable[date],
        existing: Optional[ScheduleMap] = None,
    ) -> AutoScheduleResult:
        """Compute the proposed schedule.

        Args:
            groups: Groups in balancing order. The order is used as given.
            date_range: Days to consider. Weekends are skipped.
            existing: Current schedule. It is not modified.

        Returns:
            AutoScheduleResult holding the merged schedule and run details.
        """
        diagnostics: list[Diagnostic] = []
        stays = compute_stays(groups, self.tz, diagnostics)
        weekly_focus = assign_all_weekly_focus(stays)

        schedule: ScheduleMap = dict(existing or {})
        result = AutoScheduleResult(
            schedule=schedule,
            weekly_focus=weekly_focus,
            diagnostics=diagnostics,
        )

        for day in date_range:
            if is_weekend(day):
                continue

            allocation = self.balancer.balance_day(day, groups, stays, weekly_focus)
            if not allocation.statuses:
                continue

            result.allocations[day] = allocation
            for group_id, status in allocation.statuses.items():
                key = CellKey(day, group_id)
                schedule[key] = get_entry(schedule, key).with_class_status(status)
                result.assigned_keys.append(key)

            log.debug(
                "day_balanced",
                day=day.isoformat(),
                total=allocation.load.total_students,
                capacity=allocation.load.capacity,
                am=allocation.load.am_students,
                pm=allocation.load.pm_students,
                unassigned=len(allocation.unassigned),
            )

        if result.is_empty:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.EMPTY_SCHEDULE,
                    message="No group has a schedulable weekday in the date range",
                )
            )

        log.info(
            "auto_schedule_computed",
            groups=len(groups),
            days=len(result.allocations),
            cells=len(result.assigned_keys),
            diagnostics=len(diagnostics),
        )
        return result

    def run_with_stats(
        self,
        groups: list[Group],
        date_range: Iterable[date],
        existing: Optional[ScheduleMap] = None,
    ) -> tuple[AutoScheduleResult, dict]:
        """Run and return summary statistics alongside the result."""
        result = self.run(groups, date_range, existing)
        return result, self._calculate_stats(result)

    def _calculate_stats(self, result: AutoScheduleResult) -> dict:
        allocations = result.allocations.values()
        assigned = sum(
            len(a.statuses) - len(a.unassigned) for a in allocations
        )
        unassigned = sum(len(a.unassigned) for a in allocations)
        am_shares = [
            a.load.am_students / a.load.total_students
            for a in allocations
            if a.load.total_students
        ]

        return {
            "days_scheduled": len(result.allocations),
            "cells_assigned": assigned,
            "cells_unassigned": unassigned,
            "avg_am_share": sum(am_shares) / len(am_shares) if am_shares else 0.0,
            "diagnostics": len(result.diagnostics),
        }


def compute_auto_schedule(
    groups: list[Group],
    date_range: Iterable[date],
    existing_schedule: Optional[ScheduleMap] = None,
    policy: Optional[SchedulePolicy] = None,
    tz: Optional[tzinfo] = None,
) -> ScheduleMap:
    """Pure auto-schedule: existing schedule with balanced class statuses merged in."""
    return AutoScheduler(policy=policy, tz=tz).run(
        groups, date_range, existing_schedule
    ).schedule
