"""Campus planner session.

CampusPlanner is the context object a front end owns for one campus view.
It loads groups, activities and the schedule map from a store, exposes the
auto-schedule and orientation operations behind busy flags, and hands out
the paint session that edits the same in-memory schedule.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from campusplanner.config import PlannerConfig, get_config
from campusplanner.domain.models import (
    Activity,
    CellKey,
    Diagnostic,
    Group,
    ScheduleMap,
)
from campusplanner.domain.policies import DefaultSchedulePolicy, SchedulePolicy
from campusplanner.errors import StorageError
from campusplanner.logging import get_logger
from campusplanner.scheduling.auto_scheduler import AutoScheduler
from campusplanner.scheduling.hours import total_hours
from campusplanner.scheduling.orientation import (
    apply_orientation_slots,
    find_orientation_slots,
)
from campusplanner.scheduling.stay import schedule_date_range, to_day
from campusplanner.session.paint import PaintSession
from campusplanner.storage.base import ScheduleStore
from campusplanner.validation.validator import ScheduleValidator, ValidationResult

log = get_logger(__name__)


@dataclass
class OperationResult:
    """Outcome of a planner operation that writes to the store.

    Attributes:
        written: Cells sent to the store.
        diagnostics: Data-quality conditions met while computing.
        error: Aggregate user-facing message if the commit failed.
    """

    written: list[CellKey] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CampusPlanner:
    """Planner state for one campus.

    Example:
        >>> planner = CampusPlanner(JsonFileStore("data/planner.json"))
        >>> planner.load("UCD")
        >>> planner.auto_schedule()
        >>> planner.total_hours()
    """

    def __init__(
        self,
        store: ScheduleStore,
        config: Optional[PlannerConfig] = None,
        policy: Optional[SchedulePolicy] = None,
    ):
        self.store = store
        self.config = config or get_config()
        self.policy = policy or DefaultSchedulePolicy.from_config(self.config)
        self.tz = ZoneInfo(self.config.timezone)
        self.validator = ScheduleValidator(policy=self.policy, tz=self.tz)

        self.campus_id: Optional[str] = None
        self.groups: list[Group] = []
        self.activities: list[Activity] = []
        self.date_range: list[date] = []
        self.schedule: ScheduleMap = {}
        self.error: Optional[str] = None
        self.diagnostics: list[Diagnostic] = []

        self._auto_scheduling = False
        self._assigning_orientations = False
        self._paint_session: Optional[PaintSession] = None

    @property
    def is_auto_scheduling(self) -> bool:
        return self._auto_scheduling

    @property
    def is_assigning_orientations(self) -> bool:
        return self._assigning_orientations

    @property
    def sorted_groups(self) -> list[Group]:
        """Groups ordered by arrival for display. Groups without dates go last."""
        def arrival_key(group: Group):
            if group.arrival is None:
                return (1, date.max)
            return (0, to_day(group.arrival, self.tz))

        return sorted(self.groups, key=arrival_key)

    def load(self, campus_id: str) -> bool:
        """Load groups, activities and schedule entries of a campus.

        Returns:
            True on success. On a storage failure the planner is left empty,
            ``error`` holds the message and False is returned.
        """
        self.campus_id = campus_id.upper()
        self.error = None
        self.diagnostics = []
        self._paint_session = None

        try:
            groups = self.store.fetch_groups(self.campus_id)
            activities = self.store.fetch_activities()
            date_range = schedule_date_range(
                groups, self.config.range_padding_days, self.tz
            )
            schedule = self.store.fetch_schedule_entries(
                [g.id for g in groups], date_range, self.diagnostics
            )
        except StorageError as exc:
            log.error("planner_load_failed", campus_id=self.campus_id, error=str(exc))
            self.error = f"Failed to load dashboard data: {exc}"
            self.groups, self.activities, self.date_range, self.schedule = [], [], [], {}
            return False

        self.groups = groups
        self.activities = activities
        self.date_range = date_range
        self.schedule = schedule

        log.info(
            "planner_loaded",
            campus_id=self.campus_id,
            groups=len(groups),
            activities=len(activities),
            days=len(date_range),
            entries=len(schedule),
            diagnostics=len(self.diagnostics),
        )
        return True

    def auto_schedule(self) -> Optional[OperationResult]:
        """Compute and commit class statuses for every schedulable weekday.

        Returns None without doing anything if a run is already in progress.
        The computed statuses are applied locally before the commit and are
        kept even if the commit fails.
        """
        if self._auto_scheduling:
            return None
        self._auto_scheduling = True
        self.error = None

        try:
            scheduler = AutoScheduler(policy=self.policy, tz=self.tz)
            result = scheduler.run(self.groups, self.date_range, self.schedule)
            outcome = OperationResult(diagnostics=result.diagnostics)

            if result.is_empty:
                outcome.error = "Auto-schedule generation resulted in an empty schedule."
                self.error = outcome.error
                return outcome

            updates = result.class_status_updates()
            self.schedule.update({key: result.schedule[key] for key in updates})
            return self._commit(updates, outcome, "Auto Schedule failed")
        finally:
            self._auto_scheduling = False

    def assign_orientations(self) -> Optional[OperationResult]:
        """Write the orientation activity on each group's first weekday.

        Returns None without doing anything if a run is already in progress.
        """
        if self._assigning_orientations:
            return None
        self._assigning_orientations = True
        self.error = None

        try:
            outcome = OperationResult()
            slots = find_orientation_slots(
                self.groups,
                activity_name=self.config.orientation_activity,
                tz=self.tz,
                diagnostics=outcome.diagnostics,
            )
            applied = apply_orientation_slots(
                slots,
                self.schedule,
                self.activities,
                policy=self.policy,
                diagnostics=outcome.diagnostics,
            )
            if not applied:
                log.info("orientation_nothing_to_save")
                return outcome

            return self._commit(applied, outcome, "Orientation Assignment failed")
        finally:
            self._assigning_orientations = False

    def total_hours(self) -> dict[str, int]:
        """Credited class hours per group for the current schedule."""
        return total_hours(self.groups, self.schedule, self.policy, self.tz)

    def validate(self) -> ValidationResult:
        """Audit the current schedule."""
        return self.validator.validate(self.schedule, self.groups, self.activities)

    def paint_session(self) -> PaintSession:
        """The paint session editing this planner's schedule."""
        if self._paint_session is None:
            self._paint_session = PaintSession(
                self.schedule, self.activities, self.store, self.validator
            )
        return self._paint_session

    def _commit(
        self,
        updates: dict[CellKey, dict],
        outcome: OperationResult,
        failure_prefix: str,
    ) -> OperationResult:
        try:
            self.store.commit_batch(updates)
        except StorageError as exc:
            log.error("planner_commit_failed", documents=len(updates), error=str(exc))
            outcome.error = f"{failure_prefix}: {exc}"
            self.error = outcome.error
            return outcome

        outcome.written = list(updates)
        log.info("planner_commit_saved", documents=len(updates))
        return outcome
