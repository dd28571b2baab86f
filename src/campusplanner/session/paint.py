"""Interactive paint session.

A paint gesture starts on one grid cell, continues over every cell the
pointer enters and ends on release. Each touched cell is updated in the
local schedule immediately; the staged updates are re-validated against the
schedule as it stood when the gesture began and written as one batch when
the gesture ends.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from campusplanner.domain.models import (
    Activity,
    CellKey,
    PendingUpdate,
    ScheduleMap,
    UpdateKind,
    get_entry,
)
from campusplanner.errors import StorageError
from campusplanner.logging import get_logger
from campusplanner.storage.base import ScheduleStore
from campusplanner.validation.validator import ScheduleValidator

log = get_logger(__name__)


class PaintState(Enum):
    """State of the paint session."""

    IDLE = "idle"
    PAINTING = "painting"


@dataclass
class FlushResult:
    """Outcome of ending a gesture.

    Attributes:
        staged: Number of cells staged during the gesture.
        written: Cells included in the committed batch.
        dropped: Cells dropped by flush-time validation.
        error: Aggregate error message if the commit failed.
    """

    staged: int = 0
    written: list[CellKey] = field(default_factory=list)
    dropped: list[CellKey] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PaintSession:
    """Stateful batch of cell edits made during one pointer drag.

    The session mutates ``schedule`` in place so the caller's view reflects
    every painted cell immediately.

    Example:
        >>> session = PaintSession(schedule, activities, store)
        >>> session.begin_paint(CellKey(day, "G1"), PendingUpdate.activity("Kayaking"))
        >>> session.continue_paint(CellKey(day, "G2"), PendingUpdate.activity("Kayaking"))
        >>> result = session.end_paint()
    """

    def __init__(
        self,
        schedule: ScheduleMap,
        activities: Iterable[Activity],
        store: ScheduleStore,
        validator: Optional[ScheduleValidator] = None,
    ):
        self.schedule = schedule
        self.activities = list(activities)
        self.store = store
        self.validator = validator or ScheduleValidator()

        self.state = PaintState.IDLE
        self.pending: dict[CellKey, PendingUpdate] = {}
        self._gesture_kind: Optional[UpdateKind] = None
        self._snapshot: ScheduleMap = {}

    @property
    def is_painting(self) -> bool:
        return self.state is PaintState.PAINTING

    def begin_paint(self, key: CellKey, update: PendingUpdate) -> None:
        """Start a gesture on a cell and open a new batch holding only that cell.

        Ignored while a gesture is already in progress.
        """
        if self.is_painting:
            log.debug("paint_already_in_progress", key=str(key))
            return

        self._snapshot = copy.deepcopy(self.schedule)
        self._gesture_kind = update.kind
        self.pending = {key: update}
        self.state = PaintState.PAINTING
        self._apply_locally(key, update)

    def continue_paint(self, key: CellKey, update: PendingUpdate) -> None:
        """Stage a cell entered during the gesture. No-op when idle."""
        if not self.is_painting:
            return

        if update.kind is not self._gesture_kind:
            log.warning(
                "paint_kind_mismatch",
                expected=self._gesture_kind.value,
                received=update.kind.value,
            )
            return

        if self.pending.get(key) == update:
            return

        self.pending[key] = update
        self._apply_locally(key, update)

    def end_paint(self) -> FlushResult:
        """End the gesture and flush the batch.

        Also used when the pointer leaves the paintable surface. Returns an
        empty result when no gesture is in progress.
        """
        if not self.is_painting:
            return FlushResult()

        try:
            return self.flush()
        finally:
            self.pending = {}
            self._snapshot = {}
            self._gesture_kind = None
            self.state = PaintState.IDLE

    def flush(self) -> FlushResult:
        """Re-validate staged updates against the pre-gesture snapshot and commit."""
        result = FlushResult(staged=len(self.pending))
        batch: dict[CellKey, dict] = {}

        for key, update in self.pending.items():
            if self.validator.check_update(key, update, self._snapshot, self.activities):
                batch[key] = update.to_partial()
                result.written.append(key)
            else:
                result.dropped.append(key)

        if result.dropped:
            log.warning("paint_updates_dropped", count=len(result.dropped))

        if not batch:
            log.info("paint_batch_empty", staged=result.staged)
            return result

        try:
            self.store.commit_batch(batch)
        except StorageError as exc:
            log.error("paint_batch_failed", documents=len(batch), error=str(exc))
            result.error = f"Failed during batch save: {exc}"
            result.written = []
            return result

        log.info("paint_batch_saved", documents=len(batch))
        return result

    def _apply_locally(self, key: CellKey, update: PendingUpdate) -> None:
        """Optimistically apply an update to the live schedule."""
        if not self.validator.check_update(key, update, self.schedule, self.activities):
            log.warning(
                "paint_update_rejected",
                day=key.day.isoformat(),
                group_id=key.group_id,
                activity=update.value,
                class_status=get_entry(self.schedule, key).class_status.value,
            )
            return

        entry = get_entry(self.schedule, key)
        updated = update.apply_to(entry)
        if updated != entry:
            self.schedule[key] = updated
