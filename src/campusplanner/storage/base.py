"""Storage contract between the planner core and a document store.

The core only needs five operations: read groups of a campus, read the
activity list, read the schedule entries of some groups, and merge-write
schedule entries either one at a time or as an atomic batch.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from campusplanner.domain.models import Activity, CellKey, Diagnostic, Group, ScheduleMap


class ScheduleStore(ABC):
    """Abstract base class for schedule storage backends."""

    @abstractmethod
    def fetch_groups(self, campus_id: str) -> list[Group]:
        """Groups affiliated with a campus (case-insensitive match)."""
        pass

    @abstractmethod
    def fetch_activities(self) -> list[Activity]:
        """All known activities."""
        pass

    @abstractmethod
    def fetch_schedule_entries(
        self,
        group_ids: Iterable[str],
        date_range: Optional[Iterable[date]] = None,
        diagnostics: Optional[list[Diagnostic]] = None,
    ) -> ScheduleMap:
        """Stored schedule entries for some groups.

        Args:
            group_ids: Groups to read.
            date_range: Days to keep. None keeps every stored day.
            diagnostics: List that receives a diagnostic per malformed key.

        Returns:
            Entries keyed by cell. Days without a stored document are absent.
        """
        pass

    @abstractmethod
    def commit_batch(self, updates: dict[CellKey, dict]) -> int:
        """Atomically merge partial entries into the store.

        Fields absent from a partial are preserved on the stored document.

        Args:
            updates: Domain-side partial entries keyed by cell.

        Returns:
            Number of documents written.

        Raises:
            CommitError: If the batch could not be written. Nothing is written then.
        """
        pass

    @abstractmethod
    def upsert_one(self, key: CellKey, partial: dict) -> None:
        """Merge a single partial entry into the store.

        Raises:
            StorageError: If the write failed.
        """
        pass
