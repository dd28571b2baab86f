"""In-memory document store.

Holds the three collections (``groups``, ``activities``, ``dailySchedule``)
as plain dicts of stored documents, the same shape the JSON file store
persists. Used directly by tests and the demo, and as the base of
JsonFileStore.
"""

import copy
from datetime import date
from typing import Iterable, Optional

from pydantic import ValidationError

from campusplanner.domain.models import (
    Activity,
    CellKey,
    Diagnostic,
    DiagnosticKind,
    Group,
    ScheduleEntry,
    ScheduleMap,
)
from campusplanner.errors import CommitError, InvalidKeyError, StorageError
from campusplanner.logging import get_logger
from campusplanner.storage.base import ScheduleStore
from campusplanner.storage.documents import (
    ActivityDocument,
    GroupDocument,
    ScheduleDocument,
    entry_to_partial,
    partial_to_fields,
)
from campusplanner.storage.keys import decode_key, encode_key

log = get_logger(__name__)

GROUPS = "groups"
ACTIVITIES = "activities"
DAILY_SCHEDULE = "dailySchedule"


def empty_collections() -> dict[str, dict[str, dict]]:
    return {GROUPS: {}, ACTIVITIES: {}, DAILY_SCHEDULE: {}}


class InMemoryStore(ScheduleStore):
    """Schedule store backed by in-process dicts.

    Example:
        >>> store = InMemoryStore.from_models(groups, activities)
        >>> store.commit_batch({CellKey(day, "G1"): {"class_status": ClassStatus.MORNING}})
        1
    """

    def __init__(self, collections: Optional[dict[str, dict[str, dict]]] = None):
        self.collections = empty_collections()
        for name, documents in (collections or {}).items():
            self.collections.setdefault(name, {}).update(documents)

    @classmethod
    def from_models(
        cls,
        groups: Iterable[Group] = (),
        activities: Iterable[Activity] = (),
        schedule: Optional[ScheduleMap] = None,
    ) -> "InMemoryStore":
        """Build a store seeded with domain objects."""
        store = cls()
        for group in groups:
            store.put_group(group)
        for activity in activities:
            store.put_activity(activity)
        for key, entry in (schedule or {}).items():
            store.collections[DAILY_SCHEDULE][encode_key(key)] = partial_to_fields(
                key, entry_to_partial(entry)
            )
        return store

    def put_group(self, group: Group) -> None:
        document = GroupDocument.from_group(group)
        self.collections[GROUPS][group.id] = document.model_dump(
            by_alias=True, mode="json", exclude_none=True
        )

    def put_activity(self, activity: Activity) -> None:
        document = ActivityDocument.from_activity(activity)
        self.collections[ACTIVITIES][activity.id] = document.model_dump(
            mode="json", exclude_none=True
        )

    def fetch_groups(self, campus_id: str) -> list[Group]:
        wanted = campus_id.upper()
        groups = []
        for group_id, raw in self.collections[GROUPS].items():
            if str(raw.get("campusId", "")).upper() != wanted:
                continue
            try:
                groups.append(GroupDocument.model_validate(raw).to_group(group_id))
            except ValidationError as exc:
                log.warning("group_document_invalid", group_id=group_id, errors=exc.error_count())
        return groups

    def fetch_activities(self) -> list[Activity]:
        activities = []
        for activity_id, raw in self.collections[ACTIVITIES].items():
            try:
                activities.append(ActivityDocument.model_validate(raw).to_activity(activity_id))
            except ValidationError as exc:
                log.warning(
                    "activity_document_invalid",
                    activity_id=activity_id,
                    errors=exc.error_count(),
                )
        return activities

    def fetch_schedule_entries(
        self,
        group_ids: Iterable[str],
        date_range: Optional[Iterable[date]] = None,
        diagnostics: Optional[list[Diagnostic]] = None,
    ) -> ScheduleMap:
        wanted_groups = set(group_ids)
        wanted_days = set(date_range) if date_range is not None else None

        entries: ScheduleMap = {}
        for raw_key, raw in self.collections[DAILY_SCHEDULE].items():
            try:
                key = decode_key(raw_key)
            except InvalidKeyError as exc:
                log.warning("schedule_key_skipped", key=raw_key, reason=exc.reason)
                if diagnostics is not None:
                    diagnostics.append(
                        Diagnostic(
                            kind=DiagnosticKind.MALFORMED_KEY,
                            message=f"Skipped schedule key: {exc.reason}",
                            key=raw_key,
                        )
                    )
                continue

            if key.group_id not in wanted_groups:
                continue
            if wanted_days is not None and key.day not in wanted_days:
                continue

            try:
                entries[key] = ScheduleDocument.model_validate(raw).to_entry()
            except ValidationError as exc:
                log.warning("schedule_document_invalid", key=raw_key, errors=exc.error_count())
        return entries

    def commit_batch(self, updates: dict[CellKey, dict]) -> int:
        if not updates:
            return 0

        staged = copy.deepcopy(self.collections[DAILY_SCHEDULE])
        for key, partial in updates.items():
            raw_key = encode_key(key)
            document = staged.setdefault(raw_key, {})
            document.update(partial_to_fields(key, partial))

        try:
            self._persist({**self.collections, DAILY_SCHEDULE: staged})
        except StorageError as exc:
            raise CommitError(str(exc), batch_size=len(updates)) from exc

        self.collections[DAILY_SCHEDULE] = staged
        log.debug("batch_committed", documents=len(updates))
        return len(updates)

    def upsert_one(self, key: CellKey, partial: dict) -> None:
        self.commit_batch({key: partial})

    def get_entry(self, key: CellKey) -> Optional[ScheduleEntry]:
        """Stored entry of one cell, or None."""
        raw = self.collections[DAILY_SCHEDULE].get(encode_key(key))
        if raw is None:
            return None
        return ScheduleDocument.model_validate(raw).to_entry()

    def _persist(self, collections: dict[str, dict[str, dict]]) -> None:
        """Make a new state durable. Raise StorageError to abort a commit."""
        pass
