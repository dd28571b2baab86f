"""Pydantic models for stored documents.

Documents keep the field names used by the document store (camelCase) and
convert to and from the domain dataclasses. Defaults mirror what the
dashboard substitutes for missing fields.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from campusplanner.domain.models import (
    Activity,
    ActivityType,
    CellKey,
    ClassStatus,
    Group,
    ScheduleEntry,
)


class GroupDocument(BaseModel):
    """A group as stored in the ``groups`` collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group_name: Optional[str] = Field(default=None, alias="groupName")
    client: Optional[str] = Field(default=None, alias="Client")
    student_count: Optional[int] = Field(default=None, alias="studentCount")
    leader_count: Optional[int] = Field(default=None, alias="leaderCount")
    arrival_date: Optional[datetime] = Field(default=None, alias="arrivalDate")
    departure_date: Optional[datetime] = Field(default=None, alias="departureDate")
    campus_id: Optional[str] = Field(default=None, alias="campusId")
    arrival_airport: Optional[str] = Field(default=None, alias="arrivalAirport")
    departure_airport: Optional[str] = Field(default=None, alias="departureAirport")
    arrival_flight_number: Optional[str] = Field(default=None, alias="arrivalFlightNumber")
    departure_flight_number: Optional[str] = Field(default=None, alias="departureFlightNumber")
    needs_arrival_transfer: Optional[bool] = Field(default=None, alias="needsArrivalTransfer")
    notes: Optional[str] = None

    def to_group(self, group_id: str) -> Group:
        return Group(
            id=group_id,
            name=self.group_name or "Unnamed Group",
            client=self.client or "Unknown",
            student_count=self.student_count or 0,
            leader_count=self.leader_count or 0,
            arrival=self.arrival_date,
            departure=self.departure_date,
            campus_id=self.campus_id or None,
            arrival_airport=self.arrival_airport or "",
            departure_airport=self.departure_airport or "",
            arrival_flight_number=self.arrival_flight_number or "",
            departure_flight_number=self.departure_flight_number or "",
            needs_arrival_transfer=self.needs_arrival_transfer is True,
            notes=self.notes or "",
        )

    @classmethod
    def from_group(cls, group: Group) -> "GroupDocument":
        return cls(
            group_name=group.name,
            client=group.client,
            student_count=group.student_count,
            leader_count=group.leader_count,
            arrival_date=group.arrival,
            departure_date=group.departure,
            campus_id=group.campus_id,
            arrival_airport=group.arrival_airport,
            departure_airport=group.departure_airport,
            arrival_flight_number=group.arrival_flight_number,
            departure_flight_number=group.departure_flight_number,
            needs_arrival_transfer=group.needs_arrival_transfer,
            notes=group.notes,
        )


class ActivityDocument(BaseModel):
    """An activity as stored in the ``activities`` collection."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None

    def to_activity(self, activity_id: str) -> Activity:
        return Activity(
            id=activity_id,
            name=self.name or "Unnamed Activity",
            type=ActivityType.parse(self.type),
            location=self.location or None,
        )

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityDocument":
        return cls(name=activity.name, location=activity.location, type=activity.type.value)


class ScheduleDocument(BaseModel):
    """A day of one group as stored in the ``dailySchedule`` collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group_id: Optional[str] = Field(default=None, alias="groupId")
    day: Optional[date] = Field(default=None, alias="date")
    class_status: Optional[str] = Field(default=None, alias="classStatus")
    activity: Optional[str] = None
    secondary_info: Optional[str] = Field(default=None, alias="secondaryInfo")

    def to_entry(self) -> ScheduleEntry:
        return ScheduleEntry(
            class_status=ClassStatus.parse(self.class_status),
            activity=self.activity or "",
            secondary_info=self.secondary_info or "",
        )


def partial_to_fields(key: CellKey, partial: dict) -> dict:
    """Stored fields written by a merge update.

    Args:
        key: Target cell.
        partial: Domain-side partial entry, e.g. ``{"class_status": ClassStatus.MORNING}``.

    Returns:
        Store-side fields including ``groupId`` and ``date``.
    """
    fields = {"groupId": key.group_id, "date": key.day.isoformat()}
    if "class_status" in partial:
        fields["classStatus"] = ClassStatus(partial["class_status"]).value
    if "activity" in partial:
        fields["activity"] = partial["activity"]
    if "secondary_info" in partial:
        fields["secondaryInfo"] = partial["secondary_info"]
    return fields


def entry_to_partial(entry: ScheduleEntry) -> dict:
    """Domain-side partial holding every field of an entry."""
    return {
        "class_status": entry.class_status,
        "activity": entry.activity,
        "secondary_info": entry.secondary_info,
    }
