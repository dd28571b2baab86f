"""Text grid output for schedules.

Renders the (date x group) schedule as a fixed-width table, one row per
day and one column per group, with a total-hours footer. Used by the CLI
to inspect a campus without a front end.
"""

from datetime import date, tzinfo
from pathlib import Path
from typing import Optional, Union

from campusplanner.domain.models import (
    CellKey,
    ClassStatus,
    Group,
    ScheduleMap,
    StayWindow,
    get_entry,
)
from campusplanner.scheduling.stay import compute_stays

STATUS_CODES = {
    ClassStatus.MORNING: "AM",
    ClassStatus.AFTERNOON: "PM",
    ClassStatus.DOUBLE: "DBL",
    ClassStatus.ERROR: "ERR",
    ClassStatus.NONE: "",
}


class GridGenerator:
    """Generates a text grid of a campus schedule."""

    def __init__(self, cell_width: int = 16, tz: Optional[tzinfo] = None):
        self.cell_width = cell_width
        self.tz = tz

    def generate(
        self,
        groups: list[Group],
        date_range: list[date],
        schedule: ScheduleMap,
        output_path: Union[str, Path],
        hours: Optional[dict[str, int]] = None,
    ) -> str:
        """Generate the grid and save to file. Returns the text."""
        content = self.generate_to_string(groups, date_range, schedule, hours)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(
        self,
        groups: list[Group],
        date_range: list[date],
        schedule: ScheduleMap,
        hours: Optional[dict[str, int]] = None,
    ) -> str:
        """Generate the grid and return it as a string."""
        stays = compute_stays(groups, self.tz)
        lines = []

        header = [self._pad("Date", 12)] + [self._pad(g.name) for g in groups]
        lines.append(" | ".join(header))
        lines.append("-" * len(lines[0]))

        for day in date_range:
            row = [self._pad(day.strftime("%a %d/%m"), 12)]
            for group in groups:
                row.append(self._pad(self.cell_text(stays[group.id], day, schedule)))
            lines.append(" | ".join(row))

        if hours is not None:
            lines.append("-" * len(lines[0]))
            footer = [self._pad("Hours", 12)] + [
                self._pad(str(hours.get(g.id, 0))) for g in groups
            ]
            lines.append(" | ".join(footer))

        return "\n".join(lines) + "\n"

    def cell_text(self, stay: StayWindow, day: date, schedule: ScheduleMap) -> str:
        """Text of one cell: travel/outside markers, or status and activity."""
        if not stay.contains(day):
            return "--"
        if day == stay.arrival_day:
            return "Arr"
        if day == stay.departure_day:
            return "Dep"

        entry = get_entry(schedule, CellKey(day, stay.group_id))
        parts = [STATUS_CODES[entry.class_status], entry.activity]
        return " ".join(part for part in parts if part)

    def _pad(self, text: str, width: Optional[int] = None) -> str:
        width = width or self.cell_width
        return text[:width].ljust(width)
