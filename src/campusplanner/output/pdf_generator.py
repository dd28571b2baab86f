"""PDF generation for group schedules.

This module creates the printable schedule handed to a group leader:
- One row per day of the stay with class session, activity and notes
- Arrival and departure days marked
- Total credited class hours
"""

from datetime import date, tzinfo
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from campusplanner.domain.models import (
    CellKey,
    ClassStatus,
    Group,
    ScheduleEntry,
    ScheduleMap,
    get_entry,
    is_weekend,
)
from campusplanner.scheduling.stay import compute_stay

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    ClassStatus.MORNING: (0.65, 0.85, 0.95),  # Light blue
    ClassStatus.AFTERNOON: (0.98, 0.85, 0.6),  # Light orange
    ClassStatus.DOUBLE: (0.7, 0.9, 0.7),  # Light green
    ClassStatus.ERROR: (0.95, 0.6, 0.6),  # Red
    "travel": (0.9, 0.9, 0.9),  # Gray
    "weekend": (0.97, 0.97, 0.97),  # Very light gray
}

COLUMNS = [
    ("Date", 0.0),
    ("Day", 0.14),
    ("Class", 0.24),
    ("Activity", 0.40),
    ("Notes", 0.72),
]


class PDFGenerator:
    """Generates a printable PDF schedule for one group.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(group, schedule, "group_schedule.pdf", hours=42)
    """

    def __init__(
        self,
        page_width: float = 612,  # Letter portrait width (8.5")
        page_height: float = 792,  # Letter portrait height (11")
        margin: float = 36,  # 0.5 inch margins
        tz: Optional[tzinfo] = None,
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.tz = tz

    def generate(
        self,
        group: Group,
        schedule: ScheduleMap,
        output_path: Union[str, Path],
        hours: Optional[int] = None,
    ) -> None:
        """Generate the group schedule PDF and save to file.

        Args:
            group: Group to print.
            schedule: Schedule map holding the group's entries.
            output_path: Path to save the PDF.
            hours: Credited class hours shown in the footer, if given.
        """
        try:
            from reportlab.lib.pagesizes import letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        c = canvas.Canvas(str(output_path), pagesize=letter)
        self._draw_pages(c, group, schedule, hours)
        c.save()

    def generate_to_buffer(
        self,
        group: Group,
        schedule: ScheduleMap,
        hours: Optional[int] = None,
    ) -> BytesIO:
        """Generate the group schedule PDF and return it as a bytes buffer."""
        try:
            from reportlab.lib.pagesizes import letter
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=letter)
        self._draw_pages(c, group, schedule, hours)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_pages(
        self,
        c,
        group: Group,
        schedule: ScheduleMap,
        hours: Optional[int],
    ) -> None:
        """Draw the schedule table, paginated."""
        stay = compute_stay(group, self.tz)
        days = stay.stay_days

        row_height = 20
        header_height = 90
        footer_height = 40
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        rows_per_page = max(1, int(usable_height / row_height))
        table_width = self.page_width - 2 * self.margin
        total_pages = max(1, (len(days) + rows_per_page - 1) // rows_per_page)

        for page_index in range(total_pages):
            page_days = days[page_index * rows_per_page : (page_index + 1) * rows_per_page]

            self._draw_header(c, group, stay.arrival_day, stay.departure_day)

            y = self.page_height - self.margin - header_height
            self._draw_column_headers(c, y, table_width)

            for day in page_days:
                y -= row_height
                self._draw_day_row(
                    c,
                    day,
                    get_entry(schedule, CellKey(day, group.id)),
                    day in (stay.arrival_day, stay.departure_day),
                    y,
                    table_width,
                    row_height - 2,
                )

            if not days:
                c.setFont("Helvetica-Oblique", 10)
                c.drawString(self.margin, y - row_height, "No valid stay dates for this group.")

            if hours is not None and page_index == total_pages - 1:
                c.setFont("Helvetica-Bold", 10)
                c.drawString(self.margin, self.margin + 15, f"Total class hours: {hours}")

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_index + 1} of {total_pages}",
            )
            c.showPage()

    def _draw_header(
        self,
        c,
        group: Group,
        arrival_day: Optional[date],
        departure_day: Optional[date],
    ) -> None:
        """Draw page header with group name and stay details."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{group.name} Schedule",
        )

        c.setFont("Helvetica", 10)
        stay_text = "Stay: unknown"
        if arrival_day and departure_day:
            stay_text = (
                f"Stay: {arrival_day.strftime('%a %d %b %Y')} - "
                f"{departure_day.strftime('%a %d %b %Y')}"
            )
        lines = [
            f"Client: {group.client}",
            stay_text,
            f"Students: {group.student_count}   Leaders: {group.leader_count}",
        ]
        y = self.page_height - self.margin - 38
        for line in lines:
            c.drawString(self.margin, y, line)
            y -= 13

    def _draw_column_headers(self, c, y: float, table_width: float) -> None:
        c.setFont("Helvetica-Bold", 10)
        c.setFillColorRGB(0, 0, 0)
        for label, offset in COLUMNS:
            c.drawString(self.margin + offset * table_width + 4, y + 6, label)
        c.setStrokeColorRGB(0.3, 0.3, 0.3)
        c.line(self.margin, y + 2, self.margin + table_width, y + 2)

    def _draw_day_row(
        self,
        c,
        day: date,
        entry: ScheduleEntry,
        is_travel_day: bool,
        y: float,
        table_width: float,
        height: float,
    ) -> None:
        """Draw a single day of the stay."""
        status = entry.class_status
        if is_travel_day:
            background = COLORS["travel"]
        elif is_weekend(day):
            background = COLORS["weekend"]
        else:
            background = None

        if background:
            c.setFillColorRGB(*background)
            c.rect(self.margin, y, table_width, height, fill=1, stroke=0)

        # Class cell colored by status
        class_color = COLORS.get(status)
        if class_color and not is_travel_day:
            class_x = self.margin + COLUMNS[2][1] * table_width
            class_w = (COLUMNS[3][1] - COLUMNS[2][1]) * table_width
            c.setFillColorRGB(*class_color)
            c.rect(class_x, y, class_w, height, fill=1, stroke=0)

        if is_travel_day:
            class_text = "Arrival/Departure"
        elif status is ClassStatus.NONE:
            class_text = ""
        else:
            class_text = status.value

        values = [
            day.strftime("%d/%m/%Y"),
            day.strftime("%A")[:3],
            class_text,
            entry.activity[:40],
            entry.secondary_info[:30],
        ]

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        for (label, offset), value in zip(COLUMNS, values):
            c.drawString(self.margin + offset * table_width + 4, y + height / 2 - 3, value)

        c.setStrokeColorRGB(0.8, 0.8, 0.8)
        c.setLineWidth(0.5)
        c.line(self.margin, y, self.margin + table_width, y)
