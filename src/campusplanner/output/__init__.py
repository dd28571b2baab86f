"""Output generation for schedules (PDF, text grid)."""

from campusplanner.output.grid_generator import GridGenerator
from campusplanner.output.pdf_generator import PDFGenerator

__all__ = [
    "GridGenerator",
    "PDFGenerator",
]
