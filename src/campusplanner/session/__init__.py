"""Interactive editing sessions."""

from campusplanner.session.paint import FlushResult, PaintSession, PaintState

__all__ = [
    "FlushResult",
    "PaintSession",
    "PaintState",
]
