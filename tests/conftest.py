"""Shared fixtures.

Dates used throughout the tests: 2024-07-01 is a Monday (ISO week 27) and
2024-07-06 is a Saturday.
"""

from datetime import date, datetime, time

import pytest

from campusplanner.config import reset_config
from campusplanner.domain.models import Activity, ActivityType, Group


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test reads configuration from scratch."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_group():
    """Factory for groups arriving in the afternoon and leaving in the morning."""

    def _make(
        group_id: str,
        arrival: date,
        departure: date,
        students: int = 20,
        campus_id: str = "UCD",
    ) -> Group:
        return Group(
            id=group_id,
            name=f"Group {group_id}",
            student_count=students,
            arrival=datetime.combine(arrival, time(15, 0)),
            departure=datetime.combine(departure, time(9, 0)),
            campus_id=campus_id,
        )

    return _make


@pytest.fixture
def activities():
    return [
        Activity(id="a1", name="Orientation", type=ActivityType.HALF_DAY),
        Activity(id="a2", name="City Tour", type=ActivityType.HALF_DAY),
        Activity(id="a3", name="Glendalough", type=ActivityType.FULL_DAY),
    ]
