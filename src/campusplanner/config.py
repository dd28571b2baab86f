"""Planner configuration loaded from environment variables.

Every field can be overridden with a ``CAMPUS_PLANNER_`` prefixed variable,
e.g. ``CAMPUS_PLANNER_CAPACITY_RATIO=0.55``. A ``.env`` file in the working
directory is read as well.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class PlannerConfig(BaseSettings):
    """Settings for scheduling rules, storage and logging."""

    # Storage
    store_path: str = Field(
        default="data/planner.json",
        description="Path of the JSON document store",
    )
    campus_ids: list[str] = Field(
        default_factory=lambda: ["UCD", "ATU", "DCU"],
        description="Campuses that can be scheduled",
    )
    timezone: str = Field(
        default="Europe/Dublin",
        description="Zone used to normalise arrival/departure instants to days",
    )

    # Scheduling rules
    capacity_ratio: float = Field(
        default=0.6,
        description="Share of the day's students a single session may hold",
    )
    session_hours: int = Field(
        default=3,
        description="Credited hours for a Morning or Afternoon class",
    )
    double_session_hours: int = Field(
        default=6,
        description="Credited hours for a Double class",
    )
    orientation_activity: str = Field(
        default="Orientation",
        description="Activity written on each group's first weekday",
    )
    range_padding_days: int = Field(
        default=7,
        description="Days shown before the earliest arrival and after the latest departure",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "CAMPUS_PLANNER_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("capacity_ratio")
    @classmethod
    def _ratio_in_range(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("capacity_ratio must be in (0, 1]")
        return value

    @field_validator("campus_ids")
    @classmethod
    def _upper_campus_ids(cls, value: list[str]) -> list[str]:
        return [campus.upper() for campus in value]


_config: Optional[PlannerConfig] = None


def get_config() -> PlannerConfig:
    """Get the planner configuration singleton."""
    global _config
    if _config is None:
        _config = PlannerConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads it."""
    global _config
    _config = None
