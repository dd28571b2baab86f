"""Smoke tests for the end-to-end planning flow."""

from datetime import date

import pytest

from campusplanner.cli import create_sample_activities, create_sample_groups
from campusplanner.config import PlannerConfig
from campusplanner.domain.models import CellKey, ClassStatus, PendingUpdate
from campusplanner.planner import CampusPlanner
from campusplanner.storage.json_store import JsonFileStore


class TestSmoke:
    """End-to-end smoke tests against a JSON file store."""

    @pytest.fixture
    def config(self, tmp_path):
        return PlannerConfig(store_path=str(tmp_path / "planner.json"), _env_file=None)

    @pytest.fixture
    def seeded_path(self, config):
        store = JsonFileStore(config.store_path)
        for group in create_sample_groups(8, start=date(2024, 7, 1)):
            store.put_group(group)
        for activity in create_sample_activities():
            store.put_activity(activity)
        store.save()
        return config.store_path

    def _planner(self, path, config):
        planner = CampusPlanner(JsonFileStore(path), config=config)
        assert planner.load("UCD")
        return planner

    def test_full_flow_survives_reload(self, seeded_path, config):
        planner = self._planner(seeded_path, config)
        assert len(planner.groups) == 8

        assert planner.auto_schedule().ok
        assert planner.assign_orientations().ok

        session = planner.paint_session()
        # G1 arrives Monday 2024-07-01 and stays over the weekend
        key = CellKey(date(2024, 7, 6), "G1")
        session.begin_paint(key, PendingUpdate.activity("Glendalough"))
        assert session.end_paint().written == [key]

        reloaded = self._planner(seeded_path, config)
        assert reloaded.schedule == planner.schedule
        assert reloaded.total_hours() == planner.total_hours()

    def test_auto_schedule_respects_capacity(self, seeded_path, config):
        planner = self._planner(seeded_path, config)
        planner.auto_schedule()

        result = planner.validate()
        assert result.is_valid, [str(e) for e in result.errors]

    def test_every_group_gets_orientation(self, seeded_path, config):
        planner = self._planner(seeded_path, config)
        planner.assign_orientations()

        for group in planner.groups:
            activities = [
                entry.activity
                for key, entry in planner.schedule.items()
                if key.group_id == group.id
            ]
            assert "Orientation" in activities

    def test_no_double_from_auto_schedule(self, seeded_path, config):
        planner = self._planner(seeded_path, config)
        planner.auto_schedule()

        assert all(
            entry.class_status is not ClassStatus.DOUBLE
            for entry in planner.schedule.values()
        )
