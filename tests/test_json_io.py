# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for JSON trajectory I/O."""
import json

import pytest

from satellite_tracker.adapters.json_io import (
    JsonTrajectoryReader,
    JsonTrajectoryWriter,
    trajectory_from_dict,
    trajectory_to_dict,
)
from satellite_tracker.ports import TrajectoryWriter


class TestTrajectoryDocument:

    def test_fields(self, equatorial_trajectory):
        doc = trajectory_to_dict(equatorial_trajectory, name="EQ")
        assert doc["name"] == "EQ"
        assert doc["start"] == "2026-03-20T12:00:00+00:00"
        assert doc["end"] == "2026-03-20T12:19:00+00:00"
        assert len(doc["samples"]) == 20
        assert set(doc["samples"][0]) == {"epoch", "longitude", "latitude", "height"}

    def test_missing_samples_rejected(self):
        with pytest.raises(ValueError, match="Malformed"):
            trajectory_from_dict({"name": "x"})

    def test_missing_field_rejected(self):
        with pytest.raises(ValueError):
            trajectory_from_dict({"samples": [{"epoch": "2026-01-01T00:00:00+00:00"}]})

    def test_document_rebuilds_trajectory(self, equatorial_trajectory):
        rebuilt = trajectory_from_dict(trajectory_to_dict(equatorial_trajectory))
        assert rebuilt == equatorial_trajectory


class TestJsonFiles:

    def test_writer_is_port(self):
        assert isinstance(JsonTrajectoryWriter(), TrajectoryWriter)

    def test_write_and_read(self, equatorial_trajectory, tmp_path):
        path = str(tmp_path / "track.json")
        count = JsonTrajectoryWriter().write_trajectory(equatorial_trajectory, path, name="EQ")
        assert count == 20
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["name"] == "EQ"
        assert JsonTrajectoryReader().read_trajectory(path).samples == equatorial_trajectory.samples
