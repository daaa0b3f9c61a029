# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON trajectory file I/O adapter.

Writes and reads the sampled geodetic trajectory as plain JSON:

    {"name": ..., "start": ISO, "end": ISO,
     "samples": [{"epoch": ISO, "longitude": deg, "latitude": deg,
                  "height": m}, ...]}
"""
import json
from datetime import datetime
from typing import Any

from satellite_tracker.domain.trajectory import SatellitePosition, Trajectory
from satellite_tracker.ports import TrajectoryWriter


def trajectory_to_dict(trajectory: Trajectory, name: str = "") -> dict[str, Any]:
    return {
        "name": name,
        "start": trajectory.start.isoformat(),
        "end": trajectory.end.isoformat(),
        "samples": [
            {
                "epoch": s.epoch.isoformat(),
                "longitude": s.longitude,
                "latitude": s.latitude,
                "height": s.height,
            }
            for s in trajectory.samples
        ],
    }


def trajectory_from_dict(data: dict[str, Any]) -> Trajectory:
    """Inverse of trajectory_to_dict. Raises ValueError on missing fields."""
    try:
        raw_samples = data['samples']
        samples = [
            SatellitePosition(
                longitude=float(s['longitude']),
                latitude=float(s['latitude']),
                height=float(s['height']),
                epoch=datetime.fromisoformat(s['epoch']),
            )
            for s in raw_samples
        ]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed trajectory document: {e}") from e
    return Trajectory(samples)


class JsonTrajectoryWriter(TrajectoryWriter):
    """Writes trajectories to JSON files."""

    def write_trajectory(self, trajectory: Trajectory, path: str, name: str = "") -> int:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(trajectory_to_dict(trajectory, name), f, indent=2, ensure_ascii=False)
        return len(trajectory)


class JsonTrajectoryReader:
    """Reads trajectories written by JsonTrajectoryWriter."""

    def read_trajectory(self, path: str) -> Trajectory:
        with open(path, encoding='utf-8') as f:
            return trajectory_from_dict(json.load(f))
