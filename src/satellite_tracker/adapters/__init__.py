# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for propagation and trajectory export.

Third-party and I/O dependencies (sgp4, json, file I/O) are confined to
this layer.
"""
from satellite_tracker.adapters.sgp4_propagator import (
    Sgp4Propagator,
    build_satrec,
    propagate_orbit,
)
from satellite_tracker.adapters.json_io import (
    JsonTrajectoryReader,
    JsonTrajectoryWriter,
    trajectory_from_dict,
    trajectory_to_dict,
)
from satellite_tracker.adapters.czml_exporter import (
    ground_station_packets,
    trajectory_packets,
    write_czml,
)

__all__ = [
    "Sgp4Propagator",
    "build_satrec",
    "propagate_orbit",
    "JsonTrajectoryReader",
    "JsonTrajectoryWriter",
    "trajectory_from_dict",
    "trajectory_to_dict",
    "ground_station_packets",
    "trajectory_packets",
    "write_czml",
]
