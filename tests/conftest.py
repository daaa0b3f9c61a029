# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Shared fixtures: reference TLEs and synthetic trajectories."""
from datetime import datetime, timedelta, timezone

import pytest

from satellite_tracker.domain.tle import ISS_REFERENCE_TLE, parse_tle
from satellite_tracker.domain.trajectory import SatellitePosition, Trajectory

# Second ISS element set with valid checksums, 2023-09-16
ISS_2023_LINES = (
    "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995",
    "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598",
)

# Equatorial circular orbit at 400 km: ~92.6 min period
_EQUATORIAL_DEG_PER_S = 360.0 / (92.56 * 60.0)


@pytest.fixture
def epoch():
    return datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def iss_lines():
    return ISS_REFERENCE_TLE


@pytest.fixture
def iss_tle():
    return parse_tle(*ISS_REFERENCE_TLE, name="ISS (ZARYA)")


@pytest.fixture
def make_trajectory(epoch):
    """Factory: trajectory from (lat, lon, height) tuples spaced step_s apart."""

    def _make(points, step_s=60.0, start=None):
        start = start or epoch
        return Trajectory(tuple(
            SatellitePosition(
                longitude=lon,
                latitude=lat,
                height=height,
                epoch=start + timedelta(seconds=i * step_s),
            )
            for i, (lat, lon, height) in enumerate(points)
        ))

    return _make


@pytest.fixture
def equatorial_trajectory(make_trajectory):
    """20 samples, one minute apart, eastbound along the equator at 400 km."""
    points = [
        (0.0, -30.0 + i * 60.0 * _EQUATORIAL_DEG_PER_S, 400_000.0)
        for i in range(20)
    ]
    return make_trajectory(points)


@pytest.fixture
def polar_trajectory(make_trajectory):
    """Northbound along the prime meridian, sample 5 exactly over the pole."""
    points = [(80.0 + 2.0 * i, 0.0, 400_000.0) for i in range(6)]
    return make_trajectory(points)


@pytest.fixture
def stationary_trajectory(make_trajectory):
    return make_trajectory([(10.0, 20.0, 35_786_000.0)] * 5)
