# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for ground stations and contact geometry."""
from datetime import timedelta

import pytest

from satellite_tracker.domain.coordinate_frames import geodetic_to_ecef
from satellite_tracker.domain.ground_station import (
    DEFAULT_GROUND_STATIONS,
    GroundStation,
    Observation,
    compute_observation,
    contact_windows,
    in_contact,
)


@pytest.fixture
def equator_station():
    return GroundStation(
        name="Equator", latitude=0.0, longitude=0.0,
        communication_range_km=2000.0, cone_angle_deg=45.0,
    )


class TestGroundStation:

    def test_default_station(self):
        station, = DEFAULT_GROUND_STATIONS
        assert station.id == "daejeon"
        assert station.name == "Daejeon Ground Station"
        assert station.latitude == pytest.approx(36.3504)
        assert station.longitude == pytest.approx(127.3845)
        assert station.communication_range_km == 2000.0
        assert station.cone_angle_deg == 45.0

    def test_key_prefers_id(self):
        assert DEFAULT_GROUND_STATIONS[0].key == "daejeon"
        assert GroundStation(name="Svalbard", latitude=78.2, longitude=15.4).key == "Svalbard"

    def test_defaults(self):
        station = GroundStation(name="X", latitude=0.0, longitude=0.0)
        assert station.communication_range_km == 1000.0
        assert station.cone_angle_deg == 45.0

    @pytest.mark.parametrize("kwargs", [
        {"latitude": 91.0},
        {"communication_range_km": 0.0},
        {"cone_angle_deg": 0.0},
        {"cone_angle_deg": 95.0},
    ])
    def test_validation(self, kwargs):
        params = {"name": "X", "latitude": 0.0, "longitude": 0.0}
        params.update(kwargs)
        with pytest.raises(ValueError):
            GroundStation(**params)

    def test_position_ecef(self, equator_station):
        assert equator_station.position_ecef() == pytest.approx(geodetic_to_ecef(0.0, 0.0, 0.0))


class TestObservation:

    def test_overhead(self, equator_station):
        obs = compute_observation(equator_station, geodetic_to_ecef(0.0, 0.0, 400_000.0))
        assert isinstance(obs, Observation)
        assert obs.elevation_deg == pytest.approx(90.0, abs=1e-6)
        assert obs.slant_range_m == pytest.approx(400_000.0, abs=1e-3)

    def test_north_azimuth(self, equator_station):
        obs = compute_observation(equator_station, geodetic_to_ecef(5.0, 0.0, 400_000.0))
        assert obs.azimuth_deg == pytest.approx(0.0, abs=1e-6)

    def test_east_azimuth(self, equator_station):
        obs = compute_observation(equator_station, geodetic_to_ecef(0.0, 5.0, 400_000.0))
        assert obs.azimuth_deg == pytest.approx(90.0, abs=1e-6)
        assert 0.0 < obs.elevation_deg < 90.0

    def test_azimuth_range(self, equator_station):
        obs = compute_observation(equator_station, geodetic_to_ecef(-3.0, -3.0, 400_000.0))
        assert 0.0 <= obs.azimuth_deg < 360.0
        assert 180.0 < obs.azimuth_deg < 270.0


class TestContact:

    def test_overhead_in_contact(self, equator_station):
        assert in_contact(equator_station, geodetic_to_ecef(0.0, 0.0, 400_000.0))

    def test_outside_cone(self, equator_station):
        # 10° away at 400 km sits well below 45° elevation
        target = geodetic_to_ecef(0.0, 10.0, 400_000.0)
        assert compute_observation(equator_station, target).elevation_deg < 45.0
        assert not in_contact(equator_station, target)

    def test_outside_range(self):
        station = GroundStation(
            name="Short", latitude=0.0, longitude=0.0,
            communication_range_km=300.0, cone_angle_deg=90.0,
        )
        assert not in_contact(station, geodetic_to_ecef(0.0, 0.0, 400_000.0))

    def test_contact_windows_over_pass(self, equator_station, equatorial_trajectory):
        # Eastbound equatorial pass from -30° longitude crosses the station at 0°
        windows = contact_windows(equator_station, equatorial_trajectory, step_s=10.0)
        assert len(windows) == 1
        start, end = windows[0]
        assert start < end
        mid = start + (end - start) / 2
        assert equatorial_trajectory.start <= mid <= equatorial_trajectory.end
        # Pass is symmetric about the crossing of the station meridian
        crossing_s = 30.0 / (360.0 / (92.56 * 60.0))
        crossing = equatorial_trajectory.start + timedelta(seconds=crossing_s)
        assert abs((mid - crossing).total_seconds()) <= 10.0

    def test_no_contact_far_away(self, equatorial_trajectory):
        station = GroundStation(name="Pole", latitude=89.0, longitude=0.0)
        assert contact_windows(station, equatorial_trajectory) == []

    def test_step_must_be_positive(self, equator_station, equatorial_trajectory):
        with pytest.raises(ValueError):
            contact_windows(equator_station, equatorial_trajectory, step_s=0.0)
