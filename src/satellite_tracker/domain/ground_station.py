# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground stations and topocentric contact geometry.

A station sees the tracked object when the object lies inside the
station's communication cone (off-zenith angle within cone_angle_deg)
and within communication_range_km of slant range.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from satellite_tracker.domain.coordinate_frames import (
    Vector3,
    ecef_to_enu_vector,
    geodetic_to_ecef,
)
from satellite_tracker.domain.tracking import position_at
from satellite_tracker.domain.trajectory import Trajectory


@dataclass(frozen=True)
class GroundStation:
    """A ground station with its communication cone."""
    name: str
    latitude: float
    longitude: float
    height: float = 0.0
    communication_range_km: float = 1000.0
    cone_angle_deg: float = 45.0
    color: str = "#FF4500"
    id: str | None = None

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range [-90, 90]: {self.latitude}")
        if self.communication_range_km <= 0:
            raise ValueError(
                f"communication_range_km must be positive, got {self.communication_range_km}"
            )
        if not 0.0 < self.cone_angle_deg <= 90.0:
            raise ValueError(f"cone_angle_deg must be in (0, 90], got {self.cone_angle_deg}")

    @property
    def key(self) -> str:
        """Stable identifier: id when set, else name."""
        return self.id or self.name

    def position_ecef(self) -> Vector3:
        return geodetic_to_ecef(self.latitude, self.longitude, self.height)


DEFAULT_GROUND_STATIONS: tuple[GroundStation, ...] = (
    GroundStation(
        id="daejeon",
        name="Daejeon Ground Station",
        latitude=36.3504,
        longitude=127.3845,
        height=100.0,
        communication_range_km=2000.0,
        cone_angle_deg=45.0,
        color="#4CAF50",
    ),
)


@dataclass(frozen=True)
class Observation:
    """Topocentric observation: azimuth, elevation, slant range."""
    azimuth_deg: float
    elevation_deg: float
    slant_range_m: float


def compute_observation(station: GroundStation, target_ecef: Vector3) -> Observation:
    """
    Compute topocentric azimuth, elevation, and slant range.

    Args:
        station: Ground station with geodetic coordinates.
        target_ecef: Target ECEF position (x, y, z) in meters.

    Returns:
        Observation with azimuth [0, 360), elevation [-90, 90],
        and slant range in meters.
    """
    station_ecef = station.position_ecef()
    range_ecef = (
        target_ecef[0] - station_ecef[0],
        target_ecef[1] - station_ecef[1],
        target_ecef[2] - station_ecef[2],
    )
    e, n, u = ecef_to_enu_vector(range_ecef, station_ecef)

    slant_range = math.sqrt(e**2 + n**2 + u**2)
    horizontal = math.sqrt(e**2 + n**2)

    return Observation(
        azimuth_deg=math.degrees(math.atan2(e, n)) % 360.0,
        elevation_deg=math.degrees(math.atan2(u, horizontal)),
        slant_range_m=slant_range,
    )


def in_contact(station: GroundStation, target_ecef: Vector3) -> bool:
    """True when target is inside the station's cone and range."""
    obs = compute_observation(station, target_ecef)
    off_zenith_deg = 90.0 - obs.elevation_deg
    return (
        off_zenith_deg <= station.cone_angle_deg
        and obs.slant_range_m <= station.communication_range_km * 1000.0
    )


def contact_windows(
    station: GroundStation,
    trajectory: Trajectory,
    step_s: float = 10.0,
) -> list[tuple[datetime, datetime]]:
    """
    Intervals within the trajectory window during which station is in contact.

    Contact is evaluated every step_s seconds on the interpolated
    trajectory; window edges are accurate to one step.
    """
    if step_s <= 0:
        raise ValueError(f"step_s must be positive, got {step_s}")

    windows: list[tuple[datetime, datetime]] = []
    opened: datetime | None = None
    last_time = trajectory.start
    elapsed = 0.0
    while elapsed <= trajectory.duration_s + 1e-9:
        t = trajectory.start + timedelta(seconds=elapsed)
        visible = in_contact(station, position_at(trajectory, t))
        if visible and opened is None:
            opened = t
        elif not visible and opened is not None:
            windows.append((opened, last_time))
            opened = None
        last_time = t
        elapsed += step_s

    if opened is not None:
        windows.append((opened, last_time))
    return windows
