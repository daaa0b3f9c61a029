# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Camera placement for tracked-object view modes.

Camera parameters follow the heading/pitch/range convention of a camera
orbiting a target in the target's local East-North-Up frame:

    heading — azimuth of the viewing direction, clockwise from north
    pitch   — elevation of the viewing direction (negative looks down)
    range   — distance from the target in meters

so the camera sits at  -range · (sin h cos p, cos h cos p, sin p)  in ENU.

Preset table (degrees):

    mode        heading  pitch  zoom×  follows manual rotation
    default       45     -30    1.0    yes
    front        270       0    1.0    yes
    back          90       0    1.0    yes
    left         180       0    1.0    yes
    right          0       0    1.0    yes
    top            0     -90    1.0    no
    bottom         0      90    0.7    no
    sunView     from Sun vector 1.2    no
    towardsSun  from Sun vector 1.0    no
"""
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import numpy as np

from satellite_tracker.domain.attitude import RotationOffset, ZERO_OFFSET
from satellite_tracker.domain.coordinate_frames import (
    DegenerateGeometryError,
    Vector3,
    enu_basis,
    polar_enu_basis,
    project_onto_basis,
)
from satellite_tracker.domain.ground_station import GroundStation
from satellite_tracker.domain.solar import sun_position_ecef
from satellite_tracker.domain.tracking import position_at
from satellite_tracker.domain.trajectory import Trajectory

# Horizontal component of a unit direction below which it counts as vertical
_VERTICAL_TOLERANCE = 1e-6

_TWO_PI = 2.0 * math.pi


class ViewMode(str, Enum):
    DEFAULT = "default"
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    SUN_VIEW = "sunView"
    TOWARDS_SUN = "towardsSun"

    @property
    def is_sun_relative(self) -> bool:
        return self in (ViewMode.SUN_VIEW, ViewMode.TOWARDS_SUN)


@dataclass(frozen=True)
class ViewPreset:
    heading_deg: float
    pitch_deg: float
    zoom_multiplier: float = 1.0
    follows_rotation: bool = True


VIEW_PRESETS: dict[ViewMode, ViewPreset] = {
    ViewMode.DEFAULT: ViewPreset(45.0, -30.0),
    ViewMode.FRONT: ViewPreset(270.0, 0.0),
    ViewMode.BACK: ViewPreset(90.0, 0.0),
    ViewMode.LEFT: ViewPreset(180.0, 0.0),
    ViewMode.RIGHT: ViewPreset(0.0, 0.0),
    ViewMode.TOP: ViewPreset(0.0, -90.0, follows_rotation=False),
    ViewMode.BOTTOM: ViewPreset(0.0, 90.0, zoom_multiplier=0.7, follows_rotation=False),
}

SUN_ZOOM_MULTIPLIERS: dict[ViewMode, float] = {
    ViewMode.SUN_VIEW: 1.2,
    ViewMode.TOWARDS_SUN: 1.0,
}

DEFAULT_ZOOM_M = 3_000_000.0


@dataclass(frozen=True)
class CameraParams:
    """Heading/pitch in radians, range in meters."""
    heading: float
    pitch: float
    range: float

    @property
    def heading_deg(self) -> float:
        return math.degrees(self.heading)

    @property
    def pitch_deg(self) -> float:
        return math.degrees(self.pitch)


@dataclass(frozen=True)
class CameraDestination:
    """Absolute camera pose: geodetic position plus orientation in radians."""
    longitude: float
    latitude: float
    height: float
    heading: float
    pitch: float
    roll: float = 0.0


def _normalize_heading(heading_rad: float) -> float:
    return heading_rad % _TWO_PI


def heading_pitch_from_enu(direction: Vector3) -> tuple[float, float]:
    """
    Heading and pitch (radians) of a viewing direction given in ENU.

    A direction within tolerance of the local vertical has no defined
    heading; it maps to heading 0 and pitch ±90°.
    """
    v = np.asarray(direction, dtype=float)
    norm = float(np.linalg.norm(v))
    if norm == 0.0:
        return 0.0, 0.0
    e, n, u = (v / norm).tolist()
    horizontal = math.hypot(e, n)
    if horizontal < _VERTICAL_TOLERANCE:
        return 0.0, math.copysign(math.pi / 2.0, u)
    return _normalize_heading(math.atan2(e, n)), math.atan2(u, horizontal)


def camera_params_for_view(
    mode: ViewMode | str,
    zoom: float,
    rotation_offset: RotationOffset = ZERO_OFFSET,
    sun_direction_enu: Vector3 | None = None,
) -> CameraParams:
    """
    Camera heading/pitch/range for a view mode. Pure function.

    Args:
        mode: View mode tag.
        zoom: Base camera distance in meters.
        rotation_offset: Manual rotation; its yaw and pitch are added to
            the heading and pitch of modes that follow rotation.
        sun_direction_enu: Unit direction from the object toward the Sun in
            the object's ENU frame. Required for the sun-relative modes.

    Raises:
        ValueError: On non-positive zoom, unknown mode, or a sun-relative
            mode without sun_direction_enu.
    """
    mode = ViewMode(mode)
    if zoom <= 0:
        raise ValueError(f"zoom must be positive, got {zoom}")

    if mode.is_sun_relative:
        if sun_direction_enu is None:
            raise ValueError(f"view mode {mode.value!r} needs sun_direction_enu")
        sign = -1.0 if mode is ViewMode.SUN_VIEW else 1.0
        look = tuple(sign * c for c in sun_direction_enu)
        heading, pitch = heading_pitch_from_enu(look)
        return CameraParams(heading, pitch, zoom * SUN_ZOOM_MULTIPLIERS[mode])

    preset = VIEW_PRESETS[mode]
    heading_deg = preset.heading_deg
    pitch_deg = preset.pitch_deg
    if preset.follows_rotation:
        heading_deg += rotation_offset.yaw
        pitch_deg += rotation_offset.pitch

    return CameraParams(
        heading=_normalize_heading(math.radians(heading_deg)),
        pitch=math.radians(pitch_deg),
        range=zoom * preset.zoom_multiplier,
    )


def sun_relative_direction(trajectory: Trajectory, time: datetime) -> Vector3:
    """Unit ECEF vector from the tracked object toward the Sun at time."""
    position = np.asarray(position_at(trajectory, time))
    toward_sun = np.asarray(sun_position_ecef(time)) - position
    x, y, z = (toward_sun / np.linalg.norm(toward_sun)).tolist()
    return x, y, z


def sun_direction_enu(trajectory: Trajectory, time: datetime) -> Vector3:
    """
    sun_relative_direction expressed in the object's local ENU frame.

    On the polar axis the fixed polar ENU axes stand in for the
    undefined local frame.
    """
    position = position_at(trajectory, time)
    direction = sun_relative_direction(trajectory, time)
    try:
        basis = enu_basis(position)
    except DegenerateGeometryError:
        basis = polar_enu_basis(position)
    return project_onto_basis(direction, basis)


def camera_params_at(
    mode: ViewMode | str,
    zoom: float,
    trajectory: Trajectory,
    time: datetime,
    rotation_offset: RotationOffset = ZERO_OFFSET,
) -> CameraParams:
    """camera_params_for_view with the Sun direction resolved at time when needed."""
    mode = ViewMode(mode)
    sun = sun_direction_enu(trajectory, time) if mode.is_sun_relative else None
    return camera_params_for_view(mode, zoom, rotation_offset, sun)


def overview_camera(distance_m: float = 2_000_000.0) -> CameraParams:
    """Straight-down view of the tracked object."""
    return CameraParams(heading=0.0, pitch=-math.pi / 2.0, range=distance_m)


def ground_station_camera(
    station: GroundStation,
    altitude_above_m: float = 10_000.0,
) -> CameraDestination:
    """Camera 10 km above a station looking 45° down toward north."""
    return CameraDestination(
        longitude=station.longitude,
        latitude=station.latitude,
        height=station.height + altitude_above_m,
        heading=0.0,
        pitch=math.radians(-45.0),
    )
