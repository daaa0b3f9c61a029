"""
Satellite Tracker

Propagate a Two-Line Element set with SGP4 into a sampled geodetic
trajectory and resolve, for any simulated time, the tracked object's
interpolated position, its facing orientation with a manual yaw/pitch/roll
offset, and camera placement for preset and Sun-relative view modes.
Includes a looping simulation clock, a tracking session with atomic
trajectory refresh, ground-station contact geometry, and CZML/JSON export.
"""

from satellite_tracker.domain.orbital_mechanics import (
    OrbitalConstants,
    period_minutes_from_mean_motion,
)
from satellite_tracker.domain.tle import (
    ISS_REFERENCE_TLE,
    ParseError,
    TleRecord,
    parse_tle,
    tle_checksum,
)
from satellite_tracker.domain.coordinate_frames import (
    DegenerateGeometryError,
    gmst_rad,
    eci_to_ecef,
    ecef_to_geodetic,
    geodetic_to_ecef,
    enu_basis,
)
from satellite_tracker.domain.trajectory import (
    PropagationConfig,
    PropagationError,
    PropagationWindow,
    SatellitePosition,
    Trajectory,
)
from satellite_tracker.domain.interpolation import lagrange_interpolate
from satellite_tracker.domain.attitude import (
    IDENTITY,
    ZERO_OFFSET,
    Quaternion,
    RotationOffset,
)
from satellite_tracker.domain.tracking import (
    compose_with_manual_offset,
    facing_orientation_at,
    orientation_at,
    position_at,
)
from satellite_tracker.domain.solar import (
    SunPosition,
    sun_position_ecef,
    sun_position_eci,
)
from satellite_tracker.domain.camera import (
    CameraDestination,
    CameraParams,
    ViewMode,
    camera_params_at,
    camera_params_for_view,
    ground_station_camera,
    overview_camera,
    sun_direction_enu,
    sun_relative_direction,
)
from satellite_tracker.domain.clock import ClockState
from satellite_tracker.domain.ground_station import (
    DEFAULT_GROUND_STATIONS,
    GroundStation,
    Observation,
    compute_observation,
    contact_windows,
    in_contact,
)
from satellite_tracker.domain.session import (
    CameraPolicy,
    FrameState,
    TrackingSession,
)
from satellite_tracker.ports import OrbitPropagator, TrajectoryWriter

__all__ = [
    "OrbitalConstants",
    "period_minutes_from_mean_motion",
    "ISS_REFERENCE_TLE",
    "ParseError",
    "TleRecord",
    "parse_tle",
    "tle_checksum",
    "DegenerateGeometryError",
    "gmst_rad",
    "eci_to_ecef",
    "ecef_to_geodetic",
    "geodetic_to_ecef",
    "enu_basis",
    "PropagationConfig",
    "PropagationError",
    "PropagationWindow",
    "SatellitePosition",
    "Trajectory",
    "lagrange_interpolate",
    "IDENTITY",
    "ZERO_OFFSET",
    "Quaternion",
    "RotationOffset",
    "compose_with_manual_offset",
    "facing_orientation_at",
    "orientation_at",
    "position_at",
    "SunPosition",
    "sun_position_ecef",
    "sun_position_eci",
    "CameraDestination",
    "CameraParams",
    "ViewMode",
    "camera_params_at",
    "camera_params_for_view",
    "ground_station_camera",
    "overview_camera",
    "sun_direction_enu",
    "sun_relative_direction",
    "ClockState",
    "DEFAULT_GROUND_STATIONS",
    "GroundStation",
    "Observation",
    "compute_observation",
    "contact_windows",
    "in_contact",
    "CameraPolicy",
    "FrameState",
    "TrackingSession",
    "OrbitPropagator",
    "TrajectoryWriter",
]
