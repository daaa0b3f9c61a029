# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracking resolver: position and orientation of the tracked object.

Stateless per call. The rendering layer queries these every frame with
the current simulated time and the user's rotation offset; nothing here
is cached between calls because the base orientation moves with time.

Orientation model:
    base  = local East-North-Up frame at the interpolated position
            (model kept level in the local horizontal plane, not banked
            along the velocity vector)
    final = base · q(yaw, pitch, roll)
"""
import logging
import math
from datetime import datetime, timedelta

import numpy as np

from satellite_tracker.domain.attitude import Quaternion, RotationOffset
from satellite_tracker.domain.coordinate_frames import (
    DegenerateGeometryError,
    Vector3,
    enu_basis,
)
from satellite_tracker.domain.interpolation import lagrange_interpolate
from satellite_tracker.domain.trajectory import Trajectory

_log = logging.getLogger(__name__)

INTERPOLATION_DEGREE = 3
DEFAULT_LOOKAHEAD_S = 1.0
# Lookahead displacement below which the object counts as stationary
_STATIONARY_TOLERANCE_M = 1e-6


def _looped_offset_s(trajectory: Trajectory, time: datetime) -> float:
    offset = trajectory.offset_s(time)
    duration = trajectory.duration_s
    if 0.0 <= offset <= duration:
        return offset
    return offset % duration


def position_at(trajectory: Trajectory, time: datetime) -> Vector3:
    """
    Interpolated ECEF position (meters) at an arbitrary time.

    Degree-3 Lagrange interpolation over the four samples around time.
    Times outside the window are looped back into it.
    """
    value = lagrange_interpolate(
        trajectory.sample_offsets_s,
        trajectory.positions_ecef,
        _looped_offset_s(trajectory, time),
        degree=INTERPOLATION_DEGREE,
    )
    return float(value[0]), float(value[1]), float(value[2])


def facing_orientation_at(
    trajectory: Trajectory,
    time: datetime,
    lookahead_s: float = DEFAULT_LOOKAHEAD_S,
) -> Quaternion:
    """
    Base orientation: the local ENU frame at the current position.

    Returns the identity quaternion when the object does not move over
    the lookahead interval or sits on the polar axis where east is
    undefined.
    """
    current = position_at(trajectory, time)
    ahead = position_at(trajectory, time + timedelta(seconds=lookahead_s))
    if math.dist(current, ahead) < _STATIONARY_TOLERANCE_M:
        _log.debug("Stationary over %.3f s lookahead at %s", lookahead_s, time)
        return Quaternion.identity()

    try:
        east, north, up = enu_basis(current)
    except DegenerateGeometryError as e:
        _log.debug("Identity orientation at %s: %s", time, e)
        return Quaternion.identity()

    q = Quaternion.from_rotation_matrix(np.column_stack([east, north, up]))
    if not q.is_finite():
        return Quaternion.identity()
    return q


def compose_with_manual_offset(base: Quaternion, offset: RotationOffset) -> Quaternion:
    """Right-multiply base by the offset so rotation is relative to the flight frame."""
    return base.multiply(offset.to_quaternion())


def orientation_at(
    trajectory: Trajectory,
    time: datetime,
    offset: RotationOffset,
    lookahead_s: float = DEFAULT_LOOKAHEAD_S,
) -> Quaternion:
    """Facing orientation at time with the manual offset applied."""
    return compose_with_manual_offset(
        facing_orientation_at(trajectory, time, lookahead_s), offset,
    )
