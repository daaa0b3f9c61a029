# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracking session: the state behind one tracked object.

The session owns the trajectory, the simulated clock, the manual rotation
offset and the single active camera policy. The render loop calls tick()
then frame() once per frame and applies the returned plain data to the
rendering engine.

Separation rules:
    - rotation changes never touch the clock
    - camera policy changes never touch the clock or the rotation
    - a re-propagated trajectory replaces the old one in one assignment,
      and the clock keeps its simulated time (clamped into the new window
      only when it falls outside)
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from satellite_tracker.domain.attitude import Quaternion, RotationOffset, ZERO_OFFSET
from satellite_tracker.domain.camera import (
    DEFAULT_ZOOM_M,
    CameraParams,
    ViewMode,
    camera_params_at,
)
from satellite_tracker.domain.clock import ClockState
from satellite_tracker.domain.coordinate_frames import Vector3
from satellite_tracker.domain.tle import TleRecord
from satellite_tracker.domain.tracking import orientation_at, position_at
from satellite_tracker.domain.trajectory import (
    PropagationConfig,
    Trajectory,
    as_utc,
)
from satellite_tracker.ports import OrbitPropagator

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraPolicy:
    """The one camera behaviour the render loop applies each frame."""
    mode: ViewMode = ViewMode.DEFAULT
    zoom: float = DEFAULT_ZOOM_M

    def __post_init__(self) -> None:
        object.__setattr__(self, 'mode', ViewMode(self.mode))
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")


@dataclass(frozen=True)
class FrameState:
    """Everything the rendering layer needs for one frame."""
    time: datetime
    position: Vector3
    orientation: Quaternion
    camera: CameraParams


class TrackingSession:
    """Mutable session state for a single tracked object."""

    def __init__(
        self,
        trajectory: Trajectory,
        multiplier: float = 1.0,
        config: PropagationConfig | None = None,
        camera: CameraPolicy | None = None,
        now: datetime | None = None,
    ):
        self._config = config or PropagationConfig()
        self._trajectory = trajectory
        self._clock = ClockState.for_trajectory(trajectory, multiplier, now)
        self._rotation = ZERO_OFFSET
        self._camera = camera or CameraPolicy()
        self._last_refresh = as_utc(now) if now is not None else None
        self.animating = True

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def clock(self) -> ClockState:
        return self._clock

    @property
    def rotation(self) -> RotationOffset:
        return self._rotation

    @property
    def camera_policy(self) -> CameraPolicy:
        return self._camera

    @property
    def config(self) -> PropagationConfig:
        return self._config

    # ── clock ─────────────────────────────────────────────────────

    def tick(self, wall_delta_s: float) -> ClockState:
        """Advance simulated time by one frame's wall-clock delta."""
        self._clock = self._clock.tick(wall_delta_s, self.animating)
        return self._clock

    def set_multiplier(self, multiplier: float) -> None:
        self._clock = self._clock.with_multiplier(multiplier)

    # ── rotation ──────────────────────────────────────────────────

    def rotate(self, d_yaw: float = 0.0, d_pitch: float = 0.0, d_roll: float = 0.0) -> RotationOffset:
        self._rotation = self._rotation.rotated(d_yaw, d_pitch, d_roll)
        return self._rotation

    def set_rotation(self, offset: RotationOffset) -> None:
        self._rotation = offset

    def reset_rotation(self) -> None:
        self._rotation = ZERO_OFFSET

    # ── camera ────────────────────────────────────────────────────

    def set_view(self, mode: ViewMode | str, zoom: float | None = None) -> CameraPolicy:
        """Replace the active camera policy; the previous one stops applying."""
        self._camera = CameraPolicy(
            mode=ViewMode(mode),
            zoom=self._camera.zoom if zoom is None else zoom,
        )
        return self._camera

    def set_zoom(self, zoom: float) -> CameraPolicy:
        return self.set_view(self._camera.mode, zoom)

    # ── trajectory ────────────────────────────────────────────────

    def replace_trajectory(self, trajectory: Trajectory) -> None:
        """Swap in a new trajectory; simulated time is preserved or clamped."""
        clock = self._clock.retarget(trajectory.start, trajectory.end)
        if clock.current_time != self._clock.current_time:
            _log.info(
                "Simulated time %s outside new window, clamped to %s",
                self._clock.current_time.isoformat(),
                clock.current_time.isoformat(),
            )
        self._trajectory, self._clock = trajectory, clock

    def refresh_due(self, wall_now: datetime) -> bool:
        if self._last_refresh is None:
            return True
        elapsed = (as_utc(wall_now) - self._last_refresh).total_seconds()
        return elapsed >= self._config.refresh_interval_s

    def refresh(
        self,
        propagator: OrbitPropagator,
        tle: TleRecord,
        wall_now: datetime | None = None,
        reference_epoch: datetime | None = None,
    ) -> Trajectory:
        """
        Re-propagate and swap in the result.

        The attempt time is recorded before propagating, so a failed
        refresh is not retried until refresh_interval_s has passed again.

        Args:
            propagator: Port implementation producing the new trajectory.
            tle: Element set to propagate.
            wall_now: Wall-clock instant anchoring the past/future window.
            reference_epoch: When given, propagate one full period from it.

        Raises:
            PropagationError: The session keeps its current trajectory.
        """
        if wall_now is None:
            wall_now = datetime.now(tz=timezone.utc)
        self._last_refresh = as_utc(wall_now)
        window = self._config.window_for(reference_epoch=reference_epoch, now=wall_now)
        trajectory = propagator.propagate(tle, window, self._config.steps)
        self.replace_trajectory(trajectory)
        return trajectory

    # ── per-frame query ───────────────────────────────────────────

    def frame(self) -> FrameState:
        """Position, orientation and camera at the current simulated time."""
        time = self._clock.current_time
        return FrameState(
            time=time,
            position=position_at(self._trajectory, time),
            orientation=orientation_at(
                self._trajectory, time, self._rotation, self._config.lookahead_s,
            ),
            camera=camera_params_at(
                self._camera.mode,
                self._camera.zoom,
                self._trajectory,
                time,
                self._rotation,
            ),
        )
