# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulated clock driving trajectory lookups.

ClockState is immutable; every tick returns a new state. The clock loops:
time carried past stop_time re-enters the window from start_time, and
time pushed before start_time (negative multiplier) holds at start_time.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from satellite_tracker.domain.trajectory import Trajectory, as_utc


@dataclass(frozen=True)
class ClockState:
    """Simulated time cursor. Invariant: start_time <= current_time <= stop_time."""
    start_time: datetime
    stop_time: datetime
    current_time: datetime
    multiplier: float = 1.0

    def __post_init__(self) -> None:
        for name in ('start_time', 'stop_time', 'current_time'):
            object.__setattr__(self, name, as_utc(getattr(self, name)))
        if self.stop_time <= self.start_time:
            raise ValueError(
                f"stop_time must follow start_time: {self.start_time.isoformat()} .. "
                f"{self.stop_time.isoformat()}"
            )
        if not self.start_time <= self.current_time <= self.stop_time:
            raise ValueError(
                f"current_time {self.current_time.isoformat()} outside "
                f"[{self.start_time.isoformat()}, {self.stop_time.isoformat()}]"
            )

    @classmethod
    def for_trajectory(
        cls,
        trajectory: Trajectory,
        multiplier: float = 1.0,
        now: datetime | None = None,
    ) -> "ClockState":
        """
        Clock spanning the trajectory window.

        Starts at the sample epoch nearest now when given, else at the
        window start.
        """
        current = trajectory.start
        if now is not None:
            now = as_utc(now)
            current = min(
                (as_utc(s.epoch) for s in trajectory.samples),
                key=lambda epoch: abs((epoch - now).total_seconds()),
            )
        return cls(
            start_time=trajectory.start,
            stop_time=trajectory.end,
            current_time=current,
            multiplier=multiplier,
        )

    @property
    def duration_s(self) -> float:
        return (self.stop_time - self.start_time).total_seconds()

    def tick(self, wall_delta_s: float, animating: bool = True) -> "ClockState":
        """
        Advance by multiplier × wall_delta_s simulated seconds.

        Returns self unchanged while not animating.
        """
        if not animating or wall_delta_s == 0 or self.multiplier == 0:
            return self

        target = self.current_time + timedelta(seconds=self.multiplier * wall_delta_s)
        if target < self.start_time:
            target = self.start_time
        elif target > self.stop_time:
            overshoot = (target - self.stop_time).total_seconds() % self.duration_s
            if overshoot == 0.0:
                overshoot = self.duration_s
            target = self.start_time + timedelta(seconds=overshoot)
        return replace(self, current_time=target)

    def with_multiplier(self, multiplier: float) -> "ClockState":
        return replace(self, multiplier=multiplier)

    def retarget(self, start_time: datetime, stop_time: datetime) -> "ClockState":
        """
        Move the window, keeping current_time.

        A current_time outside the new window is clamped to the nearest
        endpoint.
        """
        start_time = as_utc(start_time)
        stop_time = as_utc(stop_time)
        current = min(max(self.current_time, start_time), stop_time)
        return ClockState(
            start_time=start_time,
            stop_time=stop_time,
            current_time=current,
            multiplier=self.multiplier,
        )
