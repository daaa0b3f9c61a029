# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sampled trajectories and propagation windows.

A Trajectory is the propagator's output and the tracking resolver's input:
an immutable, strictly time-ordered run of geodetic samples. The window
and config types describe which instants get sampled.

Window policy:
    - reference epoch supplied → one full period starting at the epoch
    - anchored to wall-clock now → past_minutes before to future_minutes after
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import cached_property

import numpy as np

from satellite_tracker.domain.coordinate_frames import geodetic_to_ecef


class PropagationError(RuntimeError):
    """Propagation produced fewer than two usable samples."""


def as_utc(dt: datetime) -> datetime:
    """Same instant in UTC; naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass(frozen=True)
class SatellitePosition:
    """One geodetic sample: degrees, degrees, meters, UTC epoch."""
    longitude: float
    latitude: float
    height: float
    epoch: datetime


@dataclass(frozen=True)
class Trajectory:
    """
    Time-ordered geodetic samples over a bounded window.

    Invariants: at least two samples, epochs strictly increasing.
    """
    samples: tuple[SatellitePosition, ...]

    def __post_init__(self) -> None:
        samples = tuple(self.samples)
        object.__setattr__(self, 'samples', samples)
        if len(samples) < 2:
            raise ValueError(
                f"Trajectory needs at least 2 samples, got {len(samples)}"
            )
        for prev, curr in zip(samples, samples[1:]):
            if as_utc(curr.epoch) <= as_utc(prev.epoch):
                raise ValueError(
                    f"Sample epochs must strictly increase: "
                    f"{curr.epoch.isoformat()} follows {prev.epoch.isoformat()}"
                )

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def start(self) -> datetime:
        return as_utc(self.samples[0].epoch)

    @property
    def end(self) -> datetime:
        return as_utc(self.samples[-1].epoch)

    @property
    def duration_s(self) -> float:
        return (self.end - self.start).total_seconds()

    def contains(self, time: datetime) -> bool:
        return self.start <= as_utc(time) <= self.end

    def clamp(self, time: datetime) -> datetime:
        """Nearest instant inside [start, end]."""
        time = as_utc(time)
        if time < self.start:
            return self.start
        if time > self.end:
            return self.end
        return time

    def offset_s(self, time: datetime) -> float:
        """Seconds from the window start (may fall outside the window)."""
        return (as_utc(time) - self.start).total_seconds()

    @cached_property
    def sample_offsets_s(self) -> np.ndarray:
        """Sample times as seconds from start, shape (N,)."""
        return np.array([self.offset_s(s.epoch) for s in self.samples])

    @cached_property
    def positions_ecef(self) -> np.ndarray:
        """Sample positions in ECEF meters, shape (N, 3)."""
        return np.array([
            geodetic_to_ecef(s.latitude, s.longitude, s.height)
            for s in self.samples
        ])


@dataclass(frozen=True)
class PropagationWindow:
    """Closed time interval [start, end] to sample."""
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, 'start', as_utc(self.start))
        object.__setattr__(self, 'end', as_utc(self.end))
        if self.end <= self.start:
            raise ValueError(
                f"Window end must follow start: {self.start.isoformat()} .. "
                f"{self.end.isoformat()}"
            )

    @classmethod
    def around(
        cls,
        reference: datetime,
        past_minutes: float = 20.0,
        future_minutes: float = 120.0,
    ) -> "PropagationWindow":
        """Window from past_minutes before to future_minutes after reference."""
        reference = as_utc(reference)
        return cls(
            start=reference - timedelta(minutes=past_minutes),
            end=reference + timedelta(minutes=future_minutes),
        )

    @classmethod
    def full_period(
        cls,
        start: datetime,
        period_minutes: float = 90.0,
    ) -> "PropagationWindow":
        """One orbital period starting at start (closed-loop orbit line)."""
        start = as_utc(start)
        return cls(start=start, end=start + timedelta(minutes=period_minutes))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def sample_times(self, steps: int) -> list[datetime]:
        """
        steps evenly spaced instants start + i * duration / steps.

        The spacing is duration / steps, so the last instant sits one
        spacing before end.
        """
        if steps < 2:
            raise ValueError(f"steps must be at least 2, got {steps}")
        spacing_s = self.duration.total_seconds() / steps
        return [self.start + timedelta(seconds=i * spacing_s) for i in range(steps)]


@dataclass(frozen=True)
class PropagationConfig:
    """Defaults for window construction, sampling and refresh cadence."""
    past_minutes: float = 20.0
    future_minutes: float = 120.0
    period_minutes: float = 90.0
    steps: int = 100
    refresh_interval_s: float = 60.0
    lookahead_s: float = 1.0

    def __post_init__(self) -> None:
        if self.steps < 2:
            raise ValueError(f"steps must be at least 2, got {self.steps}")
        if self.past_minutes < 0 or self.future_minutes < 0:
            raise ValueError("past/future minutes must be non-negative")
        if self.past_minutes + self.future_minutes <= 0:
            raise ValueError("past + future minutes must be positive")
        if self.period_minutes <= 0:
            raise ValueError(f"period_minutes must be positive, got {self.period_minutes}")
        if self.refresh_interval_s <= 0:
            raise ValueError(
                f"refresh_interval_s must be positive, got {self.refresh_interval_s}"
            )
        if self.lookahead_s <= 0:
            raise ValueError(f"lookahead_s must be positive, got {self.lookahead_s}")

    def window_for(
        self,
        reference_epoch: datetime | None = None,
        now: datetime | None = None,
    ) -> PropagationWindow:
        """
        Select the propagation window.

        A supplied reference epoch gets one full period from that epoch;
        otherwise the past/future window is anchored to now (wall clock
        when not given).
        """
        if reference_epoch is not None:
            return PropagationWindow.full_period(reference_epoch, self.period_minutes)
        if now is None:
            now = datetime.now(tz=timezone.utc)
        return PropagationWindow.around(now, self.past_minutes, self.future_minutes)
