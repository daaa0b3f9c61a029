# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the looping simulation clock."""
from datetime import timedelta

import pytest

from satellite_tracker.domain.clock import ClockState


@pytest.fixture
def clock(epoch):
    """100 s window, current time at the start."""
    return ClockState(
        start_time=epoch,
        stop_time=epoch + timedelta(seconds=100),
        current_time=epoch,
    )


class TestClockValidation:

    def test_stop_must_follow_start(self, epoch):
        with pytest.raises(ValueError):
            ClockState(start_time=epoch, stop_time=epoch, current_time=epoch)

    def test_current_inside_window(self, epoch):
        with pytest.raises(ValueError, match="outside"):
            ClockState(
                start_time=epoch,
                stop_time=epoch + timedelta(seconds=10),
                current_time=epoch + timedelta(seconds=11),
            )

    def test_duration(self, clock):
        assert clock.duration_s == 100.0


class TestTick:

    def test_advances_by_multiplier(self, clock, epoch):
        ticked = clock.with_multiplier(10.0).tick(2.5)
        assert ticked.current_time == epoch + timedelta(seconds=25)

    def test_returns_new_state(self, clock):
        ticked = clock.tick(1.0)
        assert ticked is not clock
        assert clock.current_time == clock.start_time

    def test_not_animating_freezes(self, clock):
        assert clock.tick(50.0, animating=False) is clock

    def test_zero_multiplier_freezes(self, clock):
        assert clock.with_multiplier(0.0).tick(5.0).current_time == clock.current_time

    def test_reaching_stop_exactly_stays_at_stop(self, clock, epoch):
        assert clock.tick(100.0).current_time == epoch + timedelta(seconds=100)

    def test_overshoot_loops_from_start(self, clock, epoch):
        """Loop carries the overshoot: 90 s + 30 s over a 100 s window lands at 20 s."""
        at_90 = clock.tick(90.0)
        assert at_90.tick(30.0).current_time == epoch + timedelta(seconds=20)

    def test_overshoot_several_windows(self, clock, epoch):
        assert clock.tick(350.0).current_time == epoch + timedelta(seconds=50)

    def test_whole_window_overshoot_lands_on_stop(self, clock, epoch):
        at_stop = clock.tick(100.0)
        assert at_stop.tick(100.0).current_time == epoch + timedelta(seconds=100)

    def test_undershoot_clamps_to_start(self, clock, epoch):
        mid = clock.tick(40.0)
        assert mid.with_multiplier(-1.0).tick(60.0).current_time == epoch

    def test_reverse_within_window(self, clock, epoch):
        mid = clock.tick(40.0)
        assert mid.with_multiplier(-2.0).tick(5.0).current_time == epoch + timedelta(seconds=30)

    def test_always_inside_window(self, clock):
        state = clock.with_multiplier(7.3)
        for _ in range(200):
            state = state.tick(1.7)
            assert state.start_time <= state.current_time <= state.stop_time


class TestRetarget:

    def test_preserves_time_inside_new_window(self, clock, epoch):
        mid = clock.tick(40.0)
        moved = mid.retarget(epoch + timedelta(seconds=10), epoch + timedelta(seconds=500))
        assert moved.current_time == mid.current_time
        assert moved.stop_time == epoch + timedelta(seconds=500)

    def test_clamps_before_new_window(self, clock, epoch):
        moved = clock.retarget(epoch + timedelta(hours=1), epoch + timedelta(hours=2))
        assert moved.current_time == epoch + timedelta(hours=1)

    def test_clamps_after_new_window(self, clock, epoch):
        late = clock.tick(90.0)
        moved = late.retarget(epoch - timedelta(hours=2), epoch - timedelta(hours=1))
        assert moved.current_time == epoch - timedelta(hours=1)

    def test_keeps_multiplier(self, clock, epoch):
        moved = clock.with_multiplier(60.0).retarget(epoch, epoch + timedelta(seconds=10))
        assert moved.multiplier == 60.0


class TestForTrajectory:

    def test_starts_at_window_start(self, equatorial_trajectory):
        clock = ClockState.for_trajectory(equatorial_trajectory, multiplier=5.0)
        assert clock.start_time == equatorial_trajectory.start
        assert clock.stop_time == equatorial_trajectory.end
        assert clock.current_time == equatorial_trajectory.start
        assert clock.multiplier == 5.0

    def test_starts_at_sample_nearest_now(self, equatorial_trajectory, epoch):
        now = epoch + timedelta(seconds=185)
        clock = ClockState.for_trajectory(equatorial_trajectory, now=now)
        assert clock.current_time == epoch + timedelta(seconds=180)

    def test_now_outside_window_picks_edge_sample(self, equatorial_trajectory, epoch):
        clock = ClockState.for_trajectory(equatorial_trajectory, now=epoch + timedelta(days=1))
        assert clock.current_time == equatorial_trajectory.end
