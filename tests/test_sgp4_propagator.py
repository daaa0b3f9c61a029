# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the sgp4-backed propagation adapter."""
import logging
import math
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest
from sgp4.api import Satrec, jday

import satellite_tracker.adapters.sgp4_propagator as sgp4_adapter
from satellite_tracker.adapters.sgp4_propagator import (
    Sgp4Propagator,
    build_satrec,
    propagate_orbit,
)
from satellite_tracker.domain.coordinate_frames import geodetic_to_ecef
from satellite_tracker.domain.tle import ISS_REFERENCE_TLE, ParseError, parse_tle
from satellite_tracker.domain.trajectory import (
    PropagationError,
    PropagationWindow,
    Trajectory,
)
from satellite_tracker.ports import OrbitPropagator

from conftest import ISS_2023_LINES

_ISS_INCLINATION_DEG = 51.6435
# Geodetic latitude overshoots the inclination slightly on the ellipsoid
_LATITUDE_MARGIN_DEG = 0.25


@pytest.fixture
def period_window(iss_tle):
    return PropagationWindow.full_period(iss_tle.epoch, 90.0)


@pytest.fixture
def iss_trajectory(iss_tle, period_window):
    return Sgp4Propagator().propagate(iss_tle, period_window, 100)


class _ErrorInjectingSatrec:
    """Wraps a real Satrec and forces sgp4 error codes at given indices."""

    def __init__(self, satrec, error_indices, code=6):
        self._satrec = satrec
        self._error_indices = error_indices
        self._code = code

    def sgp4_array(self, jd, fr):
        errors, positions, velocities = self._satrec.sgp4_array(jd, fr)
        errors = errors.copy()
        for i in self._error_indices:
            errors[i] = self._code
        return errors, positions, velocities


# ── ISS reference propagation ─────────────────────────────────────

class TestIssPropagation:

    def test_is_port_implementation(self):
        assert isinstance(Sgp4Propagator(), OrbitPropagator)

    def test_sample_count(self, iss_trajectory):
        assert isinstance(iss_trajectory, Trajectory)
        assert len(iss_trajectory) == 100

    def test_latitude_bounded_by_inclination(self, iss_trajectory):
        latitudes = [s.latitude for s in iss_trajectory.samples]
        assert max(abs(lat) for lat in latitudes) <= _ISS_INCLINATION_DEG + _LATITUDE_MARGIN_DEG
        assert max(latitudes) > 50.0

    def test_heights_in_meters(self, iss_trajectory):
        for sample in iss_trajectory.samples:
            assert 350_000.0 < sample.height < 460_000.0

    def test_longitude_range(self, iss_trajectory):
        for sample in iss_trajectory.samples:
            assert -180.0 < sample.longitude <= 180.0

    def test_epochs_are_window_sample_times(self, iss_trajectory, period_window):
        assert [s.epoch for s in iss_trajectory.samples] == period_window.sample_times(100)

    def test_radius_matches_sgp4_km_times_1000(self, iss_tle, iss_trajectory):
        satrec = Satrec.twoline2rv(*ISS_REFERENCE_TLE)
        sample = iss_trajectory.samples[17]
        t = sample.epoch
        jd, fr = jday(t.year, t.month, t.day, t.hour, t.minute, t.second + t.microsecond / 1e6)
        error, r_km, _ = satrec.sgp4(jd, fr)
        assert error == 0
        expected_m = math.sqrt(sum(c**2 for c in r_km)) * 1000.0
        actual_m = math.sqrt(sum(c**2 for c in geodetic_to_ecef(
            sample.latitude, sample.longitude, sample.height,
        )))
        assert actual_m == pytest.approx(expected_m, abs=1.0)

    def test_ground_track_moves_west_to_east(self, iss_trajectory):
        """Consecutive samples are ~3.9° of orbit apart; no sample repeats."""
        positions = iss_trajectory.positions_ecef
        steps = np.linalg.norm(np.diff(positions, axis=0), axis=1)
        assert np.all(steps > 300_000.0)
        assert np.all(steps < 500_000.0)

    def test_offset_timezone_same_instant(self, iss_tle):
        start = datetime(2021, 3, 27, 12, 0, 0, tzinfo=timezone.utc)
        kst = start.astimezone(timezone(timedelta(hours=9)))
        utc_run = Sgp4Propagator().propagate(iss_tle, PropagationWindow.full_period(start, 90.0), 10)
        kst_run = Sgp4Propagator().propagate(iss_tle, PropagationWindow.full_period(kst, 90.0), 10)
        for a, b in zip(utc_run.samples, kst_run.samples):
            assert a.epoch == b.epoch
            assert a.latitude == pytest.approx(b.latitude, abs=1e-9)
            assert a.longitude == pytest.approx(b.longitude, abs=1e-9)
            assert a.height == pytest.approx(b.height, abs=1e-6)

    def test_julian_dates_use_utc_fields(self):
        utc = datetime(2021, 3, 27, 12, 0, 0, tzinfo=timezone.utc)
        kst = utc.astimezone(timezone(timedelta(hours=9)))
        jd_utc, fr_utc = sgp4_adapter._julian_dates([utc])
        jd_kst, fr_kst = sgp4_adapter._julian_dates([kst])
        assert jd_kst[0] + fr_kst[0] == pytest.approx(jd_utc[0] + fr_utc[0], abs=1e-12)

    def test_second_element_set(self):
        tle = parse_tle(*ISS_2023_LINES)
        window = PropagationWindow.around(tle.epoch)
        trajectory = Sgp4Propagator().propagate(tle, window, 50)
        assert len(trajectory) == 50
        assert trajectory.start == window.start


# ── Convenience function ──────────────────────────────────────────

class TestPropagateOrbit:

    def test_accepts_lines(self, iss_tle, period_window, iss_trajectory):
        trajectory = propagate_orbit(ISS_REFERENCE_TLE, period_window, 100)
        assert trajectory.samples == iss_trajectory.samples

    def test_accepts_record(self, iss_tle, period_window):
        assert len(propagate_orbit(iss_tle, period_window, 10)) == 10

    def test_bad_checksum_rejected(self, period_window):
        misprinted = (ISS_REFERENCE_TLE[0][:-1] + "8", ISS_REFERENCE_TLE[1])
        with pytest.raises(ParseError):
            propagate_orbit(misprinted, period_window)

    def test_bad_checksum_allowed(self, period_window):
        misprinted = (ISS_REFERENCE_TLE[0][:-1] + "8", ISS_REFERENCE_TLE[1][:-1] + "5")
        trajectory = propagate_orbit(misprinted, period_window, 10, verify_checksum=False)
        assert len(trajectory) == 10

    def test_malformed_line(self, period_window):
        with pytest.raises(ParseError):
            propagate_orbit((ISS_REFERENCE_TLE[0][:50], ISS_REFERENCE_TLE[1]), period_window)

    def test_steps_below_two(self, iss_tle, period_window):
        with pytest.raises(ValueError):
            Sgp4Propagator().propagate(iss_tle, period_window, 1)


# ── sgp4 error handling ───────────────────────────────────────────

class TestSampleErrors:

    def test_build_satrec(self, iss_tle):
        satrec = build_satrec(iss_tle)
        assert satrec.satnum == 25544
        assert satrec.error == 0

    def test_failed_samples_skipped_and_logged(self, iss_tle, period_window, monkeypatch, caplog):
        real = Satrec.twoline2rv(iss_tle.line1, iss_tle.line2)
        monkeypatch.setattr(
            sgp4_adapter, "build_satrec",
            lambda tle: _ErrorInjectingSatrec(real, [3, 7]),
        )
        with caplog.at_level(logging.WARNING, logger="satellite_tracker.adapters.sgp4_propagator"):
            trajectory = Sgp4Propagator().propagate(iss_tle, period_window, 20)

        assert len(trajectory) == 18
        times = period_window.sample_times(20)
        epochs = [s.epoch for s in trajectory.samples]
        assert times[3] not in epochs
        assert times[7] not in epochs
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2
        assert "decayed" in warnings[0].getMessage()

    def test_too_few_samples_raise(self, iss_tle, period_window, monkeypatch):
        real = Satrec.twoline2rv(iss_tle.line1, iss_tle.line2)
        monkeypatch.setattr(
            sgp4_adapter, "build_satrec",
            lambda tle: _ErrorInjectingSatrec(real, range(1, 10)),
        )
        with pytest.raises(PropagationError, match="1 of 10"):
            Sgp4Propagator().propagate(iss_tle, period_window, 10)

    def test_propagation_error_not_parse_error(self):
        assert not issubclass(PropagationError, ValueError)

    def test_partial_result_logged_at_info(self, iss_tle, period_window, monkeypatch, caplog):
        real = Satrec.twoline2rv(iss_tle.line1, iss_tle.line2)
        monkeypatch.setattr(
            sgp4_adapter, "build_satrec",
            lambda tle: _ErrorInjectingSatrec(real, [0]),
        )
        with caplog.at_level(logging.INFO, logger="satellite_tracker.adapters.sgp4_propagator"):
            trajectory = Sgp4Propagator().propagate(iss_tle, period_window, 5)
        assert len(trajectory) == 4
        assert trajectory.start == period_window.start + timedelta(minutes=18)
        assert "4 of 5" in caplog.text
