# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 propagation adapter.

The sgp4 dependency is confined to this layer.

SGP4 propagation:
    TLE mean elements are SGP4-specific, NOT pure Keplerian.
    The sgp4 library turns them into TEME state vectors (km); each one is
    rotated into ECEF by GMST and converted to WGS84 geodetic coordinates,
    heights in meters.
"""
import logging

import numpy as np
from sgp4.api import SGP4_ERRORS, Satrec, jday

from satellite_tracker.domain.coordinate_frames import (
    ecef_to_geodetic,
    eci_to_ecef,
    gmst_rad,
)
from satellite_tracker.domain.orbital_mechanics import OrbitalConstants
from satellite_tracker.domain.tle import ParseError, TleRecord, parse_tle
from satellite_tracker.domain.trajectory import (
    PropagationError,
    PropagationWindow,
    SatellitePosition,
    Trajectory,
    as_utc,
)
from satellite_tracker.ports import OrbitPropagator

_log = logging.getLogger(__name__)


def _julian_dates(times) -> tuple[np.ndarray, np.ndarray]:
    """Split Julian dates (whole, fraction) for sgp4_array."""
    jd = np.empty(len(times))
    fr = np.empty(len(times))
    for i, t in enumerate(times):
        t = as_utc(t)
        jd[i], fr[i] = jday(
            t.year, t.month, t.day,
            t.hour, t.minute, t.second + t.microsecond / 1e6,
        )
    return jd, fr


def build_satrec(tle: TleRecord) -> Satrec:
    """Initialise the sgp4 satellite record (WGS72, improved mode)."""
    satrec = Satrec.twoline2rv(tle.line1, tle.line2)
    if satrec.error != 0:
        message = SGP4_ERRORS.get(satrec.error, f"error code {satrec.error}")
        raise ParseError(f"sgp4 rejected elements for {tle.catalog_number}: {message}")
    return satrec


class Sgp4Propagator(OrbitPropagator):
    """Samples a TLE orbit with SGP4/SDP4 into a geodetic Trajectory."""

    def propagate(
        self,
        tle: TleRecord,
        window: PropagationWindow,
        steps: int,
    ) -> Trajectory:
        times = window.sample_times(steps)
        satrec = build_satrec(tle)

        jd, fr = _julian_dates(times)
        errors, positions_km, _ = satrec.sgp4_array(jd, fr)

        km_to_m = OrbitalConstants.KM_TO_M
        samples: list[SatellitePosition] = []
        for time, error, pos_km in zip(times, errors, positions_km):
            if error != 0 or not np.all(np.isfinite(pos_km)):
                _log.warning(
                    "Skipping sample at %s: %s",
                    time.isoformat(),
                    SGP4_ERRORS.get(int(error), "non-finite position"),
                )
                continue
            pos_eci_m = (
                float(pos_km[0]) * km_to_m,
                float(pos_km[1]) * km_to_m,
                float(pos_km[2]) * km_to_m,
            )
            pos_ecef = eci_to_ecef(pos_eci_m, gmst_rad(time))
            lat_deg, lon_deg, height_m = ecef_to_geodetic(pos_ecef)
            samples.append(SatellitePosition(
                longitude=lon_deg,
                latitude=lat_deg,
                height=height_m,
                epoch=time,
            ))

        if len(samples) < 2:
            raise PropagationError(
                f"Only {len(samples)} of {steps} samples propagated for "
                f"{tle.catalog_number} over {window.start.isoformat()} .. "
                f"{window.end.isoformat()}"
            )
        if len(samples) < steps:
            _log.info("Propagated %d of %d samples", len(samples), steps)
        return Trajectory(tuple(samples))


def propagate_orbit(
    tle: TleRecord | tuple[str, str],
    window: PropagationWindow,
    steps: int = 100,
    verify_checksum: bool = True,
) -> Trajectory:
    """
    Propagate a TLE across window into steps geodetic samples.

    Args:
        tle: Parsed TleRecord or a (line1, line2) pair.
        window: Time window to sample.
        steps: Number of evenly spaced samples (>= 2).
        verify_checksum: Checksum policy when tle is raw lines.

    Raises:
        ParseError: The lines could not be parsed.
        PropagationError: Fewer than two samples propagated.
    """
    if not isinstance(tle, TleRecord):
        line1, line2 = tle
        tle = parse_tle(line1, line2, verify_checksum=verify_checksum)
    return Sgp4Propagator().propagate(tle, window, steps)
