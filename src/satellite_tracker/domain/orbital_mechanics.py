# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Earth model constants and mean-motion helpers.

No external dependencies — only stdlib dataclasses.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class _OrbitalConstants:
    """WGS84 ellipsoid and unit conversions shared by the frame math."""
    R_EARTH_EQUATORIAL: float = 6_378_137.0       # m, semi-major axis
    R_EARTH_POLAR: float = 6_356_752.3142         # m, semi-minor axis
    E_SQUARED: float = 0.00669437999014           # first eccentricity squared
    # sgp4 reports kilometres, the rendering layer wants metres
    KM_TO_M: float = 1000.0
    MINUTES_PER_DAY: float = 1440.0


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


def period_minutes_from_mean_motion(mean_motion_rev_per_day: float) -> float:
    """Orbital period in minutes for a mean motion in revolutions per day."""
    if mean_motion_rev_per_day <= 0:
        raise ValueError(
            f"mean motion must be positive, got {mean_motion_rev_per_day}"
        )
    return OrbitalConstants.MINUTES_PER_DAY / mean_motion_rev_per_day
