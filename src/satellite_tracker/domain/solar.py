# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Where the Sun is, for aiming Sun-relative camera views.

Low-precision series from Meeus, Astronomical Algorithms ch. 25 (the
form Vallado also tabulates). About one arcminute of error, which is
far below anything a camera placement can show.
"""
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np

from satellite_tracker.domain.coordinate_frames import eci_to_ecef, gmst_rad
from satellite_tracker.domain.trajectory import as_utc

AU_METERS: float = 1.495978707e11

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
_SECONDS_PER_CENTURY = 36525.0 * 86400.0


@dataclass(frozen=True)
class SunPosition:
    """Sun at one epoch, in the inertial frame sgp4 output is rotated from."""
    position_eci_m: tuple[float, float, float]
    right_ascension_rad: float
    declination_rad: float
    distance_m: float

    @property
    def unit_vector(self) -> tuple[float, float, float]:
        x, y, z = (np.asarray(self.position_eci_m) / self.distance_m).tolist()
        return x, y, z


def julian_centuries_j2000(epoch: datetime) -> float:
    """Julian centuries elapsed since 2000-01-01 12:00 UTC."""
    return (as_utc(epoch) - _J2000).total_seconds() / _SECONDS_PER_CENTURY


def sun_position_eci(epoch: datetime) -> SunPosition:
    """
    Sun position at epoch.

    Args:
        epoch: UTC datetime; naive values are taken as UTC.
    """
    T = julian_centuries_j2000(epoch)

    # Mean anomaly (degrees)
    M_deg = (357.5291 + 35999.0503 * T) % 360.0
    M_rad = float(np.radians(M_deg))

    # Ecliptic longitude (degrees), mean longitude plus equation of center
    L_deg = (280.4665 + 36000.7698 * T + 1.9146 * float(np.sin(M_rad))
             + 0.0200 * float(np.sin(2.0 * M_rad))) % 360.0
    L_rad = float(np.radians(L_deg))

    # Obliquity of the ecliptic
    eps_rad = float(np.radians(23.4393 - 0.01300 * T))

    # Right ascension and declination
    ra = float(np.arctan2(np.cos(eps_rad) * np.sin(L_rad), np.cos(L_rad)))
    dec = float(np.arcsin(np.sin(eps_rad) * np.sin(L_rad)))

    # Earth-Sun distance
    r_au = 1.00014 - 0.01671 * float(np.cos(M_rad)) - 0.00014 * float(np.cos(2.0 * M_rad))
    distance = r_au * AU_METERS

    x, y, z = (distance * np.array([
        np.cos(ra) * np.cos(dec),
        np.sin(ra) * np.cos(dec),
        np.sin(dec),
    ])).tolist()
    return SunPosition(
        position_eci_m=(x, y, z),
        right_ascension_rad=ra,
        declination_rad=dec,
        distance_m=distance,
    )


def sun_position_ecef(epoch: datetime) -> tuple[float, float, float]:
    """Sun position in the Earth-fixed frame (meters) at epoch."""
    return eci_to_ecef(sun_position_eci(epoch).position_eci_m, gmst_rad(as_utc(epoch)))
