# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions.

Pure mathematical transformations between ECI, ECEF, Geodetic and local
East-North-Up (ENU) frames. No external dependencies — only stdlib
math/datetime.

Reference frames:
    ECI  — Earth-Centered Inertial (sgp4 TEME, treated as inertial)
    ECEF — Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic — Latitude, Longitude, Height (WGS84 ellipsoid)
    ENU — local tangent frame at a point: east, north, ellipsoid normal

The ECI→ECEF rotation is a simple Z-axis rotation by the Greenwich
Mean Sidereal Time (GMST) angle. ECEF→Geodetic uses the iterative
Bowring method on the WGS84 ellipsoid.
"""
import math
from datetime import datetime, timezone

from satellite_tracker.domain.orbital_mechanics import OrbitalConstants

Vector3 = tuple[float, float, float]

# Horizontal distance from the polar axis, relative to |r|, below which the
# east direction is undefined.
_POLAR_AXIS_TOLERANCE = 1e-9

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
# Bowring iteration stops once latitude moves less than this (radians)
_LATITUDE_CONVERGENCE_RAD = 1e-12
_MAX_LATITUDE_ITERATIONS = 10


class DegenerateGeometryError(ArithmeticError):
    """Local frame or direction is undefined at this configuration."""


def _prime_vertical_radius(sin_lat: float) -> float:
    c = OrbitalConstants
    return c.R_EARTH_EQUATORIAL / math.sqrt(1.0 - c.E_SQUARED * sin_lat * sin_lat)


def gmst_rad(epoch: datetime) -> float:
    """
    Greenwich Mean Sidereal Time at a UTC epoch, in radians in [0, 2π).

    IAU 1982 expression in days d and Julian centuries T since J2000.0:
        280.46061837 + 360.98564736629 d + 0.000387933 T² - T³ / 38710000

    Naive datetimes are taken as UTC.
    """
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    days = (epoch - _J2000).total_seconds() / 86400.0
    centuries = days / 36525.0
    degrees = (
        280.46061837
        + 360.98564736629 * days
        + centuries * centuries * (0.000387933 - centuries / 38710000.0)
    )
    return math.radians(degrees % 360.0)


def eci_to_ecef(pos_eci: Vector3, gmst_angle_rad: float) -> Vector3:
    """
    Earth-fixed coordinates of an inertial vector.

    The Earth has turned by the GMST angle about +Z, so the vector is
    rotated by the opposite angle. Units pass through unchanged.
    """
    x, y, z = pos_eci
    cos_g = math.cos(gmst_angle_rad)
    sin_g = math.sin(gmst_angle_rad)
    return x * cos_g + y * sin_g, y * cos_g - x * sin_g, z


def ecef_to_geodetic(pos_ecef: Vector3) -> tuple[float, float, float]:
    """
    WGS84 geodetic (latitude_deg, longitude_deg, height_m) of an ECEF point.

    Latitude comes from Bowring's fixed-point iteration; longitude is
    reported in (-180, 180].
    """
    e2 = OrbitalConstants.E_SQUARED
    x, y, z = pos_ecef
    p = math.hypot(x, y)

    lat = math.atan2(z, p * (1.0 - e2))
    for _ in range(_MAX_LATITUDE_ITERATIONS):
        previous = lat
        sin_lat = math.sin(lat)
        lat = math.atan2(z + e2 * _prime_vertical_radius(sin_lat) * sin_lat, p)
        if abs(lat - previous) < _LATITUDE_CONVERGENCE_RAD:
            break

    cos_lat = math.cos(lat)
    if abs(cos_lat) > 1e-10:
        height = p / cos_lat - _prime_vertical_radius(math.sin(lat))
    else:
        # On the polar axis
        height = abs(z) - OrbitalConstants.R_EARTH_POLAR

    lon = math.degrees(math.atan2(y, x))
    if lon <= -180.0:
        lon += 360.0
    return math.degrees(lat), lon, height


def geodetic_to_ecef(lat_deg: float, lon_deg: float, height_m: float) -> Vector3:
    """ECEF position in meters of a WGS84 geodetic point. Inverse of ecef_to_geodetic."""
    lat = math.radians(lat_deg)
    lon = math.radians(lon_deg)
    sin_lat = math.sin(lat)
    n = _prime_vertical_radius(sin_lat)
    horizontal = (n + height_m) * math.cos(lat)
    return (
        horizontal * math.cos(lon),
        horizontal * math.sin(lon),
        (n * (1.0 - OrbitalConstants.E_SQUARED) + height_m) * sin_lat,
    )


def geodetic_surface_normal(pos_ecef: Vector3) -> Vector3:
    """Unit normal of the WGS84 ellipsoid scaled through pos_ecef."""
    a2 = OrbitalConstants.R_EARTH_EQUATORIAL**2
    b2 = OrbitalConstants.R_EARTH_POLAR**2
    nx = pos_ecef[0] / a2
    ny = pos_ecef[1] / a2
    nz = pos_ecef[2] / b2
    norm = math.sqrt(nx**2 + ny**2 + nz**2)
    if norm == 0.0:
        raise DegenerateGeometryError("surface normal undefined at Earth's center")
    return nx / norm, ny / norm, nz / norm


def enu_basis(pos_ecef: Vector3) -> tuple[Vector3, Vector3, Vector3]:
    """
    Local East-North-Up unit vectors at an ECEF position.

    Up is the ellipsoid normal, east is perpendicular to the polar axis,
    north completes the right-handed set (north = up × east).

    Raises:
        DegenerateGeometryError: On (or numerically on) the polar axis,
            where east is undefined.
    """
    x, y, z = pos_ecef
    r = math.sqrt(x**2 + y**2 + z**2)
    p = math.sqrt(x**2 + y**2)
    if r == 0.0 or p <= _POLAR_AXIS_TOLERANCE * r:
        raise DegenerateGeometryError("east direction undefined on the polar axis")

    up = geodetic_surface_normal(pos_ecef)
    east = (-y / p, x / p, 0.0)
    north = (
        up[1] * east[2] - up[2] * east[1],
        up[2] * east[0] - up[0] * east[2],
        up[0] * east[1] - up[1] * east[0],
    )
    return east, north, up


def ecef_to_enu_vector(vector_ecef: Vector3, pos_ecef: Vector3) -> Vector3:
    """
    Project an ECEF direction onto the ENU axes at pos_ecef.

    Raises:
        DegenerateGeometryError: If the ENU frame is undefined at pos_ecef.
    """
    return project_onto_basis(vector_ecef, enu_basis(pos_ecef))


def project_onto_basis(
    vector: Vector3,
    basis: tuple[Vector3, Vector3, Vector3],
) -> Vector3:
    """Components of vector along each of three orthonormal axes."""
    return tuple(sum(vector[i] * axis[i] for i in range(3)) for axis in basis)


def polar_enu_basis(pos_ecef: Vector3) -> tuple[Vector3, Vector3, Vector3]:
    """
    Fixed ENU axes for a point on the polar axis.

    North pole: east +y, north -x, up +z. South pole: east +y, north +x,
    up -z.
    """
    sign = -1.0 if pos_ecef[2] < 0.0 else 1.0
    return (0.0, 1.0, 0.0), (-sign, 0.0, 0.0), (0.0, 0.0, sign)
