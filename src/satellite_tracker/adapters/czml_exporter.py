# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""CZML exporter adapter for CesiumJS visualization.

Generates CZML JSON packets for the tracked object: LAGRANGE degree-3
sampled positions, sampled orientation quaternions (ENU facing frame with
the manual rotation offset applied), the closed orbit line, and ground
stations. Output opens directly in a Cesium viewer.

Uses only stdlib json/datetime + domain imports.
"""

import json
from datetime import datetime, timedelta, timezone

from satellite_tracker.domain.attitude import RotationOffset, ZERO_OFFSET
from satellite_tracker.domain.ground_station import GroundStation
from satellite_tracker.domain.tracking import INTERPOLATION_DEGREE, orientation_at
from satellite_tracker.domain.trajectory import Trajectory


def _iso(dt: datetime) -> str:
    dt = dt.astimezone(timezone.utc)
    if dt.microsecond:
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def _hex_to_rgba(color: str, alpha: int = 255) -> list[int]:
    """'#4CAF50' → [76, 175, 80, alpha]."""
    text = color.lstrip('#')
    if len(text) != 6:
        raise ValueError(f"expected #RRGGBB color, got {color!r}")
    return [int(text[i:i + 2], 16) for i in (0, 2, 4)] + [alpha]


def _document_packet(
    name: str,
    trajectory: Trajectory | None = None,
    multiplier: float = 1.0,
) -> dict:
    pkt: dict = {
        "id": "document",
        "name": name,
        "version": "1.0",
    }
    if trajectory is not None:
        pkt["clock"] = {
            "interval": f"{_iso(trajectory.start)}/{_iso(trajectory.end)}",
            "currentTime": _iso(trajectory.start),
            "multiplier": multiplier,
            "range": "LOOP_STOP",
            "step": "SYSTEM_CLOCK_MULTIPLIER",
        }
    return pkt


def _orientation_samples(
    trajectory: Trajectory,
    rotation_offset: RotationOffset,
    step_s: float,
) -> list[float]:
    """[seconds, x, y, z, w, ...] across the window, endpoint included."""
    values: list[float] = []
    elapsed = 0.0
    while elapsed <= trajectory.duration_s + 1e-9:
        t = trajectory.start + timedelta(seconds=elapsed)
        q = orientation_at(trajectory, t, rotation_offset)
        values.extend([elapsed, q.x, q.y, q.z, q.w])
        elapsed += step_s
    return values


def trajectory_packets(
    trajectory: Trajectory,
    name: str = "ISS",
    multiplier: float = 1.0,
    rotation_offset: RotationOffset = ZERO_OFFSET,
    orientation_step_s: float = 10.0,
    entity_id: str = "ISS",
) -> list[dict]:
    """Document packet + tracked entity packet + orbit line packet.

    Position: epoch + cartographicDegrees [seconds, lon, lat, height_m, ...]
    Interpolation: LAGRANGE degree 3.
    Orientation: epoch + unitQuaternion [seconds, x, y, z, w, ...]
    """
    if orientation_step_s <= 0:
        raise ValueError(f"orientation_step_s must be positive, got {orientation_step_s}")

    epoch = _iso(trajectory.start)
    coords: list[float] = []
    orbit_line: list[float] = []
    for sample in trajectory.samples:
        coords.extend([
            trajectory.offset_s(sample.epoch),
            sample.longitude,
            sample.latitude,
            sample.height,
        ])
        orbit_line.extend([sample.longitude, sample.latitude, sample.height])

    entity: dict = {
        "id": entity_id,
        "name": name,
        "availability": f"{epoch}/{_iso(trajectory.end)}",
        "position": {
            "epoch": epoch,
            "cartographicDegrees": coords,
            "interpolationAlgorithm": "LAGRANGE",
            "interpolationDegree": INTERPOLATION_DEGREE,
        },
        "orientation": {
            "epoch": epoch,
            "unitQuaternion": _orientation_samples(
                trajectory, rotation_offset, orientation_step_s,
            ),
        },
        "point": {
            "pixelSize": 8,
            "color": {"rgba": [255, 255, 255, 255]},
        },
        "label": {
            "text": name,
            "font": "14pt sans-serif",
            "fillColor": {"rgba": [255, 255, 0, 255]},
            "outlineWidth": 2,
            "style": "FILL_AND_OUTLINE",
            "horizontalOrigin": "LEFT",
            "pixelOffset": {"cartesian2": [12, 0]},
        },
    }

    orbit: dict = {
        "id": f"{entity_id}_ORBIT",
        "name": f"{name} orbit",
        "polyline": {
            "positions": {"cartographicDegrees": orbit_line},
            "width": 2,
            "clampToGround": False,
            "material": {
                "polylineGlow": {
                    "glowPower": 0.2,
                    "color": {"rgba": [0, 0, 255, 255]},
                },
            },
        },
    }

    return [_document_packet(name, trajectory, multiplier), entity, orbit]


def ground_station_packets(stations: list[GroundStation] | tuple[GroundStation, ...]) -> list[dict]:
    """One point+label packet per station (no document packet; append to another list)."""
    packets: list[dict] = []
    for station in stations:
        packets.append({
            "id": f"groundStation-{station.key}",
            "name": station.name,
            "position": {
                "cartographicDegrees": [
                    station.longitude, station.latitude, station.height,
                ],
            },
            "point": {
                "pixelSize": 10,
                "color": {"rgba": _hex_to_rgba(station.color)},
                "outlineColor": {"rgba": [255, 255, 255, 255]},
                "outlineWidth": 2,
            },
            "label": {
                "text": station.name,
                "font": "14px sans-serif",
                "fillColor": {"rgba": [255, 255, 255, 255]},
                "outlineColor": {"rgba": [0, 0, 0, 255]},
                "outlineWidth": 2,
                "style": "FILL_AND_OUTLINE",
                "verticalOrigin": "TOP",
                "pixelOffset": {"cartesian2": [0, -30]},
            },
        })
    return packets


def write_czml(packets: list[dict], path: str) -> int:
    """Write JSON array to file. Returns len(packets)."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(packets, f, indent=2, ensure_ascii=False)
    return len(packets)
