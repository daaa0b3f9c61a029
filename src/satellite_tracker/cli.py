# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for satellite tracking.

Usage:
    # Bundled ISS reference TLE, 20 min back / 120 min ahead of now
    satellite-tracker

    # One full orbit from the TLE epoch, exported for a Cesium viewer
    satellite-tracker --line1 "1 25544U ..." --line2 "2 25544 ..." \\
        --reference-epoch tle --czml iss.czml

    # Camera placement for a view mode with a manual rotation offset
    satellite-tracker --view sunView --zoom 2000000 --yaw 15 --roll 5
"""
import argparse
import logging
import sys
from datetime import datetime, timezone

from satellite_tracker.adapters import (
    JsonTrajectoryWriter,
    Sgp4Propagator,
    ground_station_packets,
    trajectory_packets,
    write_czml,
)
from satellite_tracker.domain.attitude import RotationOffset
from satellite_tracker.domain.camera import DEFAULT_ZOOM_M, ViewMode
from satellite_tracker.domain.ground_station import DEFAULT_GROUND_STATIONS
from satellite_tracker.domain.session import CameraPolicy, TrackingSession
from satellite_tracker.domain.tle import ISS_REFERENCE_TLE, ParseError, TleRecord, parse_tle
from satellite_tracker.domain.trajectory import (
    PropagationConfig,
    PropagationError,
    Trajectory,
    as_utc,
)

_log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_reference_epoch(text: str | None, tle: TleRecord) -> datetime | None:
    """'tle' selects the element-set epoch; anything else is ISO 8601."""
    if text is None:
        return None
    if text.lower() == 'tle':
        return tle.epoch
    return as_utc(datetime.fromisoformat(text))


def propagate_window(
    tle: TleRecord,
    config: PropagationConfig | None = None,
    reference_epoch: str | None = None,
    now: datetime | None = None,
) -> tuple[Trajectory, datetime]:
    """
    Propagate a parsed TLE over the configured window.

    Returns:
        (trajectory, now). The wall-clock anchor is returned so the
        caller can start the session clock at the same instant.
    """
    if config is None:
        config = PropagationConfig()
    if now is None:
        now = datetime.now(tz=timezone.utc)

    epoch = _parse_reference_epoch(reference_epoch, tle)
    window = config.window_for(reference_epoch=epoch, now=now)
    _log.debug(
        "Propagating %d over %s .. %s in %d steps",
        tle.catalog_number, window.start.isoformat(), window.end.isoformat(), config.steps,
    )
    trajectory = Sgp4Propagator().propagate(tle, window, config.steps)
    return trajectory, now


def run(
    line1: str,
    line2: str,
    name: str = "",
    config: PropagationConfig | None = None,
    reference_epoch: str | None = None,
    verify_checksum: bool = True,
    now: datetime | None = None,
) -> tuple[TleRecord, Trajectory, datetime]:
    """Parse the TLE lines, then propagate_window."""
    tle = parse_tle(line1, line2, name=name, verify_checksum=verify_checksum)
    trajectory, now = propagate_window(tle, config, reference_epoch, now)
    return tle, trajectory, now


def format_summary(tle: TleRecord, trajectory: Trajectory, session: TrackingSession) -> str:
    latitudes = [s.latitude for s in trajectory.samples]
    heights_km = [s.height / 1000.0 for s in trajectory.samples]
    frame = session.frame()
    q = frame.orientation
    policy = session.camera_policy
    label = tle.name or f"NORAD {tle.catalog_number}"

    return "\n".join([
        f"{label} (catalog {tle.catalog_number}), epoch {tle.epoch.isoformat()}",
        f"Period {tle.period_minutes:.2f} min, inclination {tle.inclination_deg:.4f} deg",
        f"Window {trajectory.start.isoformat()} .. {trajectory.end.isoformat()} "
        f"({len(trajectory)} samples)",
        f"Latitude {min(latitudes):.2f} .. {max(latitudes):.2f} deg, "
        f"height {min(heights_km):.1f} .. {max(heights_km):.1f} km",
        f"At {frame.time.isoformat()}: ECEF ({frame.position[0]:.0f}, "
        f"{frame.position[1]:.0f}, {frame.position[2]:.0f}) m",
        f"Orientation (x, y, z, w): ({q.x:.6f}, {q.y:.6f}, {q.z:.6f}, {q.w:.6f})",
        f"Camera [{policy.mode.value}]: heading {frame.camera.heading_deg:.2f} deg, "
        f"pitch {frame.camera.pitch_deg:.2f} deg, range {frame.camera.range:.0f} m",
    ])


def main():
    parser = argparse.ArgumentParser(
        description="Propagate a TLE with SGP4 and resolve tracking orientation and camera views"
    )
    parser.add_argument('--line1', help="TLE line 1 (default: bundled ISS reference TLE)")
    parser.add_argument('--line2', help="TLE line 2 (default: bundled ISS reference TLE)")
    parser.add_argument('--name', default="", help="Object name")
    parser.add_argument(
        '--no-checksum', action='store_true', default=False,
        help="Accept lines whose column-69 checksum does not match"
    )
    parser.add_argument('-v', '--verbose', action='store_true', help="Debug logging")

    window_group = parser.add_argument_group('propagation window')
    window_group.add_argument(
        '--reference-epoch',
        help="Propagate one full period from this ISO 8601 time ('tle' = element epoch)"
    )
    window_group.add_argument(
        '--past-minutes', type=float, default=20.0,
        help="Minutes before now (default: 20)"
    )
    window_group.add_argument(
        '--future-minutes', type=float, default=120.0,
        help="Minutes after now (default: 120)"
    )
    window_group.add_argument(
        '--period-minutes', type=float, default=None,
        help="Full-period window length (default: period from mean motion)"
    )
    window_group.add_argument(
        '--steps', type=int, default=100,
        help="Number of samples (default: 100)"
    )

    view_group = parser.add_argument_group('view')
    view_group.add_argument(
        '--view', default=ViewMode.DEFAULT.value,
        choices=[mode.value for mode in ViewMode],
        help="Camera view mode (default: default)"
    )
    view_group.add_argument(
        '--zoom', type=float, default=DEFAULT_ZOOM_M,
        help="Camera distance in meters (default: 3000000)"
    )
    view_group.add_argument('--yaw', type=float, default=0.0, help="Manual yaw offset, degrees")
    view_group.add_argument('--pitch', type=float, default=0.0, help="Manual pitch offset, degrees")
    view_group.add_argument('--roll', type=float, default=0.0, help="Manual roll offset, degrees")

    export_group = parser.add_argument_group('export')
    export_group.add_argument('--json', help="Write the sampled trajectory as JSON")
    export_group.add_argument('--czml', help="Write CZML packets for a Cesium viewer")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    if (args.line1 is None) != (args.line2 is None):
        print("Error: --line1 and --line2 must be given together", file=sys.stderr)
        sys.exit(1)
    line1, line2 = (args.line1, args.line2) if args.line1 else ISS_REFERENCE_TLE
    name = args.name or ("" if args.line1 else "ISS (ZARYA)")

    try:
        tle = parse_tle(line1, line2, name=name, verify_checksum=not args.no_checksum)
        period = args.period_minutes
        if period is None:
            period = tle.period_minutes
        config = PropagationConfig(
            past_minutes=args.past_minutes,
            future_minutes=args.future_minutes,
            period_minutes=period,
            steps=args.steps,
        )
        trajectory, now = propagate_window(tle, config, args.reference_epoch)

        session = TrackingSession(
            trajectory,
            config=config,
            camera=CameraPolicy(mode=ViewMode(args.view), zoom=args.zoom),
            now=now if args.reference_epoch is None else None,
        )
        session.set_rotation(RotationOffset(yaw=args.yaw, pitch=args.pitch, roll=args.roll))
        print(format_summary(tle, trajectory, session))

        if args.json:
            count = JsonTrajectoryWriter().write_trajectory(trajectory, args.json, name=tle.name)
            print(f"Exported {count} samples to {args.json}")

        if args.czml:
            packets = trajectory_packets(
                trajectory,
                name=tle.name or str(tle.catalog_number),
                multiplier=session.clock.multiplier,
                rotation_offset=session.rotation,
            )
            packets.extend(ground_station_packets(DEFAULT_GROUND_STATIONS))
            count = write_czml(packets, args.czml)
            print(f"Exported {count} CZML packets to {args.czml}")

    except (ParseError, PropagationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
