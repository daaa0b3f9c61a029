# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Two-Line Element set parsing and validation.

Decodes the fixed-column NORAD format into a frozen TleRecord. Every
failure is reported as ParseError so callers get one exception type for
bad input regardless of which column broke.

Column layout (1-based, per NORAD convention):
    Line 1: 3-7 catalog no., 8 classification, 19-20 epoch year,
            21-32 epoch day, 54-61 B*, 69 checksum
    Line 2: 3-7 catalog no., 9-16 inclination, 18-25 RAAN,
            27-33 eccentricity (implied decimal), 35-42 arg. of perigee,
            44-51 mean anomaly, 53-63 mean motion, 64-68 rev. number,
            69 checksum

No external dependencies — only stdlib dataclasses/datetime.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from satellite_tracker.domain.orbital_mechanics import period_minutes_from_mean_motion

TLE_LINE_LENGTH = 69


class ParseError(ValueError):
    """TLE text could not be decoded."""


@dataclass(frozen=True)
class TleRecord:
    """A parsed two-line element set. Immutable."""
    line1: str
    line2: str
    name: str
    catalog_number: int
    classification: str
    epoch: datetime
    bstar: float
    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    revolution_number: int

    @property
    def period_minutes(self) -> float:
        """Nodal period implied by the mean motion."""
        return period_minutes_from_mean_motion(self.mean_motion_rev_per_day)


def tle_checksum(line: str) -> int:
    """Modulo-10 checksum over the first 68 columns (digits, '-' counts 1)."""
    total = 0
    for ch in line[:TLE_LINE_LENGTH - 1]:
        if ch.isdigit():
            total += int(ch)
        elif ch == '-':
            total += 1
    return total % 10


def _field_float(line: str, start: int, end: int, label: str) -> float:
    text = line[start:end].strip()
    try:
        return float(text)
    except ValueError:
        raise ParseError(f"Non-numeric {label} field: {text!r}") from None


def _field_int(line: str, start: int, end: int, label: str) -> int:
    text = line[start:end].strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ParseError(f"Non-numeric {label} field: {text!r}") from None


def _implied_decimal_exponent(field: str, label: str) -> float:
    """Decode the ' 34473-4' style field: ±.MMMMM × 10^±E."""
    text = field.strip()
    if not text:
        return 0.0
    sign = 1.0
    if text[0] in '+-':
        sign = -1.0 if text[0] == '-' else 1.0
        text = text[1:]
    mantissa, exponent = text[:-2], text[-2:]
    try:
        return sign * float(f"0.{mantissa}") * 10.0 ** int(exponent)
    except ValueError:
        raise ParseError(f"Non-numeric {label} field: {field!r}") from None


def _epoch_from_fields(year_2digit: int, day_of_year: float) -> datetime:
    """NORAD two-digit year: 57-99 → 19xx, 00-56 → 20xx."""
    year = 1900 + year_2digit if year_2digit >= 57 else 2000 + year_2digit
    if not 1.0 <= day_of_year < 367.0:
        raise ParseError(f"Epoch day-of-year out of range: {day_of_year}")
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    return start + timedelta(days=day_of_year - 1.0)


def _check_line(line: str, number: int, verify_checksum: bool) -> str:
    line = line.rstrip()
    if len(line) != TLE_LINE_LENGTH:
        raise ParseError(
            f"TLE line {number} must be {TLE_LINE_LENGTH} columns, got {len(line)}"
        )
    if line[0] != str(number) or line[1] != ' ':
        raise ParseError(f"TLE line {number} must start with '{number} '")
    if verify_checksum:
        expected = tle_checksum(line)
        if not line[-1].isdigit() or int(line[-1]) != expected:
            raise ParseError(
                f"TLE line {number} checksum mismatch: "
                f"column 69 is {line[-1]!r}, computed {expected}"
            )
    return line


def parse_tle(
    line1: str,
    line2: str,
    name: str = "",
    verify_checksum: bool = True,
) -> TleRecord:
    """
    Parse and validate a two-line element set.

    Args:
        line1: First TLE line (69 columns).
        line2: Second TLE line (69 columns).
        name: Optional object name (the "line 0" of a 3LE).
        verify_checksum: Reject lines whose column 69 disagrees with
            tle_checksum().

    Returns:
        TleRecord with decoded elements.

    Raises:
        ParseError: On wrong length, line number, catalog mismatch,
            non-numeric fields, checksum mismatch, or unphysical elements.
    """
    line1 = _check_line(line1, 1, verify_checksum)
    line2 = _check_line(line2, 2, verify_checksum)

    catalog_1 = _field_int(line1, 2, 7, "catalog number")
    catalog_2 = _field_int(line2, 2, 7, "catalog number")
    if catalog_1 != catalog_2:
        raise ParseError(
            f"Catalog numbers differ between lines: {catalog_1} vs {catalog_2}"
        )

    epoch = _epoch_from_fields(
        _field_int(line1, 18, 20, "epoch year"),
        _field_float(line1, 20, 32, "epoch day"),
    )
    bstar = _implied_decimal_exponent(line1[53:61], "B*")

    eccentricity_text = line2[26:33].strip()
    if not eccentricity_text.isdigit():
        raise ParseError(f"Non-numeric eccentricity field: {eccentricity_text!r}")
    eccentricity = float(f"0.{eccentricity_text}")

    mean_motion = _field_float(line2, 52, 63, "mean motion")
    if mean_motion <= 0.0:
        raise ParseError(f"Mean motion must be positive, got {mean_motion}")

    inclination = _field_float(line2, 8, 16, "inclination")
    if not 0.0 <= inclination <= 180.0:
        raise ParseError(f"Inclination out of range [0, 180]: {inclination}")

    return TleRecord(
        line1=line1,
        line2=line2,
        name=name.strip(),
        catalog_number=catalog_1,
        classification=line1[7],
        epoch=epoch,
        bstar=bstar,
        inclination_deg=inclination,
        raan_deg=_field_float(line2, 17, 25, "RAAN"),
        eccentricity=eccentricity,
        arg_perigee_deg=_field_float(line2, 34, 42, "argument of perigee"),
        mean_anomaly_deg=_field_float(line2, 43, 51, "mean anomaly"),
        mean_motion_rev_per_day=mean_motion,
        revolution_number=_field_int(line2, 63, 68, "revolution number"),
    )


# ISS (ZARYA) 2021-03-27. Column 69 carries the computed checksums; the
# widely copied version of these lines has them wrong (8→7, 5→6).
ISS_REFERENCE_TLE: tuple[str, str] = (
    "1 25544U 98067A   21086.52438556  .00001448  00000-0  34473-4 0  9997",
    "2 25544  51.6435 114.6349 0003448 236.0557 256.6114 15.48955396276556",
)
