# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Quaternion algebra and user rotation offsets.

Quaternions are stored (x, y, z, w), scalar last, and compose with the
Hamilton product: (a * b).rotate(v) == a.rotate(b.rotate(v)).

Heading-pitch-roll convention (radians):
    q = Rz(-heading) · Ry(-pitch) · Rx(roll)
so heading turns clockwise about the local up axis when seen from above,
and positive pitch raises the +x (nose) axis.
"""
import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion (x, y, z, w)."""
    x: float
    y: float
    z: float
    w: float

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(
        cls, axis: tuple[float, float, float], angle_rad: float,
    ) -> "Quaternion":
        """Rotation of angle_rad about a unit axis."""
        s = math.sin(angle_rad / 2.0)
        return cls(axis[0] * s, axis[1] * s, axis[2] * s, math.cos(angle_rad / 2.0))

    @classmethod
    def from_heading_pitch_roll(
        cls, heading_rad: float, pitch_rad: float, roll_rad: float,
    ) -> "Quaternion":
        """Rz(-heading) · Ry(-pitch) · Rx(roll)."""
        roll = cls.from_axis_angle((1.0, 0.0, 0.0), roll_rad)
        pitch = cls.from_axis_angle((0.0, 1.0, 0.0), -pitch_rad)
        heading = cls.from_axis_angle((0.0, 0.0, 1.0), -heading_rad)
        return heading.multiply(pitch).multiply(roll)

    @classmethod
    def from_rotation_matrix(cls, matrix: np.ndarray) -> "Quaternion":
        """
        Quaternion for a 3×3 proper rotation matrix.

        Branches on the largest of trace and diagonal to keep the square
        root argument well away from zero.
        """
        m = np.asarray(matrix, dtype=float)
        trace = m[0, 0] + m[1, 1] + m[2, 2]
        if trace > 0.0:
            s = 2.0 * math.sqrt(trace + 1.0)
            w = 0.25 * s
            x = (m[2, 1] - m[1, 2]) / s
            y = (m[0, 2] - m[2, 0]) / s
            z = (m[1, 0] - m[0, 1]) / s
        elif m[0, 0] > m[1, 1] and m[0, 0] > m[2, 2]:
            s = 2.0 * math.sqrt(1.0 + m[0, 0] - m[1, 1] - m[2, 2])
            w = (m[2, 1] - m[1, 2]) / s
            x = 0.25 * s
            y = (m[0, 1] + m[1, 0]) / s
            z = (m[0, 2] + m[2, 0]) / s
        elif m[1, 1] > m[2, 2]:
            s = 2.0 * math.sqrt(1.0 + m[1, 1] - m[0, 0] - m[2, 2])
            w = (m[0, 2] - m[2, 0]) / s
            x = (m[0, 1] + m[1, 0]) / s
            y = 0.25 * s
            z = (m[1, 2] + m[2, 1]) / s
        else:
            s = 2.0 * math.sqrt(1.0 + m[2, 2] - m[0, 0] - m[1, 1])
            w = (m[1, 0] - m[0, 1]) / s
            x = (m[0, 2] + m[2, 0]) / s
            y = (m[1, 2] + m[2, 1]) / s
            z = 0.25 * s
        return cls(float(x), float(y), float(z), float(w)).normalized()

    def multiply(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product self · other."""
        x1, y1, z1, w1 = self.x, self.y, self.z, self.w
        x2, y2, z2, w2 = other.x, other.y, other.z, other.w
        return Quaternion(
            x=w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            y=w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            z=w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w=w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        )

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def norm(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def normalized(self) -> "Quaternion":
        n = self.norm()
        if n == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def to_rotation_matrix(self) -> np.ndarray:
        x, y, z, w = self.x, self.y, self.z, self.w
        return np.array([
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ])

    def rotate(self, vector: tuple[float, float, float]) -> tuple[float, float, float]:
        """Apply the rotation to a 3-vector."""
        v = self.to_rotation_matrix() @ np.asarray(vector, dtype=float)
        return float(v[0]), float(v[1]), float(v[2])

    def as_tuple(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.z, self.w

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self.as_tuple())

    def is_close(self, other: "Quaternion", tol: float = 1e-9) -> bool:
        """Same rotation within tol (q and -q are the same rotation)."""
        dot = sum(a * b for a, b in zip(self.as_tuple(), other.as_tuple()))
        return abs(abs(dot) - self.norm() * other.norm()) <= tol


@dataclass(frozen=True)
class RotationOffset:
    """Manual yaw/pitch/roll offset in degrees, relative to the flight frame."""
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    def rotated(
        self, d_yaw: float = 0.0, d_pitch: float = 0.0, d_roll: float = 0.0,
    ) -> "RotationOffset":
        """New offset with the deltas added."""
        return RotationOffset(
            yaw=self.yaw + d_yaw,
            pitch=self.pitch + d_pitch,
            roll=self.roll + d_roll,
        )

    def is_zero(self) -> bool:
        return self.yaw == 0.0 and self.pitch == 0.0 and self.roll == 0.0

    def to_quaternion(self) -> Quaternion:
        """Heading-pitch-roll quaternion for yaw, pitch, roll (in that order)."""
        return Quaternion.from_heading_pitch_roll(
            math.radians(self.yaw),
            math.radians(self.pitch),
            math.radians(self.roll),
        )


ZERO_OFFSET = RotationOffset()
IDENTITY = Quaternion.identity()
