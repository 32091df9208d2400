"""Small 2D and 3D float vector types and scalar helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from .defs import FLOAT_ERROR, FLOAT_HALF


def float_error(left: float, right: float, error: float) -> bool:
    """Return True if ``left`` and ``right`` differ by strictly less than ``error``."""
    diff = left - right
    return -error < diff < error


def float_equal(left: float, right: float) -> bool:
    """Compare two floats with the package's default tolerance."""
    return float_error(left, right, FLOAT_ERROR)


def quantize(var: float, qsize: float) -> float:
    """Round ``var`` to the nearest multiple of ``qsize``."""
    return qsize * math.floor(var / qsize + FLOAT_HALF)


@dataclass(frozen=True)
class Vec2f:
    """A 2D float vector."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Vec3f:
    """A 3D float vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3f) -> Vec3f:
        if not isinstance(other, Vec3f):
            return NotImplemented
        return Vec3f(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3f) -> Vec3f:
        if not isinstance(other, Vec3f):
            return NotImplemented
        return Vec3f(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vec3f) -> Vec3f:
        """Component-wise product."""
        if not isinstance(other, Vec3f):
            return NotImplemented
        return Vec3f(self.x * other.x, self.y * other.y, self.z * other.z)

    def scale(self, scalar: float) -> Vec3f:
        return Vec3f(self.x * scalar, self.y * scalar, self.z * scalar)

    def truncate(self) -> Vec3f:
        """Drop the fractional part of each component (towards zero)."""
        return Vec3f(float(int(self.x)), float(int(self.y)), float(int(self.z)))

    def inverse(self) -> Vec3f:
        """Component-wise reciprocal."""
        return Vec3f(1.0 / self.x, 1.0 / self.y, 1.0 / self.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vec3f:
        """Unit vector in the same direction, or the zero vector."""
        mag = self.magnitude()
        if mag > 0.0:
            return self.scale(1.0 / mag)
        return Vec3f()

    def dot(self, other: Vec3f) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3f) -> Vec3f:
        return Vec3f(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def angle_between(self, other: Vec3f) -> float:
        """Angle in radians between two non-zero vectors."""
        cosine = self.dot(other) / (self.magnitude() * other.magnitude())
        return math.acos(max(-1.0, min(1.0, cosine)))

    def is_close(self, other: Vec3f) -> bool:
        return (
            float_equal(self.x, other.x)
            and float_equal(self.y, other.y)
            and float_equal(self.z, other.z)
        )

    def greater(self, other: Vec3f) -> bool:
        """Lexicographic strict comparison on (x, y, z)."""
        return (self.x, self.y, self.z) > (other.x, other.y, other.z)

    def less(self, other: Vec3f) -> bool:
        """Lexicographic strict comparison on (x, y, z)."""
        return (self.x, self.y, self.z) < (other.x, other.y, other.z)

    def greater_equal(self, other: Vec3f) -> bool:
        return self.greater(other) or self.is_close(other)

    def less_equal(self, other: Vec3f) -> bool:
        return self.less(other) or self.is_close(other)

    def reflect(self, other: Vec3f) -> Vec3f:
        """Reflect this vector about the plane with normal ``other``."""
        return self - other.scale(2.0 * self.dot(other))

    def quantize(self, qsize: float) -> Vec3f:
        return Vec3f(quantize(self.x, qsize), quantize(self.y, qsize), quantize(self.z, qsize))

    def mvp_mul(self, mvp: Sequence[float]) -> Vec3f:
        """Transform by a column-major 4x4 matrix given as 16 floats, with perspective divide."""
        if len(mvp) != 16:
            raise ValueError(f"expected 16 matrix elements, got {len(mvp)}")
        x, y, z = self.x, self.y, self.z
        tx = mvp[0] * x + mvp[4] * y + mvp[8] * z + mvp[12]
        ty = mvp[1] * x + mvp[5] * y + mvp[9] * z + mvp[13]
        tz = mvp[2] * x + mvp[6] * y + mvp[10] * z + mvp[14]
        tw = mvp[3] * x + mvp[7] * y + mvp[11] * z + mvp[15]
        return Vec3f(tx / tw, ty / tw, tz / tw)

    def rotate(self, angle: float, axis: Vec3f) -> Vec3f:
        """Rotate by ``angle`` radians about ``axis`` (Rodrigues' formula)."""
        cosa = math.cos(angle)
        sina = math.sin(angle)
        omc = 1.0 - cosa
        length = axis.magnitude()
        ax, ay, az = axis.x / length, axis.y / length, axis.z / length
        rows = (
            (ax * ax * omc + cosa, ax * ay * omc - az * sina, ax * az * omc + ay * sina),
            (ay * ax * omc + az * sina, ay * ay * omc + cosa, ay * az * omc - ax * sina),
            (az * ax * omc - ay * sina, az * ay * omc + ax * sina, az * az * omc + cosa),
        )
        x, y, z = rows_applied = tuple(r[0] * self.x + r[1] * self.y + r[2] * self.z for r in rows)
        del rows_applied
        return Vec3f(x, y, z)