"""Vector and matrix helpers in the left-handed, row-vector convention."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

Row = Tuple[float, float, float, float]
Matrix = Tuple[Row, Row, Row, Row]


@dataclass(frozen=True)
class Vec3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vec3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_sq(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; the zero vector stays zero."""
        length = self.length()
        if length == 0.0:
            return Vec3()
        return Vec3(self.x / length, self.y / length, self.z / length)


def _matrix(*rows: Tuple[float, ...]) -> Matrix:
    return tuple(tuple(float(v) for v in row) for row in rows)  # type: ignore[return-value]


def identity() -> Matrix:
    return _matrix((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (0, 0, 0, 1))


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product ``a @ b``: transform by ``a`` first, then ``b``."""
    columns = list(zip(*b))
    return _matrix(
        *(tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a)
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return _matrix((x, 0, 0, 0), (0, y, 0, 0), (0, 0, z, 0), (0, 0, 0, 1))


def translation(x: float, y: float, z: float) -> Matrix:
    return _matrix((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0), (x, y, z, 1))


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> Matrix:
    """Rotation by roll (Z), then pitch (X), then yaw (Y)."""
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cr, sr = math.cos(roll), math.sin(roll)
    return _matrix(
        (cr * cy + sr * sp * sy, sr * cp, sr * sp * cy - cr * sy, 0),
        (cr * sp * sy - sr * cy, cr * cp, sr * sy + cr * sp * cy, 0),
        (cp * sy, -sp, cp * cy, 0),
        (0, 0, 0, 1),
    )


def rotation_axis(axis: Vec3, angle: float) -> Matrix:
    """Rotation by ``angle`` radians about ``axis`` (normalised first)."""
    n = axis.normalized()
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    return _matrix(
        (n.x * n.x * t + c, n.x * n.y * t + n.z * s, n.x * n.z * t - n.y * s, 0),
        (n.x * n.y * t - n.z * s, n.y * n.y * t + c, n.y * n.z * t + n.x * s, 0),
        (n.x * n.z * t + n.y * s, n.y * n.z * t - n.x * s, n.z * n.z * t + c, 0),
        (0, 0, 0, 1),
    )


def look_at_lh(eye: Vec3, focus: Vec3, up: Vec3) -> Matrix:
    """Left-handed view matrix looking from ``eye`` towards ``focus``."""
    direction = focus - eye
    if direction.length_sq() == 0.0:
        raise ValueError("eye and focus must differ")
    if up.length_sq() == 0.0:
        raise ValueError("up vector must not be zero")
    forward = direction.normalized()
    right = up.cross(forward).normalized()
    upward = forward.cross(right)
    neg_eye = -eye
    return _matrix(
        (right.x, upward.x, forward.x, 0),
        (right.y, upward.y, forward.y, 0),
        (right.z, upward.z, forward.z, 0),
        (right.dot(neg_eye), upward.dot(neg_eye), forward.dot(neg_eye), 1),
    )


def perspective_fov_lh(fov_y: float, aspect: float, near_z: float, far_z: float) -> Matrix:
    """Left-handed perspective projection mapping depth to the range 0..1."""
    if near_z <= 0.0 or far_z <= 0.0:
        raise ValueError("clip distances must be positive")
    if math.isclose(near_z, far_z, rel_tol=0.0, abs_tol=1e-5):
        raise ValueError("near and far clip distances must differ")
    if math.isclose(fov_y, 0.0, abs_tol=2e-5):
        raise ValueError("field of view must not be zero")
    if math.isclose(aspect, 0.0, abs_tol=1e-5):
        raise ValueError("aspect ratio must not be zero")
    half = fov_y * 0.5
    height = math.cos(half) / math.sin(half)
    width = height / aspect
    depth = far_z / (far_z - near_z)
    return _matrix(
        (width, 0, 0, 0),
        (0, height, 0, 0),
        (0, 0, depth, 1),
        (0, 0, -depth * near_z, 0),
    )


def random_range(low: float, high: float, rng: Optional[random.Random] = None) -> float:
    """Random value between ``low`` and ``high``."""
    value = (rng or random).random()
    return low + (high - low) * value