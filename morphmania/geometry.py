"""Small 3D vector and quaternion helpers used by the walk mesh and mixer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

Vec3 = Tuple[float, float, float]

_FLOAT_EPSILON = 1.1920928955078125e-07


def add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise sum of two vectors."""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Component-wise difference ``a - b``."""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(v: Sequence[float], s: float) -> Vec3:
    """Vector multiplied by a scalar."""
    return (v[0] * s, v[1] * s, v[2] * s)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """Right-handed cross product."""
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length(v: Sequence[float]) -> float:
    """Euclidean length."""
    return math.sqrt(dot(v, v))


def normalize(v: Sequence[float]) -> Vec3:
    """Unit vector in the direction of ``v``; raises ValueError for a zero vector."""
    n = length(v)
    if n == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return (v[0] / n, v[1] / n, v[2] / n)


def mix(a: Sequence[float], b: Sequence[float], t: float) -> Vec3:
    """Linear interpolation ``a * (1 - t) + b * t``."""
    return (
        a[0] * (1.0 - t) + b[0] * t,
        a[1] * (1.0 - t) + b[1] * t,
        a[2] * (1.0 - t) + b[2] * t,
    )


@dataclass(frozen=True)
class Quat:
    """Unit quaternion ``w + xi + yj + zk`` describing a rotation."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def angle_axis(cls, angle: float, axis: Sequence[float]) -> "Quat":
        """Rotation of ``angle`` radians about the (unit) ``axis``."""
        s = math.sin(angle * 0.5)
        return cls(math.cos(angle * 0.5), axis[0] * s, axis[1] * s, axis[2] * s)

    @classmethod
    def rotation_between(cls, a: Sequence[float], b: Sequence[float]) -> "Quat":
        """Shortest rotation taking unit vector ``a`` onto unit vector ``b``."""
        cos_theta = dot(a, b)
        if cos_theta >= 1.0 - _FLOAT_EPSILON:
            return cls()
        if cos_theta < -1.0 + _FLOAT_EPSILON:
            axis = cross((0.0, 0.0, 1.0), a)
            if dot(axis, axis) < _FLOAT_EPSILON:
                axis = cross((1.0, 0.0, 0.0), a)
            return cls.angle_axis(math.pi, normalize(axis))
        axis = cross(a, b)
        s = math.sqrt((1.0 + cos_theta) * 2.0)
        inv = 1.0 / s
        return cls(s * 0.5, axis[0] * inv, axis[1] * inv, axis[2] * inv)

    def __mul__(self, other: Union["Quat", Sequence[float]]):
        """Compose with another quaternion, or rotate a vector."""
        if isinstance(other, Quat):
            return Quat(
                self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
                self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
                self.w * other.y + self.y * other.w + self.z * other.x - self.x * other.z,
                self.w * other.z + self.z * other.w + self.x * other.y - self.y * other.x,
            )
        return self.rotate(other)

    def rotate(self, v: Sequence[float]) -> Vec3:
        """Apply this rotation to vector ``v``."""
        q = (self.x, self.y, self.z)
        uv = cross(q, v)
        uuv = cross(q, uv)
        return add(v, add(scale(uv, 2.0 * self.w), scale(uuv, 2.0)))

    def columns(self) -> Tuple[Vec3, Vec3, Vec3]:
        """Columns of the equivalent 3x3 rotation matrix."""
        w, x, y, z = self.w, self.x, self.y, self.z
        return (
            (1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y + w * z), 2.0 * (x * z - w * y)),
            (2.0 * (x * y - w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z + w * x)),
            (2.0 * (x * z + w * y), 2.0 * (y * z - w * x), 1.0 - 2.0 * (x * x + y * y)),
        )