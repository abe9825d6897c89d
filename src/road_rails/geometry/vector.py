"""Vector and rotation value types.

Conventions follow a right-handed, Y-up world: a body's local forward axis is
``-Z`` and its local up axis is ``+Y``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

_EPS = 1e-12


@dataclass(frozen=True)
class Vec3:
    """An (x, y, z) triple used for both points and directions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vec3:
        """Build a :class:`Vec3` from any 3-item iterable."""
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, k: float) -> Vec3:
        return Vec3(self.x * k, self.y * k, self.z * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vec3:
        return Vec3(self.x / k, self.y / k, self.z / k)

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

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def distance_to(self, other: Vec3) -> float:
        return (self - other).length()

    def normalized(self) -> Vec3:
        """Return a unit-length copy; the zero vector normalizes to itself."""
        length = self.length()
        if length < _EPS:
            return Vec3()
        return self / length

    def project_onto(self, other: Vec3) -> Vec3:
        """Return the component of this vector parallel to *other*."""
        denom = other.length_squared()
        if denom < _EPS:
            return Vec3()
        return other * (self.dot(other) / denom)

    def is_close(self, other: Vec3, tol: float = 1e-6) -> bool:
        return (
            math.isclose(self.x, other.x, abs_tol=tol)
            and math.isclose(self.y, other.y, abs_tol=tol)
            and math.isclose(self.z, other.z, abs_tol=tol)
        )


Vec3.ZERO = Vec3(0.0, 0.0, 0.0)
Vec3.X = Vec3(1.0, 0.0, 0.0)
Vec3.Y = Vec3(0.0, 1.0, 0.0)
Vec3.Z = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Quat:
    """A rotation quaternion ``w + xi + yj + zk``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_axis_angle(cls, axis: Vec3, angle: float) -> Quat:
        """Rotation of *angle* radians about *axis* (need not be unit length)."""
        n = axis.normalized()
        s = math.sin(angle / 2.0)
        return cls(math.cos(angle / 2.0), n.x * s, n.y * s, n.z * s)

    @classmethod
    def look_to(cls, direction: Vec3, up: Vec3) -> Quat:
        """Rotation whose forward axis (local ``-Z``) points along *direction*.

        The rotated local ``+Y`` is *up* re-orthogonalised against the
        forward axis.
        """
        back = (-direction).normalized()
        right = up.cross(back).normalized()
        if right.length_squared() < _EPS:
            # up is parallel to direction; pick any perpendicular axis
            right = Vec3.X.cross(back).normalized()
            if right.length_squared() < _EPS:
                right = Vec3.Z.cross(back).normalized()
        true_up = back.cross(right)
        return cls._from_basis(right, true_up, back)

    @classmethod
    def _from_basis(cls, x_axis: Vec3, y_axis: Vec3, z_axis: Vec3) -> Quat:
        m00, m01, m02 = x_axis.x, y_axis.x, z_axis.x
        m10, m11, m12 = x_axis.y, y_axis.y, z_axis.y
        m20, m21, m22 = x_axis.z, y_axis.z, z_axis.z
        trace = m00 + m11 + m22
        if trace > 0.0:
            s = math.sqrt(trace + 1.0) * 2.0
            q = cls(0.25 * s, (m21 - m12) / s, (m02 - m20) / s, (m10 - m01) / s)
        elif m00 > m11 and m00 > m22:
            s = math.sqrt(1.0 + m00 - m11 - m22) * 2.0
            q = cls((m21 - m12) / s, 0.25 * s, (m01 + m10) / s, (m02 + m20) / s)
        elif m11 > m22:
            s = math.sqrt(1.0 + m11 - m00 - m22) * 2.0
            q = cls((m02 - m20) / s, (m01 + m10) / s, 0.25 * s, (m12 + m21) / s)
        else:
            s = math.sqrt(1.0 + m22 - m00 - m11) * 2.0
            q = cls((m10 - m01) / s, (m02 + m20) / s, (m12 + m21) / s, 0.25 * s)
        return q.normalized()

    def __mul__(self, other: Quat) -> Quat:
        """Hamilton product: ``(self * other)`` applies *other* first."""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quat(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def normalized(self) -> Quat:
        n = math.sqrt(self.w ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2)
        if n < _EPS:
            return Quat()
        return Quat(self.w / n, self.x / n, self.y / n, self.z / n)

    def rotate(self, v: Vec3) -> Vec3:
        """Apply this rotation to *v*."""
        q = Vec3(self.x, self.y, self.z)
        t = q.cross(v) * 2.0
        return v + t * self.w + q.cross(t)

    def forward(self) -> Vec3:
        return self.rotate(Vec3(0.0, 0.0, -1.0))

    def up(self) -> Vec3:
        return self.rotate(Vec3.Y)

    def integrate(self, angular_velocity: Vec3, dt: float) -> Quat:
        """Advance this orientation by a world-space angular velocity over *dt*."""
        omega = Quat(0.0, angular_velocity.x, angular_velocity.y, angular_velocity.z)
        dq = omega * self
        half = 0.5 * dt
        return Quat(
            self.w + dq.w * half,
            self.x + dq.x * half,
            self.y + dq.y * half,
            self.z + dq.z * half,
        ).normalized()


Quat.IDENTITY = Quat(1.0, 0.0, 0.0, 0.0)
