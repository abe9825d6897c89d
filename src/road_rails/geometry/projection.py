"""Point-to-segment projection and triangle normals."""

from __future__ import annotations

from road_rails.geometry.vector import Vec3


def closest_point_on_segment_capped(a: Vec3, b: Vec3, p: Vec3) -> Vec3 | None:
    """Project *p* onto the segment ``a -> b``.

    The projection is *capped*, not clamped: when the foot of the
    perpendicular lies before ``a`` or past ``b`` there is no candidate and
    ``None`` is returned instead of snapping to the nearest endpoint.

    Raises:
        ValueError: If ``a`` and ``b`` coincide.
    """
    ab = b - a
    length_squared = ab.length_squared()
    if length_squared == 0.0:
        raise ValueError("Cannot project onto a zero-length segment")

    dot_product = (p - a).dot(ab)
    if dot_product < 0.0 or dot_product > length_squared:
        return None
    return a + ab * (dot_product / length_squared)


def face_normal(p0: Vec3, p1: Vec3, p2: Vec3) -> Vec3:
    """Unit normal of triangle ``(p0, p1, p2)``; depends on winding order."""
    return (p1 - p0).cross(p2 - p0).normalized()
