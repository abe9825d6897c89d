"""Road ribbon mesh synthesis.

Each segment becomes one flat-shaded quad of constant half-width centred on
the segment, oriented by the segment's ``up`` vector.  The quad's near edge
is perpendicular to its own segment and its far edge is perpendicular to the
*next* segment (a miter joint), so consecutive quads share an edge and the
ribbon has no gaps or overlaps at the joints.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from road_rails.geometry.projection import face_normal
from road_rails.geometry.vector import Vec3
from road_rails.network.models import RoadNetwork, Segment

VERTICES_PER_SEGMENT = 4
INDICES_PER_SEGMENT = 6


@dataclass(frozen=True)
class Material:
    """Single flat-colour material, visible from above and below."""

    color: tuple[float, float, float] = (0.9, 0.5, 0.3)
    double_sided: bool = True
    cull_mode: str | None = None
    """``None`` disables back-face culling."""


@dataclass(eq=False)
class RoadMesh:
    """Triangle-list buffers ready for upload.

    ``positions`` and ``normals`` are ``float32`` arrays of shape ``(4n, 3)``;
    ``indices`` is a ``uint32`` array of length ``6n`` for ``n`` segments.
    """

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    @classmethod
    def empty(cls) -> RoadMesh:
        return cls(
            positions=np.zeros((0, 3), dtype=np.float32),
            normals=np.zeros((0, 3), dtype=np.float32),
            indices=np.zeros(0, dtype=np.uint32),
        )

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def triangle_count(self) -> int:
        return int(self.indices.shape[0]) // 3

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def to_dict(self) -> dict:
        return {
            "positions": self.positions.tolist(),
            "normals": self.normals.tolist(),
            "indices": self.indices.tolist(),
        }


class MeshSynthesizer:
    """Builds a :class:`RoadMesh` from a road network.

    Args:
        half_width: Distance from the centerline to each ribbon edge.
    """

    def __init__(self, half_width: float = 1.5) -> None:
        if half_width <= 0.0:
            raise ValueError("half_width must be > 0")
        self.half_width = half_width

    def build(self, network: RoadNetwork) -> RoadMesh:
        segments = network.road_segments
        n = len(segments)
        if n == 0:
            return RoadMesh.empty()

        positions = np.empty((n * VERTICES_PER_SEGMENT, 3), dtype=np.float32)
        normals = np.empty((n * VERTICES_PER_SEGMENT, 3), dtype=np.float32)
        indices = np.empty(n * INDICES_PER_SEGMENT, dtype=np.uint32)
        w = self.half_width

        for i, segment in enumerate(segments):
            right = _right_of(segment)
            left = -right
            if i + 1 < n:
                next_right = _right_of(segments[i + 1])
                next_left = -next_right
            else:
                next_right, next_left = right, left

            p1 = segment.a + left * w
            p2 = segment.a + right * w
            p3 = segment.b + next_left * w
            p4 = segment.b + next_right * w
            normal = face_normal(p1, p2, p3)

            v = i * VERTICES_PER_SEGMENT
            positions[v:v + VERTICES_PER_SEGMENT] = [
                p1.to_tuple(), p2.to_tuple(), p3.to_tuple(), p4.to_tuple()
            ]
            normals[v:v + VERTICES_PER_SEGMENT] = normal.to_tuple()

            k = i * INDICES_PER_SEGMENT
            # (p1, p2, p3) and (p3, p2, p4)
            indices[k:k + INDICES_PER_SEGMENT] = [v, v + 1, v + 2, v + 2, v + 1, v + 3]

        return RoadMesh(positions=positions, normals=normals, indices=indices)


def _right_of(segment: Segment) -> Vec3:
    return segment.direction.cross(segment.up.normalized()).normalized()
