"""Vector math and segment projection.

Public API
----------
Vec3                            - point / direction value type
Quat                            - rotation value type
closest_point_on_segment_capped - capped point-to-segment projection
face_normal                     - winding-dependent triangle normal
"""

from road_rails.geometry.projection import closest_point_on_segment_capped, face_normal
from road_rails.geometry.vector import Quat, Vec3

__all__ = ["Quat", "Vec3", "closest_point_on_segment_capped", "face_normal"]
