"""Road-relative guidance controller."""

from road_rails.guidance.controller import (
    Correction,
    GuidanceController,
    GuidedEntity,
    NearestSegment,
    apply_control,
    find_nearest_segment,
)

__all__ = [
    "Correction",
    "GuidanceController",
    "GuidedEntity",
    "NearestSegment",
    "apply_control",
    "find_nearest_segment",
]
