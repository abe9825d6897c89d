"""Pydantic models for the persisted road network format.

Field names and nesting must stay stable so previously saved networks keep
loading::

    {
      "last_position": [x, y, z] | null,
      "road_segments": [{"a": [x, y, z], "b": [...], "up": [...]}, ...],
      "macros": [[<segment>, ...], ...]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from road_rails.geometry.vector import Vec3
from road_rails.network.models import Macro, RoadNetwork, Segment

Vector = tuple[float, float, float]


class SegmentSchema(BaseModel):
    a: Vector
    b: Vector
    up: Vector

    @model_validator(mode="after")
    def _reject_zero_length(self) -> SegmentSchema:
        if self.a == self.b:
            raise ValueError(f"zero-length segment at {list(self.a)}")
        return self

    @classmethod
    def from_segment(cls, segment: Segment) -> SegmentSchema:
        return cls(a=segment.a.to_tuple(), b=segment.b.to_tuple(), up=segment.up.to_tuple())

    def to_segment(self) -> Segment:
        return Segment(
            a=Vec3.from_iterable(self.a),
            b=Vec3.from_iterable(self.b),
            up=Vec3.from_iterable(self.up),
        )


class RoadNetworkSchema(BaseModel):
    last_position: Vector | None = None
    road_segments: list[SegmentSchema] = []
    macros: list[list[SegmentSchema]] = []

    @classmethod
    def from_network(cls, network: RoadNetwork) -> RoadNetworkSchema:
        return cls(
            last_position=(
                network.last_position.to_tuple()
                if network.last_position is not None
                else None
            ),
            road_segments=[SegmentSchema.from_segment(s) for s in network.road_segments],
            macros=[
                [SegmentSchema.from_segment(s) for s in macro.segments]
                for macro in network.macros
            ],
        )

    def to_network(self) -> RoadNetwork:
        return RoadNetwork(
            last_position=(
                Vec3.from_iterable(self.last_position)
                if self.last_position is not None
                else None
            ),
            road_segments=[s.to_segment() for s in self.road_segments],
            macros=[Macro(segments=[s.to_segment() for s in m]) for m in self.macros],
        )
