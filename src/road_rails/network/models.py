"""Road network data structures."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from road_rails.geometry.vector import Vec3


class DegenerateSegmentError(ValueError):
    """Raised when a segment's endpoints coincide."""


@dataclass(frozen=True)
class Segment:
    """A directed straight road piece.

    Travel direction is ``a -> b``.  ``up`` is the orientation reference
    captured at recording time (the vehicle's up vector); it need not be unit
    length and is normalised wherever it is used.
    """

    a: Vec3
    """Start point."""

    b: Vec3
    """End point."""

    up: Vec3 = Vec3.Y
    """Banking / roll reference for this piece of road."""

    def __post_init__(self) -> None:
        if self.a == self.b:
            raise DegenerateSegmentError(f"Zero-length segment at {self.a.to_tuple()}")

    @property
    def direction(self) -> Vec3:
        """Unnormalised travel direction ``b - a``."""
        return self.b - self.a

    @property
    def length(self) -> float:
        return self.direction.length()

    def offset(self, v: Vec3) -> Segment:
        """Return a copy translated by *v* (``up`` unchanged)."""
        return Segment(a=self.a + v, b=self.b + v, up=self.up)


@dataclass
class Macro:
    """A recorded, relocatable sequence of segments.

    Coordinates are stored as they were in world space at record time and are
    reinterpreted as offsets from the driving frame when replayed.
    """

    segments: list[Segment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass
class RoadNetwork:
    """Ordered road segments, recorded macros and the open edit cursor.

    ``last_position`` is ``None`` when no start point is pending; otherwise
    the next appended segment starts there.
    """

    last_position: Vec3 | None = None
    road_segments: list[Segment] = field(default_factory=list)
    macros: list[Macro] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.road_segments

    def add_segment(self, segment: Segment) -> None:
        self.road_segments.append(segment)

    def clear_segments(self, cursor: Vec3 | None = None) -> None:
        """Drop every road segment and move the edit cursor to *cursor*.

        Recorded macros are kept.
        """
        self.road_segments.clear()
        self.last_position = cursor

    def record_macro(self) -> Macro:
        """Append a by-value copy of the current segments as a new macro."""
        macro = Macro(segments=list(self.road_segments))
        self.macros.append(macro)
        return macro

    def latest_macro(self) -> Macro | None:
        return self.macros[-1] if self.macros else None

    def snapshot(self) -> RoadNetwork:
        """Return an independent copy safe to hand to readers."""
        return copy.deepcopy(self)
