"""GuidanceController: pulls guided bodies back onto the nearest road segment.

Every tick, for each guided entity:

1. Scan all road segments (raised by the float height) for the nearest
   capped projection of the entity's position.
2. Ignore the entity if there is no candidate or the candidate is farther
   than the influence radius.
3. Add a torque aligning the entity's forward axis with the segment
   direction and its up axis with the segment's ``up``.
4. Add a centering force, keeping only the component perpendicular to the
   segment so forward travel is neither resisted nor assisted.

The search is a linear scan: O(segments) per entity per tick.  There is no
spatial index; iteration order defines the tie-break (the first segment at
the minimum distance wins).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from road_rails.config import GuidanceConfig
from road_rails.geometry.projection import closest_point_on_segment_capped
from road_rails.geometry.vector import Vec3
from road_rails.network.models import RoadNetwork, Segment
from road_rails.physics.world import EntityId, PhysicsWorld, RigidBody

_logger = logging.getLogger(__name__)


def apply_control(delta: Vec3, rate_of_change: Vec3, p: float, r: float) -> Vec3:
    """Proportional + rate correction (PID-like, no integral term).

    *r* is typically negative so the rate term damps motion.
    """
    return delta * p + rate_of_change * r


@dataclass(frozen=True)
class NearestSegment:
    """Result of the nearest-segment search."""

    index: int
    point: Vec3
    """Closest point on the raised segment."""

    distance: float
    segment: Segment


@dataclass(frozen=True)
class GuidedEntity:
    """An entity subject to road guidance and its gain multiplier."""

    entity: EntityId
    weight: float = 1.0


@dataclass(frozen=True)
class Correction:
    force: Vec3
    torque: Vec3


def find_nearest_segment(
    segments: Sequence[Segment],
    position: Vec3,
    float_height: float = 0.0,
) -> NearestSegment | None:
    """Return the segment whose raised centerline is closest to *position*.

    Segments whose capped projection misses are skipped.  Ties keep the
    lowest index.
    """
    offset = Vec3.Y * float_height

    closest_dist: float | None = None
    closest_point: Vec3 | None = None
    closest_index: int | None = None

    for index, segment in enumerate(segments):
        candidate = closest_point_on_segment_capped(
            segment.a + offset, segment.b + offset, position
        )
        if candidate is None:
            continue

        dist = candidate.distance_to(position)
        if closest_dist is not None:
            assert closest_point is not None and closest_index is not None, (
                "closest distance recorded without a matching point and segment"
            )
            if not dist < closest_dist:
                continue

        closest_dist = dist
        closest_point = candidate
        closest_index = index

    if closest_dist is None:
        return None
    assert closest_point is not None and closest_index is not None
    return NearestSegment(
        index=closest_index,
        point=closest_point,
        distance=closest_dist,
        segment=segments[closest_index],
    )


class GuidanceController:
    """Computes and applies road-centering force and torque.

    Parameters
    ----------
    config:
        Gains, float height and influence radii; see
        :class:`~road_rails.config.GuidanceConfig`.
    """

    def __init__(self, config: GuidanceConfig | None = None) -> None:
        self.config = config or GuidanceConfig()

    def influence_radius(self, towing: bool) -> float:
        cfg = self.config
        return cfg.towing_influence_radius if towing else cfg.influence_radius

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply(
        self,
        network: RoadNetwork,
        world: PhysicsWorld,
        guided: Iterable[GuidedEntity],
        towing: bool = False,
    ) -> int:
        """Add corrections to every guided entity's force accumulator.

        Entities that no longer exist are skipped.  Returns the number of
        entities that received a correction this tick.
        """
        corrected = 0
        for item in guided:
            body = world.get(item.entity)
            if body is None:
                _logger.debug("Guided entity %s not found; skipping", item.entity)
                continue
            correction = self.correction_for(network, body, item.weight, towing)
            if correction is None:
                continue
            body.external.add_force(correction.force)
            body.external.add_torque(correction.torque)
            corrected += 1
        return corrected

    def correction_for(
        self,
        network: RoadNetwork,
        body: RigidBody,
        weight: float = 1.0,
        towing: bool = False,
    ) -> Correction | None:
        """Return the correction for *body*, or None when it is off the road."""
        cfg = self.config
        nearest = find_nearest_segment(network.road_segments, body.position, cfg.float_height)
        if nearest is None:
            return None
        if nearest.distance > self.influence_radius(towing):
            return None

        direction = nearest.segment.direction
        rot_p = cfg.rotation_p * weight
        rot_r = cfg.rotation_r * weight
        pos_p = cfg.position_p * weight
        pos_r = cfg.position_r * weight

        delta_forward = -direction.normalized().cross(body.forward()) * cfg.sub_target_fraction
        delta_up = -nearest.segment.up.normalized().cross(body.up()) * cfg.sub_target_fraction
        torque = (
            apply_control(delta_forward, body.angvel, rot_p, rot_r)
            + apply_control(delta_up, body.angvel, rot_p, rot_r)
        )

        delta_position = nearest.point - body.position
        centering = apply_control(delta_position, body.linvel, pos_p, pos_r)
        force = centering - centering.project_onto(direction)

        return Correction(force=force, torque=torque)
