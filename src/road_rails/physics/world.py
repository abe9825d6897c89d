"""In-memory rigid-body world.

Bodies and joints are addressed through stable integer identifiers resolved
via lookup tables; identifiers are never reused after a despawn, so a stale
handle simply resolves to ``None``.

The integrator is intentionally minimal (semi-implicit Euler, linear and
angular damping, positional correction for revolute joints).  It exists so
the guidance controller and editor can be driven headless; collision is not
simulated.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import NewType

from road_rails.geometry.vector import Quat, Vec3

_logger = logging.getLogger(__name__)

EntityId = NewType("EntityId", int)
JointHandle = NewType("JointHandle", int)


@dataclass
class ExternalForce:
    """Additive force/torque accumulator.

    Contributors add into it; the world consumes and clears it on each step.
    """

    force: Vec3 = Vec3.ZERO
    torque: Vec3 = Vec3.ZERO

    def add_force(self, f: Vec3) -> None:
        self.force = self.force + f

    def add_torque(self, t: Vec3) -> None:
        self.torque = self.torque + t

    def clear(self) -> None:
        self.force = Vec3.ZERO
        self.torque = Vec3.ZERO


@dataclass
class RigidBody:
    """Kinematic state of one simulated body."""

    position: Vec3 = Vec3.ZERO
    rotation: Quat = Quat.IDENTITY
    linvel: Vec3 = Vec3.ZERO
    angvel: Vec3 = Vec3.ZERO
    mass: float = 1.0
    inertia: float = 1.0
    linear_damping: float = 0.8
    angular_damping: float = 0.4
    external: ExternalForce = field(default_factory=ExternalForce)

    def forward(self) -> Vec3:
        return self.rotation.forward()

    def up(self) -> Vec3:
        return self.rotation.up()

    def to_world(self, local_point: Vec3) -> Vec3:
        return self.rotation.rotate(local_point) + self.position


@dataclass(frozen=True)
class RevoluteJoint:
    """Rotational joint about *axis* with fixed local anchors on each body."""

    local_anchor1: Vec3
    local_anchor2: Vec3
    axis: Vec3 = Vec3.Y


@dataclass
class _JointRecord:
    body1: EntityId
    body2: EntityId
    joint: RevoluteJoint


class PhysicsWorld:
    """Owns bodies and joints; hands out stable identifiers."""

    def __init__(self) -> None:
        self._bodies: dict[EntityId, RigidBody] = {}
        self._joints: dict[JointHandle, _JointRecord] = {}
        self._next_entity = itertools.count(1)
        self._next_joint = itertools.count(1)

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------

    def spawn(self, body: RigidBody | None = None) -> EntityId:
        entity = EntityId(next(self._next_entity))
        self._bodies[entity] = body if body is not None else RigidBody()
        return entity

    def despawn(self, entity: EntityId) -> None:
        """Remove a body and any joint attached to it."""
        self._bodies.pop(entity, None)
        for handle in [h for h, rec in self._joints.items() if entity in (rec.body1, rec.body2)]:
            del self._joints[handle]

    def get(self, entity: EntityId | None) -> RigidBody | None:
        if entity is None:
            return None
        return self._bodies.get(entity)

    def __contains__(self, entity: object) -> bool:
        return entity in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)

    # ------------------------------------------------------------------
    # Joints
    # ------------------------------------------------------------------

    def add_joint(self, body1: EntityId, body2: EntityId, joint: RevoluteJoint) -> JointHandle:
        if body1 not in self._bodies or body2 not in self._bodies:
            raise KeyError(f"Cannot join missing bodies {body1} and {body2}")
        handle = JointHandle(next(self._next_joint))
        self._joints[handle] = _JointRecord(body1, body2, joint)
        return handle

    def remove_joint(self, handle: JointHandle) -> None:
        self._joints.pop(handle, None)

    def joint(self, handle: JointHandle | None) -> RevoluteJoint | None:
        if handle is None:
            return None
        rec = self._joints.get(handle)
        return rec.joint if rec else None

    def joint_count(self) -> int:
        return len(self._joints)

    # ------------------------------------------------------------------
    # Integration
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Advance every body by *dt* seconds and clear force accumulators."""
        for body in self._bodies.values():
            ext = body.external
            linvel = body.linvel + ext.force * (dt / body.mass)
            angvel = body.angvel + ext.torque * (dt / body.inertia)
            body.linvel = linvel * (1.0 / (1.0 + dt * body.linear_damping))
            body.angvel = angvel * (1.0 / (1.0 + dt * body.angular_damping))
            body.position = body.position + body.linvel * dt
            body.rotation = body.rotation.integrate(body.angvel, dt)
            ext.clear()

        for rec in self._joints.values():
            self._solve_joint(rec)

    def _solve_joint(self, rec: _JointRecord) -> None:
        # Drag body2 so that both anchors coincide.
        body1 = self._bodies.get(rec.body1)
        body2 = self._bodies.get(rec.body2)
        if body1 is None or body2 is None:
            _logger.debug("Skipping joint between missing bodies %s/%s", rec.body1, rec.body2)
            return
        anchor1 = body1.to_world(rec.joint.local_anchor1)
        anchor2 = body2.to_world(rec.joint.local_anchor2)
        body2.position = body2.position + (anchor1 - anchor2)
