"""Rigid-body world used as the controller's kinematics source and force sink."""

from road_rails.physics.world import (
    EntityId,
    ExternalForce,
    JointHandle,
    PhysicsWorld,
    RevoluteJoint,
    RigidBody,
)

__all__ = [
    "EntityId",
    "ExternalForce",
    "JointHandle",
    "PhysicsWorld",
    "RevoluteJoint",
    "RigidBody",
]
