"""Tests for the in-memory PhysicsWorld."""

from __future__ import annotations

import pytest

from road_rails.geometry.vector import Vec3
from road_rails.physics.world import ExternalForce, PhysicsWorld, RevoluteJoint, RigidBody


def test_spawn_and_get():
    world = PhysicsWorld()
    body = RigidBody(position=Vec3(1, 2, 3))
    entity = world.spawn(body)
    assert world.get(entity) is body
    assert entity in world


def test_get_none_and_missing():
    world = PhysicsWorld()
    assert world.get(None) is None
    assert world.get(999) is None


def test_ids_not_reused_after_despawn():
    world = PhysicsWorld()
    first = world.spawn()
    world.despawn(first)
    second = world.spawn()
    assert second != first
    assert world.get(first) is None


def test_accumulator_is_additive():
    ext = ExternalForce()
    ext.add_force(Vec3(1, 0, 0))
    ext.add_force(Vec3(0, 2, 0))
    ext.add_torque(Vec3(0, 0, 3))
    assert ext.force == Vec3(1, 2, 0)
    assert ext.torque == Vec3(0, 0, 3)
    ext.clear()
    assert ext.force == Vec3.ZERO and ext.torque == Vec3.ZERO


def test_step_integrates_force_and_clears_accumulator():
    world = PhysicsWorld()
    body = RigidBody(mass=2.0, linear_damping=0.0)
    entity = world.spawn(body)
    body.external.add_force(Vec3(4.0, 0.0, 0.0))

    world.step(0.5)

    assert world.get(entity).linvel.x == pytest.approx(1.0)
    assert body.position.x == pytest.approx(0.5)
    assert body.external.force == Vec3.ZERO


def test_damping_slows_free_body():
    world = PhysicsWorld()
    body = RigidBody(linvel=Vec3(10.0, 0, 0), linear_damping=0.8)
    world.spawn(body)
    world.step(0.1)
    assert body.linvel.x < 10.0


def test_joint_pulls_second_body_to_anchor():
    world = PhysicsWorld()
    tow = world.spawn(RigidBody(position=Vec3(0, 0, 0)))
    trailer_body = RigidBody(position=Vec3(3, 0, 9))
    trailer = world.spawn(trailer_body)
    joint = RevoluteJoint(local_anchor1=Vec3(0, 0, 2.5), local_anchor2=Vec3(0, 0, -2.5))

    handle = world.add_joint(tow, trailer, joint)
    world.step(0.0)

    assert world.joint(handle) is joint
    assert trailer_body.position.is_close(Vec3(0, 0, 5))


def test_remove_joint_and_despawn_cleanup():
    world = PhysicsWorld()
    a, b = world.spawn(), world.spawn()
    handle = world.add_joint(a, b, RevoluteJoint(Vec3.ZERO, Vec3.ZERO))
    world.remove_joint(handle)
    assert world.joint(handle) is None

    world.add_joint(a, b, RevoluteJoint(Vec3.ZERO, Vec3.ZERO))
    world.despawn(b)
    assert world.joint_count() == 0


def test_add_joint_to_missing_body_raises():
    world = PhysicsWorld()
    a = world.spawn()
    with pytest.raises(KeyError):
        world.add_joint(a, 42, RevoluteJoint(Vec3.ZERO, Vec3.ZERO))
