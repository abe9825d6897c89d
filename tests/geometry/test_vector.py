"""Tests for Vec3 / Quat value types."""

from __future__ import annotations

import math

import pytest

from road_rails.geometry.vector import Quat, Vec3


class TestVec3:
    def test_cross_follows_right_hand_rule(self):
        assert Vec3.X.cross(Vec3.Y) == Vec3.Z
        assert Vec3.Y.cross(Vec3.Z) == Vec3.X

    def test_normalized_has_unit_length(self):
        v = Vec3(3.0, 4.0, 12.0).normalized()
        assert v.length() == pytest.approx(1.0)

    def test_zero_vector_normalizes_to_zero(self):
        assert Vec3().normalized() == Vec3.ZERO

    def test_project_onto_keeps_parallel_component(self):
        v = Vec3(2.0, 5.0, 0.0)
        assert v.project_onto(Vec3(10.0, 0.0, 0.0)).is_close(Vec3(2.0, 0.0, 0.0))

    def test_from_iterable_round_trips_tuple(self):
        v = Vec3.from_iterable([1, 2, 3])
        assert v.to_tuple() == (1.0, 2.0, 3.0)
        assert list(v) == [1.0, 2.0, 3.0]


class TestQuat:
    def test_identity_axes(self):
        q = Quat.IDENTITY
        assert q.forward().is_close(Vec3(0.0, 0.0, -1.0))
        assert q.up().is_close(Vec3.Y)

    def test_axis_angle_rotates_x_to_minus_z_about_y(self):
        q = Quat.from_axis_angle(Vec3.Y, math.pi / 2)
        assert q.rotate(Vec3.X).is_close(Vec3(0.0, 0.0, -1.0))

    def test_look_to_points_forward_along_direction(self):
        direction = Vec3(1.0, 0.0, 1.0).normalized()
        q = Quat.look_to(direction, Vec3.Y)
        assert q.forward().is_close(direction)
        assert q.up().is_close(Vec3.Y)

    def test_look_to_with_banked_up(self):
        up = Vec3(0.0, 1.0, 1.0).normalized()
        q = Quat.look_to(Vec3.X, up)
        assert q.forward().is_close(Vec3.X)
        assert q.up().is_close(up)

    def test_look_to_survives_parallel_up(self):
        q = Quat.look_to(Vec3.Y, Vec3.Y)
        assert q.forward().is_close(Vec3.Y)

    def test_product_composes_rotations(self):
        quarter = Quat.from_axis_angle(Vec3.Y, math.pi / 2)
        half = quarter * quarter
        assert half.rotate(Vec3.X).is_close(Vec3(-1.0, 0.0, 0.0))

    def test_integrate_yaw(self):
        q = Quat.IDENTITY
        for _ in range(1000):
            q = q.integrate(Vec3(0.0, math.pi / 2, 0.0), 0.001)
        # quarter turn about +Y: forward (-Z) swings to -X
        assert q.forward().is_close(Vec3(-1.0, 0.0, 0.0), tol=1e-3)
