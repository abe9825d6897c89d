"""Tests for SimulationEngine tick ordering and wiring."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from road_rails.config import SimulationConfig
from road_rails.editor.editor import EditAction
from road_rails.geometry.vector import Vec3
from road_rails.network.models import Macro, RoadNetwork, Segment
from road_rails.sim.engine import SimulationEngine, build_default_simulation
from road_rails.state import SimulationState


def _road_north() -> RoadNetwork:
    return RoadNetwork(
        last_position=Vec3(0, 0, -50),
        road_segments=[Segment(a=Vec3(0, 0, 0), b=Vec3(0, 0, -50), up=Vec3.Y)],
    )


def test_default_simulation_has_vehicle_and_trailer():
    engine = build_default_simulation()
    assert engine.world.get(engine.state.vehicle) is not None
    trailer = engine.world.get(engine.state.trailer)
    assert trailer is not None
    assert trailer.position.is_close(Vec3(0, 0, 5))


def test_default_simulation_without_trailer():
    engine = build_default_simulation(SimulationConfig(spawn_trailer=False))
    assert engine.state.trailer is None


def test_submitted_edits_run_on_next_tick():
    engine = build_default_simulation()
    engine.submit(EditAction.APPEND_SEGMENT)
    assert engine.pending() == 1
    assert engine.state.network.last_position is None

    result = engine.tick()

    assert result.edits == 1
    assert engine.pending() == 0
    assert engine.state.network.last_position == Vec3.ZERO


def test_submit_rejects_unknown_action():
    with pytest.raises(ValueError):
        build_default_simulation().submit("fly")


def test_guided_entities_include_trailer_only_when_attached():
    engine = build_default_simulation()
    assert [g.entity for g in engine.guided_entities()] == [engine.state.vehicle]

    engine.editor.toggle_trailer()
    guided = engine.guided_entities()
    assert [g.entity for g in guided] == [engine.state.vehicle, engine.state.trailer]
    assert [g.weight for g in guided] == [1.0, 1.5]


def test_tick_applies_guidance_and_steps_world():
    engine = build_default_simulation(SimulationConfig(spawn_trailer=False))
    engine.load_network(_road_north())
    vehicle = engine.world.get(engine.state.vehicle)
    vehicle.position = Vec3(1.0, 1.5, -10)

    result = engine.tick()

    assert result.corrected == 1
    # pulled toward the centerline (x decreases), accumulator consumed by the step
    assert vehicle.linvel.x < 0.0
    assert vehicle.external.force == Vec3.ZERO


def test_towing_widens_influence_radius():
    engine = build_default_simulation()
    engine.load_network(_road_north())
    engine.editor.toggle_trailer()
    vehicle = engine.world.get(engine.state.vehicle)
    vehicle.position = Vec3(20.0, 1.5, -10)

    assert engine.tick().corrected >= 1


def test_guidance_converges_onto_road():
    engine = build_default_simulation(SimulationConfig(spawn_trailer=False))
    engine.load_network(_road_north())
    vehicle = engine.world.get(engine.state.vehicle)
    vehicle.position = Vec3(2.0, 1.5, -10)

    engine.run(600)

    assert abs(vehicle.position.x) < 0.5


def test_tick_order_edits_before_controller():
    calls: list[str] = []
    editor = MagicMock()
    editor.handle.side_effect = lambda action: calls.append(f"edit:{action.value}")
    controller = MagicMock()
    controller.config.vehicle_weight = 1.0
    controller.apply.side_effect = lambda *a, **k: calls.append("guide") or 0
    world = MagicMock()
    world.step.side_effect = lambda dt: calls.append("step")

    engine = SimulationEngine(SimulationState(), world, editor, controller)
    engine.submit("record-macro")
    engine.tick()

    assert calls == ["edit:record-macro", "guide", "step"]


def test_step_physics_can_be_disabled():
    world = MagicMock()
    controller = MagicMock()
    controller.apply.return_value = 0
    engine = SimulationEngine(SimulationState(), world, MagicMock(), controller, step_physics=False)
    engine.tick()
    world.step.assert_not_called()


def test_current_mesh_follows_edits():
    engine = build_default_simulation()
    assert engine.current_mesh().is_empty
    engine.load_network(_road_north())
    assert engine.current_mesh().vertex_count == 4


def test_despawned_trailer_drops_towing_radius():
    engine = build_default_simulation()
    engine.load_network(_road_north())
    assert engine.editor.toggle_trailer() is True
    engine.world.despawn(engine.state.trailer)
    assert engine.world.joint_count() == 0
    vehicle = engine.world.get(engine.state.vehicle)
    # inside the towing radius, outside the solo one
    vehicle.position = Vec3(20.0, 1.5, -10)

    result = engine.tick()

    assert result.corrected == 0
    assert not engine.state.coupling.attached
    assert [g.entity for g in engine.guided_entities()] == [engine.state.vehicle]


def test_replay_collapsing_to_zero_length_does_not_break_tick():
    engine = build_default_simulation(SimulationConfig(spawn_trailer=False))
    engine.load_network(_road_north())
    engine.state.network.macros.append(
        Macro(segments=[Segment(a=Vec3(0, 0, 0), b=Vec3(1e-12, 0, 0), up=Vec3.Y)])
    )
    engine.world.get(engine.state.vehicle).position = Vec3(1e6, 0, 0)
    engine.submit(EditAction.REPLAY_MACRO)

    result = engine.tick()

    assert result.edits == 1
    assert len(engine.state.network.road_segments) == 1
