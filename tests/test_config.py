"""Tests for configuration defaults and environment overrides."""

from __future__ import annotations

import pytest

from road_rails.config import GuidanceConfig, SimulationConfig


def test_design_defaults():
    cfg = GuidanceConfig()
    assert cfg.influence_radius == 10.0
    assert cfg.towing_influence_radius == 30.0
    assert cfg.float_height == 1.5
    assert cfg.sub_target_fraction == 0.8
    assert (cfg.vehicle_weight, cfg.trailer_weight) == (1.0, 1.5)


def test_from_env_overrides_numeric_fields():
    cfg = SimulationConfig.from_env(
        {
            "ROAD_RAILS_INFLUENCE_RADIUS": "30",
            "ROAD_RAILS_FLOAT_HEIGHT": "5.5",
            "ROAD_RAILS_HALF_WIDTH": "2.0",
            "ROAD_RAILS_ATTACH_DISTANCE": "12",
            "ROAD_RAILS_SPAWN_TRAILER": "no",
            "ROAD_RAILS_DT": "0.02",
        }
    )
    assert cfg.guidance.influence_radius == 30.0
    assert cfg.guidance.float_height == 5.5
    assert cfg.mesh.half_width == 2.0
    assert cfg.coupling.attach_distance == 12.0
    assert cfg.spawn_trailer is False
    assert cfg.dt == 0.02


def test_from_env_empty_keeps_defaults():
    assert SimulationConfig.from_env({}) == SimulationConfig()


def test_from_env_rejects_garbage():
    with pytest.raises(ValueError):
        SimulationConfig.from_env({"ROAD_RAILS_POSITION_P": "fast"})
