"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from road_rails.config import SimulationConfig
from road_rails.sim.engine import build_default_simulation
from road_rails.web.app import create_app


@pytest.fixture
def engine():
    """A fresh simulation per test."""
    return build_default_simulation(SimulationConfig())


@pytest.fixture
def client(engine, monkeypatch):
    """FastAPI test client bound to *engine*."""
    monkeypatch.delenv("ROAD_RAILS_NETWORK_FILE", raising=False)
    with TestClient(create_app(engine)) as c:
        yield c


@pytest.fixture
def network_payload() -> dict:
    """A two-segment network in the persisted format."""
    return {
        "last_position": [0.0, 0.0, -20.0],
        "road_segments": [
            {"a": [0.0, 0.0, 0.0], "b": [0.0, 0.0, -10.0], "up": [0.0, 1.0, 0.0]},
            {"a": [0.0, 0.0, -10.0], "b": [0.0, 0.0, -20.0], "up": [0.0, 1.0, 0.0]},
        ],
        "macros": [],
    }
