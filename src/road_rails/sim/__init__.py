"""Tick-driven simulation loop."""

from road_rails.sim.engine import SimulationEngine, TickResult, build_default_simulation

__all__ = ["SimulationEngine", "TickResult", "build_default_simulation"]
