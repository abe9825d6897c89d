"""Tunable parameters with their design defaults.

Every constant that differs between tunings of the controller (influence
radius, float height, gains, weights) is a named field here rather than a
literal in the algorithm.  :meth:`SimulationConfig.from_env` overrides the
defaults from ``ROAD_RAILS_*`` environment variables; entry points call
``dotenv.load_dotenv()`` beforehand so a project ``.env`` file is honoured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace

from road_rails.geometry.vector import Vec3

_ENV_PREFIX = "ROAD_RAILS_"


@dataclass(frozen=True)
class GuidanceConfig:
    """Gains and thresholds for the road-centering controller."""

    rotation_p: float = 40.0
    rotation_r: float = -3.0
    position_p: float = 4.0
    position_r: float = -2.0
    sub_target_fraction: float = 0.8
    float_height: float = 1.5       # vehicles float this far above the centerline
    influence_radius: float = 10.0  # solo vehicle
    towing_influence_radius: float = 30.0
    vehicle_weight: float = 1.0
    trailer_weight: float = 1.5


@dataclass(frozen=True)
class MeshConfig:
    """Road ribbon appearance."""

    half_width: float = 1.5
    color: tuple[float, float, float] = (0.9, 0.5, 0.3)


@dataclass(frozen=True)
class CouplingConfig:
    """Trailer hitch geometry."""

    attach_distance: float = 10.0
    tow_anchor: Vec3 = Vec3(0.0, 0.0, 2.5)       # behind the tow vehicle (+Z is back)
    trailer_anchor: Vec3 = Vec3(0.0, 0.0, -2.5)  # front of the trailer


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level configuration bundle."""

    guidance: GuidanceConfig = field(default_factory=GuidanceConfig)
    mesh: MeshConfig = field(default_factory=MeshConfig)
    coupling: CouplingConfig = field(default_factory=CouplingConfig)
    spawn_trailer: bool = True
    dt: float = 1.0 / 60.0

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SimulationConfig:
        """Build a config, overriding numeric fields from the environment.

        ``ROAD_RAILS_INFLUENCE_RADIUS=30`` overrides
        ``guidance.influence_radius``; ``ROAD_RAILS_HALF_WIDTH`` overrides
        ``mesh.half_width``, and so on.  Field names are unique across the
        sub-configs.

        Raises:
            ValueError: If an override cannot be parsed.
        """
        env = os.environ if environ is None else environ
        guidance = _override(GuidanceConfig(), env)
        mesh = _override(MeshConfig(), env)
        coupling = _override(CouplingConfig(), env)

        spawn_trailer = env.get(_ENV_PREFIX + "SPAWN_TRAILER")
        dt = env.get(_ENV_PREFIX + "DT")
        return cls(
            guidance=guidance,
            mesh=mesh,
            coupling=coupling,
            spawn_trailer=(
                cls.spawn_trailer
                if spawn_trailer is None
                else spawn_trailer.strip().lower() in ("1", "true", "yes", "on")
            ),
            dt=cls.dt if dt is None else float(dt),
        )


def _override(config, env):
    """Return *config* with float fields replaced by matching env vars."""
    changes = {}
    for f in fields(config):
        raw = env.get(_ENV_PREFIX + f.name.upper())
        if raw is None or not isinstance(getattr(config, f.name), float):
            continue
        try:
            changes[f.name] = float(raw)
        except ValueError as exc:
            name = f"{_ENV_PREFIX}{f.name.upper()}"
            raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    return replace(config, **changes)
