"""Explicitly owned simulation state shared by the editor and controller."""

from __future__ import annotations

from dataclasses import dataclass, field

from road_rails.mesh.scene import RenderHandle
from road_rails.network.models import RoadNetwork
from road_rails.physics.world import EntityId, JointHandle


@dataclass
class TrailerCoupling:
    """Whether the trailer is currently hitched to the tow vehicle."""

    trailer: EntityId | None = None
    joint: JointHandle | None = None

    @property
    def attached(self) -> bool:
        return self.joint is not None


@dataclass
class SimulationState:
    """Everything one tick reads or writes, passed by reference.

    Only the editor mutates ``network`` and ``road_mesh``; the controller
    reads ``network`` and writes body accumulators.
    """

    network: RoadNetwork = field(default_factory=RoadNetwork)
    vehicle: EntityId | None = None
    coupling: TrailerCoupling = field(default_factory=TrailerCoupling)
    road_mesh: RenderHandle | None = None

    @property
    def trailer(self) -> EntityId | None:
        return self.coupling.trailer
