"""SimulationEngine: single-threaded tick loop tying editor, controller and world."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from road_rails.config import SimulationConfig
from road_rails.editor.editor import EditAction, NetworkEditor
from road_rails.guidance.controller import GuidanceController, GuidedEntity
from road_rails.mesh.scene import RoadMeshBuilder, Scene
from road_rails.mesh.synthesizer import Material, MeshSynthesizer, RoadMesh
from road_rails.network.models import RoadNetwork
from road_rails.physics.world import PhysicsWorld, RigidBody
from road_rails.state import SimulationState, TrailerCoupling

_logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What happened during one :meth:`SimulationEngine.tick`."""

    edits: int
    """Edit events processed."""

    corrected: int
    """Guided entities that received a road correction."""


class SimulationEngine:
    """Runs edits, guidance and physics in a fixed order once per tick.

    Parameters
    ----------
    state:
        Owned simulation state.
    world:
        Physics world (kinematics source and force sink).
    editor:
        Applies queued edit events.
    controller:
        Road guidance controller.
    scene:
        Scene holding the road renderable (used to expose the current mesh).
    step_physics:
        Advance ``world`` at the end of each tick.  Disable when an external
        integrator owns the bodies.
    """

    def __init__(
        self,
        state: SimulationState,
        world: PhysicsWorld,
        editor: NetworkEditor,
        controller: GuidanceController,
        scene: Scene | None = None,
        step_physics: bool = True,
        dt: float = 1.0 / 60.0,
    ) -> None:
        self.state = state
        self.world = world
        self.editor = editor
        self.controller = controller
        self.scene = scene
        self.step_physics = step_physics
        self.dt = dt
        self._pending: deque[EditAction] = deque()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, action: EditAction | str) -> None:
        """Queue one edit event for the next tick.

        Raises:
            ValueError: If *action* is not a known edit action.
        """
        self._pending.append(EditAction(action))

    def pending(self) -> int:
        return len(self._pending)

    def guided_entities(self) -> list[GuidedEntity]:
        """The vehicle, plus the trailer while it is hitched."""
        self.editor.sync_coupling()
        cfg = self.controller.config
        guided: list[GuidedEntity] = []
        if self.state.vehicle is not None:
            guided.append(GuidedEntity(self.state.vehicle, cfg.vehicle_weight))
        coupling = self.state.coupling
        if coupling.attached and coupling.trailer is not None:
            guided.append(GuidedEntity(coupling.trailer, cfg.trailer_weight))
        return guided

    def tick(self, dt: float | None = None) -> TickResult:
        """Process queued edits, apply guidance, then step the world."""
        edits = 0
        while self._pending:
            self.editor.handle(self._pending.popleft())
            edits += 1

        guided = self.guided_entities()
        corrected = self.controller.apply(
            self.state.network,
            self.world,
            guided,
            towing=self.state.coupling.attached,
        )

        if self.step_physics:
            self.world.step(self.dt if dt is None else dt)
        return TickResult(edits=edits, corrected=corrected)

    def run(self, ticks: int, on_tick: Callable[[int], None] | None = None) -> int:
        """Run *ticks* ticks; returns the total number of corrections applied."""
        total = 0
        for i in range(ticks):
            if on_tick is not None:
                on_tick(i)
            total += self.tick().corrected
        return total

    def load_network(self, network: RoadNetwork) -> None:
        """Replace the road network with a complete snapshot."""
        self.editor.load_network(network)
        _logger.info("Loaded road network with %d segments", len(network.road_segments))

    def current_mesh(self) -> RoadMesh:
        """The mesh currently shown for the road (empty before the first build)."""
        if self.scene is None:
            return RoadMesh.empty()
        renderable = self.scene.get(self.state.road_mesh)
        return renderable.mesh if renderable is not None else RoadMesh.empty()


def build_default_simulation(config: SimulationConfig | None = None) -> SimulationEngine:
    """Create a world with a vehicle (and trailer) and wire every component."""
    cfg = config or SimulationConfig()
    world = PhysicsWorld()
    scene = Scene()

    vehicle = world.spawn(RigidBody())
    trailer = None
    if cfg.spawn_trailer:
        hitch_gap = cfg.coupling.tow_anchor - cfg.coupling.trailer_anchor
        trailer = world.spawn(RigidBody(position=hitch_gap))

    state = SimulationState(
        network=RoadNetwork(),
        vehicle=vehicle,
        coupling=TrailerCoupling(trailer=trailer),
    )
    builder = RoadMeshBuilder(
        scene,
        MeshSynthesizer(half_width=cfg.mesh.half_width),
        Material(color=cfg.mesh.color),
    )
    editor = NetworkEditor(state, world, builder, coupling=cfg.coupling)
    controller = GuidanceController(cfg.guidance)
    return SimulationEngine(state, world, editor, controller, scene=scene, dt=cfg.dt)
