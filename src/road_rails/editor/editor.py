"""NetworkEditor: user-driven edits of the road network and trailer coupling.

All edits are discrete events.  Whenever the segment list changes the road
mesh is regenerated once, after the change is complete.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

from road_rails.config import CouplingConfig
from road_rails.geometry.vector import Quat, Vec3
from road_rails.mesh.scene import RoadMeshBuilder
from road_rails.network.models import DegenerateSegmentError, Macro, RoadNetwork, Segment
from road_rails.network.serialization import dumps_network
from road_rails.physics.world import PhysicsWorld, RevoluteJoint
from road_rails.state import SimulationState

_logger = logging.getLogger(__name__)


class EditAction(str, enum.Enum):
    """The six discrete edit events."""

    APPEND_SEGMENT = "append-segment"
    EXPORT = "export"
    RESET = "reset"
    RECORD_MACRO = "record-macro"
    REPLAY_MACRO = "replay-macro"
    TOGGLE_TRAILER = "toggle-trailer"


def transform_segment(segment: Segment, rotation: Quat, translation: Vec3) -> Segment:
    """Map a recorded segment into the frame ``(rotation, translation)``.

    Endpoints are rotated then translated; ``up`` is a direction and is only
    rotated.
    """
    return Segment(
        a=rotation.rotate(segment.a) + translation,
        b=rotation.rotate(segment.b) + translation,
        up=rotation.rotate(segment.up),
    )


def _log_sink(text: str) -> None:
    _logger.info("Road network: %s", text)


class NetworkEditor:
    """Applies edit events to a :class:`~road_rails.state.SimulationState`.

    Parameters
    ----------
    state:
        The owned simulation state; ``state.network`` is mutated in place.
    world:
        Physics world holding the driven vehicle and the trailer.
    mesh_builder:
        Regenerates the road renderable after structural changes.
    coupling:
        Hitch geometry and attach distance.
    export_sink:
        Receives the serialized network on :meth:`export`.  Defaults to the
        module logger.
    """

    def __init__(
        self,
        state: SimulationState,
        world: PhysicsWorld,
        mesh_builder: RoadMeshBuilder,
        coupling: CouplingConfig | None = None,
        export_sink: Callable[[str], None] | None = None,
    ) -> None:
        self.state = state
        self.world = world
        self._mesh_builder = mesh_builder
        self._coupling = coupling or CouplingConfig()
        self._sink = export_sink or _log_sink
        self._handlers = {
            EditAction.APPEND_SEGMENT: self.append_segment,
            EditAction.EXPORT: self.export,
            EditAction.RESET: self.reset,
            EditAction.RECORD_MACRO: self.record_macro,
            EditAction.REPLAY_MACRO: self.replay_macro,
            EditAction.TOGGLE_TRAILER: self.toggle_trailer,
        }

    @property
    def network(self) -> RoadNetwork:
        return self.state.network

    def handle(self, action: EditAction) -> None:
        """Dispatch one edit event."""
        self._handlers[EditAction(action)]()

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def append_segment(self) -> Segment | None:
        """Close a segment from the edit cursor to the vehicle's position.

        The first call only lays the start point.  Returns the new segment, or
        None when nothing was appended.
        """
        body = self.world.get(self.state.vehicle)
        if body is None:
            _logger.debug("append-segment ignored: no vehicle")
            return None

        current = body.position
        last = self.network.last_position
        if last is None:
            self.network.last_position = current
            _logger.info("Road start point set at %s", current.to_tuple())
            return None
        if last == current:
            _logger.debug("append-segment ignored: vehicle has not moved")
            return None

        segment = Segment(a=last, b=current, up=body.up())
        self.network.add_segment(segment)
        self.network.last_position = current
        _logger.info(
            "Appended segment #%d %s -> %s",
            len(self.network.road_segments) - 1,
            last.to_tuple(),
            current.to_tuple(),
        )
        self._refresh_mesh()
        return segment

    def export(self) -> str:
        """Serialize the network and emit it to the export sink."""
        text = dumps_network(self.network)
        self._sink(text)
        return text

    def reset(self) -> bool:
        """Clear all segments and send the vehicle back to the origin."""
        body = self.world.get(self.state.vehicle)
        if body is None:
            _logger.debug("reset ignored: no vehicle")
            return False

        self.network.clear_segments(cursor=Vec3.ZERO)
        body.position = Vec3.ZERO
        body.external.clear()
        _logger.info("Road network reset")
        self._refresh_mesh()
        return True

    def record_macro(self) -> Macro:
        """Snapshot the current segments as a new macro."""
        macro = self.network.record_macro()
        _logger.info("Recorded macro #%d (%d segments)", len(self.network.macros) - 1, len(macro))
        return macro

    def replay_macro(self) -> int:
        """Append the latest macro relative to the vehicle's current frame.

        The vehicle is then moved to the final endpoint, facing along the
        final segment.  Returns the number of segments appended.
        """
        macro = self.network.latest_macro()
        if macro is None or not macro.segments:
            _logger.debug("replay-macro ignored: nothing recorded")
            return 0
        body = self.world.get(self.state.vehicle)
        if body is None:
            _logger.debug("replay-macro ignored: no vehicle")
            return 0

        rotation, translation = body.rotation, body.position
        try:
            placed = [transform_segment(s, rotation, translation) for s in macro.segments]
        except DegenerateSegmentError as exc:
            # float rounding can collapse very short segments far from the origin
            _logger.warning("replay-macro ignored: %s", exc)
            return 0
        for segment in placed:
            self.network.add_segment(segment)

        final = placed[-1]
        body.position = final.b
        body.rotation = Quat.look_to(final.direction.normalized(), final.up)
        _logger.info("Replayed macro: %d segments appended", len(placed))
        self._refresh_mesh()
        return len(placed)

    def toggle_trailer(self) -> bool:
        """Hitch or unhitch the trailer.  Returns whether it is now attached."""
        coupling = self.state.coupling
        self.sync_coupling()
        if coupling.joint is not None:
            self.world.remove_joint(coupling.joint)
            coupling.joint = None
            _logger.info("Trailer detached")
            return False

        vehicle = self.world.get(self.state.vehicle)
        trailer = self.world.get(coupling.trailer)
        if vehicle is None or trailer is None:
            _logger.debug("toggle-trailer ignored: vehicle or trailer missing")
            return False

        distance = vehicle.position.distance_to(trailer.position)
        if distance > self._coupling.attach_distance:
            _logger.debug("toggle-trailer ignored: trailer %.1f units away", distance)
            return False

        joint = RevoluteJoint(
            local_anchor1=self._coupling.tow_anchor,
            local_anchor2=self._coupling.trailer_anchor,
            axis=Vec3.Y,
        )
        coupling.joint = self.world.add_joint(self.state.vehicle, coupling.trailer, joint)
        _logger.info("Trailer attached")
        return True

    def sync_coupling(self) -> bool:
        """Drop a joint handle the world no longer knows about.

        Despawning either hitched body removes the joint from the world, so
        the coupling has to be re-checked before it is trusted.  Returns
        whether the trailer is still attached.
        """
        coupling = self.state.coupling
        if coupling.joint is not None and self.world.joint(coupling.joint) is None:
            _logger.info("Trailer joint no longer exists; coupling cleared")
            coupling.joint = None
        return coupling.attached

    def load_network(self, network: RoadNetwork) -> None:
        """Swap in a complete network snapshot and rebuild the mesh."""
        self.state.network = network
        self._refresh_mesh()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _refresh_mesh(self) -> None:
        self.state.road_mesh = self._mesh_builder.regenerate(
            self.network, self.state.road_mesh
        )
