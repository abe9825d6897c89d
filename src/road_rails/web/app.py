"""FastAPI Web application exposing one simulation.

All endpoints are ``async def`` so requests are handled one at a time on the
event-loop thread; the simulation is never touched concurrently.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from road_rails import __version__
from road_rails.config import SimulationConfig
from road_rails.editor.editor import EditAction
from road_rails.network.loader import RoadNetworkLoader
from road_rails.network.serialization import RoadNetworkParseError
from road_rails.sim.engine import SimulationEngine, build_default_simulation
from road_rails.web.schemas import (
    ActionResponse,
    BodyState,
    HealthResponse,
    MeshResponse,
    RoadNetworkSchema,
    TickRequest,
    TickResponse,
)

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

_NETWORK_FILE_ENV = "ROAD_RAILS_NETWORK_FILE"


def create_app(engine: SimulationEngine | None = None) -> FastAPI:
    """Build the API around *engine* (a default simulation when omitted)."""
    if engine is None:
        engine = build_default_simulation(SimulationConfig.from_env())
    sim = engine

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        path = os.environ.get(_NETWORK_FILE_ENV)
        if path:
            try:
                sim.load_network(await RoadNetworkLoader(path).load_async())
            except (FileNotFoundError, RoadNetworkParseError) as exc:
                _logger.warning("Could not preload road network from %s: %s", path, exc)
        yield

    app = FastAPI(title="Road Rails", version=__version__, lifespan=lifespan)
    app.state.engine = sim

    # ---------------------------------------------------------------------------
    # Endpoints
    # ---------------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.get("/api/network", response_model=RoadNetworkSchema)
    async def get_network() -> RoadNetworkSchema:
        """Return the road network in its persisted format."""
        return RoadNetworkSchema.from_network(sim.state.network)

    @app.put("/api/network", response_model=ActionResponse)
    async def put_network(body: RoadNetworkSchema) -> ActionResponse:
        """Replace the road network with a complete snapshot."""
        try:
            network = body.to_network()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        sim.load_network(network)
        return _action_response(sim, "load")

    @app.post("/api/actions/{action}", response_model=ActionResponse)
    async def post_action(action: EditAction) -> ActionResponse:
        """Fire one discrete edit event."""
        sim.editor.handle(action)
        return _action_response(sim, action.value)

    @app.post("/api/tick", response_model=TickResponse)
    async def post_tick(req: TickRequest) -> TickResponse:
        corrected = 0
        for _ in range(req.steps):
            corrected += sim.tick(req.dt).corrected
        return TickResponse(ticks=req.steps, corrected=corrected)

    @app.get("/api/mesh", response_model=MeshResponse)
    async def get_mesh() -> MeshResponse:
        mesh = sim.current_mesh()
        return MeshResponse(
            vertex_count=mesh.vertex_count,
            triangle_count=mesh.triangle_count,
            **mesh.to_dict(),
        )

    @app.get("/api/entities/{role}", response_model=BodyState)
    async def get_entity(role: str) -> BodyState:
        if role == "vehicle":
            entity = sim.state.vehicle
        elif role == "trailer":
            entity = sim.state.trailer
        else:
            raise HTTPException(status_code=404, detail=f"Unknown entity role: {role}")
        body = sim.world.get(entity)
        if body is None:
            raise HTTPException(status_code=404, detail=f"No {role} in the world")
        r = body.rotation
        return BodyState(
            position=body.position.to_tuple(),
            rotation=(r.w, r.x, r.y, r.z),
            linvel=body.linvel.to_tuple(),
            angvel=body.angvel.to_tuple(),
        )

    return app


def _action_response(sim: SimulationEngine, action: str) -> ActionResponse:
    network = sim.state.network
    return ActionResponse(
        action=action,
        segment_count=len(network.road_segments),
        macro_count=len(network.macros),
        trailer_attached=sim.state.coupling.attached,
        last_position=(
            network.last_position.to_tuple() if network.last_position is not None else None
        ),
    )


app = create_app()
