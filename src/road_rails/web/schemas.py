"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from road_rails.network.schemas import RoadNetworkSchema, Vector

__all__ = [
    "ActionResponse",
    "BodyState",
    "HealthResponse",
    "MeshResponse",
    "RoadNetworkSchema",
    "TickRequest",
    "TickResponse",
]


class HealthResponse(BaseModel):
    status: str
    version: str


class ActionResponse(BaseModel):
    action: str
    segment_count: int
    macro_count: int
    trailer_attached: bool
    last_position: Vector | None = None


class TickRequest(BaseModel):
    steps: int = Field(default=1, ge=1, le=10_000)
    dt: float | None = Field(default=None, gt=0.0)


class TickResponse(BaseModel):
    ticks: int
    corrected: int


class MeshResponse(BaseModel):
    vertex_count: int
    triangle_count: int
    positions: list[Vector]
    normals: list[Vector]
    indices: list[int]


class BodyState(BaseModel):
    position: Vector
    rotation: tuple[float, float, float, float]
    linvel: Vector
    angvel: Vector
