"""Procedural road mesh generation."""

from road_rails.mesh.scene import Renderable, RenderHandle, RoadMeshBuilder, Scene
from road_rails.mesh.synthesizer import Material, MeshSynthesizer, RoadMesh

__all__ = [
    "Material",
    "MeshSynthesizer",
    "RenderHandle",
    "Renderable",
    "RoadMesh",
    "RoadMeshBuilder",
    "Scene",
]
