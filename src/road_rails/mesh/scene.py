"""Renderable registry and road mesh regeneration."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import NewType

from road_rails.mesh.synthesizer import Material, MeshSynthesizer, RoadMesh
from road_rails.network.models import RoadNetwork

_logger = logging.getLogger(__name__)

RenderHandle = NewType("RenderHandle", int)


@dataclass(frozen=True, eq=False)
class Renderable:
    mesh: RoadMesh
    material: Material


class Scene:
    """Holds static renderables keyed by never-reused handles."""

    def __init__(self) -> None:
        self._objects: dict[RenderHandle, Renderable] = {}
        self._ids = itertools.count(1)

    def spawn(self, mesh: RoadMesh, material: Material) -> RenderHandle:
        handle = RenderHandle(next(self._ids))
        self._objects[handle] = Renderable(mesh, material)
        return handle

    def despawn(self, handle: RenderHandle) -> None:
        self._objects.pop(handle, None)

    def get(self, handle: RenderHandle | None) -> Renderable | None:
        if handle is None:
            return None
        return self._objects.get(handle)

    def __len__(self) -> int:
        return len(self._objects)


class RoadMeshBuilder:
    """Replaces the road renderable whenever the segment list changes.

    Parameters
    ----------
    scene:
        Where renderables are spawned.
    synthesizer:
        Mesh generator; defaults to a :class:`MeshSynthesizer` with the
        design half-width.
    material:
        Material applied to the ribbon.
    """

    def __init__(
        self,
        scene: Scene,
        synthesizer: MeshSynthesizer | None = None,
        material: Material | None = None,
    ) -> None:
        self.scene = scene
        self._synth = synthesizer or MeshSynthesizer()
        self._material = material or Material()

    def regenerate(
        self, network: RoadNetwork, previous: RenderHandle | None
    ) -> RenderHandle:
        """Build a fresh mesh from *network* and swap it in for *previous*.

        The caller must store the returned handle so the renderable can be
        destroyed on the next regeneration.
        """
        mesh = self._synth.build(network.snapshot())
        if previous is not None:
            self.scene.despawn(previous)
        handle = self.scene.spawn(mesh, self._material)
        _logger.debug(
            "Road mesh regenerated: %d vertices, %d triangles (handle %d)",
            mesh.vertex_count,
            mesh.triangle_count,
            handle,
        )
        return handle
