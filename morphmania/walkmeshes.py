"""Collections of named walk meshes that share one vertex/triangle pool."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence, Union

from morphmania.walkmesh import WalkMesh


@dataclass(frozen=True)
class IndexEntry:
    """Half-open ranges in the shared pools that make up one named walk mesh."""

    name_begin: int
    name_end: int
    vertex_begin: int
    vertex_end: int
    triangle_begin: int
    triangle_end: int


def _name_from(names: Union[str, bytes, bytearray, Sequence[str]], begin: int, end: int) -> str:
    chunk = names[begin:end]
    if isinstance(chunk, (bytes, bytearray)):
        return chunk.decode("utf-8")
    if isinstance(chunk, str):
        return chunk
    return "".join(chunk)


@dataclass
class WalkMeshes:
    """Walk meshes looked up by name."""

    meshes: Dict[str, WalkMesh] = field(default_factory=dict)

    @classmethod
    def from_index(
        cls,
        vertices: Sequence[Sequence[float]],
        normals: Sequence[Sequence[float]],
        triangles: Sequence[Sequence[int]],
        names: Union[str, bytes, bytearray, Sequence[str]],
        index: Iterable[Union[IndexEntry, Sequence[int]]],
    ) -> "WalkMeshes":
        """Split shared pools into named meshes according to ``index``.

        Raises ValueError when the pools or the index are inconsistent.
        """
        if len(vertices) != len(normals):
            raise ValueError("mis-matched position and normal sizes")

        meshes: Dict[str, WalkMesh] = {}
        for raw in index:
            e = raw if isinstance(raw, IndexEntry) else IndexEntry(*raw)
            if not (e.name_begin <= e.name_end <= len(names)):
                raise ValueError("invalid name indices in index")
            if not (e.vertex_begin <= e.vertex_end <= len(vertices)):
                raise ValueError("invalid vertex indices in index")
            if not (e.triangle_begin <= e.triangle_end <= len(triangles)):
                raise ValueError("invalid triangle indices in index")

            wm_vertices = vertices[e.vertex_begin:e.vertex_end]
            wm_normals = normals[e.vertex_begin:e.vertex_end]

            wm_triangles = []
            for tri in triangles[e.triangle_begin:e.triangle_end]:
                if not all(e.vertex_begin <= i < e.vertex_end for i in tri):
                    raise ValueError("invalid triangle")
                wm_triangles.append(tuple(i - e.vertex_begin for i in tri))

            name = _name_from(names, e.name_begin, e.name_end)
            if name in meshes:
                raise ValueError(f"WalkMesh with duplicated name '{name}'")
            meshes[name] = WalkMesh(wm_vertices, wm_normals, wm_triangles)

        return cls(meshes)

    def lookup(self, name: str) -> WalkMesh:
        """The walk mesh called ``name``; raises KeyError if there is none."""
        try:
            return self.meshes[name]
        except KeyError:
            raise KeyError(f"WalkMesh with name '{name}' not found.") from None