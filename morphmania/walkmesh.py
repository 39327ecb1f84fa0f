"""Triangle walk meshes: locating, walking within and crossing between triangles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from morphmania.geometry import (
    Quat,
    Vec3,
    add,
    cross,
    dot,
    length,
    mix,
    normalize,
    scale,
    sub,
)

_NO_INDEX = 0xFFFFFFFF
_NAN = float("nan")


@dataclass(frozen=True)
class WalkPoint:
    """A location on a walk mesh as barycentric weights on a CCW triangle.

    By convention a point on an edge has its indices arranged so that the
    third weight is zero.
    """

    indices: Tuple[int, int, int] = (_NO_INDEX, _NO_INDEX, _NO_INDEX)
    weights: Tuple[float, float, float] = (_NAN, _NAN, _NAN)


def _ieee_div(a: float, b: float) -> float:
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return _NAN
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def barycentric_weights(a: Sequence[float], b: Sequence[float], c: Sequence[float],
                        pt: Sequence[float]) -> Vec3:
    """Barycentric weights of ``pt`` projected onto the plane of triangle ``a, b, c``."""
    n = normalize(cross(sub(b, a), sub(c, a)))
    dist = dot(sub(pt, a), n)
    proj = sub(pt, scale(n, dist))

    n = cross(sub(b, a), sub(c, a))
    n1 = cross(sub(c, b), sub(proj, b))
    n2 = cross(sub(a, c), sub(proj, c))
    n3 = cross(sub(b, a), sub(proj, a))

    dec = length(n) * length(n)
    return (dot(n, n1) / dec, dot(n, n2) / dec, dot(n, n3) / dec)


class WalkMesh:
    """Vertices, per-vertex normals and CCW triangles that characters walk on."""

    def __init__(self, vertices: Sequence[Sequence[float]], normals: Sequence[Sequence[float]],
                 triangles: Sequence[Sequence[int]]):
        self.vertices: List[Vec3] = [tuple(map(float, v)) for v in vertices]
        self.normals: List[Vec3] = [tuple(map(float, n)) for n in normals]
        self.triangles: List[Tuple[int, int, int]] = [tuple(int(i) for i in t) for t in triangles]

        # each directed edge (a, b) maps to the remaining vertex of its triangle
        self.next_vertex: Dict[Tuple[int, int], int] = {}
        for x, y, z in self.triangles:
            for edge, other in (((x, y), z), ((y, z), x), ((z, x), y)):
                if edge in self.next_vertex:
                    raise ValueError(f"edge {edge} appears in more than one triangle")
                self.next_vertex[edge] = other

        for x, y, z in self.triangles:
            a, b, c = self.vertices[x], self.vertices[y], self.vertices[z]
            out = normalize(cross(sub(b, a), sub(c, a)))
            if not all(dot(out, self.normals[i]) > 0.1 for i in (x, y, z)):
                raise ValueError(f"vertex normals of triangle {(x, y, z)} disagree with its face")

    def nearest_walk_point(self, world_point: Sequence[float]) -> WalkPoint:
        """Closest point on the mesh to ``world_point``."""
        if not self.triangles:
            raise ValueError("cannot start on an empty walkmesh")

        closest = WalkPoint()
        closest_dis2 = math.inf

        for tri in self.triangles:
            a, b, c = (self.vertices[i] for i in tri)
            coords = barycentric_weights(a, b, c, world_point)
            if all(w >= 0.0 for w in coords):
                d = sub(world_point, self.to_world_point(WalkPoint(tri, coords)))
                dis2 = dot(d, d)
                if dis2 < closest_dis2:
                    closest_dis2 = dis2
                    closest = WalkPoint(tri, coords)
                continue

            x, y, z = tri
            for ai, bi, ci in ((x, y, z), (y, z, x), (z, x, y)):
                ea, eb = self.vertices[ai], self.vertices[bi]
                along = dot(sub(world_point, ea), sub(eb, ea))
                limit = dot(sub(eb, ea), sub(eb, ea))
                if along < 0.0:
                    pt, edge_coords = ea, (1.0, 0.0, 0.0)
                elif along > limit:
                    pt, edge_coords = eb, (0.0, 1.0, 0.0)
                else:
                    amt = along / limit
                    pt, edge_coords = mix(ea, eb, amt), (1.0 - amt, amt, 0.0)
                d = sub(world_point, pt)
                dis2 = dot(d, d)
                if dis2 < closest_dis2:
                    closest_dis2 = dis2
                    closest = WalkPoint((ai, bi, ci), edge_coords)

        if not all(i < len(self.vertices) for i in closest.indices):
            raise ValueError("no walk point found near the given position")
        return closest

    def walk_in_triangle(self, start: WalkPoint, step: Sequence[float]) -> Tuple[WalkPoint, float]:
        """Step within the start triangle, stopping at its boundary.

        Returns the end point and the fraction of the step taken (1.0 when the
        whole step stays inside the triangle).
        """
        a, b, c = (self.vertices[i] for i in start.indices)
        wx, wy, wz = start.weights
        p = add(add(scale(a, wx), scale(b, wy)), scale(c, wz))
        new = barycentric_weights(a, b, c, add(p, step))
        diff = sub(start.weights, new)

        frac = 1.0
        for w_start, w_new, w_diff in zip(start.weights, new, diff):
            if w_new < 0:
                frac = _fmin(frac, _ieee_div(w_start, w_diff))

        end = WalkPoint(start.indices, sub(start.weights, scale(diff, frac)))
        return end, frac

    def cross_edge(self, start: WalkPoint, morph: int) -> Optional[Tuple[WalkPoint, Quat]]:
        """Cross the edge ``start`` lies on into the neighbouring triangle.

        Returns the new point and the rotation between the two triangle
        normals, or None when ``start`` is not on an edge, the edge is a
        boundary, or (for any morph but 2) the neighbour changes height.
        """
        wx, wy, wz = start.weights
        if wx != 0 and wy != 0 and wz != 0:
            return None

        if wz != 0:
            ix, iy, iz = start.indices
            return self.cross_edge(WalkPoint((iz, ix, iy), (wz, wx, wy)), morph)

        ix, iy, iz = start.indices
        other = self.next_vertex.get((iy, ix))
        if other is None:
            return None

        if morph != 2 and self.vertices[iz][2] != self.vertices[other][2]:
            return None

        end = WalkPoint((iy, ix, other), (wy, wx, 0.0))
        rotation = Quat.rotation_between(
            self.to_world_triangle_normal(start), self.to_world_triangle_normal(end)
        )
        return end, rotation

    def to_world_point(self, wp: WalkPoint) -> Vec3:
        """World-space position of a walk point."""
        a, b, c = (self.vertices[i] for i in wp.indices)
        wx, wy, wz = wp.weights
        return add(add(scale(a, wx), scale(b, wy)), scale(c, wz))

    def to_world_smooth_normal(self, wp: WalkPoint) -> Vec3:
        """Interpolated vertex normal at a walk point."""
        na, nb, nc = (self.normals[i] for i in wp.indices)
        wx, wy, wz = wp.weights
        return normalize(add(add(scale(na, wx), scale(nb, wy)), scale(nc, wz)))

    def to_world_triangle_normal(self, wp: WalkPoint) -> Vec3:
        """Face normal of the triangle a walk point lies on."""
        a, b, c = (self.vertices[i] for i in wp.indices)
        return normalize(cross(sub(b, a), sub(c, a)))