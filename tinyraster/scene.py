import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .vecmath import Vec3

log = logging.getLogger(__name__)

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)


# ============================================================
#  Triangles
# ============================================================

@dataclass(frozen=True)
class Triangle:
    """
    Single triangle with an unshaded base color.

    Vertices are immutable Vec3 values, so adjacent triangles may hold the
    very same corner object without any risk of one edit leaking into the
    other. Winding order carries no meaning (no culling).
    """
    v1: Vec3
    v2: Vec3
    v3: Vec3
    color: Color

    def __post_init__(self):
        if len(self.color) != 3 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(f"color channels must be three ints in 0..255, got {self.color!r}")

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return self.v1, self.v2, self.v3


Mesh = Sequence[Triangle]


def midpoint(a: Vec3, b: Vec3) -> Vec3:
    return Vec3((a.x + b.x) / 2.0, (a.y + b.y) / 2.0, (a.z + b.z) / 2.0)


def unique_vertices(mesh: Mesh) -> List[Vec3]:
    """Distinct vertex values in first-seen order."""
    seen = {}
    for t in mesh:
        for v in t.vertices:
            seen.setdefault(v, None)
    return list(seen)


def mesh_centroid(mesh: Mesh) -> Vec3:
    """Average of the distinct vertices of a mesh."""
    verts = unique_vertices(mesh)
    if not verts:
        raise ValueError("mesh has no vertices")
    n = float(len(verts))
    return Vec3(sum(v.x for v in verts) / n,
                sum(v.y for v in verts) / n,
                sum(v.z for v in verts) / n)


# ============================================================
#  Scene builders
# ============================================================

def tetrahedron(size: float = 100.0) -> List[Triangle]:
    """
    Regular tetrahedron centred at the origin.

    Vertices sit on alternating corners of the cube [-size, size]^3, so the
    circumradius is size * sqrt(3). Each face gets its own color.
    """
    s = float(size)
    a = Vec3(s, s, s)
    b = Vec3(-s, -s, s)
    c = Vec3(-s, s, -s)
    d = Vec3(s, -s, -s)
    return [
        Triangle(a, b, c, WHITE),
        Triangle(a, b, d, RED),
        Triangle(c, d, a, GREEN),
        Triangle(c, d, b, BLUE),
    ]


def subdivide(mesh: Mesh) -> List[Triangle]:
    """
    Split every triangle into four at its edge midpoints.

    The input is not modified. Corner vertices are reused as-is, midpoints
    are new values, and every child keeps the parent's color:

        v1, m12, m13
        v2, m12, m23
        v3, m23, m13
        m12, m23, m13
    """
    out: List[Triangle] = []
    for t in mesh:
        m12 = midpoint(t.v1, t.v2)
        m23 = midpoint(t.v2, t.v3)
        m13 = midpoint(t.v1, t.v3)
        out.append(Triangle(t.v1, m12, m13, t.color))
        out.append(Triangle(t.v2, m12, m23, t.color))
        out.append(Triangle(t.v3, m23, m13, t.color))
        out.append(Triangle(m12, m23, m13, t.color))
    return out


def _onto_sphere(v: Vec3, radius: float) -> Vec3:
    n = v.norm()
    if n <= 1e-12:
        return v
    return v * (radius / n)


def inflate(mesh: Mesh, radius: float = math.sqrt(30000.0)) -> List[Triangle]:
    """
    One refinement step towards a sphere: subdivide, then push every vertex
    out (or in) to the sphere of the given radius around the origin.

    Each distinct vertex is projected once and the projected value is
    shared by every triangle that referenced it.
    """
    finer = subdivide(mesh)
    projected = {v: _onto_sphere(v, radius) for v in unique_vertices(finer)}
    return [Triangle(projected[t.v1], projected[t.v2], projected[t.v3], t.color)
            for t in finer]


def sphere(subdivisions: int = 4, size: float = 100.0) -> List[Triangle]:
    """Tetrahedron inflated `subdivisions` times (4 ** n * 4 triangles)."""
    if subdivisions < 0:
        raise ValueError(f"subdivisions must be >= 0, got {subdivisions}")
    radius = math.sqrt(3.0) * float(size)
    mesh = tetrahedron(size)
    for _ in range(subdivisions):
        mesh = inflate(mesh, radius)
    log.debug("sphere: %d subdivisions -> %d triangles", subdivisions, len(mesh))
    return mesh
