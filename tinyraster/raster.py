import math
from typing import Tuple

from numba import njit

from .depth import DepthCompositor, _submit
from .vecmath import Vec3


# ============================================================
#  Orthographic projection
# ============================================================

def to_screen(v: Vec3, W, H) -> Vec3:
    """
    Camera space -> screen space.

    Orthographic: x and y are shifted so the origin lands on the canvas
    centre, z is carried through untouched for the depth test.
    """
    return Vec3(v.x + W / 2.0, v.y + H / 2.0, v.z)


def from_screen(v: Vec3, W, H) -> Vec3:
    """Inverse of to_screen."""
    return Vec3(v.x - W / 2.0, v.y - H / 2.0, v.z)


# ============================================================
#  Numba rasterizer
# ============================================================

@njit(cache=True)
def _signed_area(x1, y1, x2, y2, x3, y3):
    return (y1 - y3) * (x2 - x3) + (y2 - y3) * (x3 - x1)


@njit(cache=True)
def _barycentric(x1, y1, x2, y2, x3, y3, px, py):
    """
    Barycentric weights of pixel (px, py) w.r.t. vertices 1, 2, 3.

    Each weight is the signed sub-area opposite its vertex divided by the
    whole signed area, so b1 == 1 at vertex 1 and b1 + b2 + b3 == 1.
    If the triangle is degenerate => (-1, -1, -1).
    """
    area = _signed_area(x1, y1, x2, y2, x3, y3)
    if area == 0.0:
        return -1.0, -1.0, -1.0
    b1 = ((py - y3) * (x2 - x3) + (y2 - y3) * (x3 - px)) / area
    b2 = ((py - y1) * (x3 - x1) + (y3 - y1) * (x1 - px)) / area
    b3 = ((py - y2) * (x1 - x2) + (y1 - y2) * (x2 - px)) / area
    return b1, b2, b3


@njit(cache=True)
def _pixel_bounds(x1, y1, x2, y2, x3, y3, W, H):
    """
    Integer pixel box that can contain covered pixels, clipped to the canvas.

    ceil of the minimum and floor of the maximum keep every tested pixel
    inside the triangle's real bounding rectangle.
    """
    minx = max(0, int(math.ceil(min(x1, x2, x3))))
    maxx = min(W - 1, int(math.floor(max(x1, x2, x3))))
    miny = max(0, int(math.ceil(min(y1, y2, y3))))
    maxy = min(H - 1, int(math.floor(max(y1, y2, y3))))
    return minx, miny, maxx, maxy


@njit(cache=True)
def _fill_triangle(img, zbuf,
                   x1, y1, z1,
                   x2, y2, z2,
                   x3, y3, z3,
                   r, g, b):
    """
    Rasterize a filled triangle with a constant color.

    Pixels are sampled at integer coordinates. A pixel is covered iff all
    three weights are in [0, 1]; its depth is the weighted sum of vertex z.
    Every covered fragment goes through the depth test in _submit.

    Returns the number of fragments that won the depth test.
    """
    H, W = zbuf.shape
    if _signed_area(x1, y1, x2, y2, x3, y3) == 0.0:
        return 0

    minx, miny, maxx, maxy = _pixel_bounds(x1, y1, x2, y2, x3, y3, W, H)

    written = 0
    for y in range(miny, maxy + 1):
        py = float(y)
        for x in range(minx, maxx + 1):
            px = float(x)
            b1, b2, b3 = _barycentric(x1, y1, x2, y2, x3, y3, px, py)
            if b1 < 0.0 or b1 > 1.0 or b2 < 0.0 or b2 > 1.0 or b3 < 0.0 or b3 > 1.0:
                continue
            depth = b1 * z1 + b2 * z2 + b3 * z3
            if _submit(img, zbuf, x, y, depth, r, g, b):
                written += 1
    return written


# ============================================================
#  Python-facing helpers
# ============================================================

def barycentric(px, py, p1: Vec3, p2: Vec3, p3: Vec3) -> Tuple[float, float, float]:
    """Weights of screen point (px, py) in screen-space triangle (p1, p2, p3)."""
    return _barycentric(float(p1.x), float(p1.y), float(p2.x), float(p2.y),
                        float(p3.x), float(p3.y), float(px), float(py))


def covers(px, py, p1: Vec3, p2: Vec3, p3: Vec3) -> bool:
    """True if integer pixel (px, py) lies inside or on the triangle."""
    return all(0.0 <= b <= 1.0 for b in barycentric(px, py, p1, p2, p3))


def pixel_bounds(p1: Vec3, p2: Vec3, p3: Vec3, W: int, H: int) -> Tuple[int, int, int, int]:
    """(minx, miny, maxx, maxy) scan box of a screen-space triangle."""
    return _pixel_bounds(float(p1.x), float(p1.y), float(p2.x), float(p2.y),
                         float(p3.x), float(p3.y), int(W), int(H))


def draw_triangle(target: DepthCompositor, p1: Vec3, p2: Vec3, p3: Vec3, color) -> int:
    """
    Rasterize a screen-space triangle into a compositor.

    p1..p3 are already projected (see to_screen). Degenerate triangles
    (zero signed area) contribute nothing.
    """
    r, g, b = color
    return int(_fill_triangle(target.frame, target.depth,
                              float(p1.x), float(p1.y), float(p1.z),
                              float(p2.x), float(p2.y), float(p2.z),
                              float(p3.x), float(p3.y), float(p3.z),
                              int(r), int(g), int(b)))
