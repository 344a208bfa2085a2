"""Flat shading from a single directional light along the view axis."""

from typing import Tuple

from .vecmath import Vec3

GAMMA = 2.4

# Light travels along +Z towards the observer.
LIGHT_DIR = Vec3(0.0, 0.0, 1.0)


def face_normal(v1: Vec3, v2: Vec3, v3: Vec3) -> Vec3:
    """Unit normal of triangle (v1, v2, v3); zero vector if degenerate."""
    return (v2 - v1).cross(v3 - v1).normalize()


def facing(n: Vec3) -> float:
    """
    Cosine between unit normal `n` and the light, in [0, 1].

    Since both vectors are unit length and the light is the Z axis, the
    cosine is just |N.z|. The absolute value means front and back faces
    light the same way: correct for one closed convex solid, not for
    concave meshes where back faces would need their own treatment.
    """
    return min(1.0, abs(n.dot(LIGHT_DIR)))


def shade_factor(v1: Vec3, v2: Vec3, v3: Vec3) -> float:
    return facing(face_normal(v1, v2, v3))


def shade_color(color: Tuple[int, int, int], factor: float) -> Tuple[int, int, int]:
    """
    Scale a color by `factor` in linear light.

    Each channel is expanded with c ** 2.4, scaled, and compressed back
    with ** (1 / 2.4). Scaling the stored (non-linear) value directly
    would fall off far too dark.
    """
    factor = max(0.0, min(1.0, factor))
    out = []
    for c in color:
        linear = float(c) ** GAMMA * factor
        v = int(round(linear ** (1.0 / GAMMA)))
        out.append(max(0, min(255, v)))
    return out[0], out[1], out[2]
