"""Minimal software rasterizer: rotate, project, depth-test and flat-shade triangles."""

from .depth import DepthCompositor
from .pipeline import render, save_frame
from .scene import Triangle, inflate, sphere, subdivide, tetrahedron
from .transform import heading_matrix, pitch_matrix, rotation
from .vecmath import Mat3, Vec3

__all__ = [
    "DepthCompositor",
    "Mat3",
    "Triangle",
    "Vec3",
    "heading_matrix",
    "inflate",
    "pitch_matrix",
    "render",
    "rotation",
    "save_frame",
    "sphere",
    "subdivide",
    "tetrahedron",
]
