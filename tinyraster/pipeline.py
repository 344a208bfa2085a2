import logging
import math
import time
from typing import Iterable, Tuple

import numpy as np
from PIL import Image

from .depth import DepthCompositor
from .raster import draw_triangle, to_screen
from .scene import Triangle
from .shading import face_normal, facing, shade_color
from .transform import rotation

log = logging.getLogger(__name__)

BACKGROUND = (0, 0, 0)


def _check_frame_args(heading, pitch, width, height):
    if not (math.isfinite(heading) and math.isfinite(pitch)):
        raise ValueError(f"rotation angles must be finite, got heading={heading!r} pitch={pitch!r}")
    if not (math.isfinite(width) and math.isfinite(height)) \
            or int(width) != width or int(height) != height or width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive integers, got {width}x{height}")


def render(mesh: Iterable[Triangle], heading: float, pitch: float, width: int, height: int,
           background: Tuple[int, int, int] = BACKGROUND) -> np.ndarray:
    """
    Render one frame of `mesh` and return the color buffer.

    Parameters:
      mesh       - iterable of triangles in object space (read only, consumed once)
      heading    - rotation about the vertical axis, radians
      pitch      - rotation about the horizontal axis, radians
      width      - canvas width in pixels
      height     - canvas height in pixels
      background - RGB fill for pixels no triangle covers

    Returns:
      uint8 array of shape (height, width, 3), indexed [y, x].

    Per triangle:
      rotate vertices -> flat shade -> project + rasterize -> depth test.
    Triangles whose rotated normal vanishes are skipped before shading.
    """
    _check_frame_args(heading, pitch, width, height)
    t0 = time.perf_counter()

    target = DepthCompositor(int(width), int(height), background)
    m = rotation(heading, pitch)

    skipped = 0
    fragments = 0
    triangles = 0
    for tri in mesh:
        triangles += 1
        v1 = m.transform(tri.v1)
        v2 = m.transform(tri.v2)
        v3 = m.transform(tri.v3)

        n = face_normal(v1, v2, v3)
        if n.norm() == 0.0:
            skipped += 1
            continue
        color = shade_color(tri.color, facing(n))

        fragments += draw_triangle(target,
                                   to_screen(v1, width, height),
                                   to_screen(v2, width, height),
                                   to_screen(v3, width, height),
                                   color)

    log.debug("render %dx%d: %d triangles, %d degenerate, %d fragments written, %.1f ms",
              width, height, triangles, skipped, fragments,
              (time.perf_counter() - t0) * 1000.0)
    return target.frame


def save_frame(frame: np.ndarray, path) -> None:
    """Write an (H, W, 3) uint8 frame buffer to an image file (format from suffix)."""
    Image.fromarray(np.ascontiguousarray(frame, dtype=np.uint8)).save(path)
    log.info("saved frame %dx%d to %s", frame.shape[1], frame.shape[0], path)
