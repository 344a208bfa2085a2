from typing import Tuple

import numpy as np
from numba import njit


# ============================================================
#  Numba kernel
# ============================================================

@njit(cache=True)
def _submit(img, zbuf, x, y, depth, r, g, b):
    """
    Depth test + write for a single fragment.

    Z-buffer:
      - zbuf holds the largest depth seen so far per pixel
      - more positive z is closer to the observer
      - the fragment wins only if depth > zbuf[y, x] (strict), so an exact
        tie keeps whatever was written first

    img / zbuf:
      - img shape (H, W, 3) uint8, zbuf shape (H, W) float64
      - index order is [y, x]
    """
    H, W = zbuf.shape
    if x < 0 or x >= W or y < 0 or y >= H:
        return False
    if depth <= zbuf[y, x]:
        return False
    zbuf[y, x] = depth
    img[y, x, 0] = r
    img[y, x, 1] = g
    img[y, x, 2] = b
    return True


# ============================================================
#  Compositor
# ============================================================

class DepthCompositor:
    """
    Frame buffer plus depth buffer for one render pass.

    Both buffers are allocated here and reset explicitly: every frame cell
    gets the background color and every depth cell gets -inf. Nothing is
    left to the allocator's defaults.

    The read-compare-write in `submit` is not atomic; only one thread may
    submit at a time.
    """

    def __init__(self, width: int, height: int, background: Tuple[int, int, int] = (0, 0, 0)):
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.background = tuple(int(c) for c in background)
        self.frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        self.depth = np.empty((self.height, self.width), dtype=np.float64)
        self.reset()

    def reset(self):
        """Paint the background and push every depth cell to -inf."""
        self.frame[:, :] = self.background
        self.depth.fill(-np.inf)

    def submit(self, x: int, y: int, depth: float, color: Tuple[int, int, int]) -> bool:
        """Write `color` at (x, y) if `depth` is nearer than anything there so far."""
        r, g, b = color
        return bool(_submit(self.frame, self.depth, int(x), int(y), float(depth),
                            int(r), int(g), int(b)))
