import math

from .vecmath import Mat3


# ============================================================
#  Rotations
# ============================================================

def heading_matrix(a) -> Mat3:
    """Rotation in the X-Z plane (about the vertical axis) by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    return Mat3.rows(
        (c, 0.0, s),
        (0.0, 1.0, 0.0),
        (-s, 0.0, c),
    )


def pitch_matrix(a) -> Mat3:
    """Rotation in the Y-Z plane (about the horizontal axis) by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    return Mat3.rows(
        (1.0, 0.0, 0.0),
        (0.0, c, s),
        (0.0, -s, c),
    )


def rotation(heading, pitch) -> Mat3:
    """
    Composite model rotation for one frame.

    Order:
      heading @ pitch, so pitch is applied to each vertex first and heading
      last. Dragging heading then spins the already-pitched object about
      the world vertical axis, and pitch tilts it about the unrotated
      horizontal axis. Swapping the factors gives a different (wrong) map.
    """
    return heading_matrix(heading) @ pitch_matrix(pitch)
