import numpy as np
import pytest

from tinyraster.depth import DepthCompositor
from tinyraster.raster import covers, draw_triangle
from tinyraster.vecmath import Vec3

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def test_reset_writes_background_and_negative_infinity():
    target = DepthCompositor(6, 4, background=(10, 20, 30))
    assert target.frame.shape == (4, 6, 3)
    assert target.frame.dtype == np.uint8
    assert (target.frame == np.array([10, 20, 30], dtype=np.uint8)).all()
    assert np.isneginf(target.depth).all()

    target.submit(2, 1, 5.0, RED)
    target.reset()
    assert (target.frame == np.array([10, 20, 30], dtype=np.uint8)).all()
    assert np.isneginf(target.depth).all()


def test_submit_keeps_nearest():
    target = DepthCompositor(4, 4)
    assert target.submit(1, 2, -3.0, RED)
    assert target.submit(1, 2, 4.0, BLUE)
    assert not target.submit(1, 2, 0.0, RED)
    assert tuple(target.frame[2, 1]) == BLUE
    assert target.depth[2, 1] == 4.0


def test_exact_tie_keeps_first_writer():
    target = DepthCompositor(4, 4)
    assert target.submit(0, 0, 1.5, RED)
    assert not target.submit(0, 0, 1.5, BLUE)
    assert tuple(target.frame[0, 0]) == RED


def test_out_of_bounds_fragments_are_dropped():
    target = DepthCompositor(4, 3)
    for x, y in [(-1, 0), (4, 0), (0, -1), (0, 3), (100, 100)]:
        assert not target.submit(x, y, 1.0, RED)
    assert not target.frame.any()


def test_bad_size_rejected():
    with pytest.raises(ValueError):
        DepthCompositor(0, 10)
    with pytest.raises(ValueError):
        DepthCompositor(10, -1)


@pytest.mark.parametrize("near_first", [True, False])
def test_near_triangle_wins_regardless_of_order(near_first):
    far = (Vec3(5.0, 5.0, -10.0), Vec3(30.0, 5.0, -10.0), Vec3(5.0, 30.0, -10.0))
    near = (Vec3(12.0, 2.0, 10.0), Vec3(35.0, 20.0, 10.0), Vec3(3.0, 25.0, 10.0))
    order = [(near, BLUE), (far, RED)] if near_first else [(far, RED), (near, BLUE)]

    target = DepthCompositor(40, 40)
    for tri, color in order:
        draw_triangle(target, *tri, color)

    overlap = 0
    for y in range(40):
        for x in range(40):
            in_far = covers(x, y, *far)
            in_near = covers(x, y, *near)
            if in_near:
                assert tuple(target.frame[y, x]) == BLUE
                assert target.depth[y, x] == pytest.approx(10.0)
            elif in_far:
                assert tuple(target.frame[y, x]) == RED
            if in_far and in_near:
                overlap += 1
    assert overlap > 0
