import math

import numpy as np
import pytest
from PIL import Image

from tinyraster.pipeline import render, save_frame
from tinyraster.scene import Triangle, sphere, tetrahedron
from tinyraster.vecmath import Vec3

FAR = Triangle(Vec3(-40.0, -40.0, -10.0), Vec3(40.0, -40.0, -10.0), Vec3(-40.0, 40.0, -10.0), (255, 0, 0))
NEAR = Triangle(Vec3(-30.0, -30.0, 10.0), Vec3(30.0, -30.0, 10.0), Vec3(0.0, 30.0, 10.0), (0, 0, 255))


def test_frame_shape_and_background():
    frame = render([], 0.0, 0.0, 32, 24, background=(7, 8, 9))
    assert frame.shape == (24, 32, 3)
    assert frame.dtype == np.uint8
    assert (frame == np.array([7, 8, 9], dtype=np.uint8)).all()


def test_tetrahedron_covers_centre():
    frame = render(tetrahedron(), math.radians(200.0), math.radians(15.0), 400, 400)
    assert frame[200, 200].any()
    assert not frame[0, 0].any()


def test_facing_triangles_keep_base_color_and_near_wins():
    for mesh in ([FAR, NEAR], [NEAR, FAR]):
        frame = render(mesh, 0.0, 0.0, 100, 100)
        # origin maps to the canvas centre
        assert tuple(frame[50, 50]) == (0, 0, 255)
        # only the far triangle reaches here
        assert tuple(frame[15, 15]) == (255, 0, 0)


def test_no_state_leaks_between_calls():
    mesh = sphere(1)
    first = render(mesh, 0.4, -0.3, 120, 90)
    render(mesh, 2.0, 1.0, 120, 90)
    again = render(mesh, 0.4, -0.3, 120, 90)
    np.testing.assert_array_equal(first, again)


def test_mesh_is_read_only():
    mesh = tetrahedron()
    before = list(mesh)
    render(mesh, 1.0, 0.5, 64, 64)
    assert mesh == before


def test_edge_on_triangle_draws_nothing():
    # lies in the x-z plane, so its screen projection has zero area
    tri = Triangle(Vec3(-10.0, 0.0, -10.0), Vec3(10.0, 0.0, -10.0), Vec3(0.0, 0.0, 10.0), (255, 255, 255))
    frame = render([tri], 0.0, 0.0, 50, 50)
    assert not frame.any()


def test_degenerate_triangle_is_skipped():
    tri = Triangle(Vec3(0.0, 0.0, 0.0), Vec3(5.0, 5.0, 5.0), Vec3(10.0, 10.0, 10.0), (255, 255, 255))
    frame = render([tri, NEAR], 0.3, 0.2, 100, 100)
    assert frame.any()


@pytest.mark.parametrize("heading, pitch, width, height", [
    (float("nan"), 0.0, 10, 10),
    (0.0, float("inf"), 10, 10),
    (0.0, 0.0, 0, 10),
    (0.0, 0.0, 10, -5),
    (0.0, 0.0, 10.5, 10),
    (0.0, 0.0, float("inf"), 10),
    (0.0, 0.0, 10, float("nan")),
])
def test_invalid_arguments_rejected(heading, pitch, width, height):
    with pytest.raises(ValueError):
        render(tetrahedron(), heading, pitch, width, height)


def test_save_frame(tmp_path):
    frame = render([NEAR], 0.0, 0.0, 64, 48)
    path = tmp_path / "frame.png"
    save_frame(frame, path)
    with Image.open(path) as img:
        assert img.size == (64, 48)
        np.testing.assert_array_equal(np.asarray(img.convert("RGB")), frame)


def test_mesh_may_be_any_iterable():
    frame = render((t for t in [FAR, NEAR]), 0.0, 0.0, 100, 100)
    assert tuple(frame[50, 50]) == (0, 0, 255)
