import math

import pytest

from gravity_core.camera import Camera2D
from gravity_core.utils import try_float
from gravity_core.vector_utils import (
    clamp,
    polar_to_rect,
    vec_add,
    vec_distance,
    vec_len,
    vec_norm,
    vec_scale,
    vec_sub,
)


def test_vector_arithmetic() -> None:
    assert vec_add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)
    assert vec_sub((1.0, 2.0), (3.0, 4.0)) == (-2.0, -2.0)
    assert vec_scale((1.0, -2.0), 2.5) == (2.5, -5.0)
    assert vec_len((3.0, 4.0)) == 5.0
    assert vec_distance((1.0, 1.0), (4.0, 5.0)) == 5.0
    assert vec_norm((0.0, 0.0)) == (0.0, 0.0)
    assert clamp(5.0, 0.0, 1.0) == 1.0


def test_polar_to_rect_rotates_counter_clockwise() -> None:
    x, y = polar_to_rect(300.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(300.0)


def test_camera_is_y_up_and_invertible() -> None:
    cam = Camera2D(center=(0.0, 0.0), meters_per_pixel=2.0)
    cam.set_viewport_size(800, 600)
    assert cam.world_to_screen((0.0, 0.0)) == (400, 300)
    assert cam.world_to_screen((0.0, 100.0)) == (400, 250)
    assert cam.screen_to_world((400, 250)) == (0.0, 100.0)


def test_camera_zoom_keeps_pivot_fixed() -> None:
    cam = Camera2D(center=(0.0, 0.0), meters_per_pixel=1.0)
    cam.set_viewport_size(800, 600)
    before = cam.screen_to_world((600, 100))
    cam.zoom(2.0, (600, 100))
    after = cam.screen_to_world((600, 100))
    assert after == pytest.approx(before)
    assert cam.mpp == 0.5


def test_try_float() -> None:
    assert try_float(" 2.5 ") == 2.5
    assert try_float("abc") is None
    assert try_float(None) is None
