import math

import pytest

from gravity_core.camera import Camera2D, safe_point
from gravity_core.constants import MAX_PIXELS_PER_UNIT


def test_origin_maps_to_viewport_center():
    cam = Camera2D()
    cam.set_viewport_size(900, 700)
    assert cam.world_to_screen((0.0, 0.0)) == (450.0, 350.0)


def test_y_axis_points_up():
    cam = Camera2D()
    cam.set_viewport_size(900, 700)
    x, y = cam.world_to_screen((10.0, 20.0))
    assert x == 460.0
    assert y == 330.0


def test_screen_to_world_inverts_world_to_screen():
    cam = Camera2D(center=(12.0, -4.0), pixels_per_unit=2.5)
    world = (33.0, 71.5)
    back = cam.screen_to_world(cam.world_to_screen(world))
    assert back == pytest.approx(world)


def test_zoom_keeps_pivot_fixed():
    cam = Camera2D()
    pivot = (600, 200)
    before = cam.screen_to_world(pivot)
    cam.zoom(1.1, pivot)
    assert cam.ppu == pytest.approx(1.1)
    assert cam.screen_to_world(pivot) == pytest.approx(before)


def test_zoom_is_bounded():
    cam = Camera2D(pixels_per_unit=MAX_PIXELS_PER_UNIT)
    cam.zoom(10.0)
    assert cam.ppu == MAX_PIXELS_PER_UNIT


def test_pan_follows_drag():
    cam = Camera2D()
    target = cam.world_to_screen((5.0, 5.0))
    cam.pan_pixels(30, -10)
    moved = cam.world_to_screen((5.0, 5.0))
    assert moved == pytest.approx((target[0] + 30, target[1] - 10))


def test_frame_fits_points_and_ignores_nan():
    cam = Camera2D()
    cam.set_viewport_size(900, 700)
    cam.frame([(-100.0, -50.0), (300.0, 50.0), (math.nan, 0.0)])
    assert cam.center == pytest.approx([100.0, 0.0])
    for p in [(-100.0, -50.0), (300.0, 50.0)]:
        x, y = cam.world_to_screen(p)
        assert 0 <= x <= 900 and 0 <= y <= 700


def test_frame_without_points_resets():
    cam = Camera2D(center=(5, 5), pixels_per_unit=3.0)
    cam.frame([])
    assert cam.center == [0.0, 0.0]
    assert cam.ppu == 1.0


def test_safe_point():
    assert safe_point((10.7, -3.2)) == (10, -3)
    assert safe_point((math.nan, 0.0)) is None
    assert safe_point((math.inf, 0.0)) is None
    assert safe_point((1e9, 0.0)) is None
