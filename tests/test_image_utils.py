"""Tests for letterbox placement and pointer conversion."""

import pytest

from utils.image_utils import (
    Placement, conversion_factor, resolve_geometry, resolve_placement, resolve_pointer,
)

SIZES = [
    ((200, 200), (100, 50)),
    ((200, 200), (400, 100)),
    ((640, 480), (1920, 1080)),
    ((300, 700), (1000, 1000)),
    ((50, 900), (13, 7)),
    ((1, 1), (4096, 3)),
]


def test_small_image_is_centred_without_scaling():
    assert conversion_factor((200, 200), (100, 50)) == 1
    assert resolve_placement((200, 200), (100, 50)) == Placement(50, 75, 100, 50)


def test_large_image_is_scaled_down_to_fit():
    assert conversion_factor((200, 200), (400, 100)) == 2
    assert resolve_placement((200, 200), (400, 100)) == Placement(0, 75, 200, 50)


@pytest.mark.parametrize("canvas_size, image_size", SIZES)
def test_placement_fits_canvas_and_keeps_aspect(canvas_size, image_size):
    p = resolve_placement(canvas_size, image_size)
    eps = 1e-9
    assert p.x >= -eps and p.y >= -eps
    assert p.x + p.width <= canvas_size[0] + eps
    assert p.y + p.height <= canvas_size[1] + eps
    assert p.width / p.height == pytest.approx(image_size[0] / image_size[1])


@pytest.mark.parametrize("canvas_size", [(0, 200), (200, 0), (0, 0)])
def test_zero_canvas_gives_empty_placement(canvas_size):
    p = resolve_placement(canvas_size, (100, 50))
    assert p.is_empty
    assert conversion_factor(canvas_size, (100, 50)) == 1.0
    assert resolve_geometry(canvas_size, (100, 50)).is_degenerate


def test_resolve_pointer_maps_into_image_space():
    assert resolve_pointer((0.5, 0.5), (200, 200), (100, 50)) == (50, 25)
    assert resolve_pointer((0.5, 0.5), (200, 200), (400, 100)) == (200, 50)
    assert resolve_pointer((0.25, 0.375), (200, 200), (100, 50)) == (0, 0)


@pytest.mark.parametrize("canvas_size, image_size", SIZES)
def test_placement_corners_map_to_image_corners(canvas_size, image_size):
    geometry = resolve_geometry(canvas_size, image_size)
    p = geometry.placement
    cw, ch = canvas_size
    assert geometry.to_image(p.x / cw, p.y / ch) == pytest.approx((0, 0))
    far = geometry.to_image((p.x + p.width) / cw, (p.y + p.height) / ch)
    assert far == pytest.approx(image_size)


def test_pixel_box_is_clipped_to_bounds():
    assert Placement(49.6, 74.5, 100.8, 50).pixel_box((150, 200)) == (50, 74, 150, 124)
    assert Placement().pixel_box((10, 10)) == (0, 0, 0, 0)
