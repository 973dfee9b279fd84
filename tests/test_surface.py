"""Tests for surfaces and the surface registry."""

import pytest
from PIL import Image

from conftest import BASE_COLOR, alpha_at, make_image
from models.errors import InvalidImage
from models.surface import BlendMode, Surface, SurfaceName, SurfaceRegistry
from utils.image_utils import Placement


@pytest.fixture
def registry(canvas):
    return SurfaceRegistry.initialize(canvas, make_image(100, 50))


def test_initialize_binds_canvas_and_sizes_layers(registry, canvas):
    assert registry[SurfaceName.VIEWPORT] is canvas
    assert registry[SurfaceName.BASE].size == (100, 50)
    assert registry[SurfaceName.MASK].size == (100, 50)
    assert registry[SurfaceName.OFFSCREEN].size == canvas.size
    assert set(registry) == set(SurfaceName)


def test_initialize_draws_base_and_leaves_mask_blank(registry):
    assert registry[SurfaceName.BASE].image.getpixel((10, 10)) == BASE_COLOR
    assert registry[SurfaceName.MASK].image.getchannel("A").getextrema() == (0, 0)


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (0, 0)])
def test_zero_dimension_image_is_rejected(canvas, size):
    with pytest.raises(InvalidImage):
        SurfaceRegistry.initialize(canvas, Image.new("RGBA", size))


def test_registry_cannot_be_rebound(registry):
    with pytest.raises(TypeError):
        registry[SurfaceName.MASK] = Surface(SurfaceName.MASK)
    with pytest.raises(AttributeError):
        registry._surfaces = {}
    with pytest.raises(TypeError):
        registry._surfaces[SurfaceName.MASK] = Surface(SurfaceName.MASK)


def test_registry_requires_every_surface():
    with pytest.raises(ValueError):
        SurfaceRegistry({SurfaceName.MASK: Surface(SurfaceName.MASK)})


def test_update_image_resizes_and_clears_mask(registry):
    mask = registry[SurfaceName.MASK]
    mask.fill_circle(50, 25, 10, "#9ACC59")
    registry.update_image(make_image(30, 60, (0, 0, 255, 255)))

    assert registry[SurfaceName.BASE].size == (30, 60)
    assert mask.size == (30, 60)
    assert mask.image.getchannel("A").getextrema() == (0, 0)
    assert registry[SurfaceName.BASE].image.getpixel((5, 5)) == (0, 0, 255, 255)


def test_failed_update_keeps_previous_image(registry):
    with pytest.raises(InvalidImage):
        registry.update_image(Image.new("RGBA", (0, 5)))
    assert registry.image_size == (100, 50)
    assert registry[SurfaceName.BASE].image.getpixel((0, 0)) == BASE_COLOR


def test_resize_backbuffer_tracks_viewport(registry, canvas):
    canvas.resize(320, 90)
    registry.resize_backbuffer()
    assert registry[SurfaceName.OFFSCREEN].size == (320, 90)


def test_resize_discards_contents():
    s = Surface(SurfaceName.MASK, 20, 20)
    s.fill_circle(10, 10, 5, "#ffffff")
    s.resize(20, 20)
    assert s.image.getchannel("A").getextrema() == (0, 0)


def test_destination_out_cuts_a_hole():
    s = Surface(SurfaceName.MASK, 40, 40)
    s.image.paste((255, 255, 255, 255), (0, 0, 40, 40))
    with s.use_blend_mode(BlendMode.DESTINATION_OUT):
        s.fill_circle(20, 20, 5, "#ffffff")
    assert alpha_at(s, 20, 20) == 0
    assert alpha_at(s, 2, 2) == 255
    assert s.blend_mode is BlendMode.SOURCE_OVER


def test_blend_mode_restored_when_draw_fails():
    s = Surface(SurfaceName.MASK, 10, 10)
    with pytest.raises(RuntimeError):
        with s.use_blend_mode(BlendMode.DESTINATION_OUT):
            raise RuntimeError("draw failed")
    assert s.blend_mode is BlendMode.SOURCE_OVER


def test_draw_image_applies_global_alpha():
    s = Surface(SurfaceName.OFFSCREEN, 10, 10)
    with s.use_alpha(0.4):
        s.draw_image(make_image(10, 10), Placement(0, 0, 10, 10))
    assert s.global_alpha == 1.0
    assert alpha_at(s, 5, 5) == 102


def test_draw_image_skips_empty_placement():
    s = Surface(SurfaceName.OFFSCREEN, 10, 10)
    s.draw_image(make_image(10, 10), Placement())
    assert s.image.getchannel("A").getextrema() == (0, 0)


def test_blit_copies_pixels():
    src = Surface(SurfaceName.OFFSCREEN, 8, 8)
    src.image.paste((1, 2, 3, 255), (0, 0, 8, 8))
    dst = Surface.for_canvas(8, 8)
    dst.blit(src)
    assert dst.image.getpixel((4, 4)) == (1, 2, 3, 255)
    src.clear()
    assert dst.image.getpixel((4, 4)) == (1, 2, 3, 255)
