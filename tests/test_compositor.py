"""Tests for compositing base and mask into the viewport."""

import pytest

from conftest import BASE_COLOR, make_image
from editor.compositor import Compositor
from models.surface import SurfaceName, SurfaceRegistry


@pytest.fixture
def surfaces(canvas):
    return SurfaceRegistry.initialize(canvas, make_image(100, 50))


@pytest.fixture
def compositor(surfaces):
    return Compositor(surfaces)


def test_render_letterboxes_base(compositor, canvas):
    compositor.render()
    assert canvas.image.getpixel((100, 100)) == BASE_COLOR
    assert canvas.image.getpixel((50, 75)) == BASE_COLOR
    assert canvas.image.getpixel((10, 10))[3] == 0
    assert canvas.image.getpixel((100, 74))[3] == 0
    assert canvas.image.getpixel((100, 125))[3] == 0


def test_mask_drawn_at_forty_percent(compositor, surfaces, canvas):
    surfaces[SurfaceName.MASK].fill_circle(50, 25, 10, "#9ACC59")
    compositor.render()
    r, g, b, a = canvas.image.getpixel((100, 100))
    assert a == 255
    assert r == pytest.approx(0.4 * 0x9A + 0.6 * BASE_COLOR[0], abs=2)
    assert g == pytest.approx(0.4 * 0xCC + 0.6 * BASE_COLOR[1], abs=2)
    assert b == pytest.approx(0.4 * 0x59 + 0.6 * BASE_COLOR[2], abs=2)
    assert surfaces[SurfaceName.OFFSCREEN].global_alpha == 1.0


def test_render_is_idempotent(compositor, surfaces, canvas):
    surfaces[SurfaceName.MASK].fill_circle(30, 20, 8, "#9ACC59")
    compositor.render()
    first = canvas.image.tobytes()
    compositor.render()
    assert canvas.image.tobytes() == first


def test_render_shows_no_stale_strokes(compositor, surfaces, canvas):
    mask = surfaces[SurfaceName.MASK]
    mask.fill_circle(50, 25, 10, "#9ACC59")
    compositor.render()
    mask.clear()
    compositor.render()
    assert canvas.image.getpixel((100, 100)) == BASE_COLOR


def test_render_is_not_reentrant(compositor, surfaces, monkeypatch):
    offscreen = surfaces[SurfaceName.OFFSCREEN]
    monkeypatch.setattr(offscreen, "clear", compositor.render)
    with pytest.raises(AssertionError):
        compositor.render()
    monkeypatch.undo()
    compositor.render()


def test_render_with_zero_size_viewport(surfaces, canvas):
    canvas.resize(0, 0)
    surfaces.resize_backbuffer()
    Compositor(surfaces).render()
    assert canvas.size == (0, 0)
