"""Shared fixtures for the mask editor tests."""

import pytest
from PIL import Image

from editor.image_editor import create
from models.surface import Surface
from models.tools import ToolType

BASE_COLOR = (200, 50, 50, 255)


def make_image(width, height, color=BASE_COLOR):
    return Image.new("RGBA", (width, height), color)


def alpha_at(surface_or_image, x, y):
    img = getattr(surface_or_image, "image", surface_or_image)
    return img.getpixel((int(round(x)), int(round(y))))[3]


@pytest.fixture
def canvas():
    return Surface.for_canvas(200, 200)


@pytest.fixture
def editor(canvas):
    """100x50 image on a 200x200 canvas: factor 1, placement (50, 75, 100, 50)."""
    return create(canvas, make_image(100, 50), ToolType.BRUSH, 5)
