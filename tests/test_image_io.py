"""Tests for image decoding and data URL helpers."""

from io import BytesIO

import pytest
from PIL import Image

from conftest import BASE_COLOR, make_image
from models.errors import InvalidImage
from utils.image_io import data_url_to_image, image_to_data_url, load_image


def _png_bytes(img):
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def test_data_url_has_png_header():
    url = image_to_data_url(make_image(4, 3))
    assert url.startswith("data:image/png;base64,")
    assert data_url_to_image(url).getpixel((1, 1)) == BASE_COLOR


@pytest.mark.parametrize("bad", [
    "http://example.com/a.png",
    "data:image/png,notbase64",
    "data:image/png;base64,!!!!",
    "data:image/png;base64,aGVsbG8=",
])
def test_bad_data_urls_raise(bad):
    with pytest.raises(InvalidImage):
        data_url_to_image(bad)


def test_load_image_from_bytes_converts_to_rgba():
    img = load_image(_png_bytes(Image.new("RGB", (5, 7), (1, 2, 3))))
    assert img.mode == "RGBA"
    assert img.size == (5, 7)


def test_load_image_from_path(tmp_path):
    path = tmp_path / "in.png"
    make_image(6, 6).save(path)
    assert load_image(str(path)).size == (6, 6)


def test_load_image_rejects_garbage_and_oversize():
    with pytest.raises(InvalidImage):
        load_image(b"not an image")
    with pytest.raises(InvalidImage):
        load_image(make_image(20, 20), max_pixels=100)
    with pytest.raises(InvalidImage):
        load_image(Image.new("RGBA", (0, 3)))
