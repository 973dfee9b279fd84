"""Decoding uploaded images and converting between Pillow images and data URLs."""

import base64
import binascii
import os
from io import BytesIO
from typing import BinaryIO, Union

from PIL import Image, UnidentifiedImageError

from models.errors import InvalidImage
from models.surface import check_image

DATA_URL_PREFIX = "data:"

ImageSource = Union[str, os.PathLike, bytes, BinaryIO, Image.Image]


def load_image(source: ImageSource, max_pixels: int = 25_000_000) -> Image.Image:
    """Open an image from a path, raw bytes, a file object or a Pillow image.

    Returns an RGBA copy. Raises InvalidImage for undecodable, oversize or
    zero-dimension input.
    """
    if isinstance(source, Image.Image):
        img = source
    else:
        if isinstance(source, bytes):
            source = BytesIO(source)
        try:
            img = Image.open(source)
            img.load()
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise InvalidImage(f"Invalid image: {e}") from e

    pixels = img.width * img.height
    if max_pixels and pixels > max_pixels:
        raise InvalidImage(f"Image too large ({pixels:,} pixels, max {max_pixels:,})")
    check_image(img)
    return img.convert("RGBA")


def image_to_data_url(image: Image.Image, fmt: str = "PNG") -> str:
    """Encode an image as a self-contained base64 data URL."""
    buf = BytesIO()
    image.save(buf, format=fmt)
    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/{fmt.lower()};base64,{b64}"


def data_url_to_image(data_url: str) -> Image.Image:
    """Decode a base64 data URL back into an RGBA image."""
    if not data_url.startswith(DATA_URL_PREFIX) or "," not in data_url:
        raise InvalidImage("Not a data URL")
    header, _, payload = data_url.partition(",")
    if not header.endswith(";base64"):
        raise InvalidImage("Only base64 data URLs are supported")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImage(f"Corrupt data URL: {e}") from e
    return load_image(raw, max_pixels=0)
