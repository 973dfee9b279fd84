"""Named RGBA drawing surfaces and the frozen registry that owns them."""

import logging
from contextlib import contextmanager
from enum import Enum
from types import MappingProxyType
from collections.abc import Mapping
from typing import Dict, Iterator, Tuple

from PIL import Image, ImageDraw

from models.errors import InvalidImage
from utils.image_utils import Placement

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class SurfaceName(str, Enum):
    VIEWPORT = "viewport"    # visible output, bound to the host's canvas
    BASE = "base"            # working image
    MASK = "mask"            # user-painted mask
    OFFSCREEN = "offscreen"  # compositing back buffer


class BlendMode(str, Enum):
    SOURCE_OVER = "source-over"
    DESTINATION_OUT = "destination-out"


def check_image(image: Image.Image) -> None:
    """Raise InvalidImage unless the image has a non-zero width and height."""
    width, height = getattr(image, "size", (0, 0))
    if width <= 0 or height <= 0:
        raise InvalidImage(f"Image must have non-zero dimensions, got {width}x{height}")


class Surface:
    """A drawing target backed by a Pillow RGBA image.

    Resizing discards the contents, the same way a browser canvas does.
    """

    def __init__(self, name: SurfaceName, width: int = 0, height: int = 0):
        self.name = name
        self.blend_mode = BlendMode.SOURCE_OVER
        self.global_alpha = 1.0
        self._image = Image.new("RGBA", (max(0, int(width)), max(0, int(height))), TRANSPARENT)

    @classmethod
    def for_canvas(cls, width: int, height: int) -> "Surface":
        """Create the surface a host binds to its on-screen canvas."""
        return cls(SurfaceName.VIEWPORT, width, height)

    def __repr__(self) -> str:
        return f"Surface({self.name.value!r}, {self.width}x{self.height})"

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def resize(self, width: int, height: int) -> None:
        self._image = Image.new("RGBA", (max(0, int(width)), max(0, int(height))), TRANSPARENT)

    def clear(self) -> None:
        self._image = Image.new("RGBA", self.size, TRANSPARENT)

    def snapshot(self) -> Image.Image:
        return self._image.copy()

    @contextmanager
    def use_blend_mode(self, mode: BlendMode) -> Iterator["Surface"]:
        """Switch the blend mode for the duration of the block."""
        previous = self.blend_mode
        self.blend_mode = mode
        try:
            yield self
        finally:
            self.blend_mode = previous

    @contextmanager
    def use_alpha(self, alpha: float) -> Iterator["Surface"]:
        """Switch the global alpha for the duration of the block."""
        previous = self.global_alpha
        self.global_alpha = alpha
        try:
            yield self
        finally:
            self.global_alpha = previous

    def draw_image(self, source: Image.Image, placement: Placement) -> None:
        """Scale source into the placement box and composite it over this surface."""
        left, top, right, bottom = placement.pixel_box(self.size)
        box_size = (right - left, bottom - top)
        if box_size[0] <= 0 or box_size[1] <= 0 or source.width == 0 or source.height == 0:
            return

        layer = source if source.mode == "RGBA" else source.convert("RGBA")
        if layer.size != box_size:
            layer = layer.resize(box_size, Image.LANCZOS)

        if self.global_alpha < 1.0:
            alpha = max(0.0, self.global_alpha)
            faded = layer.getchannel("A").point(lambda a: int(round(a * alpha)))
            layer = layer.copy()
            layer.putalpha(faded)

        self._image.alpha_composite(layer, dest=(left, top))

    def fill_circle(self, cx: float, cy: float, radius: float, color) -> None:
        """Fill a circle using the current blend mode."""
        if radius <= 0 or self.is_empty:
            return
        bbox = [cx - radius, cy - radius, cx + radius, cy + radius]

        if self.blend_mode is BlendMode.DESTINATION_OUT:
            stencil = Image.new("L", self.size, 0)
            ImageDraw.Draw(stencil).ellipse(bbox, fill=255)
            self._image.paste(TRANSPARENT, (0, 0) + self.size, stencil)
        else:
            ImageDraw.Draw(self._image, "RGBA").ellipse(bbox, fill=color)

    def blit(self, source: "Surface") -> None:
        """Replace this surface's pixels with source's in a single assignment."""
        if source.size == self.size:
            self._image = source.image.copy()
            return
        frame = Image.new("RGBA", self.size, TRANSPARENT)
        frame.paste(source.image, (0, 0))
        self._image = frame


class SurfaceRegistry(Mapping):
    """Fixed set of surfaces keyed by SurfaceName.

    The mapping itself is read-only once built; surface contents are not.
    """

    def __init__(self, surfaces: Dict[SurfaceName, Surface]):
        missing = [name.value for name in SurfaceName if name not in surfaces]
        if missing:
            raise ValueError(f"Missing surfaces: {', '.join(missing)}")
        self._surfaces = MappingProxyType(dict(surfaces))

    @classmethod
    def initialize(cls, canvas: Surface, image: Image.Image) -> "SurfaceRegistry":
        """Bind the viewport to canvas and load image into the base surface."""
        check_image(image)
        surfaces = {}
        for name in SurfaceName:
            surfaces[name] = canvas if name is SurfaceName.VIEWPORT else Surface(name)
        registry = cls(surfaces)
        registry._load(image)
        return registry

    def __getitem__(self, name: SurfaceName) -> Surface:
        return self._surfaces[name]

    def __iter__(self):
        return iter(self._surfaces)

    def __len__(self) -> int:
        return len(self._surfaces)

    def __setattr__(self, key, value):
        if key != "_surfaces" or "_surfaces" in self.__dict__:
            raise AttributeError("SurfaceRegistry is frozen")
        super().__setattr__(key, value)

    @property
    def image_size(self) -> Tuple[int, int]:
        return self._surfaces[SurfaceName.BASE].size

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self._surfaces[SurfaceName.OFFSCREEN].size

    def update_image(self, image: Image.Image) -> None:
        """Swap in a new working image and start over with a blank mask."""
        check_image(image)
        self._surfaces[SurfaceName.BASE].clear()
        self._surfaces[SurfaceName.MASK].clear()
        self._load(image)

    def resize_backbuffer(self) -> None:
        """Match the offscreen buffer to the viewport's current size."""
        viewport = self._surfaces[SurfaceName.VIEWPORT]
        offscreen = self._surfaces[SurfaceName.OFFSCREEN]
        if offscreen.size != viewport.size:
            offscreen.resize(*viewport.size)

    def _load(self, image: Image.Image) -> None:
        width, height = image.size
        base = self._surfaces[SurfaceName.BASE]
        mask = self._surfaces[SurfaceName.MASK]
        base.resize(width, height)
        base.draw_image(image, Placement(0, 0, width, height))
        mask.resize(width, height)
        self.resize_backbuffer()
        logger.debug("Loaded %dx%d image into base and mask surfaces", width, height)
