"""Letterbox placement and coordinate conversion between viewport and image space."""

from dataclasses import dataclass
from typing import Tuple

Size = Tuple[int, int]


@dataclass(frozen=True)
class Placement:
    """Where the image sits inside the viewport, in viewport pixels."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def pixel_box(self, bounds: Size) -> Tuple[int, int, int, int]:
        """Round to an integer (left, top, right, bottom) box clipped to bounds."""
        left = max(0, int(round(self.x)))
        top = max(0, int(round(self.y)))
        right = min(bounds[0], int(round(self.x + self.width)))
        bottom = min(bounds[1], int(round(self.y + self.height)))
        return left, top, max(left, right), max(top, bottom)


@dataclass(frozen=True)
class Geometry:
    """One consistent snapshot of canvas/image sizes and everything derived from them."""
    canvas_size: Size
    image_size: Size
    factor: float
    placement: Placement

    @property
    def is_degenerate(self) -> bool:
        return self.placement.is_empty

    def to_image(self, nx: float, ny: float) -> Tuple[float, float]:
        """Map a normalized viewport position to image-space pixels."""
        cx = nx * self.canvas_size[0]
        cy = ny * self.canvas_size[1]
        return (
            (cx - self.placement.x) * self.factor,
            (cy - self.placement.y) * self.factor,
        )


def conversion_factor(canvas_size: Size, image_size: Size) -> float:
    """Uniform canvas-to-image scale, floored at 1 so small images are never upscaled.

    A zero canvas dimension has no meaningful factor; 1.0 is returned and the
    placement for that canvas is empty.
    """
    cw, ch = canvas_size
    iw, ih = image_size
    if cw <= 0 or ch <= 0:
        return 1.0
    return max(1.0, max(iw / cw, ih / ch))


def resolve_placement(canvas_size: Size, image_size: Size) -> Placement:
    """Centre the image in the canvas, scaled down to fit when it is larger."""
    cw, ch = canvas_size
    iw, ih = image_size
    if cw <= 0 or ch <= 0 or iw <= 0 or ih <= 0:
        return Placement()
    factor = conversion_factor(canvas_size, image_size)
    width = iw / factor
    height = ih / factor
    return Placement(
        x=(cw - width) / 2,
        y=(ch - height) / 2,
        width=width,
        height=height,
    )


def resolve_geometry(canvas_size: Size, image_size: Size) -> Geometry:
    """Snapshot factor and placement from a single pair of sizes."""
    canvas_size = (int(canvas_size[0]), int(canvas_size[1]))
    image_size = (int(image_size[0]), int(image_size[1]))
    return Geometry(
        canvas_size=canvas_size,
        image_size=image_size,
        factor=conversion_factor(canvas_size, image_size),
        placement=resolve_placement(canvas_size, image_size),
    )


def resolve_pointer(
    normalized: Tuple[float, float], canvas_size: Size, image_size: Size
) -> Tuple[float, float]:
    """Convert a normalized viewport position into image-space coordinates."""
    return resolve_geometry(canvas_size, image_size).to_image(*normalized)
