"""Exports the working image and the mask as standalone PNG data URLs."""

from typing import Tuple

from models.surface import SurfaceName, SurfaceRegistry
from utils.image_io import image_to_data_url


def export_images(surfaces: SurfaceRegistry) -> Tuple[str, str]:
    """Return (image, mask) data URLs at the working image's full resolution.

    Taken from the base and mask surfaces, never from the viewport, so neither
    letterboxing nor the mask tint ends up in the payloads.
    """
    base = surfaces[SurfaceName.BASE].snapshot()
    mask = surfaces[SurfaceName.MASK].snapshot()
    return image_to_data_url(base), image_to_data_url(mask)
