"""Composites the base image and the translucent mask into the viewport."""

from models.surface import SurfaceName, SurfaceRegistry
from utils.image_utils import resolve_geometry

MASK_OPACITY = 0.4


class Compositor:
    """The only writer of the viewport surface."""

    def __init__(self, surfaces: SurfaceRegistry, mask_opacity: float = MASK_OPACITY):
        self.surfaces = surfaces
        self.mask_opacity = mask_opacity
        self._rendering = False

    def render(self) -> None:
        """Redraw the whole frame offscreen, then flip it into the viewport."""
        assert not self._rendering, "Compositor.render() is not reentrant"
        self._rendering = True
        try:
            offscreen = self.surfaces[SurfaceName.OFFSCREEN]
            base = self.surfaces[SurfaceName.BASE]
            mask = self.surfaces[SurfaceName.MASK]
            placement = resolve_geometry(offscreen.size, base.size).placement

            offscreen.clear()
            offscreen.draw_image(base.image, placement)
            with offscreen.use_alpha(self.mask_opacity):
                offscreen.draw_image(mask.image, placement)

            self.surfaces[SurfaceName.VIEWPORT].blit(offscreen)
        finally:
            self._rendering = False
