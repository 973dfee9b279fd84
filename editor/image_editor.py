"""Mask editor: surfaces, tool, compositor and exporter behind one handle."""

import logging
from collections import deque
from typing import Deque, Optional, Tuple, Union

from PIL import Image

from editor.compositor import Compositor
from editor.tool_state import ToolStateMachine
from export.mask_exporter import export_images
from models.editor_config import EditorConfig
from models.surface import Surface, SurfaceName, SurfaceRegistry, check_image
from models.tools import ToolSelection, ToolType
from utils.image_utils import Geometry, resolve_geometry

logger = logging.getLogger(__name__)


class ImageEditor:
    """Lets a user paint a mask over an image shown letterboxed in a viewport.

    Single-threaded: hosts must call into one editor from one thread at a time.
    Every mutator leaves the viewport holding a fresh composite.
    """

    def __init__(
        self,
        canvas: Surface,
        image: Image.Image,
        initial_tool: Union[ToolType, str] = ToolType.BRUSH,
        initial_brush_size: float = 20.0,
        config: Optional[EditorConfig] = None,
    ):
        self.config = config or EditorConfig()
        self.surfaces = SurfaceRegistry.initialize(canvas, image)
        self.tools = ToolStateMachine(initial_tool, initial_brush_size, self.config.mask_color)
        self.compositor = Compositor(self.surfaces, self.config.mask_opacity)
        # Image-space stroke centres, kept for future stroke smoothing.
        self.position_buffer: Deque[Tuple[float, float]] = deque(
            maxlen=self.config.position_buffer_size
        )
        self.render()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def canvas(self) -> Surface:
        return self.surfaces[SurfaceName.VIEWPORT]

    @property
    def tool(self) -> ToolType:
        return self.tools.selection.tool

    @property
    def brush_size(self) -> float:
        return self.tools.selection.brush_size

    @property
    def image_size(self) -> Tuple[int, int]:
        return self.surfaces.image_size

    def geometry(self) -> Geometry:
        """Current placement snapshot of the image inside the viewport."""
        return resolve_geometry(self.surfaces.canvas_size, self.surfaces.image_size)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def update_image(self, image: Image.Image) -> None:
        """Replace the working image; the mask starts over empty."""
        check_image(image)
        self.surfaces.update_image(image)
        self.position_buffer.clear()
        logger.info("Editing new %dx%d image", image.width, image.height)
        self.render()

    def update_pointer(self, x: float, y: float) -> bool:
        """Apply the active tool at a normalized viewport position.

        Returns True when the mask changed.
        """
        geometry = self.geometry()
        point = self.tools.apply(self.surfaces[SurfaceName.MASK], geometry, x, y)
        if point is None:
            return False
        self.position_buffer.append(point)
        self.render()
        return True

    def select_tool(self, tool: Union[ToolType, str], brush_size: float) -> ToolSelection:
        selection = self.tools.select(tool, brush_size)
        logger.debug("Selected %s with radius %s", selection.tool.value, selection.brush_size)
        return selection

    def resize_viewport(self) -> None:
        """Resync the back buffer after the host resized the bound canvas."""
        self.surfaces.resize_backbuffer()
        self.render()

    def clear_mask(self) -> None:
        self.surfaces[SurfaceName.MASK].clear()
        self.position_buffer.clear()
        self.render()

    def render(self) -> None:
        self.compositor.render()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_images(self) -> Tuple[str, str]:
        """Return (image, mask) PNG data URLs for the generation service."""
        return export_images(self.surfaces)


def create(
    canvas: Surface,
    image: Image.Image,
    initial_tool: Union[ToolType, str] = ToolType.BRUSH,
    initial_brush_size: float = 20.0,
    config: Optional[EditorConfig] = None,
) -> ImageEditor:
    """Build an editor bound to canvas. Raises InvalidImage for a zero-size image."""
    return ImageEditor(canvas, image, initial_tool, initial_brush_size, config)
