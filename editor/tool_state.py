"""Which tool is active, and what a pointer update does to the mask with it."""

import logging
from typing import Optional, Tuple, Union

from models.surface import BlendMode, Surface
from models.tools import ToolSelection, ToolType
from utils.image_utils import Geometry

logger = logging.getLogger(__name__)

# Blend mode each drawing tool applies to the mask. Tools not listed are reserved.
_BLEND_MODES = {
    ToolType.BRUSH: BlendMode.SOURCE_OVER,
    ToolType.ERASER: BlendMode.DESTINATION_OUT,
}


class ToolStateMachine:
    """Holds the current ToolSelection and turns pointer samples into mask strokes."""

    def __init__(self, tool: Union[ToolType, str] = ToolType.BRUSH,
                 brush_size: float = 20.0, color: str = "#9ACC59"):
        self.color = color
        self._selection = ToolSelection(ToolType.parse(tool), float(brush_size))

    @property
    def selection(self) -> ToolSelection:
        return self._selection

    def select(self, tool: Union[ToolType, str], brush_size: float) -> ToolSelection:
        """Replace the current tool and radius."""
        self._selection = ToolSelection(ToolType.parse(tool), float(brush_size))
        return self._selection

    def apply(self, mask: Surface, geometry: Geometry,
              nx: float, ny: float) -> Optional[Tuple[float, float]]:
        """Stroke the mask at a normalized pointer position.

        Returns the image-space centre that was drawn, or None when nothing
        was drawn (reserved tool or degenerate viewport).
        """
        tool = self._selection.tool
        mode = _BLEND_MODES.get(tool)
        if mode is None:
            logger.debug("Ignoring pointer update for reserved tool %s", tool.value)
            return None
        if geometry.is_degenerate:
            logger.debug("Ignoring pointer update on degenerate viewport %s", geometry.canvas_size)
            return None

        x, y = geometry.to_image(nx, ny)
        radius = self._selection.brush_size * geometry.factor
        with mask.use_blend_mode(mode):
            mask.fill_circle(x, y, radius, self.color)
        return x, y
